import json
from collections.abc import MutableMapping
from typing import Any, Protocol

from streamlit_cookies_controller import CookieController

COOKIE_CONTROLLER_KEY = "auth_cookies"


class StorageUnavailableError(RuntimeError):
    """The persisted store cannot be read or written right now."""


class SessionStore(Protocol):
    """String key-value store shared by every tab on one origin."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySessionStore:
    """Dict-backed store. Two gates sharing one instance behave like two tabs."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


def _decoded(value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except ValueError:
        return value


class CookieSessionStore:
    """
    Browser cookies, reached through the cookie controller component.

    Cookie writes only reach the browser once the component renders, so
    writes made in this browser session are mirrored in `pending` until the
    browser reports the same value back. Keys with nothing pending are read
    from the cookies, which is how another tab's changes become visible.
    """

    def __init__(
        self,
        controller: Any,
        max_age: int,
        pending: MutableMapping[str, str | None] | None = None,
    ):
        self.controller = controller
        self.max_age = max_age
        self.pending = pending if pending is not None else {}

    @classmethod
    def for_browser(
        cls, max_age: int, pending: MutableMapping[str, str | None]
    ) -> "CookieSessionStore":
        return cls(CookieController(key=COOKIE_CONTROLLER_KEY), max_age, pending)

    def is_ready(self) -> bool:
        # None until the JS component has reported the browser's cookies
        return self.controller.getAll() is not None

    def _read_cookie(self, key: str) -> str | None:
        if not self.is_ready():
            raise StorageUnavailableError("cookies have not loaded yet")
        value = self.controller.get(key)
        if value is None or isinstance(value, str):
            return value
        # The component hands back JSON-looking cookies already decoded
        return json.dumps(value)

    def get(self, key: str) -> str | None:
        value = self._read_cookie(key)
        if key not in self.pending:
            return value

        expected = self.pending[key]
        if _decoded(value) == _decoded(expected):
            del self.pending[key]
        return expected

    def set(self, key: str, value: str) -> None:
        self.pending[key] = value
        self.controller.set(key, value, max_age=self.max_age)

    def remove(self, key: str) -> None:
        self.pending[key] = None
        if self.controller.get(key) is None:
            return
        self.controller.remove(key)
