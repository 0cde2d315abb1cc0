import logging

from pydantic import ValidationError

from login_app.models.session_state import (
    IS_LOGGED_IN_KEY,
    LOGGED_IN_FLAG,
    USER_KEY,
    SessionState,
)
from login_app.models.user import PublicUser
from login_app.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionGate:
    """
    Single authority on whether this client is logged in, and as whom.

    Session state lives in the injected store as two keys that are written
    and removed together. Any failure of the store is logged and treated as
    "not authenticated", which is always the safe answer.
    """

    def __init__(self, store: SessionStore):
        self.store = store

    def record_login(self, user: PublicUser) -> bool:
        """Persist the session. Returns False if it could not be established."""
        try:
            # User first, so the flag never points at a missing payload
            self.store.set(USER_KEY, user.model_dump_json(by_alias=True))
            self.store.set(IS_LOGGED_IN_KEY, LOGGED_IN_FLAG)
        except Exception:
            logger.warning("Could not record login; rolling back", exc_info=True)
            self._clear()
            return False
        return True

    def record_logout(self) -> None:
        self._clear()

    def current_session(self) -> SessionState:
        try:
            flag = self.store.get(IS_LOGGED_IN_KEY)
            payload = self.store.get(USER_KEY) if flag == LOGGED_IN_FLAG else None
        except Exception:
            logger.warning("Session store unavailable; treating as logged out", exc_info=True)
            return SessionState()

        if payload is None:
            return SessionState()

        try:
            user = PublicUser.model_validate_json(payload)
        except ValidationError:
            logger.warning("Stored user payload is unreadable; treating as logged out")
            return SessionState()

        return SessionState(user=user)

    def _clear(self) -> None:
        for key in (IS_LOGGED_IN_KEY, USER_KEY):
            try:
                self.store.remove(key)
            except Exception:
                logger.warning("Could not remove %r from session store", key, exc_info=True)
