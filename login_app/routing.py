import logging
from enum import Enum

from login_app.models.session_state import SessionState
from login_app.session_gate import SessionGate

logger = logging.getLogger(__name__)


class Route(Enum):
    LOGIN = "/"
    PROTECTED = "/welcome"

    @property
    def path(self) -> str:
        return self.value

    @property
    def requires_auth(self) -> bool:
        return self is Route.PROTECTED


def resolve_route(requested: Route, state: SessionState) -> Route:
    """Where a navigation to `requested` actually lands for this session."""
    if requested.requires_auth and not state.is_authenticated:
        return Route.LOGIN
    if requested is Route.LOGIN and state.is_authenticated:
        return Route.PROTECTED
    return requested


def guard(requested: Route, gate: SessionGate) -> tuple[Route, SessionState]:
    """Evaluate the session afresh and resolve the navigation against it."""
    state = gate.current_session()
    target = resolve_route(requested, state)
    if target is not requested:
        logger.info(
            "Redirecting %s -> %s (authenticated=%s)",
            requested.path,
            target.path,
            state.is_authenticated,
        )
    return target, state
