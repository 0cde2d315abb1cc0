import logging

from login_app.models.login import (
    INVALID_CREDENTIALS_MESSAGE,
    LoginFailure,
    LoginRequest,
    LoginResult,
    LoginSuccess,
)
from login_app.models.user import UserRecord

logger = logging.getLogger(__name__)

# Hardcoded roster for the demo; fixed for the life of the process
USERS: tuple[UserRecord, ...] = (UserRecord(username="admin", password="123"),)


def find_user(username: str, password: str) -> UserRecord | None:
    """Return the record matching both fields exactly, or None."""
    for user in USERS:
        if user.username == username and user.password == password:
            return user
    return None


def validate_credentials(request: LoginRequest) -> LoginResult:
    """
    Check a submitted username/password pair against the roster.

    Comparison is case-sensitive with no trimming. The call has no side
    effects beyond logging, so repeating it with the same input always
    yields the same verdict.
    """
    logger.info("Login attempt for user %r", request.username)

    user = find_user(request.username, request.password)
    if user is None:
        logger.info("Login rejected for user %r", request.username)
        return LoginFailure(message=INVALID_CREDENTIALS_MESSAGE)

    return LoginSuccess(user=user.to_public())
