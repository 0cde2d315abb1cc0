import logging

import httpx
from pydantic import ValidationError

from env_settings import ENV_SETTINGS
from login_app.models.login import (
    LOGIN_ERROR_MESSAGE,
    LOGIN_RESULT_ADAPTER,
    LoginFailure,
    LoginRequest,
    LoginResult,
    LoginSuccess,
)

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/login"


class LoginClientError(Exception):
    """The login call failed without a verdict from the API."""


class LoginTransportError(LoginClientError):
    """Network unreachable, timed out, or the request was aborted."""


class MalformedLoginResponse(LoginClientError):
    """The API answered, but not with a recognisable login result."""


def request_login(
    username: str,
    password: str,
    *,
    base_url: str,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> LoginResult:
    """
    POST the credentials to the login API and parse its verdict.

    Credentials go in the JSON body only. Raises LoginTransportError or
    MalformedLoginResponse when there is no usable verdict.
    """
    body = LoginRequest(username=username, password=password).model_dump(by_alias=True)

    try:
        with httpx.Client(base_url=base_url, timeout=timeout, transport=transport) as client:
            response = client.post(LOGIN_PATH, json=body)
    except httpx.TransportError as exc:
        raise LoginTransportError(f"{type(exc).__name__}: {exc}") from exc
    except httpx.RequestError as exc:
        # Body arrived but could not be decoded, or redirects looped
        raise MalformedLoginResponse(f"{type(exc).__name__}: {exc}") from exc

    if not (response.is_success or response.is_client_error):
        raise MalformedLoginResponse(f"unexpected status {response.status_code}")

    try:
        result = LOGIN_RESULT_ADAPTER.validate_json(response.content)
    except ValidationError as exc:
        raise MalformedLoginResponse(
            f"unreadable body with status {response.status_code}"
        ) from exc

    if isinstance(result, LoginSuccess) and not response.is_success:
        raise MalformedLoginResponse(f"success body with status {response.status_code}")

    return result


def submit_login(
    username: str,
    password: str,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> LoginResult:
    """Like request_login, but every failure comes back as a LoginFailure."""
    try:
        return request_login(
            username,
            password,
            base_url=base_url or ENV_SETTINGS.api_base_url,
            timeout=timeout or ENV_SETTINGS.request_timeout_seconds,
            transport=transport,
        )
    except LoginClientError as exc:
        logger.error("Login error: %s", exc)
        return LoginFailure(message=LOGIN_ERROR_MESSAGE)
