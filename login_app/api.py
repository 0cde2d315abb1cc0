"""Login API: the Credential Validator behind POST /api/login."""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from env_settings import ENV_SETTINGS
from login_app.credentials import validate_credentials
from login_app.models.login import (
    INVALID_REQUEST_MESSAGE,
    LoginFailure,
    LoginRequest,
    LoginSuccess,
)
from login_app.structured_logging import init_logging, install_request_logging

logger = logging.getLogger(__name__)


async def _invalid_request_handler(request: Request, exc: RequestValidationError):
    # Field-level detail stays in the log; the client gets the fixed message
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    body = LoginFailure(message=INVALID_REQUEST_MESSAGE)
    return JSONResponse(status_code=400, content=body.model_dump())


def create_app() -> FastAPI:
    application = FastAPI(title="Login Demo API")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(application)
    application.add_exception_handler(RequestValidationError, _invalid_request_handler)

    @application.post(
        "/api/login",
        response_model=LoginSuccess,
        responses={401: {"model": LoginFailure}, 400: {"model": LoginFailure}},
    )
    def login(body: LoginRequest):
        result = validate_credentials(body)
        if isinstance(result, LoginFailure):
            return JSONResponse(status_code=401, content=result.model_dump())
        return result

    return application


app = create_app()


def main() -> None:
    init_logging(ENV_SETTINGS.log_level, ENV_SETTINGS.log_json)
    logger.info(
        "Server is running at http://%s:%d",
        ENV_SETTINGS.server_host,
        ENV_SETTINGS.server_port,
    )
    uvicorn.run(
        app,
        host=ENV_SETTINGS.server_host,
        port=ENV_SETTINGS.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
