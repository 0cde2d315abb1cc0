"""
Logging setup
=============
Configures Python's logging for both the API process and the Streamlit
front end.

Usage:
    from login_app.structured_logging import init_logging, install_request_logging
    init_logging(level="INFO", json_output=False)
    install_request_logging(app)

JSON lines contain:
  - timestamp (ISO-8601 UTC)
  - level
  - logger (module name)
  - message
  - request_id (if inside an API request)
  - exception (if the record carries exc_info)

Request bodies are never logged; they hold passwords.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import FastAPI, Request

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

_http_logger = logging.getLogger("login_app.http")


def current_request_id() -> str | None:
    return _request_id.get()


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = current_request_id()
        if request_id:
            payload["request_id"] = request_id

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def init_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure the root logger with a single stdout handler.

    Parameters
    ----------
    level : str
        DEBUG, INFO, WARNING or ERROR. Unknown names fall back to INFO.
    json_output : bool
        Emit JSON lines instead of the human-readable format.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Streamlit re-runs scripts; replace rather than stack handlers
    for handler in root.handlers[:]:
        root.handlers.remove(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root.addHandler(handler)


def install_request_logging(app: FastAPI) -> None:
    """Assign a request id to every request and log its start and end."""

    @app.middleware("http")
    async def _request_logging(request: Request, call_next):
        token = _request_id.set(uuid.uuid4().hex)
        try:
            _http_logger.info("request_start %s %s", request.method, request.url.path)
            response = await call_next(request)
            _http_logger.info(
                "request_end %s %s status=%d",
                request.method,
                request.url.path,
                response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = current_request_id() or ""
            return response
        finally:
            _request_id.reset(token)
