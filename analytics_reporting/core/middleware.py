import time
import os
import getpass
import platform
import socket
import logging
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from analytics_reporting.core.config import APPLICATION_ID

logger = logging.getLogger(__name__)


def _current_username() -> str:
    try:
        return os.environ.get("USER") or os.environ.get("USERNAME") or getpass.getuser() or "unknown_user"
    except Exception:
        return "unknown_user"


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.username = _current_username()
        self.hostname = socket.gethostname() or platform.node() or "unknown_host"
        self.application_id = APPLICATION_ID

        logger.info(
            "Logging middleware initialized with username: %s on host: %s, App ID: %s",
            self.username,
            self.hostname,
            self.application_id,
        )

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        response = await call_next(request)
        processing_time = time.time() - start_time

        logger.info(
            "%s %s -> %d in %.3fs [user=%s host=%s app=%s client=%s]",
            request.method,
            request.url.path,
            response.status_code,
            processing_time,
            self.username,
            self.hostname,
            self.application_id,
            request.client.host if request.client else None,
        )
        return response
