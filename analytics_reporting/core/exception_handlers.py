# analytics_reporting/core/exception_handlers.py

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from analytics_reporting.core.exceptions import (
    ConfigurationError,
    FilterResolutionError,
    InvalidRequest,
    StoreExecutionError,
)

logger = logging.getLogger(__name__)


async def invalid_request_exception_handler(request: Request, exc: InvalidRequest):
    logger.warning("Invalid report query on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def filter_resolution_exception_handler(request: Request, exc: FilterResolutionError):
    logger.warning("Filter resolution failed on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    logger.error("Report data source is misconfigured: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Report data source is not configured"})


async def store_exception_handler(request: Request, exc: StoreExecutionError):
    """Store failures are logged with their traceback and reported as a bad gateway"""
    logger.error("Document store failure on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=502,
        content={"detail": "Document store request failed", "type": type(exc).__name__},
    )
