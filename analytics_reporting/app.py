"""FastAPI application entry point for the analytics report data service."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analytics_reporting.core.exceptions import (
    ConfigurationError,
    FilterResolutionError,
    InvalidRequest,
    StoreExecutionError,
)
from analytics_reporting.core.exception_handlers import (
    configuration_exception_handler,
    filter_resolution_exception_handler,
    invalid_request_exception_handler,
    store_exception_handler,
)
from analytics_reporting.core.middleware import LoggingMiddleware
from analytics_reporting.core.router import register_routes


def create_app() -> FastAPI:

    app = FastAPI(docs_url="/api/docs", redoc_url="/api/redoc", openapi_url="/api/openapi.json")

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(InvalidRequest, invalid_request_exception_handler)
    app.add_exception_handler(FilterResolutionError, filter_resolution_exception_handler)
    app.add_exception_handler(ConfigurationError, configuration_exception_handler)
    app.add_exception_handler(StoreExecutionError, store_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, replace with specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    return app
