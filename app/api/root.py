"""Application factory shared by the book service and the client gateway."""

from collections.abc import Sequence

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware import Middleware
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from app.api.exception_handlers import (
    invalid_query_exception_handler,
    request_validation_exception_handler,
)
from app.api.middleware import LoggerMiddleware
from app.core.exceptions import InvalidQueryError
from app.routers.healthcheck import router as healthcheck_router


def register_api(
    title: str,
    version: str,
    routers: Sequence[APIRouter],
    *,
    otel_enabled: bool = False,
) -> FastAPI:
    """Register the API routers and configure the FastAPI application."""
    app = FastAPI(
        title=title,
        version=version,
        middleware=[Middleware(LoggerMiddleware)],
        exception_handlers={
            InvalidQueryError: invalid_query_exception_handler,
            RequestValidationError: request_validation_exception_handler,
        },
    )

    app.include_router(healthcheck_router)
    for router in routers:
        app.include_router(router)

    if otel_enabled:
        FastAPIInstrumentor().instrument_app(app)

    return app
