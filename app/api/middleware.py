"""Middleware for the book platform APIs."""

import time
from collections.abc import Awaitable, Callable

from fastapi import status
from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, unbind_contextvars

from app.core.telemetry.context import new_request_id
from app.core.telemetry.logger import get_logger


class LoggerMiddleware(BaseHTTPMiddleware):
    """
    Middleware class to log requests and responses.

    Every request gets a short request id, stored on ``request.state`` so routes
    can hand it to the diagnostic context of the search, and bound to the logging
    context for the duration of the request. Responses are logged by status class
    together with the time taken to produce the response head.
    """

    def __init__(self, app: Starlette) -> None:
        """
        Initialize the logger middleware.

        Args:
            app: The Starlette application instance.

        """
        super().__init__(app)
        self.logger = get_logger(__name__)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """
        Process the request and response with logging.

        Args:
            request: The incoming request.
            call_next: The next middleware or route handler.

        Returns:
            The response from the next middleware or route handler.

        """
        request_id = new_request_id()
        request.state.request_id = request_id
        bind_contextvars(
            path=request.url.path,
            method=request.method,
            client_host=request.client and request.client.host,
            request_id=request_id,
        )
        started = time.perf_counter()
        self.logger.info("Incoming request", query=request.url.query)

        try:
            response = await call_next(request)
            bind_contextvars(
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000),
            )

            if (
                status.HTTP_400_BAD_REQUEST
                <= response.status_code
                < status.HTTP_500_INTERNAL_SERVER_ERROR
            ):
                self.logger.warning("Client error")
            elif response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                self.logger.error("Server error")
            else:
                self.logger.info("OK")

        except Exception:
            self.logger.exception("Unhandled exception in request")
            raise
        else:
            return response
        finally:
            unbind_contextvars(
                "path",
                "method",
                "client_host",
                "request_id",
                "status_code",
                "duration_ms",
            )
