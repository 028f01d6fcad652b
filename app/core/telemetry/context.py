"""Request-scoped diagnostic context passed explicitly through the search path."""

import uuid
from dataclasses import dataclass, field

import structlog

from app.core.telemetry.logger import get_logger


def new_request_id() -> str:
    """Return a short random identifier for a request."""
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True, slots=True)
class DiagnosticContext:
    """
    Diagnostic channel for a single logical call.

    Components log through ``logger``, which is bound to the request id, instead
    of reaching for module-level loggers. A context is created per request and
    dropped with it.
    """

    request_id: str = field(default_factory=new_request_id)
    logger: structlog.stdlib.BoundLogger = field(init=False)

    def __post_init__(self) -> None:
        """Bind the logger to the request id."""
        object.__setattr__(
            self,
            "logger",
            get_logger("app.search").bind(request_id=self.request_id),
        )

    def bind(self, **values: object) -> structlog.stdlib.BoundLogger:
        """Return the context logger with extra values bound."""
        return self.logger.bind(**values)
