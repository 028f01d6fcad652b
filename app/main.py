"""Main module for the book service, which searches the synthetic corpus."""

from app.api.root import register_api
from app.core.config import get_settings
from app.core.telemetry.logger import get_logger, logger_configurer
from app.core.telemetry.otel import configure_otel
from app.domain.books.routes import router as books_router

logger = get_logger(__name__)
settings = get_settings()
logger_configurer.configure_console_logger(
    log_level=settings.log_level, rich_rendering=settings.running_locally
)

if settings.otel_config and settings.otel_enabled:
    configure_otel(
        settings.otel_config,
        f"{settings.app_name}-book-service",
        settings.app_version,
        settings.env,
    )

app = register_api(
    "Book Service",
    settings.app_version,
    [books_router],
    otel_enabled=settings.otel_enabled,
)
