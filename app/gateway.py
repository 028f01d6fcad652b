"""Main module for the book client gateway, which searches via the book service."""

from app.api.root import register_api
from app.core.config import get_settings
from app.core.telemetry.logger import get_logger, logger_configurer
from app.core.telemetry.otel import configure_otel
from app.domain.client.routes import router as client_router

logger = get_logger(__name__)
settings = get_settings()
logger_configurer.configure_console_logger(
    log_level=settings.log_level, rich_rendering=settings.running_locally
)

if settings.otel_config and settings.otel_enabled:
    configure_otel(
        settings.otel_config,
        f"{settings.app_name}-gateway",
        settings.app_version,
        settings.env,
    )

app = register_api(
    "Book Client Gateway",
    settings.app_version,
    [client_router],
    otel_enabled=settings.otel_enabled,
)
logger.info(
    "Book client gateway configured",
    book_service_url=str(settings.book_client.book_service_url),
    max_retries=settings.book_client.max_retries,
)
