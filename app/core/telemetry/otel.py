"""Configure OpenTelemetry for tracing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from app.core.telemetry.attributes import Attributes
from app.core.telemetry.logger import get_logger

if TYPE_CHECKING:
    from app.core.config import Environment, OTelConfig

logger = get_logger(__name__)


def configure_otel(
    config: OTelConfig, app_name: str, app_version: str, env: Environment
) -> None:
    """
    Configure OpenTelemetry tracing.

    Sets up the OpenTelemetry SDK with an OTLP exporter globally, so spans
    started anywhere in the app are exported with no need to pass around
    objects. Outgoing httpx requests are instrumented too.
    """
    # Ensures this can only be called once (basically helps on dev autoreload)
    if trace._TRACER_PROVIDER_SET_ONCE._done:  # noqa: SLF001
        return

    headers = {}
    if config.api_key:
        headers["x-honeycomb-team"] = config.api_key

    resource = Resource.create(
        {
            Attributes.SERVICE_NAMESPACE: "book-platform",
            Attributes.SERVICE_NAME: f"{app_name}-{env.value}",
            Attributes.SERVICE_VERSION: app_version,
            Attributes.DEPLOYMENT_ENVIRONMENT: env.value,
        }
    )

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(
                endpoint=str(config.trace_endpoint),
                headers=headers,
            ),
        )
    )
    trace.set_tracer_provider(tracer_provider)
    HTTPXClientInstrumentor().instrument()

    logger.info("OpenTelemetry configured", service_name=f"{app_name}-{env.value}")
