"""Dependencies shared by the routers of both services."""

from fastapi import Request

from app.core.telemetry.context import DiagnosticContext, new_request_id


def diagnostic_context(request: Request) -> DiagnosticContext:
    """Return the diagnostic context for the current request."""
    request_id = getattr(request.state, "request_id", None) or new_request_id()
    return DiagnosticContext(request_id=request_id)
