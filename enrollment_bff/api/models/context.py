"""Request context model for middleware and observability."""

from pydantic import BaseModel


class RequestContext(BaseModel):
    """Identifiers bound at the start of each request.

    Used to correlate logs and traces across the request lifecycle.
    """

    request_id: str
    """Unique identifier for this request."""

    trace_id: str
    """OpenTelemetry trace ID, or the request ID when tracing is off."""

    client_app: str | None = None
    """Calling application from the X-Client-App header."""
