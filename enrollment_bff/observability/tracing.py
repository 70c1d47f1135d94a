"""OpenTelemetry tracing setup.

Spans are exported over OTLP when an endpoint is configured.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, SpanKind, Tracer

_tracer: Tracer | None = None


def setup_tracing(
    service_name: str = "enrollment-bff",
    otlp_endpoint: str | None = None,
) -> Tracer:
    """Initialize OpenTelemetry tracing.

    Args:
        service_name: Name to identify this service in traces
        otlp_endpoint: OTLP gRPC endpoint, falls back to
            OTEL_EXPORTER_OTLP_ENDPOINT

    Returns:
        Configured Tracer instance
    """
    global _tracer

    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))

    endpoint = otlp_endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
        )

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> Tracer:
    """Get the configured tracer, or a no-op tracer if not initialized."""
    if _tracer is None:
        return trace.get_tracer("enrollment-bff")
    return _tracer


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string, if inside a valid span."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.trace_id, "032x")
    return None


@contextmanager
def lifecycle_span(
    operation: str,
    **attributes: Any,
) -> Generator[Span, None, None]:
    """Open an internal span for a lifecycle operation.

    Attributes with a None value are not recorded.
    """
    with get_tracer().start_as_current_span(
        f"enrollment.{operation}",
        kind=SpanKind.INTERNAL,
        attributes={
            f"enrollment.{key}": value
            for key, value in attributes.items()
            if value is not None
        },
    ) as span:
        yield span
