"""Prometheus metrics for the enrollment lifecycle."""

from prometheus_client import Counter, Histogram

ENROLLMENT_OPERATIONS = Counter(
    "enrollment_bff_operations_total",
    "Lifecycle operations handled, by outcome",
    labelnames=["operation", "outcome"],
)

ENROLLMENT_TRANSITIONS = Counter(
    "enrollment_bff_status_transitions_total",
    "Enrollment status transitions applied",
    labelnames=["from_status", "to_status"],
)

REQUEST_LATENCY = Histogram(
    "enrollment_bff_request_latency_seconds",
    "HTTP request latency in seconds",
    labelnames=["method", "route", "status"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

ERRORS = Counter(
    "enrollment_bff_errors_total",
    "Errors returned to callers",
    labelnames=["error_code"],
)
