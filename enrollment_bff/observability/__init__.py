"""Observability: structured logging, distributed tracing, metrics.

structlog for logging, OpenTelemetry for tracing, Prometheus for metrics.
"""
