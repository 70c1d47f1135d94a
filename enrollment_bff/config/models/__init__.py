"""Nested configuration models."""

from enrollment_bff.config.models.api import APIConfig
from enrollment_bff.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from enrollment_bff.config.models.plans import PlanCatalogConfig
from enrollment_bff.config.models.storage import (
    EnrollmentStoreConfig,
    PostgresConfig,
    StorageConfig,
)

__all__ = [
    "APIConfig",
    "EnrollmentStoreConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PlanCatalogConfig",
    "PostgresConfig",
    "StorageConfig",
    "TracingConfig",
]
