"""API request and response models."""

from enrollment_bff.api.models.enrollment import (
    ActivationResponse,
    CreateEnrollmentBody,
    DeletionResponse,
    EnrollmentResponse,
    EnrollmentStatusResponse,
)
from enrollment_bff.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from enrollment_bff.api.models.health import ComponentHealth, HealthResponse

__all__ = [
    "ActivationResponse",
    "ComponentHealth",
    "CreateEnrollmentBody",
    "DeletionResponse",
    "EnrollmentResponse",
    "EnrollmentStatusResponse",
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
