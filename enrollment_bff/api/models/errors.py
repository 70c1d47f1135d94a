"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes returned by every endpoint."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request body or parameters failed schema validation."""

    MISSING_FIELD = "MISSING_FIELD"
    """A required field was empty or absent."""

    ENROLLMENT_NOT_FOUND = "ENROLLMENT_NOT_FOUND"
    """No enrollment matches the given id or hierarchy path."""

    INVALID_TRANSITION = "INVALID_TRANSITION"
    """The enrollment's current status does not allow the change."""

    DUPLICATE_ENROLLMENT = "DUPLICATE_ENROLLMENT"
    """An enrollment with the generated id already exists."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    """Machine-readable error code."""

    message: str
    """Human-readable error message."""

    field: str | None = None
    """Missing field name for MISSING_FIELD errors."""

    details: list[ErrorDetail] | None = None
    """Additional error details for validation failures."""


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "ENROLLMENT_NOT_FOUND",
                "message": "Enrollment abc not found"
            }
        }
    """

    error: ErrorBody
