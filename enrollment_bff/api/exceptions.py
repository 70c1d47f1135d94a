"""Mapping from enrollment errors to HTTP responses.

Each domain error class maps to a status code and an ErrorCode. The
global exception handler uses this table to render ErrorResponse
bodies. Anything not in the table is an internal error.
"""

from enrollment_bff.api.models.errors import ErrorBody, ErrorCode
from enrollment_bff.enrollment.errors import (
    DuplicateIdError,
    EnrollmentError,
    EnrollmentNotFoundError,
    InvalidTransitionError,
    MissingFieldError,
)

ERROR_STATUS: dict[type[EnrollmentError], tuple[int, ErrorCode]] = {
    MissingFieldError: (400, ErrorCode.MISSING_FIELD),
    EnrollmentNotFoundError: (404, ErrorCode.ENROLLMENT_NOT_FOUND),
    InvalidTransitionError: (409, ErrorCode.INVALID_TRANSITION),
    DuplicateIdError: (409, ErrorCode.DUPLICATE_ENROLLMENT),
}


def error_status(exc: EnrollmentError) -> tuple[int, ErrorCode]:
    """Get the HTTP status and error code for an enrollment error."""
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            return ERROR_STATUS[error_type]
    return 500, ErrorCode.INTERNAL_ERROR


def error_body(exc: EnrollmentError) -> tuple[int, ErrorBody]:
    """Build the status code and error body for an enrollment error."""
    status_code, code = error_status(exc)
    if code == ErrorCode.INTERNAL_ERROR:
        return status_code, ErrorBody(code=code, message="An unexpected error occurred")
    return status_code, ErrorBody(
        code=code,
        message=exc.message,
        field=getattr(exc, "field", None),
    )
