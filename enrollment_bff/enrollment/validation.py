"""Request validation for enrollment lifecycle operations.

All checks are pure: they raise MissingFieldError for the first
violated rule and never touch the store.
"""

from enrollment_bff.enrollment.errors import MissingFieldError
from enrollment_bff.enrollment.models import EnrollmentRequest


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_create(request: EnrollmentRequest) -> EnrollmentRequest:
    """Validate a creation request.

    Returns:
        The request with selected_benefits normalized to a de-duplicated
        list (empty when absent)

    Raises:
        MissingFieldError: If customer_id or plan_id is empty
    """
    if _is_blank(request.customer_id):
        raise MissingFieldError("customer_id")
    if _is_blank(request.plan_id):
        raise MissingFieldError("plan_id")

    benefits = list(dict.fromkeys(request.selected_benefits or []))
    return request.model_copy(update={"selected_benefits": benefits})


def validate_activate(enrollment_id: str | None) -> str:
    """Validate an activation target id."""
    if enrollment_id is None or not enrollment_id.strip():
        raise MissingFieldError("enrollment_id")
    return enrollment_id


def validate_delete(enrollment_id: str | None) -> str:
    """Validate a deletion target id."""
    return validate_activate(enrollment_id)
