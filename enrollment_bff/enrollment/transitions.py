"""Enrollment status state machine."""

from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.errors import InvalidTransitionError
from enrollment_bff.enrollment.models import Enrollment

ALLOWED_TRANSITIONS: dict[EnrollmentStatus, frozenset[EnrollmentStatus]] = {
    EnrollmentStatus.PENDING: frozenset({EnrollmentStatus.ACTIVE, EnrollmentStatus.DELETED}),
    EnrollmentStatus.ACTIVE: frozenset({EnrollmentStatus.DELETED}),
    EnrollmentStatus.DELETED: frozenset(),
}


def can_transition(current: EnrollmentStatus, target: EnrollmentStatus) -> bool:
    """Check whether a status change is legal."""
    return target in ALLOWED_TRANSITIONS[current]


def apply_transition(enrollment: Enrollment, target: EnrollmentStatus) -> Enrollment:
    """Return a copy of the enrollment moved to the target status.

    Raises:
        InvalidTransitionError: If the state machine forbids the change
    """
    if not can_transition(enrollment.status, target):
        raise InvalidTransitionError(enrollment.enrollment_id, enrollment.status, target)
    return enrollment.with_status(target)
