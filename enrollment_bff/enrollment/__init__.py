"""Enrollment lifecycle: models, validation, storage and orchestration.

Enrollments move Pending -> Active -> Deleted (or Pending -> Deleted).
Deleted is terminal and deletion is logical, so ids are never reused.
"""

from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.errors import (
    DuplicateIdError,
    EnrollmentError,
    EnrollmentNotFoundError,
    InvalidTransitionError,
    MissingFieldError,
)
from enrollment_bff.enrollment.manager import EnrollmentLifecycleManager
from enrollment_bff.enrollment.models import Enrollment, EnrollmentRequest
from enrollment_bff.enrollment.plans import PlanCatalog, StaticPlanCatalog

__all__ = [
    # Enums
    "EnrollmentStatus",
    # Models
    "Enrollment",
    "EnrollmentRequest",
    # Errors
    "EnrollmentError",
    "MissingFieldError",
    "DuplicateIdError",
    "EnrollmentNotFoundError",
    "InvalidTransitionError",
    # Services
    "EnrollmentLifecycleManager",
    "PlanCatalog",
    "StaticPlanCatalog",
]
