"""Enrollment error taxonomy.

Every error a lifecycle operation reports to its caller is one of the
EnrollmentError subclasses below. Each carries the structured data
describing the violated rule so the request boundary can render it
without exposing internals.
"""

from enrollment_bff.enrollment.enums import EnrollmentStatus


class EnrollmentError(Exception):
    """Base exception for all enrollment lifecycle errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingFieldError(EnrollmentError):
    """Raised when a required request field is empty or absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} is required")
        self.field = field


class DuplicateIdError(EnrollmentError):
    """Raised when an enrollment id is already present in the store."""

    def __init__(self, enrollment_id: str) -> None:
        super().__init__(f"Enrollment {enrollment_id} already exists")
        self.enrollment_id = enrollment_id


class EnrollmentNotFoundError(EnrollmentError):
    """Raised when no enrollment matches the requested id or hierarchy."""

    def __init__(self, enrollment_id: str) -> None:
        super().__init__(f"Enrollment {enrollment_id} not found")
        self.enrollment_id = enrollment_id


class InvalidTransitionError(EnrollmentError):
    """Raised when a status change is not allowed by the state machine."""

    def __init__(
        self,
        enrollment_id: str,
        from_status: EnrollmentStatus,
        to_status: EnrollmentStatus,
    ) -> None:
        super().__init__(
            f"Enrollment {enrollment_id} cannot move from "
            f"{from_status.value} to {to_status.value}"
        )
        self.enrollment_id = enrollment_id
        self.from_status = from_status
        self.to_status = to_status
