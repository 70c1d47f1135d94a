"""EnrollmentStore abstract interface."""

from abc import ABC, abstractmethod

from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.models import Enrollment


class EnrollmentStore(ABC):
    """Abstract interface for enrollment storage.

    The store is the single owner of enrollment records. Implementations
    must make status changes atomic per enrollment id: the legality check
    and the write happen under the same per-record exclusion, while
    operations on different ids proceed independently.
    """

    @abstractmethod
    async def insert(self, enrollment: Enrollment) -> None:
        """Add a new enrollment.

        Raises:
            DuplicateIdError: If the id is already stored
        """
        pass

    @abstractmethod
    async def get(self, enrollment_id: str) -> Enrollment | None:
        """Get an enrollment by id."""
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: str) -> list[Enrollment]:
        """List a customer's enrollments, oldest first."""
        pass

    @abstractmethod
    async def find_by_hierarchy(
        self,
        organization_id: str,
        department_id: str,
        employee_id: str,
        enrollment_id: str,
    ) -> Enrollment | None:
        """Get an enrollment only if it sits under the given hierarchy path."""
        pass

    @abstractmethod
    async def update_status(
        self, enrollment_id: str, new_status: EnrollmentStatus
    ) -> Enrollment:
        """Move an enrollment to a new status.

        Raises:
            EnrollmentNotFoundError: If the id is unknown
            InvalidTransitionError: If the state machine forbids the change
        """
        pass

    @abstractmethod
    async def delete(self, enrollment_id: str) -> None:
        """Mark an enrollment as deleted. Deleting twice is a no-op.

        Raises:
            EnrollmentNotFoundError: If the id is unknown
        """
        pass

    async def health_check(self) -> bool:
        """Check that the backing storage is reachable."""
        return True
