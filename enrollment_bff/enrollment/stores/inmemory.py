"""In-memory implementation of EnrollmentStore."""

import asyncio
from collections import defaultdict

from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.errors import DuplicateIdError, EnrollmentNotFoundError
from enrollment_bff.enrollment.models import Enrollment
from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.enrollment.transitions import apply_transition


class InMemoryEnrollmentStore(EnrollmentStore):
    """In-memory implementation of EnrollmentStore for development and testing.

    Writes take a lock scoped to the enrollment id, so unrelated
    enrollments never wait on each other. Records are immutable and
    replaced whole, so lock-free reads always see a complete record.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._enrollments: dict[str, Enrollment] = {}
        self._customer_index: dict[str, list[str]] = defaultdict(list)
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, enrollment_id: str) -> asyncio.Lock:
        return self._locks.setdefault(enrollment_id, asyncio.Lock())

    def _existing_lock(self, enrollment_id: str) -> asyncio.Lock:
        """Lock for a stored enrollment. Unknown ids never get a lock."""
        if enrollment_id not in self._enrollments:
            raise EnrollmentNotFoundError(enrollment_id)
        return self._lock_for(enrollment_id)

    def _require(self, enrollment_id: str) -> Enrollment:
        enrollment = self._enrollments.get(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return enrollment

    async def insert(self, enrollment: Enrollment) -> None:
        """Add a new enrollment."""
        async with self._lock_for(enrollment.enrollment_id):
            if enrollment.enrollment_id in self._enrollments:
                raise DuplicateIdError(enrollment.enrollment_id)
            self._enrollments[enrollment.enrollment_id] = enrollment
            self._customer_index[enrollment.customer_id].append(enrollment.enrollment_id)

    async def get(self, enrollment_id: str) -> Enrollment | None:
        """Get an enrollment by id."""
        return self._enrollments.get(enrollment_id)

    async def list_by_customer(self, customer_id: str) -> list[Enrollment]:
        """List a customer's enrollments, oldest first."""
        ids = self._customer_index.get(customer_id, [])
        results = [self._enrollments[enrollment_id] for enrollment_id in ids]
        results.sort(key=lambda e: e.enrollment_date)
        return results

    async def find_by_hierarchy(
        self,
        organization_id: str,
        department_id: str,
        employee_id: str,
        enrollment_id: str,
    ) -> Enrollment | None:
        """Get an enrollment only if it sits under the given hierarchy path."""
        enrollment = self._enrollments.get(enrollment_id)
        if enrollment and enrollment.matches_hierarchy(
            organization_id, department_id, employee_id
        ):
            return enrollment
        return None

    async def update_status(
        self, enrollment_id: str, new_status: EnrollmentStatus
    ) -> Enrollment:
        """Move an enrollment to a new status."""
        async with self._existing_lock(enrollment_id):
            updated = apply_transition(self._require(enrollment_id), new_status)
            self._enrollments[enrollment_id] = updated
            return updated

    async def delete(self, enrollment_id: str) -> None:
        """Mark an enrollment as deleted."""
        async with self._existing_lock(enrollment_id):
            current = self._require(enrollment_id)
            if current.status == EnrollmentStatus.DELETED:
                return
            self._enrollments[enrollment_id] = apply_transition(
                current, EnrollmentStatus.DELETED
            )
