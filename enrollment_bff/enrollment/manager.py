"""Enrollment lifecycle manager.

Stateless orchestration over validation, the plan catalog and the
enrollment store. Holds no enrollment state of its own; every read and
write goes through the injected store.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.errors import EnrollmentError, EnrollmentNotFoundError
from enrollment_bff.enrollment.ids import new_enrollment_id
from enrollment_bff.enrollment.models import Enrollment, EnrollmentRequest, utc_now
from enrollment_bff.enrollment.plans import PlanCatalog
from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.enrollment.validation import (
    validate_activate,
    validate_create,
    validate_delete,
)
from enrollment_bff.observability.logging import get_logger
from enrollment_bff.observability.metrics import (
    ENROLLMENT_OPERATIONS,
    ENROLLMENT_TRANSITIONS,
)
from enrollment_bff.observability.tracing import lifecycle_span

logger = get_logger(__name__)


@contextmanager
def _track(operation: str, **context: str | None) -> Iterator[None]:
    """Count the outcome of a lifecycle operation and wrap it in a span."""
    with lifecycle_span(operation, **context):
        try:
            yield
        except EnrollmentError as e:
            ENROLLMENT_OPERATIONS.labels(operation=operation, outcome=type(e).__name__).inc()
            logger.info(f"{operation}_rejected", reason=e.message, **context)
            raise
        ENROLLMENT_OPERATIONS.labels(operation=operation, outcome="success").inc()


class EnrollmentLifecycleManager:
    """Entry point for all enrollment lifecycle operations.

    Validates requests, assigns identity on creation and delegates
    state transitions to the store, which applies them atomically.
    """

    def __init__(
        self,
        store: EnrollmentStore,
        plan_catalog: PlanCatalog,
        id_factory: Callable[[], str] = new_enrollment_id,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the manager.

        Args:
            store: Enrollment store owning all records
            plan_catalog: Resolves plan display names at creation time
            id_factory: Produces new enrollment ids
            clock: Source of creation timestamps
        """
        self._store = store
        self._plan_catalog = plan_catalog
        self._id_factory = id_factory
        self._clock = clock

    async def create_enrollment(self, request: EnrollmentRequest) -> Enrollment:
        """Validate a request and persist a new pending enrollment.

        Raises:
            MissingFieldError: If customer_id or plan_id is empty
            DuplicateIdError: If the generated id collides with a stored one
        """
        with _track("create_enrollment", customer_id=request.customer_id):
            request = validate_create(request)
            now = self._clock()
            enrollment = Enrollment(
                enrollment_id=self._id_factory(),
                customer_id=request.customer_id,
                plan_id=request.plan_id,
                plan_name=await self._plan_catalog.resolve_plan_name(request.plan_id),
                selected_benefits=tuple(request.selected_benefits or ()),
                status=EnrollmentStatus.PENDING,
                enrollment_date=now,
                updated_at=now,
                organization_id=request.organization_id,
                department_id=request.department_id,
                employee_id=request.employee_id,
            )
            await self._store.insert(enrollment)

        logger.info(
            "enrollment_created",
            enrollment_id=enrollment.enrollment_id,
            customer_id=enrollment.customer_id,
            plan_id=enrollment.plan_id,
            benefit_count=len(enrollment.selected_benefits),
        )
        return enrollment

    async def activate_enrollment(self, enrollment_id: str | None) -> None:
        """Move a pending enrollment to active.

        Raises:
            MissingFieldError: If enrollment_id is empty
            EnrollmentNotFoundError: If the id is unknown
            InvalidTransitionError: If the enrollment is active or deleted
        """
        with _track("activate_enrollment", enrollment_id=enrollment_id):
            enrollment_id = validate_activate(enrollment_id)
            await self._store.update_status(enrollment_id, EnrollmentStatus.ACTIVE)

        ENROLLMENT_TRANSITIONS.labels(
            from_status=EnrollmentStatus.PENDING.value,
            to_status=EnrollmentStatus.ACTIVE.value,
        ).inc()
        logger.info("enrollment_activated", enrollment_id=enrollment_id)

    async def delete_enrollment(self, enrollment_id: str | None) -> None:
        """Logically delete an enrollment. Repeated deletes succeed.

        Raises:
            MissingFieldError: If enrollment_id is empty
            EnrollmentNotFoundError: If the id was never issued
        """
        with _track("delete_enrollment", enrollment_id=enrollment_id):
            enrollment_id = validate_delete(enrollment_id)
            await self._store.delete(enrollment_id)

        logger.info("enrollment_deleted", enrollment_id=enrollment_id)

    async def get_customer_enrollments(self, customer_id: str) -> list[Enrollment]:
        """List a customer's enrollments, oldest first.

        An unknown customer simply has no enrollments.
        """
        with _track("get_customer_enrollments", customer_id=customer_id):
            enrollments = await self._store.list_by_customer(customer_id)

        logger.debug(
            "customer_enrollments_listed",
            customer_id=customer_id,
            count=len(enrollments),
        )
        return enrollments

    async def get_employee_enrollment(
        self,
        organization_id: str,
        department_id: str,
        employee_id: str,
        enrollment_id: str,
    ) -> Enrollment:
        """Look up an enrollment through its corporate hierarchy path.

        Raises:
            EnrollmentNotFoundError: If no enrollment matches all four ids
        """
        with _track(
            "get_employee_enrollment",
            organization_id=organization_id,
            department_id=department_id,
            employee_id=employee_id,
            enrollment_id=enrollment_id,
        ):
            enrollment = await self._store.find_by_hierarchy(
                organization_id, department_id, employee_id, enrollment_id
            )
            if enrollment is None:
                raise EnrollmentNotFoundError(enrollment_id)

        return enrollment

    async def get_enrollment_status(self, enrollment_id: str) -> EnrollmentStatus:
        """Get the current status of an enrollment.

        Raises:
            EnrollmentNotFoundError: If the id is unknown
        """
        with _track("get_enrollment_status", enrollment_id=enrollment_id):
            enrollment = await self._store.get(enrollment_id)
            if enrollment is None:
                raise EnrollmentNotFoundError(enrollment_id)

        return enrollment.status
