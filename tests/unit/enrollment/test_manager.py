"""Tests for EnrollmentLifecycleManager."""

import asyncio
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from prometheus_client import REGISTRY

from enrollment_bff.enrollment import (
    DuplicateIdError,
    EnrollmentLifecycleManager,
    EnrollmentNotFoundError,
    EnrollmentRequest,
    EnrollmentStatus,
    InvalidTransitionError,
    MissingFieldError,
)


def _operation_count(operation: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value(
        "enrollment_bff_operations_total",
        {"operation": operation, "outcome": outcome},
    )
    return value or 0.0


@pytest.fixture
def ticking_clock():
    """Clock that advances one minute per call."""
    start = datetime(2024, 1, 1, tzinfo=UTC)
    ticks = count()
    return lambda: start + timedelta(minutes=next(ticks))


class TestCreateEnrollment:
    """Tests for create_enrollment."""

    async def test_creates_pending_enrollment(self, manager, store) -> None:
        """Should persist a pending enrollment with a fresh id."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(
                customer_id="C1", plan_id="P1", selected_benefits=["medical", "dental"]
            )
        )

        assert enrollment.enrollment_id
        assert enrollment.status == EnrollmentStatus.PENDING
        assert enrollment.selected_benefits == ("medical", "dental")
        assert enrollment.plan_name == "Premium Health Plan"
        assert await store.get(enrollment.enrollment_id) == enrollment

    async def test_unknown_plan_uses_default_name(self, manager) -> None:
        """Should label unknown plans with the default name."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P9")
        )
        assert enrollment.plan_name == "Health Savings Plan"
        assert enrollment.selected_benefits == ()

    async def test_records_hierarchy(self, manager) -> None:
        """Should carry hierarchy ids onto the enrollment."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(
                customer_id="C1",
                plan_id="P1",
                organization_id="O1",
                department_id="D1",
                employee_id="EMP1",
            )
        )
        assert enrollment.matches_hierarchy("O1", "D1", "EMP1")

    async def test_uses_clock_for_dates(self, store, plan_catalog) -> None:
        """Should stamp enrollment_date from the injected clock."""
        fixed = datetime(2024, 6, 1, tzinfo=UTC)
        manager = EnrollmentLifecycleManager(store, plan_catalog, clock=lambda: fixed)

        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        assert enrollment.enrollment_date == fixed
        assert enrollment.updated_at == fixed

    async def test_ids_are_unique(self, manager) -> None:
        """Should never reuse an id across creations."""
        created = [
            await manager.create_enrollment(
                EnrollmentRequest(customer_id="C1", plan_id="P1")
            )
            for _ in range(20)
        ]
        assert len({e.enrollment_id for e in created}) == 20

    async def test_missing_customer_leaves_store_untouched(self, manager, store) -> None:
        """Should reject before anything is stored."""
        with pytest.raises(MissingFieldError) as exc_info:
            await manager.create_enrollment(EnrollmentRequest(plan_id="P1"))

        assert exc_info.value.field == "customer_id"
        assert await store.list_by_customer("") == []

    async def test_missing_plan(self, manager, store) -> None:
        """Should name plan_id when it is empty."""
        with pytest.raises(MissingFieldError) as exc_info:
            await manager.create_enrollment(EnrollmentRequest(customer_id="C1"))

        assert exc_info.value.field == "plan_id"
        assert await store.list_by_customer("C1") == []

    async def test_id_collision_is_reported(self, store, plan_catalog) -> None:
        """Should surface DuplicateIdError when the id factory repeats."""
        manager = EnrollmentLifecycleManager(
            store, plan_catalog, id_factory=lambda: "fixed-id"
        )
        first = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        with pytest.raises(DuplicateIdError):
            await manager.create_enrollment(
                EnrollmentRequest(customer_id="C2", plan_id="corporate")
            )

        assert await store.get("fixed-id") == first
        assert await store.list_by_customer("C2") == []

    async def test_counts_outcomes(self, manager) -> None:
        """Should count successes and rejections by error type."""
        success_before = _operation_count("create_enrollment", "success")
        rejected_before = _operation_count("create_enrollment", "MissingFieldError")

        await manager.create_enrollment(EnrollmentRequest(customer_id="C1", plan_id="P1"))
        with pytest.raises(MissingFieldError):
            await manager.create_enrollment(EnrollmentRequest())

        assert _operation_count("create_enrollment", "success") == success_before + 1
        assert (
            _operation_count("create_enrollment", "MissingFieldError")
            == rejected_before + 1
        )


class TestActivateEnrollment:
    """Tests for activate_enrollment."""

    async def test_activates_pending(self, manager) -> None:
        """Should move a pending enrollment to active."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        await manager.activate_enrollment(enrollment.enrollment_id)

        status = await manager.get_enrollment_status(enrollment.enrollment_id)
        assert status == EnrollmentStatus.ACTIVE

    async def test_second_activation_rejected(self, manager) -> None:
        """Should reject activating an already active enrollment."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )
        await manager.activate_enrollment(enrollment.enrollment_id)

        with pytest.raises(InvalidTransitionError) as exc_info:
            await manager.activate_enrollment(enrollment.enrollment_id)

        assert exc_info.value.from_status == EnrollmentStatus.ACTIVE
        assert exc_info.value.to_status == EnrollmentStatus.ACTIVE

    async def test_deleted_cannot_be_activated(self, manager) -> None:
        """Should keep deleted enrollments terminal."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )
        await manager.delete_enrollment(enrollment.enrollment_id)

        with pytest.raises(InvalidTransitionError):
            await manager.activate_enrollment(enrollment.enrollment_id)

        status = await manager.get_enrollment_status(enrollment.enrollment_id)
        assert status == EnrollmentStatus.DELETED

    async def test_unknown_id(self, manager) -> None:
        """Should raise not found for ids never issued."""
        with pytest.raises(EnrollmentNotFoundError):
            await manager.activate_enrollment("missing")

    @pytest.mark.parametrize("value", [None, ""])
    async def test_empty_id(self, manager, value) -> None:
        """Should reject an absent id."""
        with pytest.raises(MissingFieldError) as exc_info:
            await manager.activate_enrollment(value)
        assert exc_info.value.field == "enrollment_id"


class TestDeleteEnrollment:
    """Tests for delete_enrollment."""

    async def test_delete_is_logical(self, manager, store) -> None:
        """Should keep the record and mark it deleted."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        await manager.delete_enrollment(enrollment.enrollment_id)

        stored = await store.get(enrollment.enrollment_id)
        assert stored is not None
        assert stored.status == EnrollmentStatus.DELETED

    async def test_delete_active(self, manager) -> None:
        """Should delete active enrollments."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )
        await manager.activate_enrollment(enrollment.enrollment_id)

        await manager.delete_enrollment(enrollment.enrollment_id)

        status = await manager.get_enrollment_status(enrollment.enrollment_id)
        assert status == EnrollmentStatus.DELETED

    async def test_delete_is_idempotent(self, manager) -> None:
        """Should succeed when deleting twice."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        await manager.delete_enrollment(enrollment.enrollment_id)
        await manager.delete_enrollment(enrollment.enrollment_id)

        status = await manager.get_enrollment_status(enrollment.enrollment_id)
        assert status == EnrollmentStatus.DELETED

    async def test_unknown_id(self, manager) -> None:
        """Should raise not found for ids never issued."""
        with pytest.raises(EnrollmentNotFoundError):
            await manager.delete_enrollment("missing")

    async def test_empty_id(self, manager) -> None:
        """Should reject an absent id."""
        with pytest.raises(MissingFieldError):
            await manager.delete_enrollment("")


class TestQueries:
    """Tests for read operations."""

    async def test_customer_enrollments_oldest_first(
        self, store, plan_catalog, ticking_clock
    ) -> None:
        """Should list all of a customer's enrollments by creation time."""
        manager = EnrollmentLifecycleManager(store, plan_catalog, clock=ticking_clock)
        first = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )
        await manager.create_enrollment(EnrollmentRequest(customer_id="C2", plan_id="P1"))
        second = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="corporate")
        )
        await manager.delete_enrollment(first.enrollment_id)

        enrollments = await manager.get_customer_enrollments("C1")

        assert [e.enrollment_id for e in enrollments] == [
            first.enrollment_id,
            second.enrollment_id,
        ]
        assert enrollments[0].status == EnrollmentStatus.DELETED

    async def test_unknown_customer_is_empty(self, manager) -> None:
        """Should return an empty list rather than raising."""
        assert await manager.get_customer_enrollments("nobody") == []

    async def test_employee_enrollment_found(self, manager) -> None:
        """Should return the enrollment at its hierarchy path."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(
                customer_id="C1",
                plan_id="P1",
                organization_id="O1",
                department_id="D1",
                employee_id="EMP1",
            )
        )

        found = await manager.get_employee_enrollment(
            "O1", "D1", "EMP1", enrollment.enrollment_id
        )

        assert found == enrollment

    async def test_employee_enrollment_wrong_path(self, manager) -> None:
        """Should raise not found when any coordinate differs."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(
                customer_id="C1",
                plan_id="P1",
                organization_id="O1",
                department_id="D1",
                employee_id="EMP1",
            )
        )

        with pytest.raises(EnrollmentNotFoundError):
            await manager.get_employee_enrollment(
                "O1", "D2", "EMP1", enrollment.enrollment_id
            )

    async def test_status_unknown_id(self, manager) -> None:
        """Should raise not found for unknown ids."""
        with pytest.raises(EnrollmentNotFoundError):
            await manager.get_enrollment_status("missing")

    async def test_status_empty_id(self, manager) -> None:
        """Should treat an empty id as not found."""
        with pytest.raises(EnrollmentNotFoundError):
            await manager.get_enrollment_status("")


class TestLifecycleScenarios:
    """End-to-end lifecycle flows through the manager."""

    async def test_create_activate_delete(self, manager) -> None:
        """Should walk an enrollment through its full lifecycle."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(
                customer_id="C1", plan_id="P1", selected_benefits=["medical"]
            )
        )
        enrollment_id = enrollment.enrollment_id
        assert await manager.get_enrollment_status(enrollment_id) == EnrollmentStatus.PENDING

        await manager.activate_enrollment(enrollment_id)
        assert await manager.get_enrollment_status(enrollment_id) == EnrollmentStatus.ACTIVE

        with pytest.raises(InvalidTransitionError):
            await manager.activate_enrollment(enrollment_id)

        await manager.delete_enrollment(enrollment_id)
        assert await manager.get_enrollment_status(enrollment_id) == EnrollmentStatus.DELETED

        await manager.delete_enrollment(enrollment_id)
        with pytest.raises(InvalidTransitionError):
            await manager.activate_enrollment(enrollment_id)

    async def test_pending_straight_to_deleted(self, manager) -> None:
        """Should allow deleting a pending enrollment."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        await manager.delete_enrollment(enrollment.enrollment_id)

        with pytest.raises(InvalidTransitionError):
            await manager.activate_enrollment(enrollment.enrollment_id)


class TestConcurrency:
    """Tests for concurrent lifecycle operations."""

    async def test_concurrent_activations_single_winner(self, manager) -> None:
        """Should let exactly one of many concurrent activations succeed."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        results = await asyncio.gather(
            *(manager.activate_enrollment(enrollment.enrollment_id) for _ in range(10)),
            return_exceptions=True,
        )

        successes = [r for r in results if r is None]
        failures = [r for r in results if isinstance(r, InvalidTransitionError)]
        assert len(successes) == 1
        assert len(failures) == 9

    async def test_concurrent_activate_and_delete(self, manager) -> None:
        """Should always end deleted with activation either applied first or rejected."""
        enrollment = await manager.create_enrollment(
            EnrollmentRequest(customer_id="C1", plan_id="P1")
        )

        activate_result, delete_result = await asyncio.gather(
            manager.activate_enrollment(enrollment.enrollment_id),
            manager.delete_enrollment(enrollment.enrollment_id),
            return_exceptions=True,
        )

        assert delete_result is None
        assert activate_result is None or isinstance(
            activate_result, InvalidTransitionError
        )
        status = await manager.get_enrollment_status(enrollment.enrollment_id)
        assert status == EnrollmentStatus.DELETED

    async def test_concurrent_creates_are_distinct(self, manager) -> None:
        """Should give every concurrent creation its own id."""
        created = await asyncio.gather(
            *(
                manager.create_enrollment(
                    EnrollmentRequest(customer_id="C1", plan_id="P1")
                )
                for _ in range(25)
            )
        )

        assert len({e.enrollment_id for e in created}) == 25
        assert len(await manager.get_customer_enrollments("C1")) == 25
