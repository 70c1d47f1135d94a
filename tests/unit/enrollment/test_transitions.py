"""Tests for the enrollment status state machine."""

import pytest

from enrollment_bff.enrollment import EnrollmentStatus, InvalidTransitionError
from enrollment_bff.enrollment.transitions import apply_transition, can_transition

PENDING = EnrollmentStatus.PENDING
ACTIVE = EnrollmentStatus.ACTIVE
DELETED = EnrollmentStatus.DELETED


class TestCanTransition:
    """Tests for can_transition."""

    @pytest.mark.parametrize(
        ("current", "target", "allowed"),
        [
            (PENDING, ACTIVE, True),
            (PENDING, DELETED, True),
            (PENDING, PENDING, False),
            (ACTIVE, DELETED, True),
            (ACTIVE, ACTIVE, False),
            (ACTIVE, PENDING, False),
            (DELETED, PENDING, False),
            (DELETED, ACTIVE, False),
            (DELETED, DELETED, False),
        ],
    )
    def test_transition_table(self, current, target, allowed) -> None:
        """Should only allow forward moves toward deleted."""
        assert can_transition(current, target) is allowed


class TestApplyTransition:
    """Tests for apply_transition."""

    def test_allowed_transition(self, make_enrollment) -> None:
        """Should return a copy in the new status."""
        enrollment = make_enrollment()
        updated = apply_transition(enrollment, ACTIVE)
        assert updated.status == ACTIVE
        assert enrollment.status == PENDING

    def test_forbidden_transition_carries_context(self, make_enrollment) -> None:
        """Should report id and both statuses on rejection."""
        enrollment = make_enrollment(status=DELETED)
        with pytest.raises(InvalidTransitionError) as exc_info:
            apply_transition(enrollment, ACTIVE)

        error = exc_info.value
        assert error.enrollment_id == enrollment.enrollment_id
        assert error.from_status == DELETED
        assert error.to_status == ACTIVE
        assert "deleted" in error.message
        assert "active" in error.message
