"""Enrollment domain models."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from enrollment_bff.enrollment.enums import EnrollmentStatus


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class Enrollment(BaseModel):
    """A customer's enrollment in a benefits plan.

    Instances are immutable. Status changes produce a new instance that
    the store swaps in whole, so readers never see a half-applied update.
    """

    model_config = ConfigDict(frozen=True)

    enrollment_id: str = Field(..., min_length=1, description="Unique identifier")
    customer_id: str = Field(..., min_length=1, description="Enrolled party")
    plan_id: str = Field(..., min_length=1, description="Selected plan")
    plan_name: str = Field(..., description="Plan display name at creation")
    selected_benefits: tuple[str, ...] = Field(
        default=(), description="Selected benefit codes"
    )
    status: EnrollmentStatus = Field(
        default=EnrollmentStatus.PENDING, description="Lifecycle status"
    )
    enrollment_date: datetime = Field(
        default_factory=utc_now, description="Creation time"
    )
    updated_at: datetime = Field(
        default_factory=utc_now, description="Last status change"
    )
    organization_id: str | None = Field(default=None, description="Owning organization")
    department_id: str | None = Field(default=None, description="Owning department")
    employee_id: str | None = Field(default=None, description="Enrolled employee")

    @property
    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE

    def matches_hierarchy(
        self,
        organization_id: str,
        department_id: str,
        employee_id: str,
    ) -> bool:
        """Check whether this enrollment sits under the given hierarchy path."""
        return (
            self.organization_id == organization_id
            and self.department_id == department_id
            and self.employee_id == employee_id
        )

    def with_status(self, status: EnrollmentStatus) -> "Enrollment":
        """Return a copy with a new status and refreshed updated_at."""
        return self.model_copy(update={"status": status, "updated_at": utc_now()})


class EnrollmentRequest(BaseModel):
    """Inbound request to create an enrollment.

    Required fields are checked by the validation layer rather than by
    the model so that the first violated rule can be reported by name.
    """

    customer_id: str = ""
    plan_id: str = ""
    selected_benefits: list[str] | None = None
    organization_id: str | None = None
    department_id: str | None = None
    employee_id: str | None = None
