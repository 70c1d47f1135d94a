"""Enrollment request and response models.

Request bodies accept both snake_case and the camelCase names sent by
mobile clients. Responses are always snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from enrollment_bff.enrollment import Enrollment, EnrollmentRequest, EnrollmentStatus


class CreateEnrollmentBody(BaseModel):
    """Request body for POST /api/v1/enrollment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    customer_id: str | None = None
    plan_id: str | None = None
    selected_benefits: list[str] | None = None
    organization_id: str | None = None
    department_id: str | None = None
    employee_id: str | None = None

    def to_request(self) -> EnrollmentRequest:
        return EnrollmentRequest(
            customer_id=self.customer_id or "",
            plan_id=self.plan_id or "",
            selected_benefits=self.selected_benefits,
            organization_id=self.organization_id,
            department_id=self.department_id,
            employee_id=self.employee_id,
        )


class EnrollmentResponse(BaseModel):
    """Enrollment as returned to clients."""

    enrollment_id: str
    customer_id: str
    plan_id: str
    plan_name: str
    status: EnrollmentStatus
    is_active: bool
    benefits: list[str] = Field(default_factory=list)
    enrollment_date: datetime
    organization_id: str | None = None
    department_id: str | None = None
    employee_id: str | None = None

    @classmethod
    def from_enrollment(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            enrollment_id=enrollment.enrollment_id,
            customer_id=enrollment.customer_id,
            plan_id=enrollment.plan_id,
            plan_name=enrollment.plan_name,
            status=enrollment.status,
            is_active=enrollment.is_active,
            benefits=list(enrollment.selected_benefits),
            enrollment_date=enrollment.enrollment_date,
            organization_id=enrollment.organization_id,
            department_id=enrollment.department_id,
            employee_id=enrollment.employee_id,
        )


class EnrollmentStatusResponse(BaseModel):
    """Response for GET /api/v1/enrollment/{enrollment_id}/status."""

    enrollment_id: str
    status: EnrollmentStatus
    client_app: str | None = None


class ActivationResponse(BaseModel):
    """Response for POST /api/v1/enrollment/activateEnrollment."""

    message: str = "Enrollment activated successfully"
    enrollment_id: str


class DeletionResponse(BaseModel):
    """Response for DELETE /api/v1/enrollment/{enrollment_id}."""

    message: str = "Enrollment deleted successfully"
    deleted_id: str
