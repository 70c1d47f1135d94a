"""Enrollment lifecycle endpoints."""

from fastapi import APIRouter, Header, Query

from enrollment_bff.api.dependencies import LifecycleManagerDep
from enrollment_bff.api.models.enrollment import (
    ActivationResponse,
    CreateEnrollmentBody,
    DeletionResponse,
    EnrollmentResponse,
    EnrollmentStatusResponse,
)
from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/enrollment")


@router.get("/customer/{customer_id}", response_model=list[EnrollmentResponse])
async def get_customer_enrollments(
    customer_id: str,
    manager: LifecycleManagerDep,
) -> list[EnrollmentResponse]:
    """List a customer's enrollments, oldest first.

    Returns an empty list for customers with no enrollments.
    """
    enrollments = await manager.get_customer_enrollments(customer_id)
    return [EnrollmentResponse.from_enrollment(e) for e in enrollments]


@router.post("/", response_model=EnrollmentResponse, status_code=201)
@router.post("", response_model=EnrollmentResponse, status_code=201, include_in_schema=False)
async def create_enrollment(
    body: CreateEnrollmentBody,
    manager: LifecycleManagerDep,
) -> EnrollmentResponse:
    """Create a pending enrollment.

    Args:
        body: Customer, plan and selected benefits, plus optional
            organization/department/employee ids
        manager: Enrollment lifecycle manager

    Returns:
        The stored enrollment
    """
    enrollment = await manager.create_enrollment(body.to_request())
    return EnrollmentResponse.from_enrollment(enrollment)


@router.post("/activateEnrollment", response_model=ActivationResponse)
async def activate_enrollment(
    manager: LifecycleManagerDep,
    enrollment_id: str | None = Query(default=None, alias="enrollmentId"),
) -> ActivationResponse:
    """Activate a pending enrollment."""
    await manager.activate_enrollment(enrollment_id)
    return ActivationResponse(enrollment_id=enrollment_id or "")


@router.delete("/{enrollment_id}", response_model=DeletionResponse)
async def delete_enrollment(
    enrollment_id: str,
    manager: LifecycleManagerDep,
) -> DeletionResponse:
    """Delete an enrollment. Deleting an already deleted enrollment succeeds."""
    await manager.delete_enrollment(enrollment_id)
    return DeletionResponse(deleted_id=enrollment_id)


@router.get(
    "/organizations/{org_id}/departments/{dept_id}/employees/{emp_id}"
    "/enrollments/{enrollment_id}",
    response_model=EnrollmentResponse,
)
async def get_employee_enrollment(
    org_id: str,
    dept_id: str,
    emp_id: str,
    enrollment_id: str,
    manager: LifecycleManagerDep,
) -> EnrollmentResponse:
    """Get an employee's enrollment through the corporate hierarchy."""
    enrollment = await manager.get_employee_enrollment(org_id, dept_id, emp_id, enrollment_id)
    return EnrollmentResponse.from_enrollment(enrollment)


@router.get("/{enrollment_id}/status", response_model=EnrollmentStatusResponse)
async def get_enrollment_status(
    enrollment_id: str,
    manager: LifecycleManagerDep,
    client_app: str | None = Header(default=None, alias="X-Client-App"),
) -> EnrollmentStatusResponse:
    """Get the current status of an enrollment.

    The X-Client-App header is echoed back for client-side correlation.
    """
    status = await manager.get_enrollment_status(enrollment_id)
    logger.debug("enrollment_status_read", enrollment_id=enrollment_id, status=status.value)
    return EnrollmentStatusResponse(
        enrollment_id=enrollment_id,
        status=status,
        client_app=client_app,
    )
