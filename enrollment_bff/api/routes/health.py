"""Health check and metrics endpoints."""

import time
from typing import Literal

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from enrollment_bff import __version__
from enrollment_bff.api.dependencies import EnrollmentStoreDep
from enrollment_bff.api.models.health import ComponentHealth, HealthResponse
from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


async def _check_store_health(store: EnrollmentStore, name: str) -> ComponentHealth:
    """Check a store and time the check."""
    start = time.perf_counter()
    healthy = await store.health_check()
    latency_ms = (time.perf_counter() - start) * 1000
    if healthy:
        return ComponentHealth(name=name, status="healthy", latency_ms=latency_ms)
    return ComponentHealth(
        name=name,
        status="unhealthy",
        latency_ms=latency_ms,
        message="Store unreachable",
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    enrollment_store: EnrollmentStoreDep,
    response: Response,
) -> HealthResponse:
    """Check service health status.

    Returns 503 when any component is unhealthy.
    """
    components = [await _check_store_health(enrollment_store, "enrollment_store")]

    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    if any(c.status == "unhealthy" for c in components):
        overall_status = "unhealthy"
        response.status_code = 503

    logger.debug("health_check_completed", status=overall_status)
    return HealthResponse(status=overall_status, version=__version__, components=components)


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
