"""API route registration."""

from fastapi import APIRouter, FastAPI

from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all routes."""
    router = APIRouter(prefix="/api/v1")

    from enrollment_bff.api.routes.enrollment import router as enrollment_router

    router.include_router(enrollment_router, tags=["Enrollment"])

    logger.debug("v1_router_created", routes=["enrollment"])
    return router


def register_routes(app: FastAPI, *, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_enabled: Expose the Prometheus scrape endpoint
    """
    app.include_router(create_v1_router())

    from enrollment_bff.api.routes.health import metrics_router
    from enrollment_bff.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered", metrics_enabled=metrics_enabled)
