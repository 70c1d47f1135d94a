"""Dependency injection for API routes.

Stores and services are built once per process from settings and can
be overridden in tests through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from enrollment_bff.config import get_settings as load_settings
from enrollment_bff.config.settings import Settings, set_toml_tables
from enrollment_bff.db.pool import PostgresPool
from enrollment_bff.enrollment.manager import EnrollmentLifecycleManager
from enrollment_bff.enrollment.plans import PlanCatalog, StaticPlanCatalog
from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.enrollment.stores.inmemory import InMemoryEnrollmentStore
from enrollment_bff.enrollment.stores.postgres import PostgresEnrollmentStore
from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)

_postgres_pool: PostgresPool | None = None
_enrollment_store: EnrollmentStore | None = None
_plan_catalog: PlanCatalog | None = None


@lru_cache
def get_settings() -> Settings:
    """Get application settings.

    Falls back to model defaults when no config/default.toml exists.
    """
    try:
        return load_settings()
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_tables({})
        return Settings()


async def get_postgres_pool(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PostgresPool:
    """Get the shared PostgreSQL connection pool, connecting on first use."""
    global _postgres_pool
    if _postgres_pool is None:
        _postgres_pool = PostgresPool(settings.storage.postgres)
    await _postgres_pool.connect()
    return _postgres_pool


async def get_enrollment_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> EnrollmentStore:
    """Get the EnrollmentStore selected by storage.enrollment.backend."""
    global _enrollment_store
    if _enrollment_store is None:
        backend = settings.storage.enrollment.backend
        if backend == "postgres":
            pool = await get_postgres_pool(settings)
            _enrollment_store = _enrollment_store or PostgresEnrollmentStore(pool)
        else:
            _enrollment_store = InMemoryEnrollmentStore()
        logger.info("enrollment_store_initialized", store_type=backend)
    return _enrollment_store


def get_plan_catalog(
    settings: Annotated[Settings, Depends(get_settings)],
) -> PlanCatalog:
    """Get the PlanCatalog built from the plans settings section."""
    global _plan_catalog
    if _plan_catalog is None:
        _plan_catalog = StaticPlanCatalog.from_config(settings.plans)
        logger.info("plan_catalog_initialized", plan_count=len(settings.plans.names))
    return _plan_catalog


def get_lifecycle_manager(
    store: Annotated[EnrollmentStore, Depends(get_enrollment_store)],
    plan_catalog: Annotated[PlanCatalog, Depends(get_plan_catalog)],
) -> EnrollmentLifecycleManager:
    """Get an EnrollmentLifecycleManager over the shared store.

    Managers hold no state; one is built per request.
    """
    return EnrollmentLifecycleManager(store=store, plan_catalog=plan_catalog)


EnrollmentStoreDep = Annotated[EnrollmentStore, Depends(get_enrollment_store)]
LifecycleManagerDep = Annotated[EnrollmentLifecycleManager, Depends(get_lifecycle_manager)]


async def reset_dependencies() -> None:
    """Reset all cached dependencies, closing the database pool."""
    global _postgres_pool, _enrollment_store, _plan_catalog

    if _postgres_pool is not None:
        await _postgres_pool.close()
        _postgres_pool = None

    _enrollment_store = None
    _plan_catalog = None
    get_settings.cache_clear()
