"""Shared test fixtures for the enrollment BFF test suite."""

import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest

from enrollment_bff.enrollment import (
    Enrollment,
    EnrollmentLifecycleManager,
    EnrollmentStatus,
    StaticPlanCatalog,
)
from enrollment_bff.enrollment.stores import InMemoryEnrollmentStore


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"ENROLLMENT_BFF_DEBUG": "true"}):
                ...
    """
    return EnvOverrideContext


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings and TOML state around each test."""
    from enrollment_bff.api.dependencies import get_settings as get_api_settings
    from enrollment_bff.config import get_settings
    from enrollment_bff.config.settings import set_toml_tables

    get_settings.cache_clear()
    get_api_settings.cache_clear()
    set_toml_tables({})
    yield
    get_settings.cache_clear()
    get_api_settings.cache_clear()
    set_toml_tables({})


@pytest.fixture
def make_enrollment() -> Callable[..., Enrollment]:
    """Factory for stored enrollments with unique ids.

    Usage:
        enrollment = make_enrollment(customer_id="C1", status=EnrollmentStatus.ACTIVE)
    """

    def _make(**overrides: Any) -> Enrollment:
        now = datetime.now(UTC)
        values: dict[str, Any] = {
            "enrollment_id": str(uuid4()),
            "customer_id": "C1",
            "plan_id": "P1",
            "plan_name": "Premium Health Plan",
            "selected_benefits": ("medical", "dental"),
            "status": EnrollmentStatus.PENDING,
            "enrollment_date": now,
            "updated_at": now,
        }
        values.update(overrides)
        return Enrollment(**values)

    return _make


@pytest.fixture
def plan_catalog() -> StaticPlanCatalog:
    return StaticPlanCatalog(
        names={"P1": "Premium Health Plan", "corporate": "Corporate Plan"},
        default_name="Health Savings Plan",
    )


@pytest.fixture
def store() -> InMemoryEnrollmentStore:
    """Create a fresh store for each test."""
    return InMemoryEnrollmentStore()


@pytest.fixture
def manager(
    store: InMemoryEnrollmentStore, plan_catalog: StaticPlanCatalog
) -> EnrollmentLifecycleManager:
    return EnrollmentLifecycleManager(store=store, plan_catalog=plan_catalog)
