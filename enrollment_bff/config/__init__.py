"""Configuration for the enrollment BFF.

Usage:
    from enrollment_bff.config import get_settings

    backend = get_settings().storage.enrollment.backend
"""

from functools import lru_cache

from enrollment_bff.config.loader import load_config
from enrollment_bff.config.settings import Settings, set_toml_tables


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    Use reload_settings() to pick up changed files or environment.
    """
    set_toml_tables(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
