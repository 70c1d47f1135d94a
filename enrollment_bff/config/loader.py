"""Layered TOML configuration for the enrollment BFF.

Files are read from the config directory in order, later files
overriding earlier ones table by table:

    default.toml          required base values
    {environment}.toml    optional per-environment overrides
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "ENROLLMENT_BFF_CONFIG_DIR"
ENVIRONMENT_ENV = "ENROLLMENT_BFF_ENV"
DEFAULT_ENVIRONMENT = "development"

# How many parent directories of the working directory are searched
_SEARCH_DEPTH = 5


def get_config_dir() -> Path:
    """Locate the configuration directory.

    ENROLLMENT_BFF_CONFIG_DIR wins when set and must exist. Otherwise the
    nearest `config/` directory at or above the working directory is used.
    """
    explicit = os.environ.get(CONFIG_DIR_ENV)
    if explicit:
        path = Path(explicit)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {explicit}")
        return path

    cwd = Path.cwd()
    for candidate in [cwd, *cwd.parents][:_SEARCH_DEPTH]:
        if (candidate / "config").is_dir():
            return candidate / "config"
    return Path("config")


def get_environment() -> str:
    """Name of the active environment, e.g. development or production."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")
    return tomllib.loads(file_path.read_text(encoding="utf-8"))


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base.

    Tables present on both sides are merged key by key; any other value
    from override (scalars, arrays) replaces the base value outright.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def config_files(config_dir: Path, environment: str) -> list[Path]:
    """Files that make up the configuration, base first.

    Raises:
        FileNotFoundError: If default.toml is missing
    """
    default_path = config_dir / "default.toml"
    if not default_path.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or set {CONFIG_DIR_ENV}."
        )

    files = [default_path]
    env_path = config_dir / f"{environment}.toml"
    if env_path.is_file():
        files.append(env_path)
    return files


def load_config() -> dict[str, Any]:
    """Load and merge every configuration layer for the active environment."""
    config: dict[str, Any] = {}
    for path in config_files(get_config_dir(), get_environment()):
        config = deep_merge(config, load_toml(path))
    return config
