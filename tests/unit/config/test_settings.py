"""Tests for the Settings model and its sources."""

from pathlib import Path
from typing import Any, get_origin

import pytest
from pydantic import BaseModel, ValidationError

from enrollment_bff.config import get_settings
from enrollment_bff.config.loader import deep_merge, load_toml
from enrollment_bff.config.settings import Settings, set_toml_tables

CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


class TestSettingsDefaults:
    """Tests for Settings defaults."""

    def test_defaults(self) -> None:
        """Should run in memory with tracing off when nothing is configured."""
        settings = Settings()

        assert settings.app_name == "enrollment-bff"
        assert settings.storage.enrollment.backend == "inmemory"
        assert settings.plans.default_plan_name == "Health Savings Plan"
        assert settings.observability.tracing.enabled is False
        assert settings.observability.metrics.enabled is True

    def test_invalid_backend_rejected(self) -> None:
        """Should reject unknown storage backends."""
        set_toml_tables({"storage": {"enrollment": {"backend": "mongo"}}})
        with pytest.raises(ValidationError):
            Settings()


class TestSettingsSources:
    """Tests for TOML and environment layering."""

    def test_toml_values_applied(self) -> None:
        """Should read values from the TOML source."""
        set_toml_tables({"plans": {"names": {"gold": "Gold Plan"}}, "debug": True})

        settings = Settings()

        assert settings.debug is True
        assert settings.plans.names == {"gold": "Gold Plan"}

    def test_env_overrides_toml(self, env_override) -> None:
        """Should let ENROLLMENT_BFF_* variables win over TOML."""
        set_toml_tables({"storage": {"enrollment": {"backend": "inmemory"}}})

        with env_override({"ENROLLMENT_BFF_STORAGE__ENROLLMENT__BACKEND": "postgres"}):
            settings = Settings()

        assert settings.storage.enrollment.backend == "postgres"

    def test_get_settings_loads_files(
        self, test_config_dir, mock_toml_files, env_override
    ) -> None:
        """Should load and cache settings from the config directory."""
        mock_toml_files(
            {
                "default.toml": '[plans]\ndefault_plan_name = "Starter"\n',
                "development.toml": '[observability.logging]\nlevel = "DEBUG"\n',
            }
        )

        with env_override(
            {
                "ENROLLMENT_BFF_CONFIG_DIR": str(test_config_dir),
                "ENROLLMENT_BFF_ENV": "development",
            }
        ):
            settings = get_settings()

        assert settings.plans.default_plan_name == "Starter"
        assert settings.observability.logging.level == "DEBUG"
        assert get_settings() is settings


def _unknown_keys(model: type[BaseModel], table: dict[str, Any], prefix: str = "") -> list[str]:
    unknown = []
    for key, value in table.items():
        field = model.model_fields.get(key)
        if field is None:
            unknown.append(f"{prefix}{key}")
            continue
        annotation = field.annotation
        nested = (
            get_origin(annotation) is None
            and isinstance(annotation, type)
            and issubclass(annotation, BaseModel)
        )
        if isinstance(value, dict) and nested:
            unknown.extend(_unknown_keys(annotation, value, f"{prefix}{key}."))
    return unknown


class TestShippedConfig:
    """Tests for the TOML files under config/."""

    @pytest.mark.parametrize("filename", ["default.toml", "development.toml"])
    def test_every_key_is_a_setting(self, filename) -> None:
        """Should only contain keys that some setting reads."""
        tables = load_toml(CONFIG_DIR / filename)

        assert _unknown_keys(Settings, tables) == []

    def test_shipped_defaults_load(self) -> None:
        """Should validate the merged default and development files."""
        set_toml_tables(
            deep_merge(
                load_toml(CONFIG_DIR / "default.toml"),
                load_toml(CONFIG_DIR / "development.toml"),
            )
        )

        settings = Settings()

        assert settings.observability.logging.level == "DEBUG"
        assert settings.plans.names["corporate"] == "Corporate Plan"
