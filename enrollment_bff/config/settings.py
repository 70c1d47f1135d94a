"""Settings object for the enrollment BFF.

Values resolve from, highest precedence first:

1. keyword arguments passed to Settings(...)
2. ENROLLMENT_BFF_* environment variables, nested with "__"
   (ENROLLMENT_BFF_STORAGE__ENROLLMENT__BACKEND=postgres)
3. the merged TOML tables from config/
4. model defaults
"""

from typing import Any

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from enrollment_bff.config.models.api import APIConfig
from enrollment_bff.config.models.observability import ObservabilityConfig
from enrollment_bff.config.models.plans import PlanCatalogConfig
from enrollment_bff.config.models.storage import StorageConfig


_toml_tables: dict[str, Any] = {}


def set_toml_tables(tables: dict[str, Any]) -> None:
    """Install the merged TOML tables read by subsequent Settings()."""
    global _toml_tables
    _toml_tables = dict(tables)


class TomlTablesSource(PydanticBaseSettingsSource):
    """Settings source over the installed TOML tables.

    Only keys naming a Settings field are passed on; unknown tables in
    the files are ignored.
    """

    def get_field_value(
        self, field: FieldInfo, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        return _toml_tables.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: _toml_tables[name]
            for name in self.settings_cls.model_fields
            if name in _toml_tables
        }


class Settings(BaseSettings):
    """Root configuration for the service."""

    model_config = SettingsConfigDict(
        env_prefix="ENROLLMENT_BFF_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(
        default="enrollment-bff", description="Service name used in logs and traces"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    api: APIConfig = Field(default_factory=APIConfig, description="HTTP server")
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Enrollment store backend"
    )
    plans: PlanCatalogConfig = Field(
        default_factory=PlanCatalogConfig, description="Plan display names"
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig, description="Logging, tracing and metrics"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use constructor arguments, then environment, then TOML."""
        return init_settings, env_settings, TomlTablesSource(settings_cls)
