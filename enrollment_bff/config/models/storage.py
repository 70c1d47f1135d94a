"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "postgres"]


class PostgresConfig(BaseModel):
    """PostgreSQL connection pool configuration."""

    connection_url: str | None = Field(
        default=None,
        description="Connection URL (falls back to DATABASE_URL env var)",
    )
    min_pool_size: int = Field(
        default=5,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=20,
        gt=0,
        description="Maximum connections in pool",
    )
    max_inactive_connection_lifetime: float = Field(
        default=300.0,
        gt=0,
        description="Close connections idle longer than this (seconds)",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )


class EnrollmentStoreConfig(BaseModel):
    """Configuration for the enrollment store backend."""

    backend: BackendType = Field(
        default="inmemory",
        description="Backend type",
    )


class StorageConfig(BaseModel):
    """Storage configuration for all stores."""

    enrollment: EnrollmentStoreConfig = Field(
        default_factory=EnrollmentStoreConfig,
        description="Enrollment store backend",
    )
    postgres: PostgresConfig = Field(
        default_factory=PostgresConfig,
        description="Shared PostgreSQL pool settings",
    )
