"""Shared asyncpg pool for the PostgreSQL enrollment store."""

import asyncio
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from enrollment_bff.config.models.storage import PostgresConfig
from enrollment_bff.db.errors import ConnectionError
from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)


def resolve_dsn(config: PostgresConfig) -> str:
    """Pick the connection string for a pool.

    storage.postgres.connection_url wins, then ENROLLMENT_BFF_DATABASE_URL,
    then DATABASE_URL, then a DSN assembled from the POSTGRES_* variables.
    """
    explicit = (
        config.connection_url
        or os.environ.get("ENROLLMENT_BFF_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
    )
    if explicit:
        return explicit

    env = os.environ
    return "postgresql://{user}:{password}@{host}:{port}/{db}".format(
        user=env.get("POSTGRES_USER", "enrollment"),
        password=env.get("POSTGRES_PASSWORD", "enrollment"),
        host=env.get("POSTGRES_HOST", "localhost"),
        port=env.get("POSTGRES_PORT", "5432"),
        db=env.get("POSTGRES_DB", "enrollment"),
    )


class PostgresPool:
    """Lazily created asyncpg pool.

    The first acquire() opens the pool; concurrent first callers share
    one connect attempt.

    Usage:
        pool = PostgresPool(PostgresConfig(connection_url="postgresql://..."))
        async with pool.acquire() as conn:
            row = await conn.fetchrow("SELECT ...")
        await pool.close()
    """

    def __init__(self, config: PostgresConfig | None = None) -> None:
        self._config = config or PostgresConfig()
        self._dsn = resolve_dsn(self._config)
        self._pool: asyncpg.Pool | None = None
        self._connect_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Open the pool if it is not open yet.

        Raises:
            ConnectionError: If the server cannot be reached
        """
        async with self._connect_lock:
            if self._pool is not None:
                return
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self._dsn,
                    min_size=self._config.min_pool_size,
                    max_size=self._config.max_pool_size,
                    max_inactive_connection_lifetime=self._config.max_inactive_connection_lifetime,
                    command_timeout=self._config.command_timeout,
                )
            except (OSError, asyncpg.PostgresError) as e:
                logger.error("postgres_pool_connection_failed", error=str(e))
                raise ConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

            logger.info(
                "postgres_pool_connected",
                min_size=self._config.min_pool_size,
                max_size=self._config.max_pool_size,
            )

    async def close(self) -> None:
        pool, self._pool = self._pool, None
        if pool is not None:
            await pool.close()
            logger.info("postgres_pool_closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Borrow a connection, opening the pool on first use.

        Server-side errors raised while the connection is held surface as
        ConnectionError; everything else propagates unchanged.
        """
        await self.connect()
        assert self._pool is not None

        try:
            async with self._pool.acquire() as connection:
                yield connection
        except asyncpg.PostgresError as e:
            logger.error("postgres_query_error", error=str(e))
            raise ConnectionError(f"PostgreSQL error: {e}", cause=e) from e

    async def health_check(self) -> bool:
        """Run a trivial query; False when the pool is closed or the server is down."""
        if self._pool is None:
            return False
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (OSError, asyncpg.PostgresError) as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False
        return True
