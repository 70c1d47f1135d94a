"""PostgreSQL implementation of EnrollmentStore.

Uses asyncpg for async database access. Status changes lock the row
with SELECT ... FOR UPDATE inside a transaction, so concurrent writers
on one enrollment are serialized by the database.
"""

from collections.abc import Mapping
from typing import Any

import asyncpg

from enrollment_bff.db.errors import ConnectionError, StoreError
from enrollment_bff.db.pool import PostgresPool
from enrollment_bff.enrollment.enums import EnrollmentStatus
from enrollment_bff.enrollment.errors import (
    DuplicateIdError,
    EnrollmentError,
    EnrollmentNotFoundError,
)
from enrollment_bff.enrollment.models import Enrollment
from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.enrollment.transitions import apply_transition
from enrollment_bff.observability.logging import get_logger

logger = get_logger(__name__)

_COLUMNS = """
    enrollment_id, customer_id, plan_id, plan_name, selected_benefits,
    status, enrollment_date, updated_at,
    organization_id, department_id, employee_id
"""


class PostgresEnrollmentStore(EnrollmentStore):
    """PostgreSQL implementation of EnrollmentStore."""

    def __init__(self, pool: PostgresPool) -> None:
        """Initialize with connection pool.

        Args:
            pool: PostgreSQL connection pool
        """
        self._pool = pool

    async def insert(self, enrollment: Enrollment) -> None:
        """Add a new enrollment."""
        try:
            async with self._pool.acquire() as conn:
                inserted = await conn.fetchval(
                    f"""
                    INSERT INTO enrollments ({_COLUMNS})
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
                    ON CONFLICT (enrollment_id) DO NOTHING
                    RETURNING enrollment_id
                    """,
                    enrollment.enrollment_id,
                    enrollment.customer_id,
                    enrollment.plan_id,
                    enrollment.plan_name,
                    list(enrollment.selected_benefits),
                    enrollment.status.value,
                    enrollment.enrollment_date,
                    enrollment.updated_at,
                    enrollment.organization_id,
                    enrollment.department_id,
                    enrollment.employee_id,
                )
        except (EnrollmentError, StoreError):
            raise
        except Exception as e:
            logger.error(
                "postgres_insert_enrollment_error",
                enrollment_id=enrollment.enrollment_id,
                error=str(e),
            )
            raise ConnectionError(f"Failed to insert enrollment: {e}", cause=e) from e

        if inserted is None:
            raise DuplicateIdError(enrollment.enrollment_id)
        logger.debug("enrollment_row_inserted", enrollment_id=enrollment.enrollment_id)

    async def get(self, enrollment_id: str) -> Enrollment | None:
        """Get an enrollment by id."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"SELECT {_COLUMNS} FROM enrollments WHERE enrollment_id = $1",
                    enrollment_id,
                )
        except StoreError:
            raise
        except Exception as e:
            logger.error(
                "postgres_get_enrollment_error", enrollment_id=enrollment_id, error=str(e)
            )
            raise ConnectionError(f"Failed to get enrollment: {e}", cause=e) from e

        return self._row_to_enrollment(row) if row else None

    async def list_by_customer(self, customer_id: str) -> list[Enrollment]:
        """List a customer's enrollments, oldest first."""
        try:
            async with self._pool.acquire() as conn:
                rows = await conn.fetch(
                    f"""
                    SELECT {_COLUMNS} FROM enrollments
                    WHERE customer_id = $1
                    ORDER BY enrollment_date ASC, enrollment_id ASC
                    """,
                    customer_id,
                )
        except StoreError:
            raise
        except Exception as e:
            logger.error(
                "postgres_list_enrollments_error", customer_id=customer_id, error=str(e)
            )
            raise ConnectionError(f"Failed to list enrollments: {e}", cause=e) from e

        return [self._row_to_enrollment(row) for row in rows]

    async def find_by_hierarchy(
        self,
        organization_id: str,
        department_id: str,
        employee_id: str,
        enrollment_id: str,
    ) -> Enrollment | None:
        """Get an enrollment only if it sits under the given hierarchy path."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    SELECT {_COLUMNS} FROM enrollments
                    WHERE enrollment_id = $1
                      AND organization_id = $2
                      AND department_id = $3
                      AND employee_id = $4
                    """,
                    enrollment_id,
                    organization_id,
                    department_id,
                    employee_id,
                )
        except StoreError:
            raise
        except Exception as e:
            logger.error(
                "postgres_find_by_hierarchy_error", enrollment_id=enrollment_id, error=str(e)
            )
            raise ConnectionError(f"Failed to look up enrollment: {e}", cause=e) from e

        return self._row_to_enrollment(row) if row else None

    async def update_status(
        self, enrollment_id: str, new_status: EnrollmentStatus
    ) -> Enrollment:
        """Move an enrollment to a new status."""
        try:
            async with self._pool.acquire() as conn, conn.transaction():
                current = await self._lock_row(conn, enrollment_id)
                updated = apply_transition(current, new_status)
                await self._write_status(conn, updated)
                return updated
        except (EnrollmentError, StoreError):
            raise
        except Exception as e:
            logger.error(
                "postgres_update_status_error", enrollment_id=enrollment_id, error=str(e)
            )
            raise ConnectionError(f"Failed to update enrollment: {e}", cause=e) from e

    async def delete(self, enrollment_id: str) -> None:
        """Mark an enrollment as deleted."""
        try:
            async with self._pool.acquire() as conn, conn.transaction():
                current = await self._lock_row(conn, enrollment_id)
                if current.status == EnrollmentStatus.DELETED:
                    return
                await self._write_status(
                    conn, apply_transition(current, EnrollmentStatus.DELETED)
                )
        except (EnrollmentError, StoreError):
            raise
        except Exception as e:
            logger.error(
                "postgres_delete_enrollment_error", enrollment_id=enrollment_id, error=str(e)
            )
            raise ConnectionError(f"Failed to delete enrollment: {e}", cause=e) from e

    async def health_check(self) -> bool:
        """Check that the database answers."""
        return await self._pool.health_check()

    async def _lock_row(
        self, conn: asyncpg.Connection, enrollment_id: str
    ) -> Enrollment:
        row = await conn.fetchrow(
            f"SELECT {_COLUMNS} FROM enrollments WHERE enrollment_id = $1 FOR UPDATE",
            enrollment_id,
        )
        if row is None:
            raise EnrollmentNotFoundError(enrollment_id)
        return self._row_to_enrollment(row)

    @staticmethod
    async def _write_status(conn: asyncpg.Connection, enrollment: Enrollment) -> None:
        await conn.execute(
            """
            UPDATE enrollments SET status = $2, updated_at = $3
            WHERE enrollment_id = $1
            """,
            enrollment.enrollment_id,
            enrollment.status.value,
            enrollment.updated_at,
        )

    @staticmethod
    def _row_to_enrollment(row: Mapping[str, Any]) -> Enrollment:
        return Enrollment(
            enrollment_id=row["enrollment_id"],
            customer_id=row["customer_id"],
            plan_id=row["plan_id"],
            plan_name=row["plan_name"],
            selected_benefits=tuple(row["selected_benefits"] or ()),
            status=EnrollmentStatus(row["status"]),
            enrollment_date=row["enrollment_date"],
            updated_at=row["updated_at"],
            organization_id=row["organization_id"],
            department_id=row["department_id"],
            employee_id=row["employee_id"],
        )
