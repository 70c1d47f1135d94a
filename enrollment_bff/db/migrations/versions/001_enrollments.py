"""Create enrollments table.

Revision ID: 001
Revises:
Create Date: 2026-10-18

Tables: enrollments
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import ARRAY

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the enrollments table.

    Rows are never physically deleted; deletion sets status = 'deleted'.
    """
    op.create_table(
        "enrollments",
        sa.Column("enrollment_id", sa.Text, primary_key=True),
        sa.Column("customer_id", sa.Text, nullable=False),
        sa.Column("plan_id", sa.Text, nullable=False),
        sa.Column("plan_name", sa.Text, nullable=False),
        sa.Column(
            "selected_benefits",
            ARRAY(sa.Text),
            server_default=sa.text("'{}'::text[]"),
            nullable=False,
        ),
        sa.Column("status", sa.Text, server_default="pending", nullable=False),
        sa.Column("enrollment_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),

        # Corporate hierarchy, absent for direct customer enrollments
        sa.Column("organization_id", sa.Text),
        sa.Column("department_id", sa.Text),
        sa.Column("employee_id", sa.Text),

        sa.CheckConstraint(
            "status IN ('pending', 'active', 'deleted')",
            name="chk_enrollments_status",
        ),
        sa.CheckConstraint("customer_id <> ''", name="chk_enrollments_customer_id"),
        sa.CheckConstraint("plan_id <> ''", name="chk_enrollments_plan_id"),
    )

    op.create_index(
        "idx_enrollments_customer_date",
        "enrollments",
        ["customer_id", "enrollment_date"],
    )


def downgrade() -> None:
    """Drop the enrollments table."""
    op.drop_index("idx_enrollments_customer_date", table_name="enrollments")
    op.drop_table("enrollments")
