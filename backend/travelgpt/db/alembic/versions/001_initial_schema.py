"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-06-01

Creates user, plan, message and activity tables.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "user",
        sa.Column("user_id", sa.Text(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("preferences", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "plan",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("time_creation", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("message_id_created", sa.Uuid(), nullable=True),
        sa.Column("context", sa.JSON(), nullable=False),
        sa.Column("summary_of_plan", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"]),
    )
    op.create_index("idx_plan_user_created", "plan", ["user_id", "time_creation"])

    op.create_table(
        "message",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("plan_id", sa.Uuid(), nullable=True),
        sa.Column("time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("message_type", sa.Text(), nullable=False),
        sa.Column("sender", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.user_id"]),
        sa.ForeignKeyConstraint(["plan_id"], ["plan.id"]),
    )
    op.create_index("idx_message_user_time", "message", ["user_id", "time"])

    op.create_table(
        "activity",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("plan_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("initial_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("final_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("city", sa.Text(), nullable=False),
        sa.Column("activity_name", sa.Text(), nullable=False),
        sa.Column("activity_type", sa.Text(), nullable=False),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("provider_company", sa.Text(), nullable=True),
        sa.Column("extra_details", sa.Text(), nullable=True),
        sa.Column("extra_fields", sa.JSON(), nullable=True),
        sa.Column("link_to_buy", sa.Text(), nullable=True),
        sa.Column("purchased", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["plan_id"], ["plan.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_activity_plan_position", "activity", ["plan_id", "position"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("idx_activity_plan_position", table_name="activity")
    op.drop_table("activity")
    op.drop_index("idx_message_user_time", table_name="message")
    op.drop_table("message")
    op.drop_index("idx_plan_user_created", table_name="plan")
    op.drop_table("plan")
    op.drop_table("user")
