"""Dreams and dream tasks

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "dreams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=24), nullable=False),
        sa.Column("description", sa.String(length=60), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("duration_unit", sa.String(length=16), nullable=True),
        sa.Column("recurrence", sa.String(length=16), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("target_date", sa.Date(), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.CheckConstraint("progress >= 0 AND progress <= 100", name="ck_dreams_progress_range"),
    )

    op.create_table(
        "dream_tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("dream_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.ForeignKeyConstraint(["dream_id"], ["dreams.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("dream_id", "sort_order", name="uq_dream_tasks_dream_sort_order"),
    )
    op.create_index("ix_dream_tasks_dream_id", "dream_tasks", ["dream_id"])
    op.create_index("ix_dream_tasks_due_date", "dream_tasks", ["due_date"])


def downgrade() -> None:
    op.drop_index("ix_dream_tasks_due_date", table_name="dream_tasks")
    op.drop_index("ix_dream_tasks_dream_id", table_name="dream_tasks")
    op.drop_table("dream_tasks")
    op.drop_table("dreams")
