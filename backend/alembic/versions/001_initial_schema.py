"""Initial schema: schedules, closed dates, tables, durations, reservations

Revision ID: 001
Revises:
Create Date: (run alembic upgrade head)

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "operating_schedules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("weekday", sa.Text(), nullable=False),
        sa.Column("open_time", sa.Text(), nullable=False),
        sa.Column("close_time", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("is_closed", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("updated_at", sa.Text(), server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "closed_dates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("closed_date", sa.Text(), nullable=False, unique=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "billiard_tables",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False, unique=True),
        sa.Column("billiard_type", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'Available'")),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_table(
        "durations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("hours", sa.Float(), nullable=False, unique=True),
    )
    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "table_id",
            sa.Integer(),
            sa.ForeignKey("billiard_tables.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("reservation_date", sa.Text(), nullable=False),
        sa.Column("start_time", sa.Text(), nullable=False),
        sa.Column("end_time", sa.Text(), nullable=False),
        sa.Column("duration_hours", sa.Float(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'pending'")),
        sa.Column("customer_name", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.Text(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.Text(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_index(
        "ix_reservations_table_date", "reservations", ["table_id", "reservation_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_reservations_table_date", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("durations")
    op.drop_table("billiard_tables")
    op.drop_table("closed_dates")
    op.drop_table("operating_schedules")
