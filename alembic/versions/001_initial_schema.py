"""Initial schema: workout_sessions, session_exercises, session_sets.

Revision ID: 001
Revises:
Create Date: 2026-10-18

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
        "workout_sessions",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("session_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_time_seconds", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_volume", sa.Numeric(precision=12, scale=2), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "session_date", name="uq_workout_sessions_user_day"),
    )
    op.create_index(
        "ix_workout_sessions_user_created_at", "workout_sessions", ["user_id", "created_at"], unique=False
    )

    op.create_table(
        "session_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("session_id", sa.String(length=255), nullable=False),
        sa.Column("exercise_key", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["session_id"], ["workout_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_session_exercises_session_id", "session_exercises", ["session_id"], unique=False)

    op.create_table(
        "session_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Numeric(precision=8, scale=2), nullable=False, server_default="0"),
        sa.Column("reps", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(["exercise_id"], ["session_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_session_sets_exercise_id", "session_sets", ["exercise_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_session_sets_exercise_id", table_name="session_sets")
    op.drop_table("session_sets")
    op.drop_index("ix_session_exercises_session_id", table_name="session_exercises")
    op.drop_table("session_exercises")
    op.drop_index("ix_workout_sessions_user_created_at", table_name="workout_sessions")
    op.drop_table("workout_sessions")
