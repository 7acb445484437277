"""Workout session, its exercises and their sets."""

from __future__ import annotations

from datetime import date, datetime, timezone
import uuid

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from workout_log.db.base import Base


def session_key(user_id: str, day: date) -> str:
    """Persistence key of a session: one per user and calendar day."""
    return f"{user_id}_{day.isoformat()}"


class WorkoutSession(Base):
    """One sealed day of training. Totals are computed when the session is sealed."""

    __tablename__ = "workout_sessions"
    __table_args__ = (
        UniqueConstraint("user_id", "session_date", name="uq_workout_sessions_user_day"),
        Index("ix_workout_sessions_user_created_at", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(255), primary_key=True)  # "{user_id}_{YYYY-MM-DD}"
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    session_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    total_time_seconds: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_volume: Mapped[float] = mapped_column(Numeric(12, 2), default=0, nullable=False)  # kg

    exercises: Mapped[list["SessionExercise"]] = relationship(
        "SessionExercise",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionExercise.position",
    )


class SessionExercise(Base):
    """Exercise performed in a session; position keeps insertion order."""

    __tablename__ = "session_exercises"
    __table_args__ = (Index("ix_session_exercises_session_id", "session_id"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    session_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
    )
    exercise_key: Mapped[str] = mapped_column(String(64), nullable=False)  # unique within the session
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0)

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="exercises")
    sets: Mapped[list["SessionSet"]] = relationship(
        "SessionSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="SessionSet.position",
    )


class SessionSet(Base):
    """One set: weight (kg) x reps, and whether it was completed."""

    __tablename__ = "session_sets"
    __table_args__ = (Index("ix_session_sets_exercise_id", "exercise_id"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("session_exercises.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[float] = mapped_column(Numeric(8, 2), default=0, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    exercise: Mapped["SessionExercise"] = relationship("SessionExercise", back_populates="sets")
