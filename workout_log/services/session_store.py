"""Session storage: one interface, interchangeable backends.

Writes go through upsert keyed by (user_id, session_date), so a user never
ends up with two sessions for the same calendar day.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from workout_log.models.session import SessionExercise, SessionSet, WorkoutSession, session_key
from workout_log.schemas.session import (
    SessionExerciseRead,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSetRead,
)

logger = logging.getLogger(__name__)


class SessionStore(abc.ABC):
    """Where sealed sessions live. All methods are scoped to an explicit user id."""

    @abc.abstractmethod
    async def list(self, user_id: str) -> list[WorkoutSessionRead]:
        """All sessions of the user, newest day first."""

    @abc.abstractmethod
    async def upsert(self, user_id: str, session: WorkoutSessionCreate) -> WorkoutSessionRead:
        """Write the session for its day, replacing any session already stored for that day."""

    @abc.abstractmethod
    async def get_by_day(self, user_id: str, day: date) -> WorkoutSessionRead | None:
        ...

    @abc.abstractmethod
    async def delete_by_day(self, user_id: str, day: date) -> bool:
        """Remove the session for that day. Returns False if there was none."""


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _to_read(user_id: str, session: WorkoutSessionCreate) -> WorkoutSessionRead:
    return WorkoutSessionRead(
        id=session_key(user_id, session.session_date),
        user_id=user_id,
        session_date=session.session_date,
        created_at=_as_utc(session.created_at),
        total_time_seconds=session.total_time_seconds,
        total_volume=session.total_volume,
        exercises=session.exercises,
    )


class InMemorySessionStore(SessionStore):
    """Dict-backed store for fixtures, demos and tests."""

    def __init__(self, seed: Mapping[str, Iterable[WorkoutSessionCreate]] | None = None):
        self._sessions: dict[tuple[str, date], WorkoutSessionRead] = {}
        for user_id, sessions in (seed or {}).items():
            for s in sessions:
                self._sessions[(user_id, s.session_date)] = _to_read(user_id, s)

    async def list(self, user_id: str) -> list[WorkoutSessionRead]:
        rows = [s for (uid, _), s in self._sessions.items() if uid == user_id]
        return sorted(rows, key=lambda s: s.session_date, reverse=True)

    async def upsert(self, user_id: str, session: WorkoutSessionCreate) -> WorkoutSessionRead:
        key = (user_id, session.session_date)
        if key in self._sessions:
            logger.info("Replacing session %s", session_key(user_id, session.session_date))
        self._sessions[key] = _to_read(user_id, session)
        return self._sessions[key]

    async def get_by_day(self, user_id: str, day: date) -> WorkoutSessionRead | None:
        return self._sessions.get((user_id, day))

    async def delete_by_day(self, user_id: str, day: date) -> bool:
        return self._sessions.pop((user_id, day), None) is not None


def _load_tree():
    return selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets)


def _row_to_read(row: WorkoutSession) -> WorkoutSessionRead:
    return WorkoutSessionRead(
        id=row.id,
        user_id=row.user_id,
        session_date=row.session_date,
        # SQLite drops the offset; values are always written as UTC
        created_at=_as_utc(row.created_at),
        total_time_seconds=row.total_time_seconds or 0,
        total_volume=float(row.total_volume or 0),
        exercises=tuple(
            SessionExerciseRead(
                id=ex.exercise_key,
                name=ex.name,
                sets=tuple(
                    WorkoutSetRead(weight=float(s.weight or 0), reps=s.reps or 0, completed=s.completed)
                    for s in ex.sets
                ),
            )
            for ex in row.exercises
        ),
    )


class SqlSessionStore(SessionStore):
    """SQLAlchemy-backed store; one instance per request session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_row(self, user_id: str, day: date) -> WorkoutSession | None:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.id == session_key(user_id, day))
            .options(_load_tree())
        )
        return result.scalar_one_or_none()

    async def list(self, user_id: str) -> list[WorkoutSessionRead]:
        result = await self.db.execute(
            select(WorkoutSession)
            .where(WorkoutSession.user_id == user_id)
            .options(_load_tree())
            .order_by(WorkoutSession.session_date.desc())
        )
        return [_row_to_read(row) for row in result.scalars().all()]

    async def upsert(self, user_id: str, session: WorkoutSessionCreate) -> WorkoutSessionRead:
        row = await self._get_row(user_id, session.session_date)
        if row is None:
            row = WorkoutSession(
                id=session_key(user_id, session.session_date),
                user_id=user_id,
                session_date=session.session_date,
            )
            self.db.add(row)
        else:
            logger.info("Replacing session %s", row.id)
        row.created_at = _as_utc(session.created_at)
        row.total_time_seconds = session.total_time_seconds
        row.total_volume = session.total_volume
        row.exercises = [
            SessionExercise(
                exercise_key=ex.id,
                name=ex.name,
                position=i,
                sets=[
                    SessionSet(position=j, weight=s.weight, reps=s.reps, completed=s.completed)
                    for j, s in enumerate(ex.sets)
                ],
            )
            for i, ex in enumerate(session.exercises)
        ]
        await self.db.flush()
        return _to_read(user_id, session)

    async def get_by_day(self, user_id: str, day: date) -> WorkoutSessionRead | None:
        row = await self._get_row(user_id, day)
        return _row_to_read(row) if row is not None else None

    async def delete_by_day(self, user_id: str, day: date) -> bool:
        row = await self._get_row(user_id, day)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True
