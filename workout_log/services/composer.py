"""Workout composer: a mutable draft that is sealed into an immutable session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone, tzinfo

from workout_log.core.catalog import get_exercises_for_routine, get_routine
from workout_log.core.constants import (
    MAX_EXERCISES_PER_SESSION,
    MAX_SETS_PER_EXERCISE_PER_SESSION,
)
from workout_log.core.enums import to_seconds
from workout_log.core.exceptions import (
    SessionLimitError,
    SessionSealedError,
    UnknownExerciseError,
    UnknownRoutineError,
)
from workout_log.schemas.session import (
    SessionExerciseRead,
    WorkoutSessionCreate,
    WorkoutSessionUpsert,
    WorkoutSetRead,
)
from workout_log.services.aggregation import calendar_day, normalize_timestamp, total_volume_for_session

logger = logging.getLogger(__name__)


@dataclass
class DraftSet:
    weight: float = 0.0
    reps: int = 0
    completed: bool = False


@dataclass
class DraftExercise:
    id: str
    name: str
    sets: list[DraftSet] = field(default_factory=list)


class SessionDraft:
    """Exercises and sets being recorded for one day; editable in place until sealed."""

    def __init__(self, session_date: date, exercises: list[DraftExercise] | None = None):
        self.session_date = session_date
        self.exercises: list[DraftExercise] = []
        self._sealed = False
        for ex in exercises or []:
            self.add_exercise(ex.id, ex.name)
            for s in ex.sets:
                self.add_set(ex.id, s.weight, s.reps, s.completed)

    @classmethod
    def from_routine(cls, routine_id: str, session_date: date) -> SessionDraft:
        """Start a draft with the routine's exercises in order and no sets."""
        if get_routine(routine_id) is None:
            raise UnknownRoutineError(f"Routine {routine_id!r} not found")
        draft = cls(session_date)
        for ex in get_exercises_for_routine(routine_id):
            draft.add_exercise(ex.id, ex.name)
        return draft

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_open(self) -> None:
        if self._sealed:
            raise SessionSealedError("Session is already completed")

    def _exercise(self, exercise_id: str) -> DraftExercise:
        for ex in self.exercises:
            if ex.id == exercise_id:
                return ex
        raise UnknownExerciseError(f"Exercise {exercise_id!r} is not in this workout")

    def _set(self, exercise_id: str, index: int) -> DraftSet:
        sets = self._exercise(exercise_id).sets
        if not 0 <= index < len(sets):
            raise IndexError(f"Set {index + 1} does not exist for {exercise_id!r}")
        return sets[index]

    def add_exercise(self, exercise_id: str, name: str) -> DraftExercise:
        self._check_open()
        if any(ex.id == exercise_id for ex in self.exercises):
            raise ValueError(f"Exercise {exercise_id!r} already added")
        if len(self.exercises) >= MAX_EXERCISES_PER_SESSION:
            raise SessionLimitError(f"Maximum {MAX_EXERCISES_PER_SESSION} exercises per session.")
        ex = DraftExercise(id=exercise_id, name=name)
        self.exercises.append(ex)
        return ex

    def remove_exercise(self, exercise_id: str) -> None:
        self._check_open()
        self.exercises.remove(self._exercise(exercise_id))

    def add_set(
        self,
        exercise_id: str,
        weight: float | None = None,
        reps: int | None = None,
        completed: bool = False,
    ) -> DraftSet:
        """Append a set. Weight/reps left out are copied from the previous set (0 for the first)."""
        self._check_open()
        ex = self._exercise(exercise_id)
        if len(ex.sets) >= MAX_SETS_PER_EXERCISE_PER_SESSION:
            raise SessionLimitError(
                f"Maximum {MAX_SETS_PER_EXERCISE_PER_SESSION} sets per exercise per session."
            )
        prev = ex.sets[-1] if ex.sets else DraftSet()
        s = DraftSet(
            weight=prev.weight if weight is None else weight,
            reps=prev.reps if reps is None else reps,
            completed=completed,
        )
        if s.weight < 0 or s.reps < 0:
            raise ValueError("weight and reps must be non-negative")
        ex.sets.append(s)
        return s

    def update_set(
        self,
        exercise_id: str,
        index: int,
        weight: float | None = None,
        reps: int | None = None,
        completed: bool | None = None,
    ) -> DraftSet:
        self._check_open()
        s = self._set(exercise_id, index)
        if (weight is not None and weight < 0) or (reps is not None and reps < 0):
            raise ValueError("weight and reps must be non-negative")
        if weight is not None:
            s.weight = weight
        if reps is not None:
            s.reps = reps
        if completed is not None:
            s.completed = completed
        return s

    def toggle_set(self, exercise_id: str, index: int) -> DraftSet:
        self._check_open()
        s = self._set(exercise_id, index)
        s.completed = not s.completed
        return s

    def remove_set(self, exercise_id: str, index: int) -> None:
        self._check_open()
        self._set(exercise_id, index)
        del self._exercise(exercise_id).sets[index]

    def current_volume(self) -> float:
        return total_volume_for_session(self.exercises)

    def seal(self, total_time_seconds: int, created_at: datetime | None = None) -> WorkoutSessionCreate:
        """
        Complete the workout: compute totals and freeze the result.
        The draft rejects further edits afterwards.
        """
        self._check_open()
        exercises = tuple(
            SessionExerciseRead(
                id=ex.id,
                name=ex.name,
                sets=tuple(WorkoutSetRead(weight=s.weight, reps=s.reps, completed=s.completed) for s in ex.sets),
            )
            for ex in self.exercises
        )
        sealed = WorkoutSessionCreate(
            session_date=self.session_date,
            created_at=created_at or datetime.now(timezone.utc),
            total_time_seconds=total_time_seconds,
            total_volume=total_volume_for_session(exercises),
            exercises=exercises,
        )
        self._sealed = True
        logger.info(
            "Sealed workout for %s: %d exercises, %.1f kg",
            self.session_date.isoformat(),
            len(exercises),
            sealed.total_volume,
        )
        return sealed


def seal_payload(
    session_date: date,
    payload: WorkoutSessionUpsert,
    tz: tzinfo = timezone.utc,
    now: datetime | None = None,
) -> WorkoutSessionCreate:
    """
    Seal a client-composed workout for session_date. Elapsed time is converted
    to seconds and the volume is recomputed from the sets. created_at must fall
    on session_date; when omitted it is now (today) or the start of the day.
    """
    now = now or datetime.now(timezone.utc)
    created_at = payload.created_at
    if created_at is not None:
        # naive values are wall-clock time in tz; pin the offset before it is stored
        created_at = normalize_timestamp(created_at, tz)
        if created_at.date() != session_date:
            raise ValueError(f"created_at {created_at.isoformat()} is not on {session_date.isoformat()}")
    elif calendar_day(now, tz) == session_date:
        created_at = now
    else:
        created_at = datetime.combine(session_date, time.min, tzinfo=tz)

    draft = SessionDraft(
        session_date,
        [
            DraftExercise(
                id=ex.id,
                name=ex.name,
                sets=[DraftSet(weight=s.weight, reps=s.reps, completed=s.completed) for s in ex.sets],
            )
            for ex in payload.exercises
        ],
    )
    return draft.seal(to_seconds(payload.total_time, payload.time_unit), created_at=created_at)
