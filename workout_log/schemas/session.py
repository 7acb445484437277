"""Workout session, exercise and set schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workout_log.core.enums import TimeUnit


class WorkoutSetIn(BaseModel):
    weight: float = Field(0, ge=0)  # kg
    reps: int = Field(0, ge=0)
    completed: bool = True  # clients without the flag count every set


class WorkoutSetRead(WorkoutSetIn):
    model_config = ConfigDict(frozen=True)


class SessionExerciseIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    sets: list[WorkoutSetIn] = []

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v):
        # Older clients number exercises 1, 2, 3...
        return str(v) if isinstance(v, int) else v


class SessionExerciseRead(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    name: str
    sets: tuple[WorkoutSetRead, ...] = ()


class WorkoutSessionUpsert(BaseModel):
    """Body of "complete workout": exercises as composed, elapsed time in the client's unit."""

    exercises: list[SessionExerciseIn] = []
    total_time: float = Field(0, ge=0)
    time_unit: TimeUnit = TimeUnit.SECONDS
    created_at: datetime | None = None

    @field_validator("exercises")
    @classmethod
    def _unique_exercise_ids(cls, v: list[SessionExerciseIn]) -> list[SessionExerciseIn]:
        ids = [e.id for e in v]
        if len(ids) != len(set(ids)):
            raise ValueError("exercise ids must be unique within a session")
        return v


class WorkoutSessionCreate(BaseModel):
    """A sealed session ready to be written. total_volume is computed, never taken from the client."""

    model_config = ConfigDict(frozen=True)
    session_date: date
    created_at: datetime
    total_time_seconds: int = Field(0, ge=0)
    total_volume: float = Field(0, ge=0)
    exercises: tuple[SessionExerciseRead, ...] = ()


class WorkoutSessionRead(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str | None = None
    user_id: str | None = None
    session_date: date
    created_at: datetime
    total_time_seconds: int = 0
    total_volume: float = 0
    exercises: tuple[SessionExerciseRead, ...] = ()


class ShareText(BaseModel):
    text: str
