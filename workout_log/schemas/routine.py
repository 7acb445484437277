"""Exercise catalog and routine schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict

from workout_log.core.enums import ExerciseCategory
from workout_log.schemas.session import SessionExerciseIn


class CatalogExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    category: ExerciseCategory


class RoutineRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    creator: str
    description: str
    exercise_ids: list[str] = []


class RoutineDetail(RoutineRead):
    exercises: list[CatalogExerciseRead] = []


class SessionDraftRead(BaseModel):
    """Starting point for composing a workout from a routine (exercises in order, no sets yet)."""

    session_date: date
    routine_id: str | None = None
    exercises: list[SessionExerciseIn] = []
