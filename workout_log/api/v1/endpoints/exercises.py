"""Exercise catalog endpoints."""

from fastapi import APIRouter

from workout_log.core.catalog import list_exercises
from workout_log.core.enums import ExerciseCategory
from workout_log.schemas.routine import CatalogExerciseRead

router = APIRouter()


@router.get("", response_model=list[CatalogExerciseRead])
async def get_exercises(category: ExerciseCategory | None = None):
    """Exercises the app offers, optionally filtered by body area."""
    return [CatalogExerciseRead.model_validate(ex) for ex in list_exercises(category)]
