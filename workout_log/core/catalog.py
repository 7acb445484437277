"""Exercise catalog and premade routines: hardcoded, no DB queries.

Routines are templates: starting a workout from one pre-fills the exercise
list in routine order; sets are added while the workout is composed.
"""

from dataclasses import dataclass

from workout_log.core.enums import ExerciseCategory


@dataclass(frozen=True)
class CatalogExercise:
    id: str
    name: str
    category: ExerciseCategory


@dataclass(frozen=True)
class Routine:
    id: str
    name: str
    creator: str
    description: str
    exercise_ids: tuple[str, ...]


# ── Exercises the app knows about, grouped by body area ──
EXERCISE_LIST: tuple[CatalogExercise, ...] = (
    CatalogExercise("bench-press", "Bench Press", ExerciseCategory.CHEST),
    CatalogExercise("incline-press", "Incline Bench Press", ExerciseCategory.CHEST),
    CatalogExercise("dips", "Dips", ExerciseCategory.CHEST),
    CatalogExercise("pull-up", "Pull-up", ExerciseCategory.BACK),
    CatalogExercise("barbell-row", "Barbell Row", ExerciseCategory.BACK),
    CatalogExercise("lat-pull-down", "Lat Pulldown", ExerciseCategory.BACK),
    CatalogExercise("squat", "Squat", ExerciseCategory.LEGS),
    CatalogExercise("deadlift", "Deadlift", ExerciseCategory.LEGS),
    CatalogExercise("leg-press", "Leg Press", ExerciseCategory.LEGS),
    CatalogExercise("overhead-press", "Overhead Press", ExerciseCategory.SHOULDERS),
    CatalogExercise("side-lateral-raise", "Side Lateral Raise", ExerciseCategory.SHOULDERS),
    CatalogExercise("barbell-curl", "Barbell Curl", ExerciseCategory.ARMS),
    CatalogExercise("triceps-extension", "Triceps Extension", ExerciseCategory.ARMS),
    CatalogExercise("plank", "Plank", ExerciseCategory.CORE),
)

EXERCISES_BY_ID: dict[str, CatalogExercise] = {ex.id: ex for ex in EXERCISE_LIST}

PREMADE_ROUTINES: tuple[Routine, ...] = (
    Routine(
        id="routine-beginner-strength",
        name="Beginner Strength",
        creator="Workout Log Coach",
        description="Full-body strength program built around the big lifts.",
        exercise_ids=("squat", "bench-press", "deadlift", "overhead-press"),
    ),
    Routine(
        id="routine-push-day",
        name="Push Day (chest/shoulders/triceps)",
        creator="Workout Log Coach",
        description="Pressing day that balances chest, shoulders and triceps.",
        exercise_ids=("bench-press", "incline-press", "overhead-press", "triceps-extension"),
    ),
    Routine(
        id="routine-pull-day",
        name="Pull Day (back/biceps)",
        creator="Workout Log Coach",
        description="Pulling day focused on back and biceps.",
        exercise_ids=("pull-up", "barbell-row", "lat-pull-down", "barbell-curl"),
    ),
)


def get_routine(routine_id: str) -> Routine | None:
    return next((r for r in PREMADE_ROUTINES if r.id == routine_id), None)


def get_exercises_for_routine(routine_id: str) -> list[CatalogExercise]:
    """Exercises of a routine in routine order. Unknown routine -> []; unknown exercise ids are skipped."""
    routine = get_routine(routine_id)
    if routine is None:
        return []
    return [EXERCISES_BY_ID[ex_id] for ex_id in routine.exercise_ids if ex_id in EXERCISES_BY_ID]


def list_exercises(category: ExerciseCategory | None = None) -> list[CatalogExercise]:
    if category is None:
        return list(EXERCISE_LIST)
    return [ex for ex in EXERCISE_LIST if ex.category == category]
