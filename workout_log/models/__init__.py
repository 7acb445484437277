"""ORM models - import all so Base.metadata is complete for migrations."""

from workout_log.models.session import SessionExercise, SessionSet, WorkoutSession, session_key

__all__ = [
    "SessionExercise",
    "SessionSet",
    "WorkoutSession",
    "session_key",
]
