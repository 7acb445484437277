"""Domain errors raised by services; endpoints map them to HTTP responses."""


class WorkoutLogError(Exception):
    """Base class for workout log domain errors."""


class SessionLimitError(WorkoutLogError):
    """Too many exercises in a session or sets in an exercise."""


class SessionSealedError(WorkoutLogError):
    """A sealed session was modified."""


class UnknownExerciseError(WorkoutLogError):
    """Exercise id not present in a draft."""


class UnknownRoutineError(WorkoutLogError):
    """Routine id not present in the catalog."""
