"""Shared enums for models and API."""

from enum import Enum


class TimeUnit(str, Enum):
    """Unit a client reports elapsed workout time in. Stored as seconds."""

    SECONDS = "seconds"
    MINUTES = "minutes"


class ExerciseCategory(str, Enum):
    """Body area an exercise in the catalog trains."""

    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    SHOULDERS = "shoulders"
    ARMS = "arms"
    CORE = "core"


def to_seconds(value: int | float, unit: TimeUnit) -> int:
    """Convert elapsed time to the canonical unit (whole seconds)."""
    if unit == TimeUnit.MINUTES:
        return int(round(value * 60))
    return int(round(value))
