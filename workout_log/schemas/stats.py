"""Calendar and statistics schemas."""

from datetime import date

from pydantic import BaseModel

from workout_log.schemas.session import WorkoutSessionRead


class MonthlyStats(BaseModel):
    """Totals over the sessions of one calendar month. All zero when the month is empty."""

    total_workouts: int = 0
    total_volume: float = 0
    total_time: int | float = 0  # same unit as the sessions summed (seconds for stored sessions)
    skipped_records: int = 0  # sessions left out because created_at could not be parsed


class LifetimeStats(BaseModel):
    total_workouts: int = 0
    total_days: int = 0
    total_volume: float = 0
    total_time: int | float = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: date | None = None


class CalendarMonth(BaseModel):
    year: int
    month: int
    workout_days: list[date] = []
    stats: MonthlyStats


class DayLookup(BaseModel):
    """Result of selecting a calendar day. found=False is a normal state, not an error."""

    selected_date: date | None = None
    found: bool = False
    session: WorkoutSessionRead | None = None
    message: str | None = None
