"""Plain-text summaries for sharing a finished workout or lifetime stats."""

from workout_log.core.constants import SHARE_HASHTAGS
from workout_log.schemas.session import WorkoutSessionRead
from workout_log.schemas.stats import LifetimeStats


def format_elapsed(seconds: int) -> str:
    """12 min 5 s."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins} min {secs} s"


def format_kg(volume: float) -> str:
    """Thousands separators, no trailing .0 for whole kilograms."""
    if float(volume).is_integer():
        return f"{int(volume):,}kg"
    return f"{volume:,.1f}kg"


def session_share_text(session: WorkoutSessionRead) -> str:
    day = session.session_date
    return (
        "Workout done! 💪\n"
        f"📅 {day.strftime('%b')} {day.day}\n"
        f"⏱️ Time: {format_elapsed(session.total_time_seconds)}\n"
        f"🏋️ Total volume: {format_kg(session.total_volume)}\n"
        "\n"
        f"{SHARE_HASHTAGS}"
    )


def profile_share_text(stats: LifetimeStats) -> str:
    return (
        f"I trained {stats.total_workouts} times over {stats.total_days} days with Workout Log! 💪\n"
        "\n"
        f"Total volume: {format_kg(stats.total_volume)}\n"
        f"Current streak: {stats.current_streak} days\n"
        "\n"
        f"{SHARE_HASHTAGS}"
    )
