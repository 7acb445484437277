"""Session aggregation: monthly totals, day lookup, volume and streaks.

Everything here is a pure function of its arguments. Sessions may be schema
objects, ORM rows or plain mappings (fixtures, imported JSON); timestamps may
be datetimes, dates or ISO-8601 strings. Each timestamp is normalised to the
calendar timezone before it is compared, so time-of-day and the timezone it
was stored in never cause a false mismatch.

Malformed timestamps are skipped and logged, never coerced to "today", so one
corrupt record does not blank a whole month.
"""

from __future__ import annotations

import calendar
import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any

from workout_log.schemas.stats import LifetimeStats, MonthlyStats

logger = logging.getLogger(__name__)

_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "created_at": ("created_at", "createdAt"),
    "total_volume": ("total_volume", "totalVolume"),
    "total_time": ("total_time_seconds", "total_time", "totalTime"),
    "exercises": ("exercises",),
    "sets": ("sets",),
    "weight": ("weight",),
    "reps": ("reps",),
    "completed": ("completed",),
}

_MISSING = object()


def _field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from an object or a mapping, accepting camelCase aliases."""
    for key in _FIELD_ALIASES.get(name, (name,)):
        if isinstance(record, Mapping):
            value = record.get(key, _MISSING)
        else:
            value = getattr(record, key, _MISSING)
        if value is not _MISSING:
            return value
    return default


def normalize_timestamp(value: Any, tz: tzinfo = timezone.utc) -> datetime | None:
    """
    Return value as an aware datetime in tz, or None if it cannot be parsed.
    Naive datetimes are taken as wall-clock time in tz; bare dates as midnight.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def calendar_day(value: Any, tz: tzinfo = timezone.utc) -> date | None:
    """Calendar day of a timestamp in tz (None if malformed)."""
    dt = normalize_timestamp(value, tz)
    return dt.date() if dt is not None else None


def month_window(reference_date: Any, tz: tzinfo = timezone.utc) -> tuple[datetime, datetime]:
    """First and last instant (inclusive) of the calendar month containing reference_date."""
    ref = normalize_timestamp(reference_date, tz)
    if ref is None:
        raise ValueError(f"Invalid reference date: {reference_date!r}")
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    start = datetime(ref.year, ref.month, 1, tzinfo=tz)
    end = datetime(ref.year, ref.month, last_day, 23, 59, 59, 999999, tzinfo=tz)
    return start, end


def total_volume_for_session(exercises: Iterable[Any]) -> float:
    """Sum of weight * reps over completed sets. A set without a completed flag counts."""
    volume = 0.0
    for exercise in exercises or ():
        for s in _field(exercise, "sets") or ():
            if _field(s, "completed", True) is False:
                continue
            volume += float(_field(s, "weight") or 0) * int(_field(s, "reps") or 0)
    return volume


def monthly_stats(sessions: Iterable[Any], reference_date: Any, tz: tzinfo = timezone.utc) -> MonthlyStats:
    """
    Totals over sessions whose created_at falls in the month of reference_date.
    Bounds are inclusive. Sessions with malformed created_at are counted in
    skipped_records and left out of the sums.
    """
    start, end = month_window(reference_date, tz)
    total_workouts = 0
    total_volume = 0.0
    total_time: int | float = 0
    skipped = 0
    for session in sessions:
        raw = _field(session, "created_at")
        created = normalize_timestamp(raw, tz)
        if created is None:
            skipped += 1
            logger.warning(
                "Skipping session %s in monthly stats: malformed created_at %r",
                _field(session, "id"),
                raw,
            )
            continue
        if start <= created <= end:
            total_workouts += 1
            total_volume += float(_field(session, "total_volume") or 0)
            total_time += _field(session, "total_time") or 0
    return MonthlyStats(
        total_workouts=total_workouts,
        total_volume=total_volume,
        total_time=total_time,
        skipped_records=skipped,
    )


def find_duplicate_days(sessions: Iterable[Any], tz: tzinfo = timezone.utc) -> dict[date, int]:
    """Days holding more than one session (violates one-session-per-day), with their counts."""
    counts = Counter(d for d in (calendar_day(_field(s, "created_at"), tz) for s in sessions) if d is not None)
    return {d: n for d, n in counts.items() if n > 1}


def find_session_for_date(sessions: Iterable[Any], selected_date: Any, tz: tzinfo = timezone.utc) -> Any | None:
    """
    First session (in input order) on the same calendar day as selected_date.
    Returns None when nothing is selected or no session matches. Extra sessions
    on the same day are logged as an anomaly; the first one still wins.
    """
    if selected_date is None:
        return None
    target = calendar_day(selected_date, tz)
    if target is None:
        logger.warning("Cannot look up session: malformed selected date %r", selected_date)
        return None
    match = None
    extra = 0
    for session in sessions:
        if calendar_day(_field(session, "created_at"), tz) != target:
            continue
        if match is None:
            match = session
        else:
            extra += 1
    if extra:
        logger.warning(
            "Found %d sessions on %s; using the first (%s)",
            extra + 1,
            target.isoformat(),
            _field(match, "id"),
        )
    return match


def session_days(sessions: Iterable[Any], tz: tzinfo = timezone.utc) -> list[date]:
    """Distinct calendar days with at least one session, ascending (calendar highlights)."""
    days = {calendar_day(_field(s, "created_at"), tz) for s in sessions}
    days.discard(None)
    return sorted(days)


def _longest_run(days_desc: list[date]) -> int:
    longest = 1
    run = 1
    for i in range(1, len(days_desc)):
        if days_desc[i] == days_desc[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def lifetime_stats(sessions: Iterable[Any], today: date, tz: tzinfo = timezone.utc) -> LifetimeStats:
    """
    Profile totals plus streaks. The current streak counts consecutive days
    ending today or yesterday; otherwise it is 0.
    """
    sessions = list(sessions)
    valid = [s for s in sessions if calendar_day(_field(s, "created_at"), tz) is not None]
    days_desc = sorted(session_days(valid, tz), reverse=True)
    if not days_desc:
        return LifetimeStats()

    current = 0
    if days_desc[0] >= today - timedelta(days=1):
        current = 1
        for i in range(1, len(days_desc)):
            if days_desc[i] == days_desc[i - 1] - timedelta(days=1):
                current += 1
            else:
                break

    return LifetimeStats(
        total_workouts=len(valid),
        total_days=len(days_desc),
        total_volume=sum(float(_field(s, "total_volume") or 0) for s in valid),
        total_time=sum(_field(s, "total_time") or 0 for s in valid),
        current_streak=current,
        longest_streak=_longest_run(days_desc),
        last_workout_date=days_desc[0],
    )
