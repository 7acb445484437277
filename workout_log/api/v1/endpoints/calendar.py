"""Calendar view: monthly stats, highlighted workout days and day selection."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from fastapi import APIRouter, Depends, Path

from workout_log.api.deps import get_calendar_tz, get_current_user_id, get_session_store
from workout_log.schemas.stats import CalendarMonth, DayLookup, MonthlyStats
from workout_log.services.aggregation import (
    find_session_for_date,
    month_window,
    monthly_stats,
    session_days,
)
from workout_log.services.session_store import SessionStore

router = APIRouter()

NO_WORKOUT_PROMPT = "No workout recorded for this day. Record one to fill it in."


@router.get("/stats/monthly", response_model=MonthlyStats)
async def get_monthly_stats(
    reference_date: datetime | None = None,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Workouts, volume (kg) and time (s) for the month containing reference_date (default: now)."""
    sessions = await store.list(user_id)
    return monthly_stats(sessions, reference_date or datetime.now(timezone.utc), tz=tz)


@router.get("/day", response_model=DayLookup)
async def get_day(
    selected_date: date | None = None,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """
    Session recorded on the selected calendar day. A day without a workout is
    a normal result (found=false with a prompt), not an error.
    """
    if selected_date is None:
        return DayLookup(found=False)
    session = find_session_for_date(await store.list(user_id), selected_date, tz=tz)
    if session is None:
        return DayLookup(selected_date=selected_date, found=False, message=NO_WORKOUT_PROMPT)
    return DayLookup(selected_date=selected_date, found=True, session=session)


@router.get("/{year}/{month}", response_model=CalendarMonth)
async def get_calendar_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """Days to highlight on the calendar plus the month's totals."""
    sessions = await store.list(user_id)
    reference = date(year, month, 1)
    start, end = month_window(reference, tz)
    return CalendarMonth(
        year=year,
        month=month,
        workout_days=[d for d in session_days(sessions, tz) if start.date() <= d <= end.date()],
        stats=monthly_stats(sessions, reference, tz=tz),
    )
