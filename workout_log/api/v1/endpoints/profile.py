"""Profile statistics: lifetime totals, streaks and a shareable summary."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo

from fastapi import APIRouter, Depends

from workout_log.api.deps import get_calendar_tz, get_current_user_id, get_session_store
from workout_log.schemas.session import ShareText
from workout_log.schemas.stats import LifetimeStats
from workout_log.services.aggregation import lifetime_stats
from workout_log.services.session_store import SessionStore
from workout_log.services.share import profile_share_text

router = APIRouter()


async def _stats(user_id: str, store: SessionStore, tz: tzinfo) -> LifetimeStats:
    today = datetime.now(timezone.utc).astimezone(tz).date()
    return lifetime_stats(await store.list(user_id), today, tz=tz)


@router.get("/stats", response_model=LifetimeStats)
async def get_profile_stats(
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """
    Total workouts, training days and volume, current streak (consecutive days
    ending today or yesterday), longest streak and the last workout day.
    """
    return await _stats(user_id, store, tz)


@router.get("/share", response_model=ShareText)
async def share_profile(
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    return ShareText(text=profile_share_text(await _stats(user_id, store, tz)))
