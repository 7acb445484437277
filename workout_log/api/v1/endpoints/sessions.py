"""Workout session endpoints: complete, read, delete and share a day's workout."""

from __future__ import annotations

import logging
from datetime import date, tzinfo

from fastapi import APIRouter, Depends, HTTPException

from workout_log.api.deps import get_calendar_tz, get_current_user_id, get_session_store
from workout_log.core.exceptions import SessionLimitError
from workout_log.schemas.session import ShareText, WorkoutSessionRead, WorkoutSessionUpsert
from workout_log.services.composer import seal_payload
from workout_log.services.session_store import SessionStore
from workout_log.services.share import session_share_text

logger = logging.getLogger(__name__)
router = APIRouter()

NO_SESSION_DETAIL = "No workout recorded for this day."


@router.get("", response_model=list[WorkoutSessionRead])
async def list_sessions(
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
):
    """All sessions of the caller, newest day first."""
    return await store.list(user_id)


@router.put("/{day}", response_model=WorkoutSessionRead)
async def complete_session(
    day: date,
    payload: WorkoutSessionUpsert,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
    tz: tzinfo = Depends(get_calendar_tz),
):
    """
    Complete the workout for a day. Totals are recomputed from the sets and
    elapsed time is stored in seconds. Writing a day that already has a
    session replaces it.
    """
    try:
        sealed = seal_payload(day, payload, tz=tz)
    except SessionLimitError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    session = await store.upsert(user_id, sealed)
    logger.info("Stored session %s (%.1f kg, %ds)", session.id, session.total_volume, session.total_time_seconds)
    return session


@router.get("/{day}", response_model=WorkoutSessionRead)
async def get_session(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
):
    session = await store.get_by_day(user_id, day)
    if session is None:
        raise HTTPException(status_code=404, detail=NO_SESSION_DETAIL)
    return session


@router.delete("/{day}", status_code=204)
async def delete_session(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
):
    """Delete the session recorded for a day."""
    if not await store.delete_by_day(user_id, day):
        raise HTTPException(status_code=404, detail=NO_SESSION_DETAIL)
    return None


@router.get("/{day}/share", response_model=ShareText)
async def share_session(
    day: date,
    user_id: str = Depends(get_current_user_id),
    store: SessionStore = Depends(get_session_store),
):
    """Shareable summary of a finished workout."""
    session = await store.get_by_day(user_id, day)
    if session is None:
        raise HTTPException(status_code=404, detail=NO_SESSION_DETAIL)
    return ShareText(text=session_share_text(session))
