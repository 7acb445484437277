"""Premade routines - templates for starting a workout."""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

from fastapi import APIRouter, Depends, HTTPException

from workout_log.api.deps import get_calendar_tz
from workout_log.core.catalog import PREMADE_ROUTINES, get_exercises_for_routine, get_routine
from workout_log.core.exceptions import UnknownRoutineError
from workout_log.schemas.routine import CatalogExerciseRead, RoutineDetail, RoutineRead, SessionDraftRead
from workout_log.schemas.session import SessionExerciseIn
from workout_log.services.composer import SessionDraft

router = APIRouter()


@router.get("", response_model=list[RoutineRead])
async def list_routines():
    return [RoutineRead.model_validate(r) for r in PREMADE_ROUTINES]


@router.get("/{routine_id}", response_model=RoutineDetail)
async def get_routine_detail(routine_id: str):
    """Routine with its exercises resolved from the catalog."""
    routine = get_routine(routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return RoutineDetail(
        **RoutineRead.model_validate(routine).model_dump(),
        exercises=[CatalogExerciseRead.model_validate(ex) for ex in get_exercises_for_routine(routine_id)],
    )


@router.get("/{routine_id}/exercises", response_model=list[CatalogExerciseRead])
async def list_routine_exercises(routine_id: str):
    if get_routine(routine_id) is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return [CatalogExerciseRead.model_validate(ex) for ex in get_exercises_for_routine(routine_id)]


@router.post("/{routine_id}/draft", response_model=SessionDraftRead, status_code=201)
async def start_from_routine(routine_id: str, day: date | None = None, tz: tzinfo = Depends(get_calendar_tz)):
    """Start composing a workout from a routine (same exercise order; sets are added during the session)."""
    today = datetime.now(timezone.utc).astimezone(tz).date()
    try:
        draft = SessionDraft.from_routine(routine_id, day or today)
    except UnknownRoutineError:
        raise HTTPException(status_code=404, detail="Routine not found")
    return SessionDraftRead(
        session_date=draft.session_date,
        routine_id=routine_id,
        exercises=[SessionExerciseIn(id=ex.id, name=ex.name, sets=[]) for ex in draft.exercises],
    )
