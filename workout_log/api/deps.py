"""Shared request dependencies: caller scope, calendar timezone, session store."""

from datetime import tzinfo
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from workout_log.core.config import get_settings
from workout_log.core.constants import USER_ID_HEADER
from workout_log.db.session import get_db
from workout_log.services.session_store import SessionStore, SqlSessionStore


def get_current_user_id(x_user_id: str | None = Header(None, alias=USER_ID_HEADER)) -> str:
    """User scope of the request, passed explicitly to every store call."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=f"{USER_ID_HEADER} header required")
    return x_user_id.strip()


def get_calendar_tz() -> tzinfo:
    return ZoneInfo(get_settings().calendar_timezone)


def get_session_store(request: Request, db: AsyncSession = Depends(get_db)) -> SessionStore:
    """Backend chosen by STORAGE_BACKEND; callers only see the SessionStore interface."""
    if get_settings().storage_backend == "memory":
        return request.app.state.session_store
    return SqlSessionStore(db)
