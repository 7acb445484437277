"""Health check endpoint for load balancers and monitoring."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from workout_log.core.config import get_settings
from workout_log.db.session import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + storage backend."""
    backend = get_settings().storage_backend
    if backend == "memory":
        return {"status": "ok", "storage": "memory"}
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ok", "storage": backend, "database": "connected"}
    except Exception as e:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "storage": backend, "database": str(e)},
        )
