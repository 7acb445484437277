"""API v1 router aggregation."""

from fastapi import APIRouter

from workout_log.api.v1.endpoints import (
    calendar,
    exercises,
    health,
    profile,
    routines,
    sessions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(routines.router, prefix="/routines", tags=["routines"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
