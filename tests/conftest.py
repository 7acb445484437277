import os
import tempfile
import uuid
from pathlib import Path
from zoneinfo import ZoneInfo

# Settings are read once at import time; point them at a throwaway SQLite file first.
_DB_DIR = Path(tempfile.mkdtemp(prefix="workout_log_tests_"))
os.environ["DATABASE_DSN"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["STORAGE_BACKEND"] = "database"
os.environ["CALENDAR_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient

from workout_log.api.deps import get_calendar_tz, get_session_store
from workout_log.main import app
from workout_log.services.session_store import InMemorySessionStore


@pytest.fixture()
def memory_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def client(memory_store: InMemorySessionStore):
    """API client backed by the in-memory store."""
    app.dependency_overrides[get_session_store] = lambda: memory_store

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture()
def db_client():
    """API client backed by the SQL store (SQLite file created on startup)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def headers() -> dict[str, str]:
    # Fresh user per test keeps the shared database isolated between tests
    return {"X-User-Id": f"user-{uuid.uuid4().hex[:8]}"}


def session_body(volume_sets: list[tuple[float, int, bool]], total_time: float = 0, **extra) -> dict:
    """PUT /sessions/{day} body with one exercise holding the given (weight, reps, completed) sets."""
    return {
        "exercises": [
            {
                "id": "bench-press",
                "name": "Bench Press",
                "sets": [{"weight": w, "reps": r, "completed": c} for w, r, c in volume_sets],
            }
        ],
        "total_time": total_time,
        **extra,
    }


@pytest.fixture()
def tokyo_calendar():
    """Cut calendar days in Asia/Tokyo (UTC+9) instead of the suite's UTC."""
    tz = ZoneInfo("Asia/Tokyo")
    app.dependency_overrides[get_calendar_tz] = lambda: tz
    yield tz
    app.dependency_overrides.pop(get_calendar_tz, None)
