from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from conftest import session_body

API = "/api/v1"


@pytest.fixture()
def january(client: TestClient, headers):
    """Three sessions: Jan 15 (500 kg, 40 s), Jan 20 (300 kg, 30 s), Feb 1 (100 kg, 10 s)."""
    for day, weight, seconds in (("2024-01-15", 50, 40), ("2024-01-20", 30, 30), ("2024-02-01", 10, 10)):
        body = session_body([(weight, 10, True)], total_time=seconds, created_at=f"{day}T18:00:00Z")
        assert client.put(f"{API}/sessions/{day}", json=body, headers=headers).status_code == 200
    return headers


def test_monthly_stats_scenario(client: TestClient, january):
    r = client.get(f"{API}/calendar/stats/monthly", params={"reference_date": "2024-01-25T00:00:00"}, headers=january)
    assert r.status_code == 200
    assert r.json() == {"total_workouts": 2, "total_volume": 800, "total_time": 70, "skipped_records": 0}


def test_monthly_stats_empty_month(client: TestClient, headers):
    r = client.get(f"{API}/calendar/stats/monthly", params={"reference_date": "2023-06-01T00:00:00"}, headers=headers)
    assert r.json() == {"total_workouts": 0, "total_volume": 0, "total_time": 0, "skipped_records": 0}


def test_calendar_month(client: TestClient, january):
    r = client.get(f"{API}/calendar/2024/1", headers=january)
    assert r.status_code == 200
    data = r.json()
    assert data["workout_days"] == ["2024-01-15", "2024-01-20"]
    assert data["stats"]["total_workouts"] == 2

    assert client.get(f"{API}/calendar/2024/13", headers=january).status_code == 422


def test_select_day_with_session(client: TestClient, january):
    r = client.get(f"{API}/calendar/day", params={"selected_date": "2024-01-20"}, headers=january)
    assert r.status_code == 200
    data = r.json()
    assert data["found"] is True
    assert data["session"]["total_volume"] == 300


def test_select_day_without_session_prompts_to_record(client: TestClient, january):
    r = client.get(f"{API}/calendar/day", params={"selected_date": "2024-01-16"}, headers=january)
    assert r.status_code == 200
    data = r.json()
    assert data["found"] is False
    assert data["session"] is None
    assert "Record one" in data["message"]


def test_select_no_day(client: TestClient, january):
    r = client.get(f"{API}/calendar/day", headers=january)
    assert r.status_code == 200
    assert r.json()["found"] is False


def test_profile_stats_and_share(client: TestClient, headers):
    today = datetime.now(timezone.utc).date()
    for offset in (0, 1, 2, 5):
        day = (today - timedelta(days=offset)).isoformat()
        client.put(f"{API}/sessions/{day}", json=session_body([(100, 5, True)], total_time=60), headers=headers)

    stats = client.get(f"{API}/profile/stats", headers=headers).json()
    assert stats["total_workouts"] == 4
    assert stats["total_days"] == 4
    assert stats["total_volume"] == 2000
    assert stats["current_streak"] == 3
    assert stats["longest_streak"] == 3
    assert stats["last_workout_date"] == today.isoformat()

    text = client.get(f"{API}/profile/share", headers=headers).json()["text"]
    assert "4 times over 4 days" in text
    assert "Current streak: 3 days" in text


def test_routines_and_draft(client: TestClient):
    routines = client.get(f"{API}/routines").json()
    assert [r["id"] for r in routines] == ["routine-beginner-strength", "routine-push-day", "routine-pull-day"]

    detail = client.get(f"{API}/routines/routine-beginner-strength").json()
    assert [ex["id"] for ex in detail["exercises"]] == ["squat", "bench-press", "deadlift", "overhead-press"]

    exercises = client.get(f"{API}/routines/routine-pull-day/exercises").json()
    assert exercises[0] == {"id": "pull-up", "name": "Pull-up", "category": "back"}

    r = client.post(f"{API}/routines/routine-push-day/draft", params={"day": "2024-01-15"})
    assert r.status_code == 201
    draft = r.json()
    assert draft["session_date"] == "2024-01-15"
    assert [ex["id"] for ex in draft["exercises"]][0] == "bench-press"
    assert all(ex["sets"] == [] for ex in draft["exercises"])

    assert client.get(f"{API}/routines/nope").status_code == 404
    assert client.post(f"{API}/routines/nope/draft").status_code == 404


def test_exercise_catalog(client: TestClient):
    all_exercises = client.get(f"{API}/exercises").json()
    assert len(all_exercises) == 14
    core = client.get(f"{API}/exercises", params={"category": "core"}).json()
    assert core == [{"id": "plank", "name": "Plank", "category": "core"}]


def test_health(client: TestClient):
    assert client.get(f"{API}/health").json()["status"] == "ok"
    assert client.get("/").json()["status"] == "ok"


def test_naive_created_at_stays_on_its_day_outside_utc(client: TestClient, headers, tokyo_calendar):
    body = session_body([(50, 10, True)], created_at="2024-01-31T20:00:00")
    r = client.put(f"{API}/sessions/2024-01-31", json=body, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["created_at"] == "2024-01-31T11:00:00Z"

    day = client.get(f"{API}/calendar/day", params={"selected_date": "2024-01-31"}, headers=headers).json()
    assert day["found"] is True

    jan = client.get(f"{API}/calendar/2024/1", headers=headers).json()
    assert jan["workout_days"] == ["2024-01-31"]
    assert jan["stats"]["total_workouts"] == 1
    feb = client.get(f"{API}/calendar/2024/2", headers=headers).json()
    assert feb["workout_days"] == []
    assert feb["stats"]["total_workouts"] == 0


def test_draft_defaults_to_today_in_calendar_zone(client: TestClient, tokyo_calendar):
    today = datetime.now(timezone.utc).astimezone(tokyo_calendar).date()
    r = client.post(f"{API}/routines/routine-push-day/draft")
    assert r.status_code == 201
    assert r.json()["session_date"] == today.isoformat()
