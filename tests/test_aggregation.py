import logging
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from workout_log.schemas.session import SessionExerciseRead, WorkoutSessionRead, WorkoutSetRead
from workout_log.schemas.stats import MonthlyStats
from workout_log.services.aggregation import (
    find_duplicate_days,
    find_session_for_date,
    lifetime_stats,
    month_window,
    monthly_stats,
    normalize_timestamp,
    session_days,
    total_volume_for_session,
)

JANUARY = [
    {"id": "a", "createdAt": "2024-01-15T09:00:00Z", "totalVolume": 500, "totalTime": 40},
    {"id": "b", "createdAt": "2024-01-20T18:30:00Z", "totalVolume": 300, "totalTime": 30},
    {"id": "c", "createdAt": "2024-02-01T07:00:00Z", "totalVolume": 100, "totalTime": 10},
]


def _session(created_at, volume=0.0, seconds=0) -> WorkoutSessionRead:
    return WorkoutSessionRead(
        id=f"u_{created_at}",
        user_id="u",
        session_date=normalize_timestamp(created_at).date(),
        created_at=created_at,
        total_volume=volume,
        total_time_seconds=seconds,
    )


def test_empty_sessions_give_zero_stats():
    stats = monthly_stats([], date(2024, 1, 25))
    assert stats == MonthlyStats(total_workouts=0, total_volume=0, total_time=0)
    assert stats.total_workouts == 0 and stats.total_volume == 0 and stats.total_time == 0


def test_monthly_stats_scenario():
    stats = monthly_stats(JANUARY, date(2024, 1, 25))
    assert stats.total_workouts == 2
    assert stats.total_volume == 800
    assert stats.total_time == 70
    assert stats.skipped_records == 0


def test_monthly_stats_matches_direct_reduction():
    sessions = [_session(datetime(2024, 3, d, 12, tzinfo=timezone.utc), volume=d * 10.5, seconds=d * 60) for d in (1, 9, 17, 31)]
    sessions.append(_session(datetime(2024, 4, 1, 12, tzinfo=timezone.utc), volume=999, seconds=999))
    in_march = [s for s in sessions if s.created_at.month == 3]

    stats = monthly_stats(sessions, datetime(2024, 3, 10, tzinfo=timezone.utc))

    assert stats.total_workouts == len(in_march)
    assert stats.total_volume == pytest.approx(sum(s.total_volume for s in in_march))
    assert stats.total_time == sum(s.total_time_seconds for s in in_march)


def test_month_bounds_are_inclusive():
    start, end = month_window(date(2024, 2, 10))
    assert start == datetime(2024, 2, 1, tzinfo=timezone.utc)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=timezone.utc)

    sessions = [
        {"createdAt": start.isoformat(), "totalVolume": 1, "totalTime": 1},
        {"createdAt": end.isoformat(), "totalVolume": 2, "totalTime": 2},
        {"createdAt": "2024-01-31T23:59:59Z", "totalVolume": 40, "totalTime": 40},
        {"createdAt": "2024-03-01T00:00:00Z", "totalVolume": 80, "totalTime": 80},
    ]
    stats = monthly_stats(sessions, date(2024, 2, 10))
    assert (stats.total_workouts, stats.total_volume, stats.total_time) == (2, 3, 3)


def test_malformed_created_at_is_skipped_and_logged(caplog):
    sessions = JANUARY + [{"id": "bad", "createdAt": "not-a-date", "totalVolume": 1000, "totalTime": 5}]
    with caplog.at_level(logging.WARNING, logger="workout_log.services.aggregation"):
        stats = monthly_stats(sessions, date(2024, 1, 25))

    assert stats.total_workouts == 2
    assert stats.total_volume == 800
    assert stats.skipped_records == 1
    assert "malformed created_at" in caplog.text


def test_missing_created_at_is_not_treated_as_today():
    stats = monthly_stats([{"totalVolume": 10, "totalTime": 1}], datetime.now(timezone.utc))
    assert stats.total_workouts == 0
    assert stats.skipped_records == 1


def test_monthly_stats_uses_calendar_timezone():
    # 16:00 UTC on Jan 31 is already Feb 1 in Seoul
    sessions = [{"createdAt": "2024-01-31T16:00:00Z", "totalVolume": 100, "totalTime": 10}]
    seoul = ZoneInfo("Asia/Seoul")
    assert monthly_stats(sessions, date(2024, 1, 15)).total_workouts == 1
    assert monthly_stats(sessions, date(2024, 1, 15), tz=seoul).total_workouts == 0
    assert monthly_stats(sessions, date(2024, 2, 15), tz=seoul).total_workouts == 1


def test_monthly_stats_does_not_mutate_input():
    sessions = [dict(s) for s in JANUARY]
    first = monthly_stats(sessions, date(2024, 1, 25))
    second = monthly_stats(sessions, date(2024, 1, 25))
    assert first == second
    assert sessions == JANUARY


def test_invalid_reference_date_raises():
    with pytest.raises(ValueError):
        month_window("yesterday-ish")


def test_find_session_for_date_without_selection():
    assert find_session_for_date(JANUARY, None) is None
    assert find_session_for_date([], None) is None


def test_find_session_for_date_scenario():
    found = find_session_for_date(JANUARY, date(2024, 1, 20))
    assert found is JANUARY[1]
    assert found["totalVolume"] == 300


def test_find_session_for_date_no_match():
    assert find_session_for_date(JANUARY, date(2024, 1, 16)) is None


def test_find_session_ignores_time_of_day():
    sessions = [_session(datetime(2024, 1, 20, 23, 30, tzinfo=timezone.utc), volume=300)]
    found = find_session_for_date(sessions, datetime(2024, 1, 20, 6, 0))
    assert found is sessions[0]
    assert find_session_for_date(sessions, "2024-01-20T00:00:01Z") is sessions[0]


def test_duplicate_days_return_first_and_are_flagged(caplog):
    sessions = [
        {"id": "first", "createdAt": "2024-01-20T08:00:00Z", "totalVolume": 300},
        {"id": "second", "createdAt": "2024-01-20T19:00:00Z", "totalVolume": 999},
    ]
    with caplog.at_level(logging.WARNING, logger="workout_log.services.aggregation"):
        found = find_session_for_date(sessions, date(2024, 1, 20))

    assert found["id"] == "first"
    assert "Found 2 sessions on 2024-01-20" in caplog.text
    assert find_duplicate_days(sessions) == {date(2024, 1, 20): 2}
    assert find_duplicate_days(JANUARY) == {}


def test_total_volume_ignores_incomplete_sets():
    exercises = [
        {
            "id": 1,
            "name": "Squat",
            "sets": [
                {"weight": 50, "reps": 10, "completed": True},
                {"weight": 20, "reps": 5, "completed": False},
            ],
        }
    ]
    assert total_volume_for_session(exercises) == 500


def test_total_volume_counts_sets_without_completed_flag():
    exercises = [{"id": 1, "name": "Squat", "sets": [{"weight": 50, "reps": 10}, {"weight": 20, "reps": 5}]}]
    assert total_volume_for_session(exercises) == 600


def test_total_volume_empty():
    assert total_volume_for_session([]) == 0
    assert total_volume_for_session([{"id": "x", "name": "Plank", "sets": []}]) == 0
    incomplete = [SessionExerciseRead(id="x", name="Row", sets=(WorkoutSetRead(weight=40, reps=8, completed=False),))]
    assert total_volume_for_session(incomplete) == 0


def test_normalize_timestamp_inputs():
    assert normalize_timestamp("2024-01-15T09:00:00Z") == datetime(2024, 1, 15, 9, tzinfo=timezone.utc)
    assert normalize_timestamp("2024-01-15") == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert normalize_timestamp(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert normalize_timestamp("garbage") is None
    assert normalize_timestamp(None) is None
    assert normalize_timestamp(12345) is None


def test_session_days_are_distinct_and_sorted():
    sessions = list(reversed(JANUARY)) + [{"createdAt": "2024-01-15T20:00:00Z"}, {"createdAt": "???"}]
    assert session_days(sessions) == [date(2024, 1, 15), date(2024, 1, 20), date(2024, 2, 1)]


def test_lifetime_stats_streaks():
    sessions = [
        {"createdAt": f"2024-01-{d:02d}T10:00:00Z", "totalVolume": 100, "totalTime": 60}
        for d in (10, 18, 19, 20)
    ]
    stats = lifetime_stats(sessions, today=date(2024, 1, 21))
    assert stats.total_workouts == 4
    assert stats.total_days == 4
    assert stats.total_volume == 400
    assert stats.total_time == 240
    assert stats.current_streak == 3
    assert stats.longest_streak == 3
    assert stats.last_workout_date == date(2024, 1, 20)

    assert lifetime_stats(sessions, today=date(2024, 1, 25)).current_streak == 0


def test_lifetime_stats_empty():
    stats = lifetime_stats([], today=date(2024, 1, 1))
    assert stats.total_workouts == 0
    assert stats.current_streak == 0
    assert stats.last_workout_date is None
