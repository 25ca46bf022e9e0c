from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from services.stats_service import StatsService, longest_streak, current_streak

TODAY = date(2025, 10, 28)
UTC = ZoneInfo("UTC")


def solved(days_ago: int, status="Completed", difficulty="Easy", hour=12) -> dict:
    d = TODAY - timedelta(days=days_ago)
    ts = datetime(d.year, d.month, d.day, hour, tzinfo=timezone.utc)
    return {"status": status, "difficulty": difficulty, "last_solved_at": ts.isoformat(),
            "updated_at": ts.isoformat()}


def pending(status="To Do", difficulty="Medium") -> dict:
    return {"status": status, "difficulty": difficulty, "last_solved_at": None,
            "updated_at": "2025-10-01T08:00:00+00:00"}


def compute(questions, **kwargs):
    kwargs.setdefault("tz", UTC)
    return StatsService.compute_stats(questions, TODAY, **kwargs)


@pytest.mark.parametrize("questions", [[], None])
def test_no_questions_gives_zero_stats(questions):
    stats = compute(questions)
    assert stats["total"] == 0
    assert stats["completion_rate"] == 0
    assert stats["current_streak"] == 0
    assert stats["longest_streak"] == 0
    assert stats["by_difficulty"] == {"Easy": 0, "Medium": 0, "Hard": 0}
    assert len(stats["activity_map"]) == 365
    assert all(day["count"] == 0 for day in stats["activity_map"])


def test_three_consecutive_days_ending_today():
    stats = compute([solved(0), solved(1), solved(2)])
    assert stats["current_streak"] == 3
    assert stats["longest_streak"] == 3


def test_gap_breaks_streak():
    stats = compute([solved(0), solved(3)])
    assert stats["current_streak"] == 1
    assert stats["longest_streak"] == 1


def test_today_inactive_means_no_current_streak():
    stats = compute([solved(1), solved(2)])
    assert stats["current_streak"] == 0
    assert stats["longest_streak"] == 2


def test_longest_streak_in_the_past():
    questions = [solved(0), solved(1)] + [solved(d) for d in range(10, 15)]
    stats = compute(questions)
    assert stats["current_streak"] == 2
    assert stats["longest_streak"] == 5


def test_several_completions_on_one_day():
    stats = compute([solved(0, hour=9), solved(0, hour=18)])
    assert stats["current_streak"] == 1
    assert stats["longest_streak"] == 1
    assert stats["activity_map"][-1] == {"date": "2025-10-28", "count": 2}


def test_counts_add_up():
    questions = [solved(0, difficulty="Hard"), pending(), pending("In Progress", "Easy"), pending()]
    stats = compute(questions)
    assert stats["total"] == 4
    assert stats["completed"] == 1
    assert stats["in_progress"] == 1
    assert stats["todo"] == 2
    assert stats["completed"] + stats["in_progress"] + stats["todo"] == stats["total"]
    assert stats["by_difficulty"] == {"Easy": 1, "Medium": 2, "Hard": 1}
    assert stats["completion_rate"] == 25


@pytest.mark.parametrize("completed,total,rate", [(1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 3, 100)])
def test_completion_rate_rounds_half_up(completed, total, rate):
    questions = [solved(0)] * completed + [pending()] * (total - completed)
    assert compute(questions)["completion_rate"] == rate


def test_completed_without_solved_time_falls_back_to_updated_at():
    question = {"status": "Completed", "difficulty": "Easy", "last_solved_at": None,
                "updated_at": "2025-10-28T07:30:00Z"}
    stats = compute([question])
    assert stats["current_streak"] == 1


def test_unfinished_question_without_solved_time_is_not_activity():
    stats = compute([pending("In Progress")])
    assert stats["longest_streak"] == 0
    assert sum(day["count"] for day in stats["activity_map"]) == 0


def test_solved_time_counts_even_after_leaving_completed():
    question = solved(0, status="In Progress")
    assert compute([question])["current_streak"] == 1


def test_malformed_timestamps_are_skipped():
    questions = [
        {"status": "To Do", "difficulty": "Easy", "last_solved_at": "not-a-date", "updated_at": "2025-10-28"},
        {"status": "Completed", "difficulty": "Easy", "last_solved_at": "garbage", "updated_at": 42},
        {"status": "Completed", "difficulty": "Hard", "last_solved_at": "", "updated_at": "2025-10-28T01:00:00+00:00"},
    ]
    stats = compute(questions)
    assert stats["total"] == 3
    assert stats["current_streak"] == 1
    assert stats["activity_map"][-1]["count"] == 1


def test_unknown_status_is_skipped():
    stats = compute([solved(0), {"status": "Archived", "difficulty": "Easy"}, {"status": "To Do", "difficulty": "?"}])
    assert stats["total"] == 1
    assert stats["completed"] == 1


def test_accepts_datetime_and_naive_values():
    questions = [
        {"status": "Completed", "difficulty": "Easy", "last_solved_at": datetime(2025, 10, 28, 5, 0)},
        {"status": "Completed", "difficulty": "Easy", "last_solved_at": date(2025, 10, 27)},
    ]
    stats = compute(questions)
    assert stats["current_streak"] == 2


def test_days_follow_the_configured_timezone():
    question = {"status": "Completed", "difficulty": "Easy", "last_solved_at": "2025-10-28T02:00:00+00:00"}
    stats = compute([question], tz=ZoneInfo("America/New_York"))
    assert stats["current_streak"] == 0
    assert stats["activity_map"][-2] == {"date": "2025-10-27", "count": 1}


def test_future_activity_is_ignored_for_streaks_and_map():
    stats = compute([solved(-1), solved(0)])
    assert stats["current_streak"] == 1
    assert stats["longest_streak"] == 1
    assert stats["activity_map"][-1]["date"] == "2025-10-28"


def test_activity_map_covers_window_ending_today():
    stats = compute([solved(0), solved(6), solved(30)], window_days=7)
    window = stats["activity_map"]
    assert len(window) == 7
    assert window[0] == {"date": "2025-10-22", "count": 1}
    assert window[-1] == {"date": "2025-10-28", "count": 1}
    # 2025-10-22 is a Wednesday
    assert stats["window_start_weekday"] == 3


def test_activity_map_size_does_not_depend_on_activity():
    questions = [solved(d) for d in range(400)]
    stats = compute(questions)
    assert len(stats["activity_map"]) == 365
    assert all(day["count"] == 1 for day in stats["activity_map"])
    assert stats["current_streak"] == 400


def test_weekly_and_monthly_completed():
    stats = compute([solved(0), solved(6), solved(7), solved(29), solved(30)])
    assert stats["weekly_completed"] == 2
    assert stats["monthly_completed"] == 4


def test_invalid_window_raises():
    with pytest.raises(ValueError):
        compute([], window_days=0)


def test_recompute_is_idempotent():
    questions = [solved(0), solved(1), pending(), solved(9, difficulty="Hard")]
    assert compute(questions) == compute(questions)


def test_longest_streak_never_below_current():
    for questions in ([solved(0)], [solved(0), solved(1), solved(5)], [solved(2), solved(3)]):
        stats = compute(questions)
        assert stats["longest_streak"] >= stats["current_streak"]


def test_streak_helpers():
    days = {TODAY, TODAY - timedelta(days=1)}
    assert current_streak(days, TODAY) == 2
    assert current_streak(set(), TODAY) == 0
    assert longest_streak(set()) == 0
    assert longest_streak({TODAY}) == 1


@pytest.mark.parametrize("stamp", [
    "2025-10-28T12:00:00.1+00:00",
    "2025-10-28T12:00:00.12345+00:00",
    "2025-10-28T12:00:00.1234Z",
    "2025-10-28 12:00:00.123+00:00",
])
def test_postgrest_timestamps_with_trimmed_fractions(stamp):
    question = {"status": "Completed", "difficulty": "Easy", "last_solved_at": stamp}
    stats = compute([question])
    assert stats["current_streak"] == 1
    assert stats["activity_map"][-1]["count"] == 1


def test_date_only_string_is_not_shifted_by_timezone():
    question = {"status": "Completed", "difficulty": "Easy", "last_solved_at": "2025-10-28"}
    stats = compute([question], tz=ZoneInfo("America/New_York"))
    assert stats["current_streak"] == 1
    assert stats["activity_map"][-1] == {"date": "2025-10-28", "count": 1}
