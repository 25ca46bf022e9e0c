"""
stats_service.py — Practice statistics & streaks
Pure aggregation over a user's question rows: counts by status and difficulty,
completion rate, current/longest streak and a dense activity map for the
calendar heatmap. Recomputed from scratch on every call; no database access.
"""

import logging
import math
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from pydantic import TypeAdapter

import config
from models.enums import Difficulty, Status

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_DAYS = 30

_DATETIME = TypeAdapter(datetime)


def parse_timestamp(value) -> datetime | date | None:
    """Accept datetimes, dates or ISO-8601 strings. Anything else is None."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # PostgREST trims trailing zeros from fractional seconds
        return _DATETIME.validate_python(text)
    except ValueError:
        return None


def to_local_day(value, tz) -> date | None:
    """Calendar day of a timestamp in tz. Naive datetimes are taken as UTC."""
    ts = parse_timestamp(value)
    if ts is None:
        return None
    if not isinstance(ts, datetime):
        return ts
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(tz).date()


def activity_day(question: dict, tz) -> date | None:
    """The day a question counts as solved: last_solved_at, else updated_at for completed rows."""
    day = to_local_day(question.get("last_solved_at"), tz)
    if day is None and question.get("status") == Status.COMPLETED.value:
        day = to_local_day(question.get("updated_at"), tz)
    return day


def current_streak(active_days: set, today: date) -> int:
    """Consecutive active days walking back from today. Zero if today is inactive."""
    streak = 0
    day = today
    while day in active_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(active_days: set) -> int:
    days = sorted(active_days, reverse=True)
    if not days:
        return 0
    longest = run = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days == 1:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def activity_map(day_counts: dict, today: date, window_days: int) -> list[dict]:
    """One entry per day for the window ending today, oldest first."""
    start = today - timedelta(days=window_days - 1)
    return [
        {"date": d.isoformat(), "count": day_counts.get(d, 0)}
        for d in (start + timedelta(days=i) for i in range(window_days))
    ]


class StatsService:
    @staticmethod
    def timezone():
        return ZoneInfo(config.STATS_TIMEZONE)

    @staticmethod
    def today() -> date:
        """Today's date in the configured stats timezone."""
        return datetime.now(StatsService.timezone()).date()

    @staticmethod
    def compute_stats(questions, today: date, window_days: int = None, tz=None) -> dict:
        """
        Aggregate a user's question rows as of `today`.

        Rows whose status or difficulty is not one of the known values are
        skipped so the status counts always add up to the total.
        """
        window_days = config.STATS_WINDOW_DAYS if window_days is None else window_days
        if window_days < 1:
            raise ValueError("window_days must be at least 1")
        tz = tz or StatsService.timezone()

        by_status = {s: 0 for s in Status}
        by_difficulty = {d: 0 for d in Difficulty}
        day_counts = {}

        for q in questions or []:
            try:
                status = Status(q.get("status"))
                difficulty = Difficulty(q.get("difficulty"))
            except ValueError:
                logger.warning("Skipping question %s with unknown status/difficulty", q.get("id"))
                continue

            by_status[status] += 1
            by_difficulty[difficulty] += 1

            day = activity_day(q, tz)
            if day is not None:
                day_counts[day] = day_counts.get(day, 0) + 1

        total = sum(by_status.values())
        completed = by_status[Status.COMPLETED]
        active_days = {d for d in day_counts if d <= today}

        week_start = today - timedelta(days=WEEK_DAYS - 1)
        month_start = today - timedelta(days=MONTH_DAYS - 1)
        window = activity_map(day_counts, today, window_days)
        first_day = today - timedelta(days=window_days - 1)

        return {
            "total": total,
            "completed": completed,
            "in_progress": by_status[Status.IN_PROGRESS],
            "todo": by_status[Status.TODO],
            "by_difficulty": {d.value: n for d, n in by_difficulty.items()},
            "completion_rate": math.floor(100 * completed / total + 0.5) if total else 0,  # half-up
            "current_streak": current_streak(active_days, today),
            "longest_streak": longest_streak(active_days),
            "weekly_completed": sum(n for d, n in day_counts.items() if week_start <= d <= today),
            "monthly_completed": sum(n for d, n in day_counts.items() if month_start <= d <= today),
            "activity_map": window,
            # 0 = Sunday, so the heatmap can pad the first column
            "window_start_weekday": (first_day.weekday() + 1) % 7,
        }
