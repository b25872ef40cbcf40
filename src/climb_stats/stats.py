"""Feed one user's stored climbs into the streak and aggregation functions.

Every function reads a fresh snapshot for a single user, so calling one right
after a climb is created, edited or deleted sees that change.
"""

from __future__ import annotations

from datetime import date

from climb_stats.db import Database
from climb_stats.models import ClimbRecord
from climb_stats.monthly import (
    MonthlySummary,
    TodayStats,
    calculate_monthly_summary,
    calculate_today_stats,
    get_month_range,
)
from climb_stats.progression import (
    GradeProgressionPoint,
    MonthKey,
    calculate_grade_progression,
    list_available_months,
)
from climb_stats.streaks import calculate_weekly_streak, parse_date, utc_today


def _records(rows: list[dict]) -> list[ClimbRecord]:
    return [ClimbRecord.from_row(row) for row in rows]


def refresh_streak(db: Database, user_id: int, today: str | date | None = None) -> int:
    """Recompute the weekly streak and store it as the user's cached value."""
    today_date = parse_date(today) if today is not None else utc_today()
    climbs = db.list_climbs_for_user(user_id)
    streak = calculate_weekly_streak((c["climb_date"] for c in climbs), today=today_date)
    db.update_user_streak(user_id, streak, today_date.isoformat())
    return streak


def get_today_stats(db: Database, user_id: int, today: str | date | None = None) -> TodayStats:
    """Counts for the climbs logged on today's date."""
    today_date = parse_date(today) if today is not None else utc_today()
    rows = db.list_climbs_for_user_on_date(user_id, today_date.isoformat())
    return calculate_today_stats(_records(rows))


def get_monthly_stats(
    db: Database, user_id: int, year: int, month: int, grade_scale: list[str]
) -> MonthlySummary:
    """Summary of one calendar month of a user's climbs."""
    start_date, end_date = get_month_range(year, month)
    rows = db.list_climbs_for_user_in_range(user_id, start_date, end_date)
    return calculate_monthly_summary(grade_scale, _records(rows))


def get_available_months(db: Database, user_id: int) -> list[MonthKey]:
    """Months with at least one climb, most recent first."""
    return list_available_months(_records(db.list_climbs_for_user(user_id)))


def get_grade_progression(
    db: Database, user_id: int, year: int, month: int, grade_scale: list[str]
) -> list[GradeProgressionPoint]:
    """Max grade per month, oldest first, up to and including year/month."""
    return calculate_grade_progression(
        grade_scale,
        get_available_months(db, user_id),
        year,
        month,
        lambda y, m: get_monthly_stats(db, user_id, y, m, grade_scale),
    )
