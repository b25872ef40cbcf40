"""Weekly streak tracking for climb-stats.

A streak is the number of distinct days climbed within the current
Sunday-to-Saturday week. Weeks are anchored on UTC calendar dates.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone


def parse_date(d: str | date) -> date:
    """Parse a YYYY-MM-DD string (or pass through a date) to a date object."""
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    return date.fromisoformat(d)


def utc_today() -> date:
    """Current calendar date at the UTC midnight boundary."""
    return datetime.now(tz=timezone.utc).date()


def week_start(d: str | date) -> date:
    """Return the Sunday on or before d."""
    day = parse_date(d)
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def current_week_range(today: str | date | None = None) -> tuple[str, str]:
    """Return (sunday, saturday) ISO strings for the week containing today."""
    start = week_start(today if today is not None else utc_today())
    return (start.isoformat(), (start + timedelta(days=6)).isoformat())


def group_dates_by_week(climb_dates: Iterable[str | date]) -> dict[date, set[date]]:
    """Bucket unique climb dates by the Sunday that starts their week."""
    weeks: dict[date, set[date]] = {}
    for d in {parse_date(d) for d in climb_dates}:
        weeks.setdefault(week_start(d), set()).add(d)
    return weeks


def calculate_weekly_streak(
    climb_dates: Iterable[str | date], today: str | date | None = None
) -> int:
    """Count distinct days climbed in the week containing today.

    Rules:
    - Several climbs on one day count once
    - Week runs Sunday to Saturday; a Saturday climb does not count
      once the next Sunday starts
    - today defaults to the current UTC date
    """
    weeks = group_dates_by_week(climb_dates)
    if not weeks:
        return 0

    today_date = parse_date(today) if today is not None else utc_today()
    return len(weeks.get(week_start(today_date), ()))
