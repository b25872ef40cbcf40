"""MCP server for climb-stats.

Exposes streak and monthly climbing stats as MCP tools so an assistant can
query them mid-conversation.
Run via: python3 -m climb_stats.mcp_server
"""
from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

mcp = FastMCP(name="climb-stats")

_NO_USER = {"error": "No user configured. Run: climb-stats setup --email you@example.com"}


def _get_db():
    from climb_stats.config import get_db_path
    from climb_stats.db import Database
    return Database(get_db_path())


def _active_user_id(db) -> int | None:
    from climb_stats.config import get_default_user
    email = get_default_user()
    if not email:
        return None
    user = db.get_user_by_email(email)
    return user["id"] if user else None


def _resolve_month(year: int, month: int) -> tuple[int, int]:
    from climb_stats.streaks import utc_today
    today = utc_today()
    return (year or today.year, month or today.month)


@mcp.tool()
def get_streak() -> dict[str, Any]:
    """Get the weekly streak: distinct days climbed this Sunday-Saturday week."""
    from climb_stats.stats import refresh_streak
    from climb_stats.streaks import current_week_range
    db = _get_db()
    try:
        user_id = _active_user_id(db)
        if user_id is None:
            return dict(_NO_USER)
        streak = refresh_streak(db, user_id)
        week_start, week_end = current_week_range()
        return {"current_streak": streak, "week_start": week_start, "week_end": week_end}
    finally:
        db.close()


@mcp.tool()
def get_today_stats() -> dict[str, Any]:
    """Get today's climb count with flashes, sends and projects."""
    from climb_stats.stats import get_today_stats as today_stats
    db = _get_db()
    try:
        user_id = _active_user_id(db)
        if user_id is None:
            return dict(_NO_USER)
        return today_stats(db, user_id).to_dict()
    finally:
        db.close()


@mcp.tool()
def get_monthly_stats(year: int = 0, month: int = 0) -> dict[str, Any]:
    """Get total climbs, max grade, success rate and route types for a month.

    year/month: the month to summarise. 0 means the current year/month.
    """
    from climb_stats.config import get_grade_scale
    from climb_stats.stats import get_monthly_stats as monthly_stats
    year, month = _resolve_month(year, month)
    if not 1 <= month <= 12:
        return {"error": "Invalid month parameter. Must be 1-12."}
    db = _get_db()
    try:
        user_id = _active_user_id(db)
        if user_id is None:
            return dict(_NO_USER)
        summary = monthly_stats(db, user_id, year, month, get_grade_scale())
        return {"year": year, "month": month, **summary.to_dict()}
    finally:
        db.close()


@mcp.tool()
def get_available_months() -> dict[str, Any]:
    """List the months that have at least one climb, most recent first."""
    from climb_stats.stats import get_available_months as available_months
    db = _get_db()
    try:
        user_id = _active_user_id(db)
        if user_id is None:
            return dict(_NO_USER)
        months = [m.to_dict() for m in available_months(db, user_id)]
        return {"months": months, "count": len(months)}
    finally:
        db.close()


@mcp.tool()
def get_grade_progression(year: int = 0, month: int = 0) -> dict[str, Any]:
    """Get the max grade of every month with climbs, oldest first, up to year/month.

    year/month: the last month to include. 0 means the current year/month.
    """
    from climb_stats.config import get_grade_scale
    from climb_stats.stats import get_grade_progression as grade_progression
    year, month = _resolve_month(year, month)
    if not 1 <= month <= 12:
        return {"error": "Invalid month parameter. Must be 1-12."}
    db = _get_db()
    try:
        user_id = _active_user_id(db)
        if user_id is None:
            return dict(_NO_USER)
        scale = get_grade_scale()
        points = [p.to_dict() for p in grade_progression(db, user_id, year, month, scale)]
        return {"points": points, "grade_scale": scale}
    finally:
        db.close()


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
