"""CLI commands for climb-stats."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from climb_stats.config import (
    get_db_path,
    get_default_user,
    get_grade_scale,
    set_default_user,
    set_grade_scale,
)
from climb_stats.db import Database
from climb_stats.display import (
    console,
    print_available_months,
    print_climb_result,
    print_climbs,
    print_dashboard,
    print_error,
    print_grade_progression,
    print_grade_scale,
    print_monthly,
    print_no_data_message,
    print_no_user_message,
    print_setup_result,
)
from climb_stats.grades import OUTCOMES, ROUTE_TYPES, grade_rank
from climb_stats.progression import MonthKey
from climb_stats.stats import (
    get_available_months,
    get_grade_progression,
    get_monthly_stats,
    get_today_stats,
    refresh_streak,
)
from climb_stats.streaks import current_week_range, parse_date, utc_today

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="climb-stats",
        description="Log your climbs and track weekly streaks and monthly progress",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    setup_p = subparsers.add_parser("setup", help="Choose the user to log climbs as")
    setup_p.add_argument("--email", "-e", required=True, help="Your email address")
    setup_p.add_argument("--name", "-n", default=None, help="Your display name")

    log_p = subparsers.add_parser("log", help="Log a climb")
    log_p.add_argument("--gym", "-g", required=True)
    log_p.add_argument("--route-type", "-t", required=True, choices=ROUTE_TYPES)
    log_p.add_argument("--grade", required=True)
    log_p.add_argument("--outcome", "-o", required=True, choices=OUTCOMES)
    log_p.add_argument("--date", "-d", default=None, help="Climb date YYYY-MM-DD (default: today)")
    log_p.add_argument("--notes", default=None)
    log_p.add_argument("--media-url", default=None)

    edit_p = subparsers.add_parser("edit", help="Edit a logged climb")
    edit_p.add_argument("climb_id", type=int)
    edit_p.add_argument("--gym", "-g", default=None)
    edit_p.add_argument("--route-type", "-t", default=None, choices=ROUTE_TYPES)
    edit_p.add_argument("--grade", default=None)
    edit_p.add_argument("--outcome", "-o", default=None, choices=OUTCOMES)
    edit_p.add_argument("--date", "-d", default=None)
    edit_p.add_argument("--notes", default=None)
    edit_p.add_argument("--media-url", default=None)

    delete_p = subparsers.add_parser("delete", help="Delete a logged climb")
    delete_p.add_argument("climb_id", type=int)

    list_p = subparsers.add_parser("list", help="List logged climbs, newest first")
    list_p.add_argument("--limit", "-l", type=int, default=20)

    subparsers.add_parser("dashboard", help="Show weekly streak and today's climbs")
    subparsers.add_parser("streak", help="Show this week's streak")

    monthly_p = subparsers.add_parser("monthly", help="Monthly stats")
    monthly_p.add_argument("--year", "-y", type=int, default=None)
    monthly_p.add_argument("--month", "-m", type=int, default=None)

    subparsers.add_parser("months", help="List months that have climbs")

    prog_p = subparsers.add_parser("progression", help="Max grade per month up to a month")
    prog_p.add_argument("--year", "-y", type=int, default=None)
    prog_p.add_argument("--month", "-m", type=int, default=None)

    scale_p = subparsers.add_parser("scale", help="Show or set the grade scale")
    scale_p.add_argument("--set", dest="grades", default=None, help="Comma-separated, weakest first")
    return parser


def main() -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args()
    command = args.command or "dashboard"

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    db = Database(get_db_path())
    logger.debug("Running %s with database %s", command, db.db_path)

    try:
        if command == "setup":
            do_setup(db, email=args.email, first_name=args.name)
        elif command == "log":
            do_log(
                db, gym=args.gym, route_type=args.route_type, grade=args.grade,
                outcome=args.outcome, climb_date=args.date, notes=args.notes,
                media_url=args.media_url,
            )
        elif command == "edit":
            do_edit(
                db, args.climb_id, gym=args.gym, route_type=args.route_type,
                grade=args.grade, outcome=args.outcome, climb_date=args.date,
                notes=args.notes, media_url=args.media_url,
            )
        elif command == "delete":
            do_delete(db, args.climb_id)
        elif command == "list":
            do_list(db, limit=args.limit)
        elif command == "dashboard":
            do_dashboard(db)
        elif command == "streak":
            do_streak(db)
        elif command == "monthly":
            do_monthly(db, year=args.year, month=args.month)
        elif command == "months":
            do_months(db)
        elif command == "progression":
            do_progression(db, year=args.year, month=args.month)
        elif command == "scale":
            do_scale(grades=args.grades)
    except (ValueError, LookupError) as exc:
        print_error(str(exc))
        sys.exit(1)
    finally:
        db.close()


def _active_user(db: Database, config_path: Path | None = None) -> dict | None:
    """Return the configured user's row, or None (after telling the user why)."""
    email = get_default_user(config_path)
    user = db.get_user_by_email(email) if email else None
    if user is None:
        print_no_user_message()
    return user


def _today(today: str | None = None) -> date:
    """The given date, or the current UTC date used by streaks and today stats."""
    return parse_date(today) if today is not None else utc_today()


def _default_year_month(year: int | None, month: int | None) -> tuple[int, int]:
    today = utc_today()
    return (year or today.year, month or today.month)


def _warn_if_off_scale(grade: str | None, config_path: Path | None = None) -> None:
    if not isinstance(grade, str) or not grade.strip():
        return
    grade = grade.strip()
    if grade_rank(get_grade_scale(config_path), grade) == -1:
        console.print(f"[yellow]Grade {grade} is not on your grade scale; it won't count as a max grade.[/]")


def do_setup(
    db: Database, email: str, first_name: str | None = None, config_path: Path | None = None
) -> dict:
    """Create (or reuse) the user for email and make it the active user."""
    user = db.get_or_create_user(email, first_name)
    if first_name and user.get("first_name") != first_name:
        db.update_user_name(user["id"], first_name)
        user = db.get_user(user["id"])
    set_default_user(user["email"], config_path)
    print_setup_result(user)
    return {"ok": True, "user": user}


def do_log(
    db: Database,
    *,
    gym: str,
    route_type: str,
    grade: str,
    outcome: str,
    climb_date: str | None = None,
    notes: str | None = None,
    media_url: str | None = None,
    today: str | None = None,
    config_path: Path | None = None,
) -> dict:
    """Log a climb for the active user, then refresh the cached streak."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}

    _warn_if_off_scale(grade, config_path)

    climb = db.create_climb(
        user["id"],
        gym=gym,
        route_type=route_type,
        grade=grade,
        outcome=outcome,
        climb_date=climb_date or _today(today).isoformat(),
        notes=notes,
        media_url=media_url,
    )
    streak = refresh_streak(db, user["id"], today=today)
    print_climb_result("Logged", climb, streak)
    return {"ok": True, "climb": climb, "streak": streak}


def do_edit(
    db: Database,
    climb_id: int,
    *,
    today: str | None = None,
    config_path: Path | None = None,
    **changes: str | None,
) -> dict:
    """Edit fields of one of the active user's climbs. None values are left unchanged."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}

    fields = {k: v for k, v in changes.items() if v is not None}
    climb = db.update_climb(climb_id, user["id"], **fields)
    if climb is None:
        print_error(f"Climb {climb_id} not found or you don't have permission to edit it")
        return {"ok": False, "reason": "not_found"}
    _warn_if_off_scale(fields.get("grade"), config_path)

    # Date may have moved in or out of this week
    streak = refresh_streak(db, user["id"], today=today)
    print_climb_result("Updated", climb, streak)
    return {"ok": True, "climb": climb, "streak": streak}


def do_delete(
    db: Database, climb_id: int, today: str | None = None, config_path: Path | None = None
) -> dict:
    """Delete one of the active user's climbs, then refresh the cached streak."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}

    try:
        db.delete_climb(climb_id, user["id"])
    except LookupError as exc:
        print_error(str(exc))
        return {"ok": False, "reason": "not_found"}

    streak = refresh_streak(db, user["id"], today=today)
    console.print(f"[green]Climb {climb_id} deleted.[/] Weekly streak: [bold]{streak}[/]")
    return {"ok": True, "streak": streak}


def do_list(db: Database, limit: int = 20, config_path: Path | None = None) -> dict:
    """Show the active user's most recent climbs."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}
    climbs = db.list_climbs_for_user(user["id"])
    if not climbs:
        print_no_data_message()
        return {"ok": True, "climbs": []}
    shown = climbs[:limit] if limit > 0 else climbs
    print_climbs(shown)
    return {"ok": True, "climbs": shown}


def do_dashboard(
    db: Database, today: str | None = None, config_path: Path | None = None
) -> dict:
    """Show weekly streak, today's counts and the climb total."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}

    streak = refresh_streak(db, user["id"], today=today)
    today_stats = get_today_stats(db, user["id"], today=today)
    data = {
        "first_name": user.get("first_name") or "climber",
        "current_streak": streak,
        "week_range": current_week_range(_today(today)),
        "today": today_stats.to_dict(),
        "total_climbs": len(db.list_climbs_for_user(user["id"])),
    }
    print_dashboard(data)
    return {"ok": True, **data}


def do_streak(db: Database, today: str | None = None, config_path: Path | None = None) -> dict:
    """Recompute and show the weekly streak."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}
    streak = refresh_streak(db, user["id"], today=today)
    week_start, week_end = current_week_range(_today(today))
    console.print(
        f"\U0001f525 Weekly streak: [bold]{streak}[/] day{'s' if streak != 1 else ''} "
        f"({week_start} to {week_end})"
    )
    return {"ok": True, "streak": streak}


def do_monthly(
    db: Database,
    year: int | None = None,
    month: int | None = None,
    config_path: Path | None = None,
) -> dict:
    """Show stats for a month (defaults to the current month)."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}
    year, month = _default_year_month(year, month)
    summary = get_monthly_stats(db, user["id"], year, month, get_grade_scale(config_path))
    data = {**summary.to_dict(), "year": year, "month": month,
            "month_name": MonthKey(year, month).month_name}
    print_monthly(data)
    return {"ok": True, **data}


def do_months(db: Database, config_path: Path | None = None) -> dict:
    """List months that have climbs, most recent first."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}
    months = [m.to_dict() for m in get_available_months(db, user["id"])]
    print_available_months(months)
    return {"ok": True, "months": months}


def do_progression(
    db: Database,
    year: int | None = None,
    month: int | None = None,
    config_path: Path | None = None,
) -> dict:
    """Show the max grade of each month up to year/month."""
    user = _active_user(db, config_path)
    if user is None:
        return {"ok": False, "reason": "no_user"}
    year, month = _default_year_month(year, month)
    scale = get_grade_scale(config_path)
    points = [p.to_dict() for p in get_grade_progression(db, user["id"], year, month, scale)]
    print_grade_progression(points, scale)
    return {"ok": True, "points": points}


def do_scale(grades: str | None = None, config_path: Path | None = None) -> dict:
    """Show the grade scale, or replace it with a comma-separated list."""
    if grades is not None:
        set_grade_scale([g.strip() for g in grades.split(",") if g.strip()], config_path)
    scale = get_grade_scale(config_path)
    print_grade_scale(scale)
    return {"ok": True, "grade_scale": scale}
