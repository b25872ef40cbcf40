"""Monthly climb aggregation.

Pure functions that summarise one user's climbs for a calendar month.
No side effects, no DB access - accepts climb records as input.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from climb_stats.grades import grade_rank, is_success
from climb_stats.models import ClimbRecord

logger = logging.getLogger(__name__)

# Route types whose share of the month is below this are left out of the breakdown.
MIN_BREAKDOWN_SHARE_PCT = 5


@dataclass
class RouteTypeShare:
    route_type: str
    count: int
    percentage: int

    def to_dict(self) -> dict:
        return {"routeType": self.route_type, "count": self.count, "percentage": self.percentage}


@dataclass
class MonthlySummary:
    total_climbs: int
    max_grade: str
    success_rate: int  # 0-100
    route_type_breakdown: list[RouteTypeShare] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalClimbs": self.total_climbs,
            "maxGrade": self.max_grade,
            "successRate": self.success_rate,
            "routeTypeBreakdown": [share.to_dict() for share in self.route_type_breakdown],
        }


@dataclass
class TodayStats:
    climbs: int = 0
    flashes: int = 0
    sends: int = 0
    projects: int = 0

    def to_dict(self) -> dict:
        return {
            "climbs": self.climbs,
            "flashes": self.flashes,
            "sends": self.sends,
            "projects": self.projects,
        }


def percentage(part: int, whole: int) -> int:
    """part / whole as a whole percentage, rounded half-up (1/3 -> 33, 1/8 -> 13)."""
    if whole <= 0:
        return 0
    # floor(part * 100 / whole + 0.5) without float error
    return (part * 200 + whole) // (whole * 2)


def get_month_range(year: int, month: int) -> tuple[str, str]:
    """Return (first_day, last_day) ISO strings for a calendar month, inclusive."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    last_day = calendar.monthrange(year, month)[1]
    return (f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}")


def calculate_monthly_summary(
    grade_scale: list[str], climbs: Iterable[ClimbRecord]
) -> MonthlySummary:
    """Summarise a month of climbs: total, max grade, success rate, route types.

    climbs must already be restricted to one user and one month.
    An empty month yields the weakest grade on the scale and a 0 success rate.
    """
    climbs = list(climbs)
    if not climbs:
        return _empty_monthly_summary(grade_scale)

    max_grade = grade_scale[0]
    max_rank = 0
    successful = 0
    route_type_counts: dict[str, int] = {}

    for climb in climbs:
        rank = grade_rank(grade_scale, getattr(climb, "grade", None))
        if rank > max_rank:
            max_rank = rank
            max_grade = grade_scale[rank]

        if is_success(getattr(climb, "outcome", None)):
            successful += 1

        route_type = getattr(climb, "route_type", None)
        if not isinstance(route_type, str):
            logger.warning("Skipping climb %s with unreadable route type", getattr(climb, "id", None))
            continue
        route_type_counts[route_type] = route_type_counts.get(route_type, 0) + 1

    total = len(climbs)
    return MonthlySummary(
        total_climbs=total,
        max_grade=max_grade,
        success_rate=percentage(successful, total),
        route_type_breakdown=_route_type_breakdown(route_type_counts, total),
    )


def _route_type_breakdown(counts: dict[str, int], total: int) -> list[RouteTypeShare]:
    """Percentages per route type, long tail below 5% dropped, largest first."""
    shares = [
        RouteTypeShare(route_type=route_type, count=count, percentage=percentage(count, total))
        for route_type, count in counts.items()
        if count * 100 >= MIN_BREAKDOWN_SHARE_PCT * total
    ]
    # sorted() is stable, so equal counts keep first-seen order
    return sorted(shares, key=lambda s: s.count, reverse=True)


def _empty_monthly_summary(grade_scale: list[str]) -> MonthlySummary:
    """Return the summary shown for a month without climbs."""
    return MonthlySummary(
        total_climbs=0,
        max_grade=grade_scale[0],
        success_rate=0,
        route_type_breakdown=[],
    )


def calculate_today_stats(climbs: Iterable[ClimbRecord]) -> TodayStats:
    """Count one day's climbs and their Flash / Send / Project outcomes."""
    stats = TodayStats()
    for climb in climbs:
        stats.climbs += 1
        outcome = getattr(climb, "outcome", None)
        if outcome == "Flash":
            stats.flashes += 1
        elif outcome == "Send":
            stats.sends += 1
        elif outcome == "Project":
            stats.projects += 1
    return stats
