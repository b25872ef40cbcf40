"""Available months and grade progression over time."""

from __future__ import annotations

import calendar
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from climb_stats.grades import grade_value
from climb_stats.models import ClimbRecord
from climb_stats.monthly import MonthlySummary
from climb_stats.streaks import parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class MonthKey:
    """A calendar month. Orders chronologically (year first, then month)."""

    year: int
    month: int

    @property
    def month_name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def short_name(self) -> str:
        return calendar.month_abbr[self.month]

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "monthName": self.month_name}


@dataclass
class GradeProgressionPoint:
    year: int
    month: int
    max_grade: str
    grade_value: int  # 1-based rank on the grade scale, 0 if off-scale

    @property
    def month_name(self) -> str:
        return MonthKey(self.year, self.month).short_name

    def to_dict(self) -> dict:
        return {
            "month": self.month_name,
            "year": self.year,
            "monthNum": self.month,
            "maxGrade": self.max_grade,
            "gradeValue": self.grade_value,
        }


def list_available_months(climbs: Iterable[ClimbRecord]) -> list[MonthKey]:
    """Return each month with at least one climb, most recent first."""
    months: set[MonthKey] = set()
    for climb in climbs:
        d = parse_date(climb.climb_date)
        months.add(MonthKey(d.year, d.month))
    return sorted(months, reverse=True)


def calculate_grade_progression(
    grade_scale: list[str],
    available_months: Iterable[MonthKey | tuple[int, int]],
    cutoff_year: int,
    cutoff_month: int,
    monthly_summary_fn: Callable[[int, int], MonthlySummary],
    on_error: Callable[[MonthKey, Exception], None] | None = None,
) -> list[GradeProgressionPoint]:
    """Build the max-grade series for every available month up to the cutoff.

    monthly_summary_fn(year, month) supplies each month's summary. A month
    whose summary fails is logged, passed to on_error if given, and left out
    so the rest of the series still renders. Output is oldest month first.
    """
    cutoff = MonthKey(cutoff_year, cutoff_month)
    points: list[GradeProgressionPoint] = []

    for key in available_months:
        if not isinstance(key, MonthKey):
            key = MonthKey(*key)
        if key > cutoff:
            continue
        try:
            summary = monthly_summary_fn(key.year, key.month)
        except Exception as exc:
            logger.warning(
                "Skipping %d-%02d in grade progression: %s", key.year, key.month, exc,
                exc_info=True,
            )
            if on_error is not None:
                on_error(key, exc)
            continue
        points.append(
            GradeProgressionPoint(
                year=key.year,
                month=key.month,
                max_grade=summary.max_grade,
                grade_value=grade_value(grade_scale, summary.max_grade),
            )
        )

    return sorted(points, key=lambda p: (p.year, p.month))
