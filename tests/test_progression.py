"""Tests for available months and grade progression."""

import logging

from climb_stats.models import ClimbRecord
from climb_stats.monthly import MonthlySummary
from climb_stats.progression import (
    GradeProgressionPoint,
    MonthKey,
    calculate_grade_progression,
    list_available_months,
)

SCALE = ["5c", "6a", "6a+", "6b", "6b+", "6c", "6c+", "7a", "7b", "7c"]


def _climb(climb_date: str) -> ClimbRecord:
    return ClimbRecord(climb_date=climb_date, grade="6a", route_type="Boulder", outcome="Send")


def _summaries(max_grades: dict[tuple[int, int], str]):
    """Build a monthly_summary_fn that returns a fixed max grade per month."""
    calls: list[tuple[int, int]] = []

    def fn(year: int, month: int) -> MonthlySummary:
        calls.append((year, month))
        return MonthlySummary(
            total_climbs=1, max_grade=max_grades[(year, month)], success_rate=100,
        )

    fn.calls = calls
    return fn


class TestMonthKey:
    def test_names(self):
        key = MonthKey(2025, 3)
        assert key.month_name == "March"
        assert key.short_name == "Mar"

    def test_ordering_year_first(self):
        assert MonthKey(2024, 12) < MonthKey(2025, 1)
        assert MonthKey(2025, 2) < MonthKey(2025, 3)

    def test_to_dict(self):
        assert MonthKey(2025, 6).to_dict() == {"year": 2025, "month": 6, "monthName": "June"}

    def test_point_label_matches_short_name(self):
        point = GradeProgressionPoint(year=2025, month=9, max_grade="6b", grade_value=4)
        assert point.month_name == MonthKey(2025, 9).short_name == "Sep"


class TestListAvailableMonths:
    def test_empty(self):
        assert list_available_months([]) == []

    def test_one_entry_per_month(self):
        climbs = [_climb("2025-01-03"), _climb("2025-01-20"), _climb("2025-01-31")]
        assert list_available_months(climbs) == [MonthKey(2025, 1)]

    def test_most_recent_first(self):
        climbs = [_climb("2024-12-30"), _climb("2025-03-02"), _climb("2025-01-15")]
        assert list_available_months(climbs) == [
            MonthKey(2025, 3), MonthKey(2025, 1), MonthKey(2024, 12),
        ]

    def test_month_order_within_year_is_numeric(self):
        climbs = [_climb("2025-02-01"), _climb("2025-11-01"), _climb("2025-10-01")]
        assert [m.month for m in list_available_months(climbs)] == [11, 10, 2]


class TestCalculateGradeProgression:
    def test_cutoff_and_ascending_order(self):
        fn = _summaries({(2025, 3): "7a", (2025, 1): "6b", (2024, 12): "6a"})
        available = [(2025, 3), (2025, 1), (2024, 12)]
        points = calculate_grade_progression(SCALE, available, 2025, 2, fn)
        assert [(p.year, p.month) for p in points] == [(2024, 12), (2025, 1)]
        assert (2025, 3) not in fn.calls

    def test_cutoff_month_itself_included(self):
        fn = _summaries({(2025, 2): "6c"})
        points = calculate_grade_progression(SCALE, [MonthKey(2025, 2)], 2025, 2, fn)
        assert points == [GradeProgressionPoint(2025, 2, "6c", 6)]

    def test_later_year_earlier_month_excluded(self):
        fn = _summaries({(2026, 1): "6a"})
        assert calculate_grade_progression(SCALE, [MonthKey(2026, 1)], 2025, 12, fn) == []

    def test_grade_value_is_one_based(self):
        fn = _summaries({(2025, 1): "5c", (2025, 2): "7c"})
        points = calculate_grade_progression(
            SCALE, [MonthKey(2025, 2), MonthKey(2025, 1)], 2025, 12, fn
        )
        assert [p.grade_value for p in points] == [1, 10]

    def test_off_scale_grade_value_is_zero(self):
        fn = _summaries({(2025, 1): "8a"})
        points = calculate_grade_progression(SCALE, [MonthKey(2025, 1)], 2025, 1, fn)
        assert points[0].grade_value == 0

    def test_empty_available_months(self):
        fn = _summaries({})
        assert calculate_grade_progression(SCALE, [], 2025, 1, fn) == []

    def test_failing_month_is_skipped(self, caplog):
        def fn(year, month):
            if month == 1:
                raise RuntimeError("storage hiccup")
            return MonthlySummary(total_climbs=1, max_grade="6b", success_rate=0)

        errors = []
        with caplog.at_level(logging.WARNING, logger="climb_stats.progression"):
            points = calculate_grade_progression(
                SCALE,
                [MonthKey(2025, 2), MonthKey(2025, 1), MonthKey(2024, 12)],
                2025, 2, fn,
                on_error=lambda key, exc: errors.append((key, str(exc))),
            )
        assert [(p.year, p.month) for p in points] == [(2024, 12), (2025, 2)]
        assert errors == [(MonthKey(2025, 1), "storage hiccup")]
        assert "2025-01" in caplog.text

    def test_to_dict(self):
        point = GradeProgressionPoint(year=2025, month=1, max_grade="6b", grade_value=4)
        assert point.to_dict() == {
            "month": "Jan", "year": 2025, "monthNum": 1, "maxGrade": "6b", "gradeValue": 4,
        }

    def test_same_input_same_output(self):
        fn = _summaries({(2025, 1): "6b", (2024, 12): "6a"})
        available = [MonthKey(2025, 1), MonthKey(2024, 12)]
        first = calculate_grade_progression(SCALE, available, 2025, 1, fn)
        second = calculate_grade_progression(SCALE, available, 2025, 1, fn)
        assert first == second
        assert available == [MonthKey(2025, 1), MonthKey(2024, 12)]
