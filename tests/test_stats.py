"""Tests for reading stored climbs into streaks and monthly stats."""

import pytest

from climb_stats.db import Database
from climb_stats.grades import DEFAULT_GRADE_SCALE
from climb_stats.progression import MonthKey
from climb_stats.stats import (
    get_available_months,
    get_grade_progression,
    get_monthly_stats,
    get_today_stats,
    refresh_streak,
)


@pytest.fixture
def db(tmp_path):
    database = Database(db_path=tmp_path / "test.db")
    yield database
    database.close()


@pytest.fixture
def user_id(db):
    return db.create_user("alex@example.com")["id"]


def _log(db, user_id, climb_date, grade="6a", route_type="Boulder", outcome="Send"):
    return db.create_climb(
        user_id, gym="Boulder Lab", route_type=route_type, grade=grade,
        outcome=outcome, climb_date=climb_date,
    )


class TestRefreshStreak:
    def test_no_climbs(self, db, user_id):
        assert refresh_streak(db, user_id, today="2025-06-05") == 0
        assert db.get_user(user_id)["current_streak"] == 0

    def test_stores_cached_value(self, db, user_id):
        _log(db, user_id, "2025-06-02")
        _log(db, user_id, "2025-06-04", grade="6b", route_type="Lead", outcome="Project")
        assert refresh_streak(db, user_id, today="2025-06-05") == 2
        user = db.get_user(user_id)
        assert user["current_streak"] == 2
        assert user["last_climb_date"] == "2025-06-05"

    def test_sees_delete_immediately(self, db, user_id):
        _log(db, user_id, "2025-06-02")
        climb = _log(db, user_id, "2025-06-04")
        assert refresh_streak(db, user_id, today="2025-06-05") == 2
        db.delete_climb(climb["id"], user_id)
        assert refresh_streak(db, user_id, today="2025-06-05") == 1

    def test_sees_date_edit_immediately(self, db, user_id):
        climb = _log(db, user_id, "2025-06-02")
        db.update_climb(climb["id"], user_id, climb_date="2025-05-20")
        assert refresh_streak(db, user_id, today="2025-06-05") == 0

    def test_other_users_climbs_ignored(self, db, user_id):
        other = db.create_user("other@example.com")["id"]
        _log(db, other, "2025-06-02")
        _log(db, other, "2025-06-03")
        assert refresh_streak(db, user_id, today="2025-06-05") == 0


class TestGetTodayStats:
    def test_counts_only_today(self, db, user_id):
        _log(db, user_id, "2025-06-05", outcome="Flash")
        _log(db, user_id, "2025-06-05", outcome="Project")
        _log(db, user_id, "2025-06-04", outcome="Send")
        stats = get_today_stats(db, user_id, today="2025-06-05")
        assert stats.to_dict() == {"climbs": 2, "flashes": 1, "sends": 0, "projects": 1}


class TestGetMonthlyStats:
    def test_june_scenario(self, db, user_id):
        _log(db, user_id, "2025-06-02", grade="6a", route_type="Boulder", outcome="Send")
        _log(db, user_id, "2025-06-04", grade="6b", route_type="Lead", outcome="Project")
        summary = get_monthly_stats(db, user_id, 2025, 6, DEFAULT_GRADE_SCALE)
        assert summary.total_climbs == 2
        assert summary.max_grade == "6b"
        assert summary.success_rate == 50
        assert sorted(s.route_type for s in summary.route_type_breakdown) == ["Boulder", "Lead"]

    def test_month_boundaries(self, db, user_id):
        _log(db, user_id, "2025-05-31", grade="7c")
        _log(db, user_id, "2025-06-30", grade="6a")
        _log(db, user_id, "2025-07-01", grade="7b")
        summary = get_monthly_stats(db, user_id, 2025, 6, DEFAULT_GRADE_SCALE)
        assert summary.total_climbs == 1
        assert summary.max_grade == "6a"

    def test_empty_month(self, db, user_id):
        summary = get_monthly_stats(db, user_id, 2025, 6, DEFAULT_GRADE_SCALE)
        assert summary.to_dict() == {
            "totalClimbs": 0, "maxGrade": "5c", "successRate": 0, "routeTypeBreakdown": [],
        }


class TestProgression:
    def test_available_months(self, db, user_id):
        _log(db, user_id, "2024-12-10")
        _log(db, user_id, "2025-03-01")
        _log(db, user_id, "2025-01-15")
        _log(db, user_id, "2025-01-20")
        assert get_available_months(db, user_id) == [
            MonthKey(2025, 3), MonthKey(2025, 1), MonthKey(2024, 12),
        ]

    def test_grade_progression(self, db, user_id):
        _log(db, user_id, "2024-12-10", grade="6a")
        _log(db, user_id, "2025-01-15", grade="6b")
        _log(db, user_id, "2025-01-20", grade="6a+")
        _log(db, user_id, "2025-03-01", grade="7a")
        points = get_grade_progression(db, user_id, 2025, 2, DEFAULT_GRADE_SCALE)
        assert [p.to_dict() for p in points] == [
            {"month": "Dec", "year": 2024, "monthNum": 12, "maxGrade": "6a", "gradeValue": 2},
            {"month": "Jan", "year": 2025, "monthNum": 1, "maxGrade": "6b", "gradeValue": 4},
        ]
