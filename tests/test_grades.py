"""Tests for the grade scale helpers."""

import pytest

from climb_stats.grades import (
    DEFAULT_GRADE_SCALE,
    grade_rank,
    grade_value,
    is_success,
    validate_grade_scale,
)


class TestDefaultScale:
    def test_weakest_and_strongest(self):
        assert DEFAULT_GRADE_SCALE[0] == "5c"
        assert DEFAULT_GRADE_SCALE[-1] == "7c"

    def test_ten_grades(self):
        assert len(DEFAULT_GRADE_SCALE) == 10


class TestGradeRank:
    def test_first(self):
        assert grade_rank(DEFAULT_GRADE_SCALE, "5c") == 0

    def test_plus_grade(self):
        assert grade_rank(DEFAULT_GRADE_SCALE, "6a+") == 2

    def test_unknown(self):
        assert grade_rank(DEFAULT_GRADE_SCALE, "9a") == -1

    def test_non_string(self):
        assert grade_rank(DEFAULT_GRADE_SCALE, None) == -1
        assert grade_rank(DEFAULT_GRADE_SCALE, 6) == -1


class TestGradeValue:
    def test_one_based(self):
        assert grade_value(DEFAULT_GRADE_SCALE, "5c") == 1
        assert grade_value(DEFAULT_GRADE_SCALE, "7c") == 10

    def test_unknown_is_zero(self):
        assert grade_value(DEFAULT_GRADE_SCALE, "5a") == 0


class TestIsSuccess:
    @pytest.mark.parametrize("outcome", ["Send", "Flash"])
    def test_success(self, outcome):
        assert is_success(outcome) is True

    @pytest.mark.parametrize("outcome", ["Project", "Attempt", "send", None])
    def test_not_success(self, outcome):
        assert is_success(outcome) is False


class TestValidateGradeScale:
    def test_valid(self):
        assert validate_grade_scale(("5a", "5b")) == ["5a", "5b"]

    def test_empty(self):
        with pytest.raises(ValueError):
            validate_grade_scale([])

    def test_not_a_list(self):
        with pytest.raises(ValueError):
            validate_grade_scale("5a,5b")

    def test_blank_grade(self):
        with pytest.raises(ValueError):
            validate_grade_scale(["5a", " "])

    def test_duplicates(self):
        with pytest.raises(ValueError, match="duplicate"):
            validate_grade_scale(["5a", "5b", "5a"])
