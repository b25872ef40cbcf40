"""Grade scale and climb vocabularies. Pure functions, no side effects."""

DEFAULT_GRADE_SCALE: list[str] = [
    "5c", "6a", "6a+", "6b", "6b+", "6c", "6c+", "7a", "7b", "7c",
]

ROUTE_TYPES: tuple[str, ...] = ("Boulder", "Top Rope", "Lead", "Auto Belay")

OUTCOMES: tuple[str, ...] = ("Send", "Flash", "Project", "Attempt")

SUCCESS_OUTCOMES: frozenset[str] = frozenset({"Send", "Flash"})


def grade_rank(grade_scale: list[str], grade: object) -> int:
    """0-based position of grade on the scale, -1 if it is not on it."""
    if not isinstance(grade, str):
        return -1
    try:
        return grade_scale.index(grade)
    except ValueError:
        return -1


def grade_value(grade_scale: list[str], grade: object) -> int:
    """1-based rank used for charting: 5c -> 1, 6a -> 2, ... Off-scale -> 0."""
    return grade_rank(grade_scale, grade) + 1


def is_success(outcome: object) -> bool:
    """Return True for outcomes that count as a successful climb."""
    return outcome in SUCCESS_OUTCOMES


def validate_grade_scale(scale: object) -> list[str]:
    """Return scale as a list if it is a usable grade scale.

    Raises ValueError if scale is empty, contains non-string or blank
    tokens, or repeats a grade.
    """
    if not isinstance(scale, (list, tuple)) or not scale:
        raise ValueError("Grade scale must be a non-empty list of grades")
    grades = list(scale)
    for grade in grades:
        if not isinstance(grade, str) or not grade.strip():
            raise ValueError(f"Invalid grade in scale: {grade!r}")
    if len(set(grades)) != len(grades):
        raise ValueError("Grade scale contains duplicate grades")
    return grades
