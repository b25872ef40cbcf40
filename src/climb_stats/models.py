"""Climb record type and write-side validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date

from climb_stats.grades import OUTCOMES, ROUTE_TYPES


@dataclass
class ClimbRecord:
    climb_date: str  # YYYY-MM-DD
    grade: str
    route_type: str
    outcome: str
    gym: str = ""
    notes: str | None = None
    media_url: str | None = None
    id: int | None = None
    user_id: int | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> ClimbRecord:
        """Build a record from a climbs table row."""
        return cls(
            climb_date=row["climb_date"],
            grade=row["grade"],
            route_type=row["route_type"],
            outcome=row["outcome"],
            gym=row.get("gym") or "",
            notes=row.get("notes"),
            media_url=row.get("media_url"),
            id=row.get("id"),
            user_id=row.get("user_id"),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


CLIMB_FIELDS: tuple[str, ...] = (
    "gym", "route_type", "grade", "outcome", "notes", "media_url", "climb_date",
)


def validate_climb_fields(fields: dict, partial: bool = False) -> dict:
    """Validate climb fields before they are written.

    With partial=True only the keys present are checked (used for edits).
    Returns a new dict holding only known climb fields.
    Raises ValueError on the first invalid or missing field.
    """
    unknown = set(fields) - set(CLIMB_FIELDS)
    if unknown:
        raise ValueError(f"Unknown climb field(s): {', '.join(sorted(unknown))}")

    if not partial:
        for required in ("gym", "route_type", "grade", "outcome", "climb_date"):
            if not fields.get(required):
                raise ValueError(f"Missing required climb field: {required}")

    cleaned = dict(fields)
    for key in ("gym", "grade"):
        if key in cleaned:
            value = cleaned[key]
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{key} must be a non-empty string")
            cleaned[key] = value.strip()

    if "route_type" in cleaned and cleaned["route_type"] not in ROUTE_TYPES:
        raise ValueError(
            f"Invalid route type {cleaned['route_type']!r}. "
            f"Must be one of: {', '.join(ROUTE_TYPES)}"
        )
    if "outcome" in cleaned and cleaned["outcome"] not in OUTCOMES:
        raise ValueError(
            f"Invalid outcome {cleaned['outcome']!r}. Must be one of: {', '.join(OUTCOMES)}"
        )
    if "climb_date" in cleaned:
        raw = cleaned["climb_date"]
        if isinstance(raw, date):
            cleaned["climb_date"] = raw.isoformat()
        else:
            try:
                cleaned["climb_date"] = date.fromisoformat(str(raw)).isoformat()
            except ValueError:
                raise ValueError(f"Invalid climb date {raw!r}, expected YYYY-MM-DD") from None
    return cleaned
