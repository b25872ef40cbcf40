"""SQLite database layer for climb-stats."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from climb_stats.models import validate_climb_fields

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".climb-stats" / "data.db"


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def _check_user_id(user_id: int) -> None:
    """Reject ids that cannot belong to a stored user before any query runs."""
    if not isinstance(user_id, int) or user_id <= 0:
        raise ValueError(f"Invalid user ID: {user_id!r}")


class Database:
    """SQLite database manager with WAL mode."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")
        self.init_db()

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                first_name TEXT,
                current_streak INTEGER DEFAULT 0,
                last_climb_date TEXT,
                created_at TEXT
            );

            CREATE TABLE IF NOT EXISTS climbs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL REFERENCES users(id),
                gym TEXT NOT NULL,
                route_type TEXT NOT NULL,
                grade TEXT NOT NULL,
                outcome TEXT NOT NULL,
                notes TEXT,
                media_url TEXT,
                climb_date TEXT NOT NULL,
                created_at TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_climbs_user_date ON climbs (user_id, climb_date);
        """)
        self.conn.commit()

    # ── Users ────────────────────────────────────────────────────────────────

    def create_user(self, email: str, first_name: str | None = None) -> dict:
        """Insert a user. first_name defaults to the local part of the email."""
        email = email.strip().lower()
        if "@" not in email:
            raise ValueError(f"Invalid email address: {email!r}")
        cursor = self.conn.execute(
            "INSERT INTO users (email, first_name, created_at) VALUES (?, ?, ?)",
            (email, first_name or email.split("@")[0], _now()),
        )
        self.conn.commit()
        logger.info("Created user %s", cursor.lastrowid)
        return self.get_user(cursor.lastrowid)

    def get_user(self, user_id: int) -> dict | None:
        """Get a user by id."""
        row = self.conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None

    def get_user_by_email(self, email: str) -> dict | None:
        """Get a user by email (case-insensitive)."""
        row = self.conn.execute(
            "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
        ).fetchone()
        return dict(row) if row else None

    def get_or_create_user(self, email: str, first_name: str | None = None) -> dict:
        """Return the user with this email, creating it if needed."""
        existing = self.get_user_by_email(email)
        if existing is not None:
            return existing
        return self.create_user(email, first_name)

    def update_user_name(self, user_id: int, first_name: str) -> None:
        """Set a user's display name."""
        _check_user_id(user_id)
        self.conn.execute("UPDATE users SET first_name = ? WHERE id = ?", (first_name, user_id))
        self.conn.commit()

    def update_user_streak(self, user_id: int, streak: int, last_climb_date: str | None) -> None:
        """Store the cached weekly streak for a user."""
        _check_user_id(user_id)
        self.conn.execute(
            "UPDATE users SET current_streak = ?, last_climb_date = ? WHERE id = ?",
            (streak, last_climb_date, user_id),
        )
        self.conn.commit()

    # ── Climbs ───────────────────────────────────────────────────────────────

    def create_climb(self, user_id: int, **fields: str | None) -> dict:
        """Insert a climb owned by user_id and return the stored row."""
        _check_user_id(user_id)
        if self.get_user(user_id) is None:
            raise LookupError(f"User {user_id} not found - cannot create climb")
        cleaned = validate_climb_fields(fields)
        columns = ["user_id"] + list(cleaned.keys()) + ["created_at"]
        placeholders = ", ".join(["?"] * len(columns))
        col_str = ", ".join(columns)
        values = [user_id] + list(cleaned.values()) + [_now()]
        cursor = self.conn.execute(
            f"INSERT INTO climbs ({col_str}) VALUES ({placeholders})",
            values,
        )
        self.conn.commit()
        logger.info("Created climb %s for user %s", cursor.lastrowid, user_id)
        return self.get_climb(cursor.lastrowid, user_id)

    def get_climb(self, climb_id: int, user_id: int) -> dict | None:
        """Get one climb, only if it belongs to user_id."""
        _check_user_id(user_id)
        row = self.conn.execute(
            "SELECT * FROM climbs WHERE id = ? AND user_id = ?", (climb_id, user_id)
        ).fetchone()
        return dict(row) if row else None

    def list_climbs_for_user(self, user_id: int) -> list[dict]:
        """All climbs for a user, newest first."""
        _check_user_id(user_id)
        rows = self.conn.execute(
            "SELECT * FROM climbs WHERE user_id = ? ORDER BY climb_date DESC, id DESC",
            (user_id,),
        ).fetchall()
        return [dict(row) for row in rows]

    def list_climbs_for_user_in_range(
        self, user_id: int, start_date: str, end_date: str
    ) -> list[dict]:
        """Climbs for a user within a date range (inclusive), newest first."""
        _check_user_id(user_id)
        rows = self.conn.execute(
            "SELECT * FROM climbs WHERE user_id = ? AND climb_date >= ? AND climb_date <= ? "
            "ORDER BY climb_date DESC, id DESC",
            (user_id, start_date, end_date),
        ).fetchall()
        return [dict(row) for row in rows]

    def list_climbs_for_user_on_date(self, user_id: int, date: str) -> list[dict]:
        """Climbs for a user on a single date."""
        return self.list_climbs_for_user_in_range(user_id, date, date)

    def update_climb(self, climb_id: int, user_id: int, **fields: str | None) -> dict | None:
        """Update a climb owned by user_id. Returns None if no such climb."""
        _check_user_id(user_id)
        if self.get_climb(climb_id, user_id) is None:
            return None
        cleaned = validate_climb_fields(fields, partial=True)
        if cleaned:
            set_clause = ", ".join(f"{k} = ?" for k in cleaned)
            values = list(cleaned.values()) + [climb_id, user_id]
            self.conn.execute(
                f"UPDATE climbs SET {set_clause} WHERE id = ? AND user_id = ?",
                values,
            )
            self.conn.commit()
            logger.info("Updated climb %s for user %s", climb_id, user_id)
        return self.get_climb(climb_id, user_id)

    def delete_climb(self, climb_id: int, user_id: int) -> None:
        """Delete a climb owned by user_id.

        Raises LookupError if the climb does not exist or belongs to someone else.
        """
        _check_user_id(user_id)
        cursor = self.conn.execute(
            "DELETE FROM climbs WHERE id = ? AND user_id = ?", (climb_id, user_id)
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise LookupError(f"Climb {climb_id} not found or you don't have permission to delete it")
        logger.info("Deleted climb %s for user %s", climb_id, user_id)

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()
