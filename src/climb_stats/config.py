"""Configuration file management for climb-stats.

Reads and writes ~/.climb-stats/config.json for settings that don't belong in the DB
(the grade scale, the active user, an alternative database path).
"""
from __future__ import annotations

import json
from pathlib import Path

from climb_stats.grades import DEFAULT_GRADE_SCALE, validate_grade_scale

DEFAULT_CONFIG_PATH: Path = Path.home() / ".climb-stats" / "config.json"


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_grade_scale(config_path: Path | None = None) -> list[str]:
    """Return the configured grade scale, or the default 5c-7c scale if unset.

    Raises ValueError if a grade_scale is configured but unusable.
    """
    raw = load_config(config_path).get("grade_scale")
    if raw is None:
        return list(DEFAULT_GRADE_SCALE)
    return validate_grade_scale(raw)


def set_grade_scale(scale: list[str], config_path: Path | None = None) -> None:
    """Validate and persist a grade scale, weakest grade first."""
    config = load_config(config_path)
    config["grade_scale"] = validate_grade_scale(scale)
    save_config(config, config_path)


def get_default_user(config_path: Path | None = None) -> str | None:
    """Return the email of the user the CLI acts as, or None if not set."""
    return load_config(config_path).get("user_email") or None


def set_default_user(email: str, config_path: Path | None = None) -> None:
    """Persist the active user's email to config."""
    config = load_config(config_path)
    config["user_email"] = email.strip().lower()
    save_config(config, config_path)


def get_db_path(config_path: Path | None = None) -> Path | None:
    """Return the configured database path, or None to use the default."""
    raw = load_config(config_path).get("db_path")
    if raw:
        return Path(raw).expanduser()
    return None
