"""Learner records, streak state and user settings."""
from datetime import datetime

from loguru import logger

from hifz_tutor.db import transaction
from hifz_tutor.models import LearnerStreakState

DEFAULT_LEARNER_NAME = "me"


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    with transaction(db_path) as conn:
        row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    with transaction(db_path) as conn:
        conn.execute(
            "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
            (key, value, value),
        )


def create_learner(db_path: str, name: str) -> int:
    with transaction(db_path) as conn:
        cursor = conn.execute(
            "INSERT INTO learners (name, created_at) VALUES (?, ?)",
            (name, datetime.now().isoformat()),
        )
        learner_id = cursor.lastrowid
    logger.info(f"Created learner {name!r} with id {learner_id}")
    return learner_id


def get_learner(db_path: str, learner_id: int) -> dict | None:
    with transaction(db_path) as conn:
        row = conn.execute("SELECT * FROM learners WHERE id = ?", (learner_id,)).fetchone()
    return dict(row) if row else None


def get_or_create_learner(db_path: str, name: str = DEFAULT_LEARNER_NAME) -> int:
    with transaction(db_path) as conn:
        row = conn.execute("SELECT id FROM learners WHERE name = ?", (name,)).fetchone()
    if row:
        return row["id"]
    return create_learner(db_path, name)


def get_active_learner_id(db_path: str) -> int:
    """Learner the CLI acts for; created on first use."""
    value = get_setting(db_path, "active_learner_id")
    if value is not None and get_learner(db_path, int(value)):
        return int(value)
    learner_id = get_or_create_learner(db_path)
    set_active_learner_id(db_path, learner_id)
    return learner_id


def set_active_learner_id(db_path: str, learner_id: int) -> None:
    set_setting(db_path, "active_learner_id", str(learner_id))


def get_streak_state(db_path: str, learner_id: int) -> LearnerStreakState:
    learner = get_learner(db_path, learner_id)
    if not learner:
        return LearnerStreakState()
    return LearnerStreakState(
        current_streak=learner["current_streak"] or 0,
        longest_streak=learner["longest_streak"] or 0,
        total_sessions=learner["total_sessions"] or 0,
        last_completion_date=learner["last_completion_date"],
        rotation_cursor=learner["rotation_cursor"] or 0,
    )


def get_rotation_cursor(db_path: str, learner_id: int) -> int:
    return get_streak_state(db_path, learner_id).rotation_cursor
