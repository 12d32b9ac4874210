"""Persistence of daily sessions and streak state."""
import json
import sqlite3

from hifz_tutor.db import transaction
from hifz_tutor.models import COMPLETED, DailySession, LearnerStreakState, SessionPassage


def _to_session(row) -> DailySession:
    return DailySession(
        id=row["id"],
        learner_id=row["learner_id"],
        session_date=row["session_date"],
        passages=[SessionPassage.from_dict(p) for p in json.loads(row["passages"])],
        tasks_completed=row["tasks_completed"],
        total_tasks=row["total_tasks"],
        status=row["status"],
        completed_at=row["completed_at"],
    )


def _passages_json(session: DailySession) -> str:
    return json.dumps([p.to_dict() for p in session.passages], ensure_ascii=False)


def get_session(db_path: str, session_id: int) -> DailySession | None:
    with transaction(db_path) as conn:
        row = conn.execute("SELECT * FROM daily_sessions WHERE id = ?", (session_id,)).fetchone()
    return _to_session(row) if row else None


def get_session_by_date(db_path: str, learner_id: int, session_date: str) -> DailySession | None:
    with transaction(db_path) as conn:
        row = conn.execute(
            "SELECT * FROM daily_sessions WHERE learner_id = ? AND session_date = ?",
            (learner_id, session_date),
        ).fetchone()
    return _to_session(row) if row else None


def list_sessions(db_path: str, learner_id: int) -> list[DailySession]:
    """All sessions for a learner, newest first."""
    with transaction(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM daily_sessions WHERE learner_id = ? ORDER BY session_date DESC",
            (learner_id,),
        ).fetchall()
    return [_to_session(r) for r in rows]


def insert_session_if_absent(db_path: str, session: DailySession) -> DailySession:
    """Insert the session unless one exists for (learner, date); return the stored one."""
    with transaction(db_path) as conn:
        conn.execute(
            """INSERT OR IGNORE INTO daily_sessions
            (learner_id, session_date, passages, tasks_completed, total_tasks, status, completed_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (session.learner_id, session.session_date, _passages_json(session),
             session.tasks_completed, session.total_tasks, session.status, session.completed_at),
        )
        row = conn.execute(
            "SELECT * FROM daily_sessions WHERE learner_id = ? AND session_date = ?",
            (session.learner_id, session.session_date),
        ).fetchone()
    return _to_session(row)


def upsert_session(db_path: str, session: DailySession) -> None:
    """Write the whole session record, keyed by (learner, date).

    A stored 'completed' status is never overwritten with 'in_progress'.
    """
    with transaction(db_path) as conn:
        conn.execute(
            """INSERT INTO daily_sessions
            (learner_id, session_date, passages, tasks_completed, total_tasks, status, completed_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(learner_id, session_date) DO UPDATE SET
                passages=excluded.passages,
                tasks_completed=excluded.tasks_completed,
                total_tasks=excluded.total_tasks,
                status=CASE WHEN daily_sessions.status = 'completed'
                    THEN 'completed' ELSE excluded.status END,
                completed_at=COALESCE(daily_sessions.completed_at, excluded.completed_at)""",
            (session.learner_id, session.session_date, _passages_json(session),
             session.tasks_completed, session.total_tasks, session.status, session.completed_at),
        )


def _write_streak(conn: sqlite3.Connection, learner_id: int, state: LearnerStreakState) -> None:
    conn.execute(
        """UPDATE learners SET current_streak=?, longest_streak=?, total_sessions=?,
        last_completion_date=?, rotation_cursor=? WHERE id=?""",
        (state.current_streak, state.longest_streak, state.total_sessions,
         state.last_completion_date, state.rotation_cursor, learner_id),
    )


def update_streak_state(db_path: str, learner_id: int, state: LearnerStreakState) -> None:
    with transaction(db_path) as conn:
        _write_streak(conn, learner_id, state)


def commit_completion(db_path: str, session: DailySession, state: LearnerStreakState) -> bool:
    """Mark the session completed and store the new streak state in one transaction.

    Returns False without touching the learner when the stored session was already
    completed.
    """
    with transaction(db_path) as conn:
        cursor = conn.execute(
            """UPDATE daily_sessions SET passages=?, tasks_completed=?, total_tasks=?,
            status=?, completed_at=? WHERE id=? AND status != ?""",
            (_passages_json(session), session.tasks_completed, session.total_tasks,
             COMPLETED, session.completed_at, session.id, COMPLETED),
        )
        if cursor.rowcount == 0:
            return False
        _write_streak(conn, session.learner_id, state)
    return True
