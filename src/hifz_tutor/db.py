"""Database initialization and connection management."""
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from hifz_tutor.errors import PersistenceError

DATA_DIR = Path(os.environ.get("HIFZ_TUTOR_HOME", Path.home() / ".hifz_tutor"))
DEFAULT_DB_PATH = str(DATA_DIR / "tutor.db")
DEFAULT_LOG_PATH = str(DATA_DIR / "tutor.log")

SCHEMA = """
CREATE TABLE IF NOT EXISTS learners (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    current_streak INTEGER DEFAULT 0,
    longest_streak INTEGER DEFAULT 0,
    total_sessions INTEGER DEFAULT 0,
    last_completion_date TEXT,
    rotation_cursor INTEGER DEFAULT 0,
    created_at TEXT
);

CREATE TABLE IF NOT EXISTS memorized_surahs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    learner_id INTEGER NOT NULL REFERENCES learners(id),
    surah_number INTEGER NOT NULL,
    status TEXT DEFAULT 'memorized',
    fluency_complete INTEGER DEFAULT 0,
    understanding_complete INTEGER DEFAULT 0,
    memorized_at TEXT,
    UNIQUE(learner_id, surah_number)
);

CREATE TABLE IF NOT EXISTS daily_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    learner_id INTEGER NOT NULL REFERENCES learners(id),
    session_date TEXT NOT NULL,
    passages TEXT NOT NULL DEFAULT '[]',
    tasks_completed INTEGER DEFAULT 0,
    total_tasks INTEGER DEFAULT 0,
    status TEXT DEFAULT 'in_progress',
    completed_at TEXT,
    UNIQUE(learner_id, session_date)
);

CREATE TABLE IF NOT EXISTS user_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL UNIQUE,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


@contextmanager
def transaction(db_path: str = DEFAULT_DB_PATH):
    """Yield a connection that commits on success; sqlite errors become PersistenceError."""
    conn = None
    try:
        conn = get_connection(db_path)
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        if conn is not None:
            conn.rollback()
        raise PersistenceError(f"Database operation failed: {e}") from e
    finally:
        if conn is not None:
            conn.close()
