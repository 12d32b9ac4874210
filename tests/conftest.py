import pytest

from hifz_tutor.db import init_db
from hifz_tutor.learners import create_learner


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def learner_id(tmp_db):
    """An initialised database with one learner."""
    init_db(tmp_db)
    return create_learner(tmp_db, "test learner")
