# tests/test_dashboard.py
from datetime import date

from hifz_tutor.dashboard import (
    get_maintenance_stats, get_quality_color, get_quality_label, get_streak_message,
)
from hifz_tutor.maintenance import (
    apply_listen_tap, apply_recite_tap, load_today, mark_practice_done, submit_assessment,
)
from hifz_tutor.memorization import set_memorized_surahs
from hifz_tutor.models import Assessment


def _assess(db_path, session_id, index, assessment):
    for n in (1, 2, 3):
        apply_listen_tap(db_path, session_id, index, n)
    for n in (1, 2, 3):
        apply_recite_tap(db_path, session_id, index, n)
    return submit_assessment(db_path, session_id, index, assessment)


def test_quality_label():
    assert get_quality_label(5) == "SMOOTH"
    assert get_quality_label(4) == "PRACTISED"
    assert get_quality_label(3) == "NEEDS PRACTICE"
    assert get_quality_label(0) == "NOT REVIEWED"


def test_quality_color():
    assert get_quality_color(5) == "green"
    assert get_quality_color(0) == "dim"


def test_streak_message():
    assert "start" in get_streak_message(0)
    assert "7-day" in get_streak_message(7)


def test_stats_with_no_data(learner_id, tmp_db):
    stats = get_maintenance_stats(tmp_db, learner_id)
    assert stats["current_streak"] == 0
    assert stats["memorized_count"] == 0
    assert stats["rotation_length"] == 4  # default set
    assert stats["sessions_completed"] == 0
    assert stats["avg_quality"] == 0.0


def test_stats_average_quality(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [1, 112, 113, 114])
    session = load_today(tmp_db, learner_id, date(2026, 1, 1))
    _assess(tmp_db, session.id, 0, Assessment.smooth())
    _assess(tmp_db, session.id, 1, Assessment.weak("fluency"))
    mark_practice_done(tmp_db, session.id, 1, "fluency")
    stats = get_maintenance_stats(tmp_db, learner_id)
    assert stats["memorized_count"] == 4
    assert stats["passages_reviewed"] == 2
    assert stats["avg_quality"] == 4.5
    assert stats["sessions_completed"] == 0
