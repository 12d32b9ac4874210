# tests/test_memorization.py
import pytest

from hifz_tutor.memorization import (
    apply_quick_select, get_memorized_units, get_surah_flags, set_memorized_surahs,
)


def test_no_memorized_surahs_by_default(learner_id, tmp_db):
    assert get_memorized_units(tmp_db, learner_id) == []


def test_memorized_units_in_mushaf_order(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [114, 1, 36, 112])
    assert get_memorized_units(tmp_db, learner_id) == [1, 36, 112, 114]


def test_set_replaces_previous_selection(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [1, 112, 113])
    set_memorized_surahs(tmp_db, learner_id, [113, 114])
    assert get_memorized_units(tmp_db, learner_id) == [113, 114]


def test_clearing_selection(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [1, 112])
    set_memorized_surahs(tmp_db, learner_id, [])
    assert get_memorized_units(tmp_db, learner_id) == []


def test_unknown_surah_rejected(learner_id, tmp_db):
    with pytest.raises(ValueError):
        set_memorized_surahs(tmp_db, learner_id, [1, 200])
    assert get_memorized_units(tmp_db, learner_id) == []


def test_fluency_and_understanding_flags(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [1, 112], fluency=[1, 50], understanding=[112])
    flags = get_surah_flags(tmp_db, learner_id)
    assert flags == {
        1: {"fluency": True, "understanding": False},
        112: {"fluency": False, "understanding": True},
    }


def test_apply_quick_select_adds_to_existing(learner_id, tmp_db):
    set_memorized_surahs(tmp_db, learner_id, [36], fluency=[36])
    result = apply_quick_select(tmp_db, learner_id, "Al-Fatihah + Last 3")
    assert result == [1, 36, 112, 113, 114]
    assert get_memorized_units(tmp_db, learner_id) == result
    assert get_surah_flags(tmp_db, learner_id)[36]["fluency"] is True


def test_learners_are_isolated(learner_id, tmp_db):
    from hifz_tutor.learners import create_learner
    other = create_learner(tmp_db, "other")
    set_memorized_surahs(tmp_db, learner_id, [1])
    set_memorized_surahs(tmp_db, other, [114])
    assert get_memorized_units(tmp_db, learner_id) == [1]
    assert get_memorized_units(tmp_db, other) == [114]
