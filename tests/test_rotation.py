# tests/test_rotation.py
import math

import pytest

from hifz_tutor.models import PassageUnit
from hifz_tutor.rotation import (
    DAILY_BATCH_SIZE, next_rotation_cursor, rotation_indices, select_todays_passages,
)


def _passages(n):
    return [PassageUnit(i + 1, 1, 5, f"P{i}") for i in range(n)]


def test_batch_size_is_three():
    assert DAILY_BATCH_SIZE == 3


def test_wraps_around_end_of_list():
    assert rotation_indices(7, 5, 3) == [5, 6, 0]


def test_select_returns_passages_in_cyclic_order():
    passages = _passages(7)
    today = select_todays_passages(passages, 5)
    assert today == [passages[5], passages[6], passages[0]]


def test_batch_capped_to_list_length():
    passages = _passages(2)
    assert select_todays_passages(passages, 1, 3) == [passages[1], passages[0]]


def test_cursor_out_of_range_is_clamped():
    assert rotation_indices(4, 10, 3) == [2, 3, 0]
    assert rotation_indices(4, -1, 2) == [3, 0]


def test_empty_list_rejected():
    with pytest.raises(ValueError):
        select_todays_passages([], 0)


@pytest.mark.parametrize("length", [1, 2, 3, 5, 7, 8, 9, 12])
def test_consecutive_batches_cover_the_list(length):
    k = DAILY_BATCH_SIZE
    cursor = 0
    seen = []
    for _ in range(math.ceil(length / k)):
        seen.extend(rotation_indices(length, cursor, k))
        cursor = (cursor + k) % length
    assert set(seen) == set(range(length))
    assert seen[:length] == list(range(length))


def test_next_cursor_follows_last_reviewed():
    passages = _passages(8)
    assert next_rotation_cursor(passages, passages[0], fallback=0) == 1
    assert next_rotation_cursor(passages, passages[7], fallback=0) == 0


def test_next_cursor_uses_current_master_list():
    passages = _passages(8)
    grown = [PassageUnit(99, 1, 3, "new")] + passages
    assert next_rotation_cursor(grown, passages[2], fallback=0) == 4


def test_next_cursor_falls_back_when_passage_removed():
    passages = _passages(5)
    missing = PassageUnit(42, 1, 3, "gone")
    assert next_rotation_cursor(passages, missing, fallback=7) == 2
