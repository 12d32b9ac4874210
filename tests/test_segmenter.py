# tests/test_segmenter.py
from hifz_tutor.catalog import DEFAULT_DAILY_SURAHS
from hifz_tutor.models import PassageUnit
from hifz_tutor.segmenter import FALLBACK_UNIT_LENGTH, build_master_list, segment_passages


def test_unit_with_two_segments_is_split_in_order():
    table = {50: [(50, 1, 7), (50, 8, 20)]}
    passages = segment_passages([50], table, {50: 20}, {50: "Qaf"})
    assert [p.key for p in passages] == [(50, 1, 7), (50, 8, 20)]
    assert passages[0].label != passages[1].label
    covered = [a for p in passages for a in range(p.start_ayah, p.end_ayah + 1)]
    assert covered == list(range(1, 21))


def test_single_segment_unit_is_whole_unit():
    table = {112: [(112, 1, 4)]}
    passages = segment_passages([112], table, {112: 4}, {112: "Al-Ikhlas"})
    assert passages == [PassageUnit(112, 1, 4, "Al-Ikhlas")]


def test_unit_without_table_entry_or_length_uses_fallback():
    passages = segment_passages([999], {}, {})
    assert passages == [PassageUnit(999, 1, FALLBACK_UNIT_LENGTH, "Surah 999")]


def test_units_concatenate_in_input_order():
    table = {2: [(2, 1, 141), (2, 142, 252), (2, 253, 286)], 1: [(1, 1, 7)]}
    passages = segment_passages([114, 2, 1], table, {114: 6, 2: 286, 1: 7})
    assert [p.key for p in passages] == [
        (114, 1, 6), (2, 1, 141), (2, 142, 252), (2, 253, 286), (1, 1, 7),
    ]


def test_segment_passages_is_deterministic():
    table = {2: [(2, 1, 141), (2, 142, 252)]}
    first = segment_passages([2, 3], table, {2: 252, 3: 200})
    second = segment_passages([2, 3], table, {2: 252, 3: 200})
    assert first == second


def test_segment_labels_include_ayah_range():
    table = {2: [(2, 1, 141), (2, 142, 252)]}
    passages = segment_passages([2], table, {}, {2: "Al-Baqarah"})
    assert passages[0].label == "Al-Baqarah 1-141"
    assert passages[1].label == "Al-Baqarah 142-252"


def test_build_master_list_uses_catalogue():
    passages = build_master_list([2, 112])
    assert [p.key for p in passages] == [(2, 1, 141), (2, 142, 252), (2, 253, 286), (112, 1, 4)]
    assert passages[-1].label == "Al-Ikhlas"


def test_build_master_list_empty_falls_back_to_default_set():
    passages = build_master_list([])
    assert [p.surah for p in passages] == DEFAULT_DAILY_SURAHS
