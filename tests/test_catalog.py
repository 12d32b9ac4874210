# tests/test_catalog.py
from hifz_tutor.catalog import (
    DEFAULT_DAILY_SURAHS, QUICK_SELECTS, build_juz_boundary_table, get_juz_starts,
    get_surah, get_surahs, surah_lengths, surahs_by_juz,
)


def test_catalogue_has_all_surahs():
    surahs = get_surahs()
    assert len(surahs) == 114
    assert [s.number for s in surahs] == list(range(1, 115))
    assert sum(s.verses for s in surahs) == 6236


def test_get_surah():
    fatihah = get_surah(1)
    assert fatihah.name_english == "Al-Fatihah"
    assert fatihah.verses == 7
    assert get_surah(115) is None


def test_thirty_juz_starts():
    starts = get_juz_starts()
    assert len(starts) == 30
    assert starts[0] == (1, 1, 1)
    assert starts[-1] == (30, 78, 1)


def test_boundary_table_segments_cover_each_surah():
    table = build_juz_boundary_table()
    lengths = surah_lengths()
    for number, segments in table.items():
        assert segments[0][1] == 1
        assert segments[-1][2] == lengths[number]
        for (_, _, end), (_, start, _) in zip(segments, segments[1:]):
            assert start == end + 1


def test_boundary_table_splits_al_baqarah():
    table = build_juz_boundary_table()
    assert table[2] == [(2, 1, 141), (2, 142, 252), (2, 253, 286)]
    assert table[18] == [(18, 1, 74), (18, 75, 110)]


def test_boundary_table_segment_count_matches_juz_membership():
    table = build_juz_boundary_table()
    for surah in get_surahs():
        assert len(table[surah.number]) == len(surah.juz)


def test_short_surahs_are_not_split():
    table = build_juz_boundary_table()
    for number in DEFAULT_DAILY_SURAHS:
        assert len(table[number]) == 1


def test_surahs_by_juz_lists_surah_in_every_juz():
    grouped = surahs_by_juz()
    assert 2 in grouped[1] and 2 in grouped[2] and 2 in grouped[3]
    assert grouped[30][0] == 78
    assert grouped[30][-1] == 114


def test_quick_selects():
    assert QUICK_SELECTS["Juz Amma (78-114)"] == list(range(78, 115))
    assert QUICK_SELECTS["Al-Fatihah + Last 3"] == [1, 112, 113, 114]
