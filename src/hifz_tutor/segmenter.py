"""Split memorised surahs into reviewable passages."""
from loguru import logger

from hifz_tutor.catalog import (
    DEFAULT_DAILY_SURAHS, build_juz_boundary_table, surah_lengths, surah_names,
)
from hifz_tutor.models import PassageUnit

FALLBACK_UNIT_LENGTH = 7


def _label(name: str, start: int, end: int, whole: bool) -> str:
    return name if whole else f"{name} {start}-{end}"


def segment_passages(
    unit_ids: list[int],
    boundary_table: dict[int, list[tuple[int, int, int]]],
    unit_lengths: dict[int, int],
    names: dict[int, str] | None = None,
) -> list[PassageUnit]:
    """Flatten memorised units into an ordered passage list.

    A unit with at most one boundary segment becomes a single whole-unit passage
    covering 1..length. A unit with several segments yields one passage per segment,
    in the order the table lists them.
    """
    names = names or {}
    passages = []
    for unit_id in unit_ids:
        name = names.get(unit_id) or f"Surah {unit_id}"
        segments = boundary_table.get(unit_id, [])
        if len(segments) <= 1:
            length = unit_lengths.get(unit_id, FALLBACK_UNIT_LENGTH)
            passages.append(PassageUnit(unit_id, 1, length, _label(name, 1, length, True)))
            continue
        for _, start, end in segments:
            passages.append(PassageUnit(unit_id, start, end, _label(name, start, end, False)))
    return passages


def build_master_list(unit_ids: list[int]) -> list[PassageUnit]:
    """Segment a learner's memorised surahs against the Quran catalogue."""
    if not unit_ids:
        logger.info(f"No memorised surahs recorded; using default set {DEFAULT_DAILY_SURAHS}")
        unit_ids = DEFAULT_DAILY_SURAHS
    return segment_passages(unit_ids, build_juz_boundary_table(), surah_lengths(), surah_names())
