"""Static Quran catalogue: surah metadata and juz boundaries."""
import json
from functools import lru_cache
from pathlib import Path

from hifz_tutor.models import Surah

CONTENT_DIR = Path(__file__).parent / "content"

# Reviewed when a learner has not recorded any memorised surahs yet.
DEFAULT_DAILY_SURAHS = [114, 113, 112, 1]

QUICK_SELECTS = {
    "Juz Amma (78-114)": list(range(78, 115)),
    "Last 10 Surahs (105-114)": list(range(105, 115)),
    "Al-Fatihah + Last 3": [1, 112, 113, 114],
    "Common Surahs (Mulk, Kahf, Yaseen)": [36, 18, 67],
}


@lru_cache(maxsize=1)
def _load() -> dict:
    return json.loads((CONTENT_DIR / "quran.json").read_text(encoding="utf-8"))


def get_surahs() -> list[Surah]:
    return [
        Surah(s["number"], s["name_english"], s["name_arabic"], s["verses"], list(s["juz"]))
        for s in _load()["surahs"]
    ]


def get_surah(number: int) -> Surah | None:
    for surah in get_surahs():
        if surah.number == number:
            return surah
    return None


def surah_names() -> dict[int, str]:
    return {s["number"]: s["name_english"] for s in _load()["surahs"]}


def surah_lengths() -> dict[int, int]:
    return {s["number"]: s["verses"] for s in _load()["surahs"]}


def get_juz_starts() -> list[tuple[int, int, int]]:
    """Return (juz, surah, ayah) for the first ayah of each of the 30 juz."""
    return [(j["juz"], j["surah"], j["ayah"]) for j in _load()["juz_starts"]]


def build_juz_boundary_table() -> dict[int, list[tuple[int, int, int]]]:
    """Map every surah to its juz segments as (surah, start_ayah, end_ayah).

    A surah is split wherever a juz begins part-way through it. The segments are
    ascending and together cover 1..verses exactly.
    """
    splits: dict[int, list[int]] = {}
    for _, surah, ayah in get_juz_starts():
        if ayah > 1:
            splits.setdefault(surah, []).append(ayah)

    table = {}
    for number, verses in surah_lengths().items():
        starts = [1] + sorted(splits.get(number, []))
        ends = [s - 1 for s in starts[1:]] + [verses]
        table[number] = [(number, start, end) for start, end in zip(starts, ends)]
    return table


def surahs_by_juz() -> dict[int, list[int]]:
    """Group surah numbers by juz; a surah appears in every juz it touches."""
    grouped: dict[int, list[int]] = {}
    for surah in get_surahs():
        for juz in surah.juz:
            grouped.setdefault(juz, []).append(surah.number)
    return grouped
