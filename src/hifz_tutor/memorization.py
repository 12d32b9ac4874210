"""Which surahs a learner has memorised, and how well they know them."""
from datetime import datetime

from loguru import logger

from hifz_tutor.catalog import QUICK_SELECTS, surah_lengths
from hifz_tutor.db import transaction


def get_memorized_units(db_path: str, learner_id: int) -> list[int]:
    """Memorised surah numbers in mushaf order."""
    with transaction(db_path) as conn:
        rows = conn.execute(
            """SELECT surah_number FROM memorized_surahs
            WHERE learner_id = ? AND status = 'memorized'
            ORDER BY surah_number""",
            (learner_id,),
        ).fetchall()
    return [r["surah_number"] for r in rows]


def set_memorized_surahs(
    db_path: str,
    learner_id: int,
    memorized,
    fluency=(),
    understanding=(),
) -> None:
    """Replace the learner's memorised set.

    Selected surahs are upserted with their fluency/understanding flags and every
    other surah is removed. Flags for surahs outside the memorised set are ignored.
    """
    memorized = set(memorized)
    known = surah_lengths()
    unknown = sorted(n for n in memorized if n not in known)
    if unknown:
        raise ValueError(f"Unknown surah numbers: {unknown}")
    fluency, understanding = set(fluency), set(understanding)
    now = datetime.now().isoformat()
    with transaction(db_path) as conn:
        for number in sorted(memorized):
            conn.execute(
                """INSERT INTO memorized_surahs
                (learner_id, surah_number, status, fluency_complete, understanding_complete, memorized_at)
                VALUES (?, ?, 'memorized', ?, ?, ?)
                ON CONFLICT(learner_id, surah_number) DO UPDATE SET
                    status='memorized', fluency_complete=excluded.fluency_complete,
                    understanding_complete=excluded.understanding_complete""",
                (learner_id, number, int(number in fluency), int(number in understanding), now),
            )
        placeholders = ",".join("?" for _ in memorized)
        if memorized:
            conn.execute(
                f"DELETE FROM memorized_surahs WHERE learner_id = ? AND surah_number NOT IN ({placeholders})",
                (learner_id, *sorted(memorized)),
            )
        else:
            conn.execute("DELETE FROM memorized_surahs WHERE learner_id = ?", (learner_id,))
    logger.info(f"Learner {learner_id} now has {len(memorized)} memorised surahs")


def get_surah_flags(db_path: str, learner_id: int) -> dict[int, dict]:
    with transaction(db_path) as conn:
        rows = conn.execute(
            """SELECT surah_number, fluency_complete, understanding_complete
            FROM memorized_surahs WHERE learner_id = ? AND status = 'memorized'""",
            (learner_id,),
        ).fetchall()
    return {
        r["surah_number"]: {
            "fluency": bool(r["fluency_complete"]),
            "understanding": bool(r["understanding_complete"]),
        }
        for r in rows
    }


def add_memorized_surahs(db_path: str, learner_id: int, surahs) -> list[int]:
    """Add surahs to the learner's memorised set, keeping existing flags."""
    flags = get_surah_flags(db_path, learner_id)
    memorized = set(get_memorized_units(db_path, learner_id)) | set(surahs)
    set_memorized_surahs(
        db_path,
        learner_id,
        memorized,
        fluency=[n for n, f in flags.items() if f["fluency"]],
        understanding=[n for n, f in flags.items() if f["understanding"]],
    )
    return sorted(memorized)


def apply_quick_select(db_path: str, learner_id: int, preset: str) -> list[int]:
    return add_memorized_surahs(db_path, learner_id, QUICK_SELECTS[preset])
