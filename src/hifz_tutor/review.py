"""Weak passage identification for targeted practice."""
from hifz_tutor.models import PRACTICE_CATEGORIES
from hifz_tutor.store import list_sessions


def get_weak_passages(db_path: str, learner_id: int, limit: int | None = None) -> list[dict]:
    """Passages the learner assessed as weak, most recent session first."""
    weak = []
    for session in list_sessions(db_path, learner_id):
        for item in session.passages:
            assessment = item.state.assessment
            if assessment is None or not assessment.is_weak:
                continue
            weak.append({
                "session_date": session.session_date,
                "surah": item.passage.surah,
                "start_ayah": item.passage.start_ayah,
                "end_ayah": item.passage.end_ayah,
                "label": item.passage.label,
                "weaknesses": sorted(assessment.weaknesses),
                "practice_done": sorted(item.state.practice_done),
                "outstanding": sorted(assessment.weaknesses - item.state.practice_done),
                "quality": item.state.quality,
            })
    return weak[:limit] if limit is not None else weak


def get_weakness_counts(db_path: str, learner_id: int) -> dict[str, int]:
    counts = {c: 0 for c in PRACTICE_CATEGORIES}
    for w in get_weak_passages(db_path, learner_id):
        for category in w["weaknesses"]:
            counts[category] += 1
    return counts
