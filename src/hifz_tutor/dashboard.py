"""Maintenance dashboard statistics and labels."""
from hifz_tutor.learners import get_streak_state
from hifz_tutor.memorization import get_memorized_units
from hifz_tutor.models import COMPLETED
from hifz_tutor.segmenter import build_master_list
from hifz_tutor.store import list_sessions


def get_quality_label(quality: int) -> str:
    if quality >= 5:
        return "SMOOTH"
    elif quality == 4:
        return "PRACTISED"
    elif quality == 3:
        return "NEEDS PRACTICE"
    return "NOT REVIEWED"


def get_quality_color(quality: int) -> str:
    if quality >= 5:
        return "green"
    elif quality == 4:
        return "yellow"
    elif quality == 3:
        return "dark_orange"
    return "dim"


def get_streak_message(streak: int) -> str:
    if streak == 0:
        return "Complete today's review to start a streak."
    if streak == 1:
        return "Day one done. Come back tomorrow to keep it going!"
    return f"You've maintained your {streak}-day streak."


def get_maintenance_stats(db_path: str, learner_id: int) -> dict:
    streak = get_streak_state(db_path, learner_id)
    memorized = get_memorized_units(db_path, learner_id)
    sessions = list_sessions(db_path, learner_id)
    qualities = [
        p.state.quality
        for s in sessions
        for p in s.passages
        if p.state.assessment is not None
    ]
    master = build_master_list(memorized)
    return {
        "current_streak": streak.current_streak,
        "longest_streak": streak.longest_streak,
        "total_sessions": streak.total_sessions,
        "last_completion_date": streak.last_completion_date,
        "memorized_count": len(memorized),
        "rotation_length": len(master),
        "rotation_cursor": streak.rotation_cursor % len(master),
        "sessions_completed": sum(1 for s in sessions if s.status == COMPLETED),
        "passages_reviewed": len(qualities),
        "avg_quality": round(sum(qualities) / len(qualities), 1) if qualities else 0.0,
    }
