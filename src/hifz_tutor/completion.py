"""Session-level completion derived from per-passage review states."""
from dataclasses import replace

from hifz_tutor.models import DailySession, ReviewState
from hifz_tutor.review_state import is_passage_complete


def count_completed(states: list[ReviewState]) -> int:
    return sum(1 for s in states if is_passage_complete(s))


def is_session_complete(states: list[ReviewState]) -> bool:
    return len(states) > 0 and count_completed(states) == len(states)


def recompute(session: DailySession) -> DailySession:
    """Return the session with tasks_completed and total_tasks refreshed."""
    states = session.states
    return replace(session, tasks_completed=count_completed(states), total_tasks=len(states))


def progress_percent(session: DailySession) -> int:
    if not session.total_tasks:
        return 0
    return round(session.tasks_completed / session.total_tasks * 100)
