"""Streak counters and rotation cursor update on session completion."""
from dataclasses import replace

from hifz_tutor.models import LearnerStreakState, PassageUnit
from hifz_tutor.rotation import next_rotation_cursor


def advance_streak(
    state: LearnerStreakState,
    completed_on: str,
    master: list[PassageUnit],
    last_reviewed: PassageUnit,
    batch_size: int,
) -> LearnerStreakState:
    """Apply one completed session to the learner's streak state.

    Tomorrow's batch starts right after the last passage reviewed today, looked up
    in the current master list. If that passage has since been removed, the cursor
    simply moves forward by today's batch size.
    """
    current = state.current_streak + 1
    return replace(
        state,
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        total_sessions=state.total_sessions + 1,
        last_completion_date=completed_on,
        rotation_cursor=next_rotation_cursor(
            master, last_reviewed, fallback=state.rotation_cursor + batch_size,
        ),
    )
