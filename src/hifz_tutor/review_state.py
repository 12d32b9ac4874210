"""Per-passage review workflow: listen, recite, self-assess, practise.

Every transition is a pure function returning the new state, or None when the
transition is not allowed from the current state.
"""
from dataclasses import dataclass, replace

from loguru import logger

from hifz_tutor.models import PRACTICE_CATEGORIES, Assessment, ReviewState, SMOOTH, WEAK

REPETITIONS = 3

QUALITY_UNREVIEWED = 0
QUALITY_WEAK = 3
QUALITY_PRACTISED = 4
QUALITY_SMOOTH = 5


@dataclass(frozen=True)
class ListenTap:
    n: int


@dataclass(frozen=True)
class ReciteTap:
    n: int


@dataclass(frozen=True)
class SubmitAssessment:
    assessment: Assessment


@dataclass(frozen=True)
class MarkPracticeDone:
    category: str


def _tap(current: int, n: int) -> int | None:
    """Re-tapping the current count undoes it; tapping the next count advances."""
    if n < 1 or n > REPETITIONS:
        return None
    if n == current:
        return n - 1
    if n == current + 1:
        return n
    return None


def _clear_assessment(state: ReviewState) -> ReviewState:
    return replace(state, assessment=None, quality=QUALITY_UNREVIEWED, practice_done=frozenset())


def set_listen_count(state: ReviewState, n: int) -> ReviewState | None:
    count = _tap(state.listen_count, n)
    if count is None:
        return None
    new_state = replace(state, listen_count=count)
    if count < REPETITIONS:
        new_state = _clear_assessment(replace(new_state, recite_count=0))
    return new_state


def set_recite_count(state: ReviewState, n: int) -> ReviewState | None:
    if state.listen_count != REPETITIONS:
        return None
    count = _tap(state.recite_count, n)
    if count is None:
        return None
    new_state = replace(state, recite_count=count)
    if count < REPETITIONS:
        new_state = _clear_assessment(new_state)
    return new_state


def _valid_assessment(assessment: Assessment) -> bool:
    if assessment.outcome == SMOOTH:
        return not assessment.weaknesses
    if assessment.outcome == WEAK:
        return bool(assessment.weaknesses) and assessment.weaknesses <= set(PRACTICE_CATEGORIES)
    return False


def submit_assessment(state: ReviewState, assessment: Assessment) -> ReviewState | None:
    """Record the learner's self-assessment after the third recitation.

    Args:
        state: Current review state of the passage.
        assessment: Smooth, or Weak with at least one practice category.

    Returns:
        The assessed state (quality 5 for smooth, 3 for weak), or None if recitation
        is unfinished, an assessment already exists, or the assessment is malformed.
    """
    if state.recite_count != REPETITIONS or state.assessment is not None:
        return None
    if not _valid_assessment(assessment):
        return None
    quality = QUALITY_WEAK if assessment.is_weak else QUALITY_SMOOTH
    return replace(state, assessment=assessment, quality=quality, practice_done=frozenset())


def mark_practice_done(state: ReviewState, category: str) -> ReviewState | None:
    assessment = state.assessment
    if assessment is None or not assessment.is_weak or category not in assessment.weaknesses:
        return None
    quality = max(state.quality, QUALITY_PRACTISED)
    return replace(state, practice_done=state.practice_done | {category}, quality=quality)


def is_passage_complete(state: ReviewState) -> bool:
    return (
        state.listen_count == REPETITIONS
        and state.recite_count == REPETITIONS
        and state.assessment is not None
    )


def current_step(state: ReviewState) -> str:
    if state.listen_count < REPETITIONS:
        return "listening"
    if state.recite_count < REPETITIONS:
        return "reciting"
    if state.assessment is None:
        return "assessing"
    if state.assessment.is_weak and state.practice_done < state.assessment.weaknesses:
        return "remediating"
    return "complete"


def apply_operation(state: ReviewState, op) -> ReviewState | None:
    if isinstance(op, ListenTap):
        new_state = set_listen_count(state, op.n)
    elif isinstance(op, ReciteTap):
        new_state = set_recite_count(state, op.n)
    elif isinstance(op, SubmitAssessment):
        new_state = submit_assessment(state, op.assessment)
    elif isinstance(op, MarkPracticeDone):
        new_state = mark_practice_done(state, op.category)
    else:
        raise TypeError(f"Unknown review operation: {op!r}")
    if new_state is None:
        logger.debug(f"Rejected {op} from {state}")
    return new_state
