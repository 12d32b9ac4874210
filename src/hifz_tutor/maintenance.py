"""Daily maintenance sessions: today's batch, review actions and completion."""
from dataclasses import dataclass, replace
from datetime import date, datetime

from loguru import logger

from hifz_tutor import store
from hifz_tutor.completion import is_session_complete, recompute
from hifz_tutor.errors import InvalidPassageError, PersistenceError, SessionNotFoundError
from hifz_tutor.learners import get_rotation_cursor, get_streak_state
from hifz_tutor.memorization import get_memorized_units
from hifz_tutor.models import COMPLETED, Assessment, DailySession, SessionPassage
from hifz_tutor.review_state import (
    ListenTap, MarkPracticeDone, ReciteTap, SubmitAssessment, apply_operation,
)
from hifz_tutor.rotation import DAILY_BATCH_SIZE, select_todays_passages
from hifz_tutor.segmenter import build_master_list
from hifz_tutor.streak import advance_streak


@dataclass
class ActionResult:
    session: DailySession
    accepted: bool


def load_today(db_path: str, learner_id: int, today: date | None = None) -> DailySession:
    """Return the learner's session for today, creating it on first request."""
    session_date = (today or date.today()).isoformat()
    existing = store.get_session_by_date(db_path, learner_id, session_date)
    if existing:
        return _complete_if_ready(db_path, existing)

    master = build_master_list(get_memorized_units(db_path, learner_id))
    cursor = get_rotation_cursor(db_path, learner_id)
    passages = select_todays_passages(master, cursor, DAILY_BATCH_SIZE)
    session = recompute(DailySession(
        id=None,
        learner_id=learner_id,
        session_date=session_date,
        passages=[SessionPassage(p) for p in passages],
    ))
    created = store.insert_session_if_absent(db_path, session)
    logger.info(
        f"Session {created.id} for learner {learner_id} on {session_date}: "
        f"{[p.passage.label for p in created.passages]}"
    )
    return created


def _load(db_path: str, session_id: int) -> DailySession:
    session = store.get_session(db_path, session_id)
    if session is None:
        raise SessionNotFoundError(session_id)
    return session


def _apply(db_path: str, session_id: int, passage_index: int, op) -> ActionResult:
    session = _load(db_path, session_id)
    if not 0 <= passage_index < len(session.passages):
        raise InvalidPassageError(session_id, passage_index, len(session.passages))
    # Practice changes neither tasks_completed nor status.
    if session.status == COMPLETED and not isinstance(op, MarkPracticeDone):
        logger.debug(f"Session {session_id} is completed; ignoring {op}")
        return ActionResult(session, False)

    target = session.passages[passage_index]
    new_state = apply_operation(target.state, op)
    if new_state is None:
        return ActionResult(session, False)

    passages = list(session.passages)
    passages[passage_index] = SessionPassage(target.passage, new_state)
    updated = recompute(replace(session, passages=passages))
    store.upsert_session(db_path, updated)
    return ActionResult(_complete_if_ready(db_path, updated), True)


def apply_listen_tap(db_path: str, session_id: int, passage_index: int, n: int) -> ActionResult:
    return _apply(db_path, session_id, passage_index, ListenTap(n))


def apply_recite_tap(db_path: str, session_id: int, passage_index: int, n: int) -> ActionResult:
    return _apply(db_path, session_id, passage_index, ReciteTap(n))


def submit_assessment(
    db_path: str, session_id: int, passage_index: int, assessment: Assessment,
) -> ActionResult:
    return _apply(db_path, session_id, passage_index, SubmitAssessment(assessment))


def mark_practice_done(
    db_path: str, session_id: int, passage_index: int, category: str,
) -> ActionResult:
    return _apply(db_path, session_id, passage_index, MarkPracticeDone(category))


def _commit_completion(db_path: str, session: DailySession, now: datetime | None = None) -> DailySession:
    """Record the streak and mark the session completed, all or nothing."""
    master = build_master_list(get_memorized_units(db_path, session.learner_id))
    streak = advance_streak(
        get_streak_state(db_path, session.learner_id),
        completed_on=session.session_date,
        master=master,
        last_reviewed=session.passages[-1].passage,
        batch_size=session.total_tasks,
    )
    completed = replace(session, status=COMPLETED, completed_at=(now or datetime.now()).isoformat())
    if not store.commit_completion(db_path, completed, streak):
        logger.debug(f"Session {session.id} was already completed")
        return _load(db_path, session.id)
    logger.info(
        f"Session {session.id} completed; streak {streak.current_streak}, "
        f"next cursor {streak.rotation_cursor}"
    )
    return completed


def _complete_if_ready(db_path: str, session: DailySession) -> DailySession:
    """Complete a finished session; on failure leave it in progress for the next save."""
    if session.status == COMPLETED or not is_session_complete(session.states):
        return session
    try:
        return _commit_completion(db_path, session)
    except PersistenceError as e:
        logger.warning(f"Could not record completion of session {session.id}, will retry: {e}")
        return session


def finish_session(db_path: str, session_id: int, now: datetime | None = None) -> DailySession:
    """Complete the session if every passage is done. Safe to call repeatedly."""
    session = _load(db_path, session_id)
    if session.status == COMPLETED:
        return session
    if not is_session_complete(session.states):
        logger.warning(
            f"finish_session({session_id}) called with "
            f"{session.tasks_completed}/{session.total_tasks} passages complete"
        )
        return session
    return _commit_completion(db_path, session, now)
