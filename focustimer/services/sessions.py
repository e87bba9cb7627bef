"""
Focus session lifecycle: start, pause/resume/cancel, complete.

Every lookup is scoped by (session id, user id); a session that does not
belong to the caller is reported as not found and never mutated.
"""
import logging
from typing import Dict, Optional

from sqlmodel import Session, select

from focustimer import clock
from focustimer.errors import ConflictError, InvalidInputError, NotFoundError
from focustimer.models import (
    OPEN_STATUSES,
    Category,
    FocusSession,
    SessionStatus,
)
from focustimer.services import stats as stats_service

logger = logging.getLogger(__name__)

MIN_PLANNED_MINUTES = 1
MAX_PLANNED_MINUTES = 480

# Statuses a caller may request directly; completion has its own operation.
SETTABLE_STATUSES = (SessionStatus.ACTIVE, SessionStatus.PAUSED, SessionStatus.CANCELLED)

TRANSITIONS = {
    SessionStatus.ACTIVE: {SessionStatus.PAUSED, SessionStatus.COMPLETED, SessionStatus.CANCELLED},
    SessionStatus.PAUSED: {SessionStatus.ACTIVE, SessionStatus.COMPLETED, SessionStatus.CANCELLED},
    SessionStatus.COMPLETED: set(),
    SessionStatus.CANCELLED: set(),
}


def get_owned_session(db: Session, user_id: str, session_id: int) -> FocusSession:
    statement = select(FocusSession).where(
        FocusSession.id == session_id, FocusSession.user_id == user_id
    )
    focus_session = db.exec(statement).one_or_none()
    if not focus_session:
        raise NotFoundError("Session not found")
    return focus_session


def get_open_session(db: Session, user_id: str) -> Optional[FocusSession]:
    """The caller's active or paused session, if any."""
    statement = select(FocusSession).where(
        FocusSession.user_id == user_id, FocusSession.status.in_(OPEN_STATUSES)
    )
    return db.exec(statement).first()


def start_session(
    db: Session,
    user_id: str,
    planned_duration: int,
    title: Optional[str] = None,
    category_id: Optional[int] = None,
) -> FocusSession:
    """Start a focus session in `active` status. Only one open session per user."""
    if not MIN_PLANNED_MINUTES <= planned_duration <= MAX_PLANNED_MINUTES:
        raise InvalidInputError(
            f"Planned duration must be between {MIN_PLANNED_MINUTES} and {MAX_PLANNED_MINUTES} minutes"
        )
    if category_id is not None and db.get(Category, category_id) is None:
        raise NotFoundError("Category not found")

    open_session = get_open_session(db, user_id)
    if open_session is not None:
        logger.warning("User %s tried to start a session while %s is %s",
                       user_id, open_session.id, open_session.status.value)
        raise ConflictError(f"Session {open_session.id} is still {open_session.status.value}")

    if title is not None:
        title = title.strip() or None

    focus_session = FocusSession(
        user_id=user_id,
        title=title,
        category_id=category_id,
        planned_duration=planned_duration,
        started_at=clock.now(),
        status=SessionStatus.ACTIVE,
        is_completed=False,
    )
    db.add(focus_session)
    db.commit()
    db.refresh(focus_session)
    logger.info("User %s started session %s (%s min)", user_id, focus_session.id, planned_duration)
    return focus_session


def _check_transition(focus_session: FocusSession, target: SessionStatus) -> None:
    if target not in TRANSITIONS[focus_session.status]:
        logger.warning("Rejected session %s transition %s -> %s",
                       focus_session.id, focus_session.status.value, target.value)
        raise ConflictError(
            f"Cannot change session from {focus_session.status.value} to {target.value}"
        )


def update_session_status(
    db: Session, user_id: str, session_id: int, status: SessionStatus
) -> FocusSession:
    """Pause, resume or cancel the caller's session. Re-issuing the current status is a no-op."""
    try:
        status = SessionStatus(status)
    except ValueError:
        status = None
    if status not in SETTABLE_STATUSES:
        raise InvalidInputError(f"Status must be one of: {[s.value for s in SETTABLE_STATUSES]}")

    focus_session = get_owned_session(db, user_id, session_id)
    if focus_session.status == status:
        return focus_session
    _check_transition(focus_session, status)

    previous = focus_session.status
    focus_session.status = status
    db.add(focus_session)
    db.commit()
    db.refresh(focus_session)
    logger.info("Session %s: %s -> %s", session_id, previous.value, status.value)
    return focus_session


def complete_session(db: Session, user_id: str, session_id: int, actual_duration: int) -> Dict:
    """
    Complete the caller's session and credit its minutes to their stats.

    The session update, the stats increments and any achievement unlocks
    are committed together, or not at all.
    """
    if actual_duration < 0:
        raise InvalidInputError("Actual duration cannot be negative")

    focus_session = get_owned_session(db, user_id, session_id)
    _check_transition(focus_session, SessionStatus.COMPLETED)

    completed_at = clock.now()
    try:
        focus_session.status = SessionStatus.COMPLETED
        focus_session.is_completed = True
        focus_session.completed_at = completed_at
        focus_session.actual_duration = actual_duration
        db.add(focus_session)

        user_stats = stats_service.get_or_create_stats(db, user_id)
        xp_gained = stats_service.record_completion(user_stats, actual_duration, completed_at)
        db.add(user_stats)
        unlocked = stats_service.unlock_achievements(db, user_stats, completed_at)

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("User %s completed session %s: %s min, +%s XP",
                user_id, session_id, actual_duration, xp_gained)
    return {"xp_gained": xp_gained, "unlocked_achievements": unlocked}


def get_active_session(db: Session, user_id: str) -> Optional[FocusSession]:
    """The caller's session in `active` status (paused ones are not returned)."""
    statement = select(FocusSession).where(
        FocusSession.user_id == user_id, FocusSession.status == SessionStatus.ACTIVE
    )
    return db.exec(statement).first()

