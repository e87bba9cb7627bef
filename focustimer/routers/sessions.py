"""
Focus sessions: start, pause/resume/cancel, complete, and the caller's running session.
"""
from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from focustimer.db import get_session
from focustimer.routers.identity import require_user_id
from focustimer.schemas import CompletionRead, FocusSessionRead, FocusSessionWithCategory
from focustimer.services import sessions as session_service

router = APIRouter(prefix="/api", tags=["sessions"])


class StartSessionRequest(BaseModel):
    title: Optional[str] = Field(default=None, max_length=200)
    category_id: Optional[int] = None
    planned_duration: int = Field(ge=1, le=480)  # 1 min to 8 hours


class UpdateStatusRequest(BaseModel):
    status: Literal["active", "paused", "cancelled"]


class CompleteSessionRequest(BaseModel):
    actual_duration: int = Field(ge=0)


@router.post("/sessions", response_model=FocusSessionRead, status_code=201)
def start_session(
    req: StartSessionRequest,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Start a focus session. Fails with 409 while another one is active or paused."""
    focus_session = session_service.start_session(
        db,
        user_id,
        planned_duration=req.planned_duration,
        title=req.title,
        category_id=req.category_id,
    )
    return FocusSessionRead.model_validate(focus_session)


@router.get("/sessions/active", response_model=Optional[FocusSessionWithCategory])
def get_active_session(
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """The caller's running session with its category, or null."""
    focus_session = session_service.get_active_session(db, user_id)
    if focus_session is None:
        return None
    return FocusSessionWithCategory.model_validate(focus_session)


@router.patch("/sessions/{session_id}/status", response_model=FocusSessionRead)
def update_session_status(
    session_id: int,
    req: UpdateStatusRequest,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Pause, resume or cancel a session."""
    focus_session = session_service.update_session_status(db, user_id, session_id, req.status)
    return FocusSessionRead.model_validate(focus_session)


@router.post("/sessions/{session_id}/complete", response_model=CompletionRead)
def complete_session(
    session_id: int,
    req: CompleteSessionRequest,
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Complete a session; returns the XP it earned and any achievements it unlocked."""
    result = session_service.complete_session(db, user_id, session_id, req.actual_duration)
    return CompletionRead.model_validate(result)
