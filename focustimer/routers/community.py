"""
Public community views: leaderboard and the live session feed. No identity needed.
"""
from typing import List, Literal

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from focustimer.db import get_session
from focustimer.schemas import ActiveSessionEntry, LeaderboardEntry
from focustimer.services import reporting

router = APIRouter(prefix="/api", tags=["community"])


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def get_leaderboard(
    period: Literal["today", "week", "month"] = "today",
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_session),
):
    """Users ranked by completed focus minutes in the period."""
    return reporting.get_leaderboard(db, period=period, limit=limit)


@router.get("/community/active", response_model=List[ActiveSessionEntry])
def get_active_sessions(db: Session = Depends(get_session)):
    """The 20 most recently started sessions that are running now."""
    return reporting.get_active_sessions(db)
