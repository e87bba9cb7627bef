"""
Per-user progress: dashboard, weekly chart, rank, plus the category list.
"""
from typing import List, Literal

from fastapi import APIRouter, Depends
from sqlmodel import Session

from focustimer.db import get_session
from focustimer.routers.identity import require_user_id
from focustimer.schemas import CategoryRead, DailyFocus, DashboardRead, UserRankRead
from focustimer.services import reporting

router = APIRouter(prefix="/api", tags=["stats"])

Period = Literal["today", "week", "month"]


@router.get("/dashboard", response_model=DashboardRead)
def get_dashboard(
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Stats, today's focus minutes, unlocked achievements and the full catalog."""
    return DashboardRead.model_validate(reporting.get_dashboard(db, user_id))


@router.get("/analytics/weekly", response_model=List[DailyFocus])
def get_weekly_analytics(
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    """Seven daily buckets ending today, zero-filled."""
    return reporting.get_weekly_analytics(db, user_id)


@router.get("/rank", response_model=UserRankRead)
def get_user_rank(
    period: Period = "today",
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    return reporting.get_user_rank(db, user_id, period)


@router.get("/categories", response_model=List[CategoryRead])
def get_categories(
    db: Session = Depends(get_session),
    user_id: str = Depends(require_user_id),
):
    return [CategoryRead.model_validate(c) for c in reporting.get_categories(db)]
