"""
Read-side reporting: dashboard snapshot, weekly buckets, leaderboard and rank.

Everything is recomputed from stored rows on each call; only completed
sessions count towards time totals.
"""
from datetime import timedelta
from typing import Dict, List

from sqlalchemy import and_, func
from sqlmodel import Session, select

from focustimer import clock
from focustimer.errors import InvalidInputError
from focustimer.models import (
    Achievement,
    Category,
    FocusSession,
    SessionStatus,
    User,
    UserAchievement,
)
from focustimer.services import stats as stats_service

PERIODS = ("today", "week", "month")
ACTIVE_FEED_LIMIT = 20
WEEK_DAYS = 7
MAX_LEADERBOARD_LIMIT = 100


def _period_start(period: str):
    if period not in PERIODS:
        raise InvalidInputError(f"Period must be one of: {list(PERIODS)}")
    return clock.period_start(period)


def get_dashboard(db: Session, user_id: str) -> Dict:
    """Stats (created zeroed on first read), today's minutes and achievements."""
    user_stats = stats_service.get_stats(db, user_id)
    if user_stats is None:
        user_stats = stats_service.get_or_create_stats(db, user_id)
        db.commit()
        db.refresh(user_stats)

    today = clock.start_of_today()
    tomorrow = today + timedelta(days=1)
    todays_focus_time = db.exec(
        select(func.coalesce(func.sum(FocusSession.actual_duration), 0)).where(
            FocusSession.user_id == user_id,
            FocusSession.is_completed == True,  # noqa: E712
            FocusSession.started_at >= today,
            FocusSession.started_at < tomorrow,
        )
    ).one()

    unlocked = db.exec(
        select(UserAchievement)
        .where(UserAchievement.user_id == user_id)
        .order_by(UserAchievement.unlocked_at)
    ).all()
    catalog = db.exec(
        select(Achievement).where(Achievement.is_active == True).order_by(Achievement.id)  # noqa: E712
    ).all()

    return {
        "stats": user_stats,
        "todays_focus_time": todays_focus_time,
        "achievements": unlocked,
        "all_achievements": catalog,
    }


def get_weekly_analytics(db: Session, user_id: str) -> List[Dict]:
    """One bucket per calendar day for the last 7 days, today included, oldest first."""
    today = clock.now().date()
    first_day = today - timedelta(days=WEEK_DAYS - 1)

    sessions = db.exec(
        select(FocusSession)
        .where(
            FocusSession.user_id == user_id,
            FocusSession.is_completed == True,  # noqa: E712
            FocusSession.started_at >= clock.start_of_day(first_day),
            FocusSession.started_at < clock.start_of_day(today + timedelta(days=1)),
        )
        .order_by(FocusSession.started_at)
    ).all()

    daily_stats = []
    for offset in range(WEEK_DAYS):
        day_string = (first_day + timedelta(days=offset)).isoformat()
        day_sessions = [s for s in sessions if s.started_at.date().isoformat() == day_string]
        daily_stats.append({
            "date": day_string,
            "total_time": sum(s.actual_duration or 0 for s in day_sessions),
            "session_count": len(day_sessions),
        })
    return daily_stats


def get_leaderboard(db: Session, period: str = "today", limit: int = 10) -> List[Dict]:
    """Users ranked by completed focus minutes in the period; idle users get zeros."""
    if not 1 <= limit <= MAX_LEADERBOARD_LIMIT:
        raise InvalidInputError(f"Limit must be between 1 and {MAX_LEADERBOARD_LIMIT}")
    start = _period_start(period)
    total_time = func.coalesce(func.sum(FocusSession.actual_duration), 0).label("total_time")

    statement = (
        select(
            User.id,
            User.name,
            User.image,
            total_time,
            func.count(FocusSession.id).label("session_count"),
        )
        .select_from(User)
        .outerjoin(
            FocusSession,
            and_(
                FocusSession.user_id == User.id,
                FocusSession.started_at >= start,
                FocusSession.is_completed == True,  # noqa: E712
            ),
        )
        .group_by(User.id, User.name, User.image)
        .order_by(total_time.desc(), User.id)
        .limit(limit)
    )
    return [
        {
            "user_id": row[0],
            "user_name": row[1],
            "user_image": row[2],
            "total_time": row[3],
            "session_count": row[4],
        }
        for row in db.exec(statement).all()
    ]


def get_active_sessions(db: Session) -> List[Dict]:
    """Community feed: the most recently started sessions that are running right now."""
    statement = (
        select(FocusSession)
        .where(FocusSession.status == SessionStatus.ACTIVE)
        .order_by(FocusSession.started_at.desc())
        .limit(ACTIVE_FEED_LIMIT)
    )
    feed = []
    for s in db.exec(statement).all():
        feed.append({
            "id": s.id,
            "user_name": s.user.name if s.user else None,
            "user_image": s.user.image if s.user else None,
            "title": s.title,
            "category_name": s.category.name if s.category else None,
            "category_color": s.category.color if s.category else None,
            "planned_duration": s.planned_duration,
            "started_at": s.started_at,
        })
    return feed


def percentile_for(rank: int, total_active_users: int, total_time: int) -> int:
    """Share of active users at or below the caller, clamped to 0..100.

    A caller with no focus time in the period is placed at 0.
    """
    if total_time <= 0:
        return 0
    percentile = round(((total_active_users - rank + 1) / total_active_users) * 100)
    return max(0, min(100, percentile))


def get_user_rank(db: Session, user_id: str, period: str = "today") -> Dict:
    start = _period_start(period)
    in_period = (
        FocusSession.started_at >= start,
        FocusSession.is_completed == True,  # noqa: E712
    )

    user_total = db.exec(
        select(func.coalesce(func.sum(FocusSession.actual_duration), 0)).where(
            FocusSession.user_id == user_id, *in_period
        )
    ).one()

    per_user = (
        select(
            FocusSession.user_id.label("user_id"),
            func.sum(FocusSession.actual_duration).label("total_time"),
        )
        .where(*in_period)
        .group_by(FocusSession.user_id)
        .subquery()
    )
    better_users = db.exec(
        select(func.count())
        .select_from(per_user)
        .where(per_user.c.total_time > user_total, per_user.c.user_id != user_id)
    ).one()

    active_users = db.exec(
        select(func.count(func.distinct(FocusSession.user_id))).where(*in_period)
    ).one()

    rank = better_users + 1
    total_active_users = max(active_users, 1)
    return {
        "rank": rank,
        "total_time": user_total,
        "percentile": percentile_for(rank, total_active_users, user_total),
        "total_active_users": total_active_users,
    }


def get_categories(db: Session) -> List[Category]:
    return db.exec(select(Category).order_by(Category.name)).all()
