"""
XP, level, streak and achievement bookkeeping for a user's stats row.

None of these functions commit: callers fold them into their own
transaction so stats never drift from the set of completed sessions.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session, select

from focustimer.models import Achievement, AchievementType, UserAchievement, UserStats

logger = logging.getLogger(__name__)

XP_PER_MINUTE = 2
XP_PER_LEVEL = 1000


def level_for_xp(total_xp: int) -> int:
    return total_xp // XP_PER_LEVEL + 1


def xp_for_minutes(minutes: int) -> int:
    return minutes * XP_PER_MINUTE


def get_stats(db: Session, user_id: str) -> Optional[UserStats]:
    return db.exec(select(UserStats).where(UserStats.user_id == user_id)).first()


def get_or_create_stats(db: Session, user_id: str) -> UserStats:
    """Fetch the stats row, adding a zeroed one (uncommitted) when absent."""
    stats = get_stats(db, user_id)
    if stats is None:
        stats = UserStats(
            user_id=user_id,
            level=1,
            total_xp=0,
            current_streak=0,
            longest_streak=0,
            total_focus_time=0,
            total_sessions=0,
        )
        db.add(stats)
        db.flush()
    return stats


def next_streak(current_streak: int, last_active: Optional[datetime], at: datetime) -> int:
    """Streak after activity at `at`, given the previous activity timestamp."""
    if last_active is None:
        return 1
    gap = (at.date() - last_active.date()).days
    if gap <= 0:
        return max(current_streak, 1)
    if gap == 1:
        return current_streak + 1
    return 1


def record_completion(stats: UserStats, minutes: int, at: datetime) -> int:
    """Credit a completed session to `stats`. Returns the XP gained."""
    xp_gained = xp_for_minutes(minutes)
    stats.total_focus_time += minutes
    stats.total_sessions += 1
    stats.total_xp += xp_gained
    stats.level = level_for_xp(stats.total_xp)

    stats.current_streak = next_streak(stats.current_streak, stats.last_active_date, at)
    stats.longest_streak = max(stats.longest_streak, stats.current_streak)
    stats.last_active_date = at
    return xp_gained


def _progress(stats: UserStats, achievement_type: AchievementType) -> int:
    if achievement_type == AchievementType.SESSIONS:
        return stats.total_sessions
    if achievement_type == AchievementType.TOTAL_TIME:
        return stats.total_focus_time
    if achievement_type == AchievementType.STREAK:
        return stats.current_streak
    if achievement_type == AchievementType.LEVEL:
        return stats.level
    return 0


def unlock_achievements(db: Session, stats: UserStats, at: datetime) -> List[Achievement]:
    """Add UserAchievement rows for every active achievement `stats` now satisfies."""
    unlocked_ids = set(
        db.exec(
            select(UserAchievement.achievement_id).where(UserAchievement.user_id == stats.user_id)
        ).all()
    )
    catalog = db.exec(select(Achievement).where(Achievement.is_active == True)).all()  # noqa: E712

    newly_unlocked = []
    for achievement in catalog:
        if achievement.id in unlocked_ids:
            continue
        if _progress(stats, achievement.type) >= achievement.requirement:
            db.add(UserAchievement(user_id=stats.user_id, achievement_id=achievement.id, unlocked_at=at))
            newly_unlocked.append(achievement)
            logger.info("User %s unlocked achievement %r", stats.user_id, achievement.name)
    return newly_unlocked
