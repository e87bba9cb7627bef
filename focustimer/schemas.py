"""Response shapes. Field names are snake_case on the wire."""
from datetime import datetime
from typing import List, Optional

from sqlmodel import SQLModel

from focustimer.models import AchievementType, SessionStatus, TodoPriority


class CategoryRead(SQLModel):
    id: int
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    is_default: bool = False


class FocusSessionRead(SQLModel):
    id: int
    user_id: str
    category_id: Optional[int] = None
    title: Optional[str] = None
    planned_duration: int
    actual_duration: Optional[int] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    status: SessionStatus
    is_completed: bool


class FocusSessionWithCategory(FocusSessionRead):
    category: Optional[CategoryRead] = None


class UserStatsRead(SQLModel):
    level: int
    total_xp: int
    current_streak: int
    longest_streak: int
    total_focus_time: int
    total_sessions: int
    last_active_date: Optional[datetime] = None


class AchievementRead(SQLModel):
    id: int
    name: str
    description: str
    icon: Optional[str] = None
    badge_color: Optional[str] = None
    requirement: int
    type: AchievementType
    xp_reward: int


class UserAchievementRead(SQLModel):
    id: int
    achievement_id: int
    unlocked_at: datetime
    achievement: AchievementRead


class DashboardRead(SQLModel):
    stats: UserStatsRead
    todays_focus_time: int
    achievements: List[UserAchievementRead]
    all_achievements: List[AchievementRead]


class CompletionRead(SQLModel):
    xp_gained: int
    unlocked_achievements: List[AchievementRead] = []


class DailyFocus(SQLModel):
    date: str
    total_time: int
    session_count: int


class LeaderboardEntry(SQLModel):
    user_id: str
    user_name: Optional[str] = None
    user_image: Optional[str] = None
    total_time: int
    session_count: int


class ActiveSessionEntry(SQLModel):
    id: int
    user_name: Optional[str] = None
    user_image: Optional[str] = None
    title: Optional[str] = None
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    planned_duration: int
    started_at: datetime


class UserRankRead(SQLModel):
    rank: int
    total_time: int
    percentile: int
    total_active_users: int


class TodoRead(SQLModel):
    id: int
    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    priority: TodoPriority
    due_date: Optional[datetime] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    created_at: datetime
    category: Optional[CategoryRead] = None
