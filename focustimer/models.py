import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship

from focustimer.clock import now

# Timestamps are naive local server time, so datetime columns are declared as
# plain (timezone-less) DateTime.


class SessionStatus(str, enum.Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


OPEN_STATUSES = (SessionStatus.ACTIVE, SessionStatus.PAUSED)


class TodoPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AchievementType(str, enum.Enum):
    SESSIONS = "sessions"
    TOTAL_TIME = "total_time"
    STREAK = "streak"
    LEVEL = "level"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(primary_key=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, max_length=255)

    stats: Optional["UserStats"] = Relationship(back_populates="user")
    sessions: List["FocusSession"] = Relationship(back_populates="user")
    todos: List["Todo"] = Relationship(back_populates="user")


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    color: Optional[str] = Field(default="#3B82F6", max_length=20)
    icon: Optional[str] = Field(default=None, max_length=50)
    is_default: bool = False
    created_at: datetime = Field(default_factory=now, sa_type=DateTime)


class FocusSession(SQLModel, table=True):
    __tablename__ = "focus_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id")
    title: Optional[str] = Field(default=None, max_length=200)
    planned_duration: int  # minutes
    actual_duration: Optional[int] = None  # minutes, set on completion
    started_at: datetime = Field(default_factory=now, index=True, sa_type=DateTime)
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    status: SessionStatus = Field(default=SessionStatus.ACTIVE, index=True)
    is_completed: bool = False

    user: Optional[User] = Relationship(back_populates="sessions")
    category: Optional[Category] = Relationship()


class UserStats(SQLModel, table=True):
    __tablename__ = "user_stats"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    level: int = Field(default=1, index=True)
    total_xp: int = Field(default=0, index=True)
    current_streak: int = 0
    longest_streak: int = 0
    total_focus_time: int = 0  # minutes
    total_sessions: int = 0
    last_active_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=now, sa_type=DateTime)
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime, sa_column_kwargs={"onupdate": now})

    user: Optional[User] = Relationship(back_populates="stats")


class Achievement(SQLModel, table=True):
    __tablename__ = "achievements"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    description: str
    icon: Optional[str] = Field(default=None, max_length=50)
    badge_color: Optional[str] = Field(default="#10B981", max_length=20)
    requirement: int  # threshold to unlock
    type: AchievementType
    xp_reward: int = 0
    is_active: bool = True
    created_at: datetime = Field(default_factory=now, sa_type=DateTime)


class UserAchievement(SQLModel, table=True):
    __tablename__ = "user_achievements"
    __table_args__ = (UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    achievement_id: int = Field(foreign_key="achievements.id", index=True)
    unlocked_at: datetime = Field(default_factory=now, sa_type=DateTime)

    achievement: Optional[Achievement] = Relationship()


class Todo(SQLModel, table=True):
    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    title: str = Field(max_length=200)
    description: Optional[str] = None
    is_completed: bool = Field(default=False, index=True)
    priority: TodoPriority = TodoPriority.MEDIUM
    due_date: Optional[datetime] = Field(default=None, sa_type=DateTime)
    completed_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=now, sa_type=DateTime)
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime, sa_column_kwargs={"onupdate": now})

    user: Optional[User] = Relationship(back_populates="todos")
    category: Optional[Category] = Relationship()
