"""
Default categories and achievement catalog.
Run with: python -m focustimer.seed
"""
import logging

from sqlmodel import Session, select

from focustimer.models import Achievement, AchievementType, Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Work", "color": "#3B82F6", "icon": "💼"},
    {"name": "Study", "color": "#8B5CF6", "icon": "📚"},
    {"name": "Reading", "color": "#F59E0B", "icon": "📖"},
    {"name": "Exercise", "color": "#EF4444", "icon": "🏃"},
    {"name": "Creative", "color": "#EC4899", "icon": "🎨"},
    {"name": "Personal", "color": "#10B981", "icon": "🌱"},
]

DEFAULT_ACHIEVEMENTS = [
    # Session count
    {"name": "First Focus", "description": "Complete your first focus session",
     "icon": "🎯", "type": AchievementType.SESSIONS, "requirement": 1, "xp_reward": 50},
    {"name": "Getting Into It", "description": "Complete 10 focus sessions",
     "icon": "🔟", "type": AchievementType.SESSIONS, "requirement": 10, "xp_reward": 100},
    {"name": "Session Veteran", "description": "Complete 100 focus sessions",
     "icon": "🏅", "type": AchievementType.SESSIONS, "requirement": 100, "xp_reward": 500},
    # Total focus time (minutes)
    {"name": "Hour of Power", "description": "Focus for 60 minutes in total",
     "icon": "⏱️", "type": AchievementType.TOTAL_TIME, "requirement": 60, "xp_reward": 100},
    {"name": "Deep Worker", "description": "Focus for 10 hours in total",
     "icon": "🧠", "type": AchievementType.TOTAL_TIME, "requirement": 600, "xp_reward": 300},
    {"name": "Time Lord", "description": "Focus for 100 hours in total",
     "icon": "⌛", "type": AchievementType.TOTAL_TIME, "requirement": 6000, "xp_reward": 1000},
    # Streaks (days)
    {"name": "On a Roll", "description": "Focus 3 days in a row",
     "icon": "🔥", "type": AchievementType.STREAK, "requirement": 3, "xp_reward": 75},
    {"name": "Week Warrior", "description": "Focus 7 days in a row",
     "icon": "📅", "type": AchievementType.STREAK, "requirement": 7, "xp_reward": 200},
    {"name": "Unstoppable", "description": "Focus 30 days in a row",
     "icon": "🚀", "type": AchievementType.STREAK, "requirement": 30, "xp_reward": 1000},
    # Levels
    {"name": "Level Up", "description": "Reach level 5",
     "icon": "⭐", "type": AchievementType.LEVEL, "requirement": 5, "xp_reward": 0},
    {"name": "Focus Master", "description": "Reach level 10",
     "icon": "👑", "type": AchievementType.LEVEL, "requirement": 10, "xp_reward": 0},
]


def seed_defaults(db: Session) -> None:
    """Insert default categories and achievements into empty tables. Safe to re-run."""
    if db.exec(select(Category)).first() is None:
        for data in DEFAULT_CATEGORIES:
            db.add(Category(is_default=True, **data))
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))

    if db.exec(select(Achievement)).first() is None:
        for data in DEFAULT_ACHIEVEMENTS:
            db.add(Achievement(**data))
        logger.info("Seeded %d achievements", len(DEFAULT_ACHIEVEMENTS))

    db.commit()


if __name__ == "__main__":
    from focustimer.db import engine, init_db

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    init_db()
    with Session(engine) as session:
        seed_defaults(session)
    logger.info("Database seeded successfully")
