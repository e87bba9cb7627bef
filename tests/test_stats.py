from datetime import datetime, timedelta

from focustimer.models import Achievement, AchievementType, UserAchievement, UserStats
from focustimer.services import stats as stats_service
from sqlmodel import select


def test_level_for_xp():
    assert stats_service.level_for_xp(0) == 1
    assert stats_service.level_for_xp(999) == 1
    assert stats_service.level_for_xp(1000) == 2
    assert stats_service.level_for_xp(2500) == 3


def test_next_streak():
    now = datetime(2024, 5, 10, 9, 0)
    assert stats_service.next_streak(0, None, now) == 1
    assert stats_service.next_streak(4, now - timedelta(hours=2), now) == 4
    assert stats_service.next_streak(4, datetime(2024, 5, 9, 23, 50), now) == 5
    assert stats_service.next_streak(4, datetime(2024, 5, 7, 12, 0), now) == 1


def test_record_completion_updates_counters():
    stats = UserStats(user_id="u", level=1, total_xp=950, current_streak=0, longest_streak=0,
                      total_focus_time=0, total_sessions=0)
    at = datetime(2024, 5, 10, 9, 0)

    xp = stats_service.record_completion(stats, 30, at)

    assert xp == 60
    assert stats.total_xp == 1010
    assert stats.level == 2
    assert stats.total_focus_time == 30
    assert stats.total_sessions == 1
    assert stats.current_streak == 1
    assert stats.longest_streak == 1
    assert stats.last_active_date == at


def test_longest_streak_survives_reset():
    stats = UserStats(user_id="u", current_streak=6, longest_streak=6,
                      last_active_date=datetime(2024, 5, 1, 8, 0))
    stats_service.record_completion(stats, 10, datetime(2024, 5, 10, 8, 0))
    assert stats.current_streak == 1
    assert stats.longest_streak == 6


def test_get_or_create_stats_is_zeroed(db, make_user):
    make_user("alice")
    stats = stats_service.get_or_create_stats(db, "alice")
    assert (stats.level, stats.total_xp, stats.total_sessions, stats.total_focus_time) == (1, 0, 0, 0)
    assert stats_service.get_or_create_stats(db, "alice").id == stats.id


def test_unlock_achievements_once(db, make_user):
    make_user("alice")
    first = Achievement(name="First", description="d", requirement=1, type=AchievementType.SESSIONS)
    hour = Achievement(name="Hour", description="d", requirement=60, type=AchievementType.TOTAL_TIME)
    retired = Achievement(name="Old", description="d", requirement=1,
                          type=AchievementType.SESSIONS, is_active=False)
    db.add_all([first, hour, retired])
    db.commit()

    stats = stats_service.get_or_create_stats(db, "alice")
    stats.total_sessions = 1
    stats.total_focus_time = 25
    now = datetime.now()

    unlocked = stats_service.unlock_achievements(db, stats, now)
    db.commit()
    assert [a.name for a in unlocked] == ["First"]

    assert stats_service.unlock_achievements(db, stats, now) == []
    rows = db.exec(select(UserAchievement).where(UserAchievement.user_id == "alice")).all()
    assert len(rows) == 1
