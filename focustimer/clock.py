"""
Wall-clock helpers. All stored timestamps are naive local server time, so
"today" and the weekly buckets follow the server's calendar.
"""
from datetime import date, datetime, time, timedelta

PERIOD_DAYS = {"week": 7, "month": 30}


def now() -> datetime:
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def start_of_today() -> datetime:
    return start_of_day(now().date())


def period_start(period: str) -> datetime:
    """Start of a leaderboard window: local midnight, or now minus 7/30 days."""
    if period == "today":
        return start_of_today()
    try:
        return now() - timedelta(days=PERIOD_DAYS[period])
    except KeyError:
        raise ValueError(f"Unknown period: {period!r}") from None
