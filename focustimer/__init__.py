"""Focus Timer backend: focus sessions, XP, streaks and leaderboards."""

__version__ = "0.2.0"
