"""
Import all services for easy access
"""

from focustimer.services import reporting
from focustimer.services import sessions
from focustimer.services import stats
from focustimer.services import todos
from focustimer.services import users

__all__ = [
    "reporting",
    "sessions",
    "stats",
    "todos",
    "users",
]
