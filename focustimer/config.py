import os

# Load .env (DATABASE_URL, CORS_ORIGINS, ...)
from dotenv import load_dotenv
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///focus.db")
SQL_ECHO = _flag("SQL_ECHO", "false")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_ON_STARTUP = _flag("SEED_ON_STARTUP", "true")
