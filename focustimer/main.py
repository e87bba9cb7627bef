"""
Focus Timer – Backend API
Start with: uvicorn focustimer.main:app --reload
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from focustimer import __version__, config
from focustimer.db import engine, init_db
from focustimer.errors import FocusTimerError
from focustimer.routers import community, sessions, stats, todos
from focustimer.seed import seed_defaults

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Focus Timer API",
    description="Gamified focus sessions, streaks and leaderboards",
    version=__version__,
)

# Allow frontend to call this API
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sessions.router)
app.include_router(stats.router)
app.include_router(community.router)
app.include_router(todos.router)


@app.on_event("startup")
def startup():
    logger.info("Starting Focus Timer API...")
    init_db()
    if config.SEED_ON_STARTUP:
        with Session(engine) as session:
            seed_defaults(session)
    logger.info("Database tables created/verified")


@app.exception_handler(FocusTimerError)
async def focus_timer_error_handler(request: Request, exc: FocusTimerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health():
    """Check that the API is running. Frontend can call this first."""
    return {"status": "ok", "message": "Focus Timer API is running"}


@app.get("/")
def root():
    """Root welcome."""
    return {"app": "Focus Timer", "docs": "/docs"}
