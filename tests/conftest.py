from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from focustimer.db import get_session, init_db
from focustimer.main import app
from focustimer.models import Category, FocusSession, SessionStatus, User


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(user_id, name=None, image=None):
        user = User(id=user_id, name=name or user_id.title(), image=image)
        db.add(user)
        db.commit()
        return user
    return _make_user


@pytest.fixture
def make_category(db):
    def _make_category(name, color="#3B82F6"):
        category = Category(name=name, color=color)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category
    return _make_category


@pytest.fixture
def add_completed(db):
    """Insert a completed session started at a given time, bypassing the lifecycle."""
    def _add_completed(user_id, minutes, started_at: datetime):
        focus_session = FocusSession(
            user_id=user_id,
            planned_duration=max(minutes, 1),
            actual_duration=minutes,
            started_at=started_at,
            completed_at=started_at,
            status=SessionStatus.COMPLETED,
            is_completed=True,
        )
        db.add(focus_session)
        db.commit()
        return focus_session
    return _add_completed
