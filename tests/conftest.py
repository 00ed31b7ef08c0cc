"""Root conftest for all tests.

Provides an isolated in-memory SQLite database per test, workout and history
factories, and a FastAPI TestClient bound to the test session.
"""

import random
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from youtubefit.db.models import Base, Workout, WorkoutHistory
from youtubefit.db.session import get_db

# Monday
TODAY = date(2026, 10, 19)
TEST_SEED = 42


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session on the per-test database.

    Usage:
        def test_something(db_session):
            db_session.add(Workout(...))
            db_session.commit()
    """
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_workout(db_session):
    """Factory for committed workouts. Defaults describe a recommendable workout."""
    counter = {"n": 0}

    def _make(**overrides) -> Workout:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "workout_id": f"YF-TC{n:02d}",
            "yt_id": f"vid{n:08d}",
            "title": f"Workout {n}",
            "channel_name": "Test Channel",
            "channel_code": "TC",
            "video_url": f"https://www.youtube.com/watch?v=vid{n:08d}",
            "category": "workout",
            "primary_target": "Full Body",
            "intensity": "medium",
            "duration_min": 20,
            "equipment": "none",
            "vetted": True,
            "do_not_recommend": False,
            "link_status": "ok",
            "repeat_cooldown_days": 5,
        }
        values.update(overrides)
        workout = Workout(**values)
        db_session.add(workout)
        db_session.commit()
        return workout

    return _make


@pytest.fixture
def add_history(db_session):
    """Factory for committed history entries."""

    def _add(workout_id: str, day: date, **overrides) -> WorkoutHistory:
        entry = WorkoutHistory(date=day, workout_id=workout_id, **overrides)
        db_session.add(entry)
        db_session.commit()
        return entry

    return _add


@pytest.fixture
def client(db_session):
    """TestClient whose requests use the test session, a seeded RNG and a fixed today."""
    from youtubefit.main import app
    from youtubefit.core.clock import get_today
    from youtubefit.recommendation.routes import get_rng

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rng] = lambda: random.Random(TEST_SEED)
    app.dependency_overrides[get_today] = lambda: TODAY
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def today() -> date:
    return TODAY
