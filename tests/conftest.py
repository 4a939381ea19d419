"""Shared fixtures for Activity Planner tests.

- In-memory SQLite database shared across connections (StaticPool)
- SQLAlchemy session and session factory bound to it
- FastAPI TestClient with the get_db dependency overridden
- Builders for the schema objects the suggestion engine consumes
"""

from collections.abc import Generator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import activity_planner.models  # noqa: F401  (registers tables)
from activity_planner.database import Base, get_db
from activity_planner.schemas import ActivityDetail, ContextRead, TimeSlotRead


# ─────────────────────────────────────────────────────────────────────────────
# Fixed moments (2026-10-19 is a Monday)
# ─────────────────────────────────────────────────────────────────────────────

SUNDAY_NOON = datetime(2026, 10, 18, 12, 0)
MONDAY_0900 = datetime(2026, 10, 19, 9, 0)
MONDAY_1000 = datetime(2026, 10, 19, 10, 0)
MONDAY_2000 = datetime(2026, 10, 19, 20, 0)
TUESDAY_0100 = datetime(2026, 10, 20, 1, 0)


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """FastAPI test client backed by the in-memory database."""
    from activity_planner.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────────────────────
# Engine input builders
# ─────────────────────────────────────────────────────────────────────────────


def make_context(id=1, label="Test Context", days=None, time_start=None, time_end=None) -> ContextRead:
    return ContextRead(
        id=id,
        name=f"context_{id}",
        label=label,
        days=days,
        time_start=time_start,
        time_end=time_end,
    )


def make_slot(time_start, time_end, day_of_week=None) -> TimeSlotRead:
    return TimeSlotRead(day_of_week=day_of_week, time_start=time_start, time_end=time_end)


def make_activity(id=1, title="Test Activity", **fields) -> ActivityDetail:
    return ActivityDetail(id=id, title=title, **fields)


@pytest.fixture
def work_context() -> ContextRead:
    return make_context(id=1, label="Test Context", days=["Mon"], time_start="09:00", time_end="17:00")


@pytest.fixture
def always_context() -> ContextRead:
    return make_context(id=99, label="Siempre")
