"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from breadcrumb.application.client_state import ClientState
from breadcrumb.infrastructure.db import models  # noqa: F401  registers tables
from breadcrumb.infrastructure.db.row_store import RowStore
from breadcrumb.infrastructure.db.session import Base
from breadcrumb.infrastructure.repository import TrackerRepository, UserRepository


@pytest.fixture
def db_engine():
    """In-memory SQLite engine; one shared connection so TestClient threads see the same data"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def store(db_session) -> RowStore:
    return RowStore(db_session)


@pytest.fixture
def repo(store) -> TrackerRepository:
    return TrackerRepository(store)


@pytest.fixture
def user_repo(store) -> UserRepository:
    return UserRepository(store)


@pytest.fixture
def sample_user(user_repo):
    """Sample user for tests"""
    return user_repo.create_user("alice")


@pytest.fixture
def client_state() -> ClientState:
    return ClientState({})


@pytest.fixture
def exercise(repo, sample_user):
    """Activity "Exercise" with a targeted marker (Pushups, 5/day) and a plain one (Stretch)"""
    activity = repo.create_activity(sample_user.id, "Exercise")
    pushups = repo.create_activity_marker(activity.id, "Pushups", target=5)
    stretch = repo.create_activity_marker(activity.id, "Stretch")
    return activity, pushups, stretch
