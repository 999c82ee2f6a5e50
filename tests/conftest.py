"""
Pytest fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from smm_planner.infrastructure.db.session import Base, get_db
from smm_planner.infrastructure.db.models import User
from smm_planner.main import app


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across threads (TestClient runs the app in a worker thread)"""
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
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sample_user(db_session) -> User:
    user = User(username="alice", password_hash="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def client(db_engine):
    """Test client with get_db bound to the in-memory engine"""
    SessionLocal = sessionmaker(bind=db_engine, autoflush=False)

    def _override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
