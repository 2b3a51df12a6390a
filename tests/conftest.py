import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest-hr.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("HR_TIMEZONE", "UTC")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOGGING_ENABLED", "false")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from atams.db import Base
from app.core import clock
import app.models  # noqa: F401  registers tables on Base.metadata


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def attach_hris(dbapi_conn, _record):
        dbapi_conn.execute("ATTACH DATABASE ':memory:' AS hris")

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def set_now(monkeypatch):
    """Freeze the HR clock at the given aware datetime"""
    def _set(value: datetime):
        monkeypatch.setattr(clock, "now_local", lambda: value)
    return _set


@pytest.fixture
def client(session_factory):
    from app.main import app
    from app.db.session import get_db

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
