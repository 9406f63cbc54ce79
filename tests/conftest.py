import os

# must be set before budget_tracker.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from budget_tracker.db import tables  # noqa: F401
from budget_tracker.db.session import Base, get_db
from budget_tracker.main import app
from budget_tracker.routers.scheduler import get_budget_scheduler
from budget_tracker.utils.scheduler import BudgetScheduler


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def budget_scheduler(session_factory):
    scheduler = BudgetScheduler(session_factory=session_factory)
    yield scheduler
    scheduler.shutdown()


@pytest.fixture
def client(session_factory, budget_scheduler):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_budget_scheduler] = lambda: budget_scheduler
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register and log in a user; returns bearer headers for that user."""

    def _make_user(email="alice@example.com", name="Alice", password="secret123"):
        response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201
        login = client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200
        client.cookies.clear()
        return {"Authorization": f"Bearer {login.json()['access_token']}"}

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    return make_user()


@pytest.fixture
def other_headers(make_user):
    return make_user(email="bob@example.com", name="Bob")
