"""Pytest fixtures — SQLite database recreated for every test."""
import itertools
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.main import app

# Import all models so they register with Base.metadata
from app.models.user import User                  # noqa: F401
from app.models.event import Event, EventHost     # noqa: F401
from app.models.invite import EventInvite         # noqa: F401
from app.models.friendship import Friendship      # noqa: F401

SQLITE_URL = "sqlite:///./test.db"

_email_seq = itertools.count(1)


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test, with ON DELETE CASCADE enforced."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session for direct table inspection."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: register / log in users and create events via the API
# ---------------------------------------------------------------------------
def register_user(client: TestClient, first: str = "Test", last: str = "User",
                  email: str = None, password: str = "secret123") -> dict:
    """Helper — POST /api/auth/register and return the created profile."""
    email = email or f"{first}.{last}.{next(_email_seq)}@example.com".lower()
    resp = client.post("/api/auth/register", json={
        "first_name": first,
        "last_name": last,
        "email": email,
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def login(client: TestClient, email: str, password: str = "secret123") -> dict:
    """Helper — POST /api/auth/login and return bearer headers."""
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['token']}"}


def create_test_user(client: TestClient, first: str = "Test", last: str = "User") -> tuple[dict, dict]:
    """Helper — register and log in; returns (profile, auth headers)."""
    user = register_user(client, first, last)
    return user, login(client, user["email"])


def create_test_event(client: TestClient, headers: dict, title: str = "Test Event",
                      description: str = "Bring snacks", location: str = "Park",
                      date: str = "2030-06-01T18:00:00") -> dict:
    """Helper — POST /api/event and return the created event."""
    resp = client.post("/api/event/", headers=headers, json={
        "title": title,
        "description": description,
        "date": date,
        "location": location,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]
