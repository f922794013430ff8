"""Pytest fixtures — SQLite database and a fresh broadcast hub per test."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "tests-secret-key-long-enough-for-hs256")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import asyncio
import json
import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from eventhub.database import Base, get_db, make_engine
from eventhub.main import app
from eventhub.services.broadcast import BroadcastHub

# Import all models so they register with Base.metadata
from eventhub.models.user import User                 # noqa: F401
from eventhub.models.event import Event               # noqa: F401
from eventhub.models.rsvp import RSVP                 # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine (foreign keys on) for each test."""
    engine = make_engine(SQLITE_URL)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def hub():
    return BroadcastHub()


@pytest.fixture(scope="function")
def client(db_engine, hub):
    """FastAPI TestClient backed by the test database and an isolated hub."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.state.hub = hub
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class FakeSink:
    """In-memory subscriber that records decoded envelopes."""

    def __init__(self, open: bool = True, fail: bool = False):
        self.open = open
        self.fail = fail
        self.messages: list[dict] = []

    @property
    def is_open(self) -> bool:
        return self.open

    async def send(self, message: str) -> None:
        if self.fail:
            raise ConnectionResetError("socket went away")
        self.messages.append(json.loads(message))


class StalledSink(FakeSink):
    """Subscriber whose send never completes, like a peer that stopped reading."""

    async def send(self, message: str) -> None:
        await asyncio.Event().wait()


# ---------------------------------------------------------------------------
# Helpers: create users and events via the API
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, email: str = "user@example.com", role: str = "ATTENDEE",
                     password: str = "secret-pass") -> dict:
    """Helper — POST /api/users/signup and return response JSON ({user, token})."""
    resp = client.post("/api/users/signup", json={"email": email, "password": password, "role": role})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth(user: dict) -> dict:
    """Authorization header for a user returned by create_test_user."""
    return {"Authorization": f"Bearer {user['token']}"}


def create_test_event(client: TestClient, user: dict, title: str = "Launch", date: str = "2030-01-15T18:00:00+00:00",
                      **overrides) -> dict:
    """Helper — POST /api/events/ as ``user`` and return response JSON."""
    payload = {
        "title": title,
        "description": f"{title} description",
        "date": date,
        "location": "Main Hall",
    }
    payload.update(overrides)
    resp = client.post("/api/events/", json=payload, headers=auth(user))
    assert resp.status_code == 201, resp.text
    return resp.json()
