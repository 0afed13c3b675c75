"""
Shared fixtures.

Environment overrides must be in place before the service modules are
imported, because settings are loaded and the default app (with its engine) is
created at import time.
"""
import os
import tempfile
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(tempfile.gettempdir(), 'aidemoi_test.db')}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from aidemoi_platform.api_service.main import app
from aidemoi_platform.api_service.db import Base
from aidemoi_platform.api_service.stores import UserStore


class FakeClock:
    """Controllable clock for token expiry tests."""

    def __init__(self, now=None):
        self.now = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, delta):
        self.now = self.now + delta


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=app.state.engine)
    Base.metadata.create_all(bind=app.state.engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_user():
    """Insert a user directly through the store and return stable scalar values."""

    def _make_user(email="user@example.com", username="user", password="secret123"):
        db = app.state.session_factory()
        try:
            user = UserStore(db).create(username, email, password)
            return {"id": user.id, "username": username, "email": email, "password": password}
        finally:
            db.close()

    return _make_user


@pytest.fixture
def login(client):
    def _login(email, password):
        resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _login
