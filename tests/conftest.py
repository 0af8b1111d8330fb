"""
Shared fixtures.

The API is exercised through `TestClient` without running the lifespan, so no
database pool exists; each test patches the repository functions it needs.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret")

from fastapi.testclient import TestClient  # noqa: E402

from equity_coffee.analytics import repository as analytics_repository  # noqa: E402
from equity_coffee.auth import security  # noqa: E402
from equity_coffee.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("JWT_SECRET", "test-secret")


@pytest.fixture(autouse=True)
def analytics_insert(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=None)
    monkeypatch.setattr(analytics_repository, "insert_user_action", mock)
    return mock


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_headers():
    def _make(role: str, user_id: UUID | None = None, email: str | None = None) -> dict[str, str]:
        uid = user_id or uuid4()
        token = security.issue_access_token(
            user_id=uid,
            role=role,
            email=email or f"{role}@example.com",
        )
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def farmer_id() -> UUID:
    return uuid4()


@pytest.fixture
def farmer_headers(make_headers, farmer_id) -> dict[str, str]:
    return make_headers("farmer", farmer_id)


@pytest.fixture
def admin_headers(make_headers) -> dict[str, str]:
    return make_headers("admin")


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 11, 5, 12, 0, tzinfo=timezone.utc)
