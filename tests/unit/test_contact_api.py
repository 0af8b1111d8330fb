"""
Tests for the contact form endpoints.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from equity_coffee.contact import repository, service


@pytest.fixture
def insert_message(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value={"id": uuid4(), "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc)})
    monkeypatch.setattr(repository, "insert_message", mock)
    return mock


@pytest.mark.unit
class TestCreateMessage:
    @pytest.mark.parametrize("path", ["/api/contact", "/api/contact/"])
    def test_public_submit(self, client, insert_message, path):
        response = client.post(
            path,
            json={"name": "Maya", "email": "Maya@Example.com", "message": "Interested in Kenyan AA"},
            headers={"User-Agent": "pytest-agent"},
        )

        assert response.status_code == 201
        assert response.json()["ok"] is True
        kwargs = insert_message.await_args.kwargs
        assert kwargs["email"] == "maya@example.com"
        assert kwargs["reason"] == ""
        assert kwargs["user_agent"] == "pytest-agent"

    def test_forwarded_for_first_hop_is_recorded(self, client, insert_message):
        client.post(
            "/api/contact",
            json={"name": "Maya", "email": "m@example.com", "message": "hi"},
            headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )

        assert insert_message.await_args.kwargs["ip"] == "203.0.113.7"

    def test_missing_message_is_rejected(self, client, insert_message):
        response = client.post("/api/contact", json={"name": "Maya", "email": "m@example.com"})

        assert response.status_code == 400
        insert_message.assert_not_awaited()


@pytest.mark.unit
class TestListMessages:
    def test_admin_only(self, client, make_headers):
        response = client.get("/api/contact/messages", headers=make_headers("farmer"))

        assert response.status_code == 403

    def test_default_limit(self, client, monkeypatch, admin_headers):
        listing = AsyncMock(return_value=[])
        monkeypatch.setattr(repository, "list_messages", listing)

        response = client.get("/api/contact/messages", headers=admin_headers)

        assert response.json() == {"ok": True, "items": []}
        listing.assert_awaited_once_with(limit=100)

    def test_limit_is_capped(self, client, monkeypatch, admin_headers):
        listing = AsyncMock(return_value=[])
        monkeypatch.setattr(repository, "list_messages", listing)

        client.get("/api/contact/messages", params={"limit": 10_000}, headers=admin_headers)

        listing.assert_awaited_once_with(limit=500)

    @pytest.mark.parametrize("limit, expected", [(None, 100), (0, 100), (-5, 100), (25, 25), (500, 500), (501, 500)])
    def test_clamp_limit(self, limit, expected):
        assert service.clamp_limit(limit) == expected
