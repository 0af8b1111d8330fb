"""
Tests for the public marketplace listing.
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from equity_coffee.core import db


@pytest.fixture
def fetch_all(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=[])
    monkeypatch.setattr(db, "fetch_all", mock)
    return mock


@pytest.mark.unit
class TestMarketplaceListing:
    def test_no_auth_needed(self, client, fetch_all):
        response = client.get("/api/marketplace/lots")

        assert response.status_code == 200
        assert response.json() == {"lots": []}

    def test_only_published_public_lots(self, client, fetch_all):
        client.get("/api/marketplace/lots")

        sql, *params = fetch_all.await_args.args
        assert "cl.status = $1" in sql
        assert "cl.visibility = $2" in sql
        assert params == ["published", "public"]

    def test_filters_are_parameterised(self, client, fetch_all):
        client.get(
            "/api/marketplace/lots",
            params={"country": "Ethiopia", "minScore": "85", "maxPrice": "9.5"},
        )

        sql, *params = fetch_all.await_args.args
        assert "cl.country = $3" in sql
        assert "cl.cup_score >= $4" in sql
        assert "(cl.price_per_kg IS NULL OR cl.price_per_kg <= $5)" in sql
        assert "Ethiopia" not in sql
        assert params == ["published", "public", "Ethiopia", Decimal("85"), Decimal("9.5")]

    def test_filter_cannot_widen_visibility(self, client, fetch_all):
        client.get("/api/marketplace/lots", params={"country": "x' OR '1'='1"})

        sql, *params = fetch_all.await_args.args
        assert params[:2] == ["published", "public"]
        assert "OR '1'='1" not in sql

    def test_blank_country_is_ignored(self, client, fetch_all):
        client.get("/api/marketplace/lots", params={"country": "  "})

        _, *params = fetch_all.await_args.args
        assert params == ["published", "public"]

    def test_out_of_range_score(self, client, fetch_all):
        response = client.get("/api/marketplace/lots", params={"minScore": "150"})

        assert response.status_code == 400
        fetch_all.assert_not_awaited()


@pytest.mark.unit
class TestMarketplaceLot:
    def test_unlisted_lot_is_404(self, client, monkeypatch):
        fetch_one = AsyncMock(return_value=None)
        monkeypatch.setattr(db, "fetch_one", fetch_one)
        lot_id = uuid4()

        response = client.get(f"/api/marketplace/lots/{lot_id}")

        assert response.status_code == 404
        _, *params = fetch_one.await_args.args
        assert params == ["published", "public", lot_id]
