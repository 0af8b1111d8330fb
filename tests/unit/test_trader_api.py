"""
Tests for the offer endpoints.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from equity_coffee.farmer import repository as lot_repository
from equity_coffee.trader import repository


def _offer_row(**overrides) -> dict:
    row = {
        "id": uuid4(),
        "lot_id": uuid4(),
        "buyer_id": uuid4(),
        "price_per_kg": 6.5,
        "quantity_bags": 10,
        "currency": "USD",
        "incoterm": "FOB",
        "message": None,
        "status": "pending",
    }
    row.update(overrides)
    return row


@pytest.mark.unit
class TestCreateOffer:
    def test_offer_starts_pending(self, client, monkeypatch, make_headers, analytics_insert):
        buyer_id = uuid4()
        lot_id = uuid4()
        insert = AsyncMock(return_value=_offer_row(lot_id=lot_id, buyer_id=buyer_id))
        monkeypatch.setattr(lot_repository, "lot_exists", AsyncMock(return_value=True))
        monkeypatch.setattr(repository, "insert_offer", insert)

        response = client.post(
            "/api/trader/offers",
            json={"lotId": str(lot_id), "pricePerKg": 6.5, "quantityBags": 10, "incoterm": "FOB"},
            headers=make_headers("trader", buyer_id),
        )

        assert response.status_code == 201
        assert response.json()["offer"]["status"] == "pending"
        kwargs = insert.await_args.kwargs
        assert kwargs["buyer_id"] == buyer_id
        assert kwargs["lot_id"] == lot_id
        assert kwargs["currency"] == "USD"
        analytics_insert.assert_awaited_once()

    def test_unknown_lot_is_404(self, client, monkeypatch, make_headers):
        insert = AsyncMock()
        monkeypatch.setattr(lot_repository, "lot_exists", AsyncMock(return_value=False))
        monkeypatch.setattr(repository, "insert_offer", insert)

        response = client.post(
            "/api/trader/offers",
            json={"lotId": str(uuid4()), "pricePerKg": 6.5},
            headers=make_headers("roaster"),
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Lot not found"}
        insert.assert_not_awaited()

    def test_farmer_cannot_make_offers(self, client, farmer_headers):
        response = client.post(
            "/api/trader/offers",
            json={"lotId": str(uuid4()), "pricePerKg": 6.5},
            headers=farmer_headers,
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden: trader/roaster role required"}

    def test_non_positive_price_rejected(self, client, make_headers):
        response = client.post(
            "/api/trader/offers",
            json={"lotId": str(uuid4()), "pricePerKg": 0},
            headers=make_headers("trader"),
        )

        assert response.status_code == 400


@pytest.mark.unit
class TestListOffers:
    def test_requires_authentication(self, client):
        response = client.get("/api/trader/offers")

        assert response.status_code == 401

    def test_filters_are_passed_through(self, client, monkeypatch, make_headers):
        lot_id = uuid4()
        listing = AsyncMock(return_value=[])
        monkeypatch.setattr(repository, "list_offers", listing)

        response = client.get(
            "/api/trader/offers",
            params={"lotId": str(lot_id), "status": "pending"},
            headers=make_headers("farmer"),
        )

        assert response.json() == {"offers": []}
        listing.assert_awaited_once_with(lot_id=lot_id, buyer_id=None, status="pending")


@pytest.mark.unit
class TestChangeOffer:
    def test_buyer_updates_own_offer(self, client, monkeypatch, make_headers):
        buyer_id = uuid4()
        offer_id = uuid4()
        update = AsyncMock(return_value=_offer_row(id=offer_id, price_per_kg=7.0))
        monkeypatch.setattr(repository, "get_offer_buyer", AsyncMock(return_value=buyer_id))
        monkeypatch.setattr(repository, "update_offer", update)

        response = client.put(
            f"/api/trader/offers/{offer_id}",
            json={"pricePerKg": 7.0},
            headers=make_headers("trader", buyer_id),
        )

        assert response.status_code == 200
        assignments = update.await_args.args[1]
        assert assignments.sql == "price_per_kg = $2"

    def test_other_buyer_is_forbidden(self, client, monkeypatch, make_headers):
        update = AsyncMock()
        monkeypatch.setattr(repository, "get_offer_buyer", AsyncMock(return_value=uuid4()))
        monkeypatch.setattr(repository, "update_offer", update)

        response = client.put(
            f"/api/trader/offers/{uuid4()}",
            json={"message": "better price"},
            headers=make_headers("trader"),
        )

        assert response.status_code == 403
        update.assert_not_awaited()

    def test_withdraw_missing_offer(self, client, monkeypatch, make_headers):
        monkeypatch.setattr(repository, "get_offer_buyer", AsyncMock(return_value=None))

        response = client.delete(f"/api/trader/offers/{uuid4()}", headers=make_headers("trader"))

        assert response.status_code == 404

    def test_withdraw_offer(self, client, monkeypatch, make_headers):
        buyer_id = uuid4()
        delete = AsyncMock(return_value=1)
        monkeypatch.setattr(repository, "get_offer_buyer", AsyncMock(return_value=buyer_id))
        monkeypatch.setattr(repository, "delete_offer", delete)

        response = client.delete(f"/api/trader/offers/{uuid4()}", headers=make_headers("roaster", buyer_id))

        assert response.json() == {"message": "Offer withdrawn"}
        delete.assert_awaited_once()
