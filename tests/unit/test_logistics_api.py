"""
Tests for the shipment endpoints.
"""

from datetime import date
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from equity_coffee.logistics import repository
from equity_coffee.roaster import repository as contract_repository


@pytest.mark.unit
class TestShipments:
    def test_create_defaults_to_booked(self, client, monkeypatch, make_headers):
        insert = AsyncMock(side_effect=lambda fields: {"id": uuid4(), **fields})
        monkeypatch.setattr(contract_repository, "contract_exists", AsyncMock(return_value=True))
        monkeypatch.setattr(repository, "insert_shipment", insert)

        response = client.post(
            "/api/logistics/shipments",
            json={"contractId": str(uuid4()), "reference": "SHP-1", "etd": "2024-12-01"},
            headers=make_headers("logistics"),
        )

        assert response.status_code == 201
        shipment = response.json()["shipment"]
        assert shipment["status"] == "booked"
        assert shipment["etd"] == "2024-12-01"
        assert insert.await_args.args[0]["etd"] == date(2024, 12, 1)

    def test_create_for_unknown_contract(self, client, monkeypatch, make_headers):
        monkeypatch.setattr(contract_repository, "contract_exists", AsyncMock(return_value=False))

        response = client.post(
            "/api/logistics/shipments",
            json={"contractId": str(uuid4()), "reference": "SHP-1"},
            headers=make_headers("logistics"),
        )

        assert response.status_code == 404
        assert response.json() == {"message": "Contract not found"}

    def test_invalid_date_is_rejected(self, client, make_headers):
        response = client.post(
            "/api/logistics/shipments",
            json={"contractId": str(uuid4()), "reference": "SHP-1", "eta": "next week"},
            headers=make_headers("logistics"),
        )

        assert response.status_code == 400

    def test_trader_cannot_create(self, client, make_headers):
        response = client.post(
            "/api/logistics/shipments",
            json={"contractId": str(uuid4()), "reference": "SHP-1"},
            headers=make_headers("trader"),
        )

        assert response.status_code == 403

    def test_update_missing_shipment(self, client, monkeypatch, make_headers):
        update = AsyncMock()
        monkeypatch.setattr(repository, "shipment_exists", AsyncMock(return_value=False))
        monkeypatch.setattr(repository, "update_shipment", update)

        response = client.put(
            f"/api/logistics/shipments/{uuid4()}",
            json={"status": "in_transit"},
            headers=make_headers("logistics"),
        )

        assert response.status_code == 404
        update.assert_not_awaited()

    def test_update_shipment(self, client, monkeypatch, make_headers):
        update = AsyncMock(return_value={"id": uuid4(), "status": "in_transit"})
        monkeypatch.setattr(repository, "shipment_exists", AsyncMock(return_value=True))
        monkeypatch.setattr(repository, "update_shipment", update)

        response = client.put(
            f"/api/logistics/shipments/{uuid4()}",
            json={"status": "in_transit", "vesselName": "MSC Aurora"},
            headers=make_headers("admin"),
        )

        assert response.status_code == 200
        assert update.await_args.args[1].sql == "vessel_name = $2, status = $3"

    def test_list_requires_authentication(self, client):
        assert client.get("/api/logistics/shipments").status_code == 401

    def test_list_with_contract_filter(self, client, monkeypatch, make_headers):
        contract_id = uuid4()
        listing = AsyncMock(return_value=[])
        monkeypatch.setattr(repository, "list_shipments", listing)

        response = client.get(
            "/api/logistics/shipments",
            params={"contractId": str(contract_id)},
            headers=make_headers("roaster"),
        )

        assert response.json() == {"shipments": []}
        listing.assert_awaited_once_with(contract_id=contract_id, status=None)
