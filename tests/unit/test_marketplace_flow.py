"""
End-to-end trading flow over one in-memory store: a farmer lists and publishes
a lot, a trader finds it and makes an offer, a roaster signs a contract.
"""

from uuid import uuid4

import pytest

from equity_coffee.farmer import repository as lot_repository
from equity_coffee.marketplace import repository as marketplace_repository
from equity_coffee.roaster import repository as contract_repository
from equity_coffee.trader import repository as offer_repository

LOT_BODY = {
    "lotName": "Gesha Lot 7",
    "cropYear": 2024,
    "country": "Panama",
    "cupScore": 91.5,
    "pricePerKg": 14.2,
    "bagsAvailable": 25,
}


class FakeMarket:
    def __init__(self) -> None:
        self.lots: dict = {}
        self.offers: dict = {}
        self.contracts: dict = {}

    # farmer repository
    async def insert_lot(self, *, farmer_id, fields):
        lot = {"id": uuid4(), "farmer_id": farmer_id, "status": "draft", **fields}
        self.lots[lot["id"]] = lot
        return dict(lot)

    async def get_lot_owner(self, lot_id):
        lot = self.lots.get(lot_id)
        return lot["farmer_id"] if lot else None

    async def lot_exists(self, lot_id):
        return lot_id in self.lots

    async def set_lot_status(self, lot_id, status):
        self.lots[lot_id]["status"] = status
        return dict(self.lots[lot_id])

    # marketplace repository
    async def list_listed_lots(self, *, country=None, min_score=None, max_price=None):
        return [
            dict(lot)
            for lot in self.lots.values()
            if lot["status"] == "published"
            and lot["visibility"] == "public"
            and (country is None or lot["country"] == country)
            and (min_score is None or (lot["cup_score"] is not None and lot["cup_score"] >= min_score))
            and (max_price is None or lot["price_per_kg"] is None or lot["price_per_kg"] <= max_price)
        ]

    # trader repository
    async def insert_offer(self, **fields):
        offer = {"id": uuid4(), "status": "pending", **fields}
        self.offers[offer["id"]] = offer
        return dict(offer)

    # roaster repository
    async def insert_contract(self, **fields):
        contract = {"id": uuid4(), "status": "pending", **fields}
        self.contracts[contract["id"]] = contract
        return dict(contract)


@pytest.fixture
def market(monkeypatch) -> FakeMarket:
    store = FakeMarket()
    for name in ("insert_lot", "get_lot_owner", "lot_exists", "set_lot_status"):
        monkeypatch.setattr(lot_repository, name, getattr(store, name))
    monkeypatch.setattr(marketplace_repository, "list_lots", store.list_listed_lots)
    monkeypatch.setattr(offer_repository, "insert_offer", store.insert_offer)
    monkeypatch.setattr(contract_repository, "insert_contract", store.insert_contract)
    return store


@pytest.mark.unit
def test_lot_to_contract(client, market, farmer_headers, farmer_id, make_headers):
    trader_headers = make_headers("trader")
    roaster_headers = make_headers("roaster")

    created = client.post("/api/farmer/lots", json=LOT_BODY, headers=farmer_headers)
    assert created.status_code == 201
    lot = created.json()["lot"]
    assert lot["status"] == "draft"

    # Drafts stay off the marketplace.
    assert client.get("/api/marketplace/lots").json() == {"lots": []}

    published = client.post(f"/api/farmer/lots/{lot['id']}/publish", headers=farmer_headers)
    assert published.json()["lot"]["status"] == "published"

    listing = client.get("/api/marketplace/lots", params={"country": "Panama", "minScore": 90}).json()["lots"]
    assert [item["id"] for item in listing] == [lot["id"]]
    assert listing[0]["cup_score"] == 91.5
    assert listing[0]["price_per_kg"] == 14.2

    offer = client.post(
        "/api/trader/offers",
        json={"lotId": lot["id"], "pricePerKg": 6.5, "quantityBags": 10},
        headers=trader_headers,
    )
    assert offer.status_code == 201
    assert offer.json()["offer"]["status"] == "pending"
    assert offer.json()["offer"]["price_per_kg"] == 6.5

    contract = client.post(
        "/api/roaster/contracts",
        json={"lotId": lot["id"], "quantityBags": 10, "pricePerKg": 6.5},
        headers=roaster_headers,
    )
    assert contract.status_code == 201
    body = contract.json()["contract"]
    assert body["total_value"] == 3900
    assert body["farmer_id"] == str(farmer_id)
    assert body["status"] == "pending"


@pytest.mark.unit
def test_hidden_lot_leaves_the_marketplace(client, market, farmer_headers):
    lot = client.post("/api/farmer/lots", json=LOT_BODY, headers=farmer_headers).json()["lot"]
    client.post(f"/api/farmer/lots/{lot['id']}/publish", headers=farmer_headers)

    client.post(f"/api/farmer/lots/{lot['id']}/hide", headers=farmer_headers)

    assert client.get("/api/marketplace/lots").json() == {"lots": []}
