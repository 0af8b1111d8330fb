"""
Roaster API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import Field

from equity_coffee.core.schemas import RequestModel

DEFAULT_BAG_SIZE_KG = Decimal("60")

CONTRACT_UPDATE_COLUMNS: tuple[str, ...] = (
    "status",
    "notes",
    "quantity_bags",
    "price_per_kg",
    "total_value",
)

INVENTORY_UPDATE_COLUMNS: tuple[str, ...] = (
    "current_bags",
    "location",
    "notes",
)


class ContractCreate(RequestModel):
    contract_number: str | None = Field(default=None, min_length=1, max_length=50)
    lot_id: UUID
    # Defaults to the lot's farmer.
    farmer_id: UUID | None = None
    quantity_bags: int = Field(..., gt=0)
    bag_size_kg: Decimal = Field(default=DEFAULT_BAG_SIZE_KG, gt=0)
    price_per_kg: Decimal = Field(..., gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    notes: str = Field(default="", max_length=4000)


class ContractUpdate(RequestModel):
    status: str | None = Field(default=None, min_length=1, max_length=30)
    notes: str | None = Field(default=None, max_length=4000)
    quantity_bags: int | None = Field(default=None, gt=0)
    price_per_kg: Decimal | None = Field(default=None, gt=0)

    non_nullable_fields = ("status", "quantity_bags", "price_per_kg")


class InventoryCreate(RequestModel):
    contract_id: UUID
    lot_id: UUID
    current_bags: int = Field(..., ge=0)
    bag_size_kg: Decimal = Field(default=DEFAULT_BAG_SIZE_KG, gt=0)
    location: str | None = Field(default=None, max_length=200)
    notes: str = Field(default="", max_length=4000)


class InventoryUpdate(RequestModel):
    current_bags: int | None = Field(default=None, ge=0)
    location: str | None = Field(default=None, max_length=200)
    notes: str | None = Field(default=None, max_length=4000)

    non_nullable_fields = ("current_bags",)


def contract_total(quantity_bags: int, bag_size_kg: Decimal, price_per_kg: Decimal) -> Decimal:
    return Decimal(quantity_bags) * Decimal(bag_size_kg) * Decimal(price_per_kg)
