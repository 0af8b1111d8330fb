"""
Trader API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import Field

from equity_coffee.core.schemas import RequestModel

OFFER_UPDATE_COLUMNS: tuple[str, ...] = (
    "price_per_kg",
    "quantity_bags",
    "currency",
    "incoterm",
    "message",
    "status",
)


class OfferCreate(RequestModel):
    lot_id: UUID
    price_per_kg: Decimal = Field(..., gt=0)
    quantity_bags: int | None = Field(default=None, gt=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    incoterm: str | None = Field(default=None, max_length=20)
    message: str | None = Field(default=None, max_length=2000)


class OfferUpdate(RequestModel):
    price_per_kg: Decimal | None = Field(default=None, gt=0)
    quantity_bags: int | None = Field(default=None, gt=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    incoterm: str | None = Field(default=None, max_length=20)
    message: str | None = Field(default=None, max_length=2000)
    status: str | None = Field(default=None, min_length=1, max_length=30)

    non_nullable_fields = ("price_per_kg", "currency", "status")
