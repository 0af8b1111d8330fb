"""
Farmer API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import AliasChoices, Field

from equity_coffee.core.schemas import RequestModel

LotStatus = Literal["draft", "published", "hidden", "booked", "sold"]
Visibility = Literal["public", "private"]

# Columns a lot update may touch, in SET order.
LOT_UPDATE_COLUMNS: tuple[str, ...] = (
    "lot_name",
    "crop_year",
    "country",
    "region",
    "altitude_meters",
    "grade",
    "certification",
    "process",
    "variety",
    "harvest_month",
    "ready_location",
    "tasting_notes",
    "bags_available",
    "bag_size_kg",
    "cup_score",
    "price_per_kg",
    "currency",
    "visibility",
    "status",
)


class LotCreate(RequestModel):
    lot_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("lotName", "lot_name", "name"),
    )
    crop_year: int = Field(..., ge=1900, le=2100)
    country: str = Field(..., min_length=1, max_length=100)
    region: str | None = Field(default=None, max_length=100)
    altitude_meters: int | None = Field(default=None, ge=0, le=9000)
    grade: str | None = Field(default=None, max_length=50)
    certification: str | None = Field(default=None, max_length=100)
    process: str | None = Field(default=None, max_length=50)
    variety: str | None = Field(default=None, max_length=100)
    harvest_month: str | None = Field(default=None, max_length=20)
    ready_location: str | None = Field(default=None, max_length=200)
    tasting_notes: str | None = Field(default=None, max_length=2000)
    bags_available: int = Field(default=0, ge=0)
    bag_size_kg: Decimal = Field(default=Decimal("60"), gt=0)
    cup_score: Decimal | None = Field(default=None, ge=0, le=100)
    price_per_kg: Decimal | None = Field(default=None, ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    visibility: Visibility = "public"
    # Admins may create lots on behalf of a farmer.
    farmer_id: UUID | None = None


class LotUpdate(RequestModel):
    lot_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("lotName", "lot_name", "name"),
    )
    crop_year: int | None = Field(default=None, ge=1900, le=2100)
    country: str | None = Field(default=None, min_length=1, max_length=100)
    region: str | None = Field(default=None, max_length=100)
    altitude_meters: int | None = Field(default=None, ge=0, le=9000)
    grade: str | None = Field(default=None, max_length=50)
    certification: str | None = Field(default=None, max_length=100)
    process: str | None = Field(default=None, max_length=50)
    variety: str | None = Field(default=None, max_length=100)
    harvest_month: str | None = Field(default=None, max_length=20)
    ready_location: str | None = Field(default=None, max_length=200)
    tasting_notes: str | None = Field(default=None, max_length=2000)
    bags_available: int | None = Field(default=None, ge=0)
    bag_size_kg: Decimal | None = Field(default=None, gt=0)
    cup_score: Decimal | None = Field(default=None, ge=0, le=100)
    price_per_kg: Decimal | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    visibility: Visibility | None = None
    status: LotStatus | None = None

    non_nullable_fields = (
        "lot_name",
        "crop_year",
        "country",
        "bags_available",
        "bag_size_kg",
        "currency",
        "visibility",
        "status",
    )
