"""
Marketplace API endpoints (public, no auth).
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Query

from . import service

router = APIRouter(prefix="/api/marketplace")


@router.get("/lots", response_model=None)
async def list_lots(
    country: str | None = Query(default=None, max_length=100),
    min_score: Decimal | None = Query(default=None, alias="minScore", ge=0, le=100),
    max_price: Decimal | None = Query(default=None, alias="maxPrice", ge=0),
) -> dict:
    """
    Published, public lots only. Optional filters: country, minScore, maxPrice.
    """
    return await service.list_lots(country=country, min_score=min_score, max_price=max_price)


@router.get("/lots/{lot_id}", response_model=None)
async def get_lot(lot_id: UUID) -> dict:
    return await service.get_lot(lot_id)
