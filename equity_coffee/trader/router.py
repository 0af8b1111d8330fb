"""
Trader API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import schemas, service

router = APIRouter(prefix="/api/trader")

buyer_roles = auth_dependencies.require_roles("trader", "roaster", "admin")


@router.get("/", response_model=None)
async def root() -> dict:
    return {"message": "Trader API root"}


@router.get("/offers", response_model=None)
async def list_offers(
    lot_id: UUID | None = Query(default=None, alias="lotId"),
    buyer_id: UUID | None = Query(default=None, alias="buyerId"),
    offer_status: str | None = Query(default=None, alias="status", max_length=30),
    _: Identity = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_offers(lot_id=lot_id, buyer_id=buyer_id, status=offer_status)


@router.post("/offers", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_offer(
    payload: schemas.OfferCreate,
    current_user: Identity = Depends(buyer_roles),
) -> dict:
    return await service.create_offer(payload, current_user)


@router.put("/offers/{offer_id}", response_model=None)
async def update_offer(
    offer_id: UUID,
    payload: schemas.OfferUpdate,
    current_user: Identity = Depends(buyer_roles),
) -> dict:
    return await service.update_offer(offer_id, payload, current_user)


@router.delete("/offers/{offer_id}", response_model=None)
async def delete_offer(offer_id: UUID, current_user: Identity = Depends(buyer_roles)) -> dict:
    return await service.delete_offer(offer_id, current_user)
