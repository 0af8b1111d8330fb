"""
Farmer API endpoints: lots, status changes, offers on own lots, dashboard.
"""

from __future__ import annotations

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import schemas, service

# Routes return raw row dicts with response_model=None so NUMERIC columns are
# rendered by jsonable_encoder as JSON numbers.
router = APIRouter(prefix="/api/farmer")

farmer_or_admin = auth_dependencies.require_roles("farmer", "admin")


@router.get("/", response_model=None)
async def root() -> dict:
    return {"message": "Farmer API root"}


@router.get("/dashboard", response_model=None)
async def dashboard(current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.dashboard(current_user)


@router.get("/lots", response_model=None)
async def list_lots(
    lot_status: schemas.LotStatus | None = Query(default=None, alias="status"),
    farmer_id: UUID | None = Query(default=None, alias="farmerId"),
    current_user: Identity = Depends(farmer_or_admin),
) -> dict:
    """
    Lots owned by the caller; admins see every lot, optionally narrowed by farmerId.
    """
    return await service.list_lots(current_user, status=lot_status, farmer_id=farmer_id)


@router.post("/lots", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_lot(
    payload: schemas.LotCreate,
    current_user: Identity = Depends(farmer_or_admin),
) -> dict:
    return await service.create_lot(payload, current_user)


@router.get("/lots/{lot_id}", response_model=None)
async def get_lot(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.get_lot(lot_id, current_user)


@router.put("/lots/{lot_id}", response_model=None)
async def update_lot(
    lot_id: UUID,
    payload: schemas.LotUpdate,
    current_user: Identity = Depends(farmer_or_admin),
) -> dict:
    return await service.update_lot(lot_id, payload, current_user)


@router.delete("/lots/{lot_id}", response_model=None)
async def delete_lot(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.delete_lot(lot_id, current_user)


@router.post("/lots/{lot_id}/publish", response_model=None)
async def publish_lot(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.set_lot_status(lot_id, service.STATUS_ACTIONS["publish"], current_user)


@router.post("/lots/{lot_id}/unpublish", response_model=None)
async def unpublish_lot(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.set_lot_status(lot_id, service.STATUS_ACTIONS["unpublish"], current_user)


@router.post("/lots/{lot_id}/hide", response_model=None)
async def hide_lot(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.set_lot_status(lot_id, service.STATUS_ACTIONS["hide"], current_user)


@router.post("/lots/{lot_id}/mark-booked", response_model=None)
async def mark_lot_booked(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.set_lot_status(lot_id, service.STATUS_ACTIONS["mark-booked"], current_user)


@router.post("/lots/{lot_id}/mark-sold", response_model=None)
async def mark_lot_sold(lot_id: UUID, current_user: Identity = Depends(farmer_or_admin)) -> dict:
    return await service.set_lot_status(lot_id, service.STATUS_ACTIONS["mark-sold"], current_user)


@router.get("/offers", response_model=None)
async def list_offers(
    offer_status: str | None = Query(default=None, alias="status", max_length=30),
    current_user: Identity = Depends(farmer_or_admin),
) -> dict:
    return await service.list_offers(current_user, status=offer_status)


@router.post("/offers/{offer_id}/{decision}", response_model=None)
async def respond_to_offer(
    offer_id: UUID,
    decision: Literal["accept", "reject"],
    current_user: Identity = Depends(farmer_or_admin),
) -> dict:
    new_status = "accepted" if decision == "accept" else "rejected"
    return await service.respond_to_offer(offer_id, new_status, current_user)
