"""
Offer business logic.
"""

from __future__ import annotations

from uuid import UUID

from equity_coffee.analytics import service as analytics
from equity_coffee.auth.access import ensure_owner_or_admin
from equity_coffee.auth.security import Identity
from equity_coffee.core.errors import NotFoundError, store_errors
from equity_coffee.core.sql import build_assignments
from equity_coffee.farmer import repository as lot_repository

from . import repository, schemas


async def _ensure_offer_access(offer_id: UUID, user: Identity) -> None:
    buyer_id = await repository.get_offer_buyer(offer_id)
    if buyer_id is None:
        raise NotFoundError("Offer not found")
    ensure_owner_or_admin(buyer_id, user, message="Not your offer")


@store_errors("Failed to load offers")
async def list_offers(
    *,
    lot_id: UUID | None = None,
    buyer_id: UUID | None = None,
    status: str | None = None,
) -> dict:
    offers = await repository.list_offers(lot_id=lot_id, buyer_id=buyer_id, status=status)
    return {"offers": offers}


@store_errors("Failed to create offer")
async def create_offer(payload: schemas.OfferCreate, user: Identity) -> dict:
    if not await lot_repository.lot_exists(payload.lot_id):
        raise NotFoundError("Lot not found")

    offer = await repository.insert_offer(
        lot_id=payload.lot_id,
        buyer_id=user.user_id,
        price_per_kg=payload.price_per_kg,
        quantity_bags=payload.quantity_bags,
        currency=payload.currency,
        incoterm=payload.incoterm,
        message=payload.message,
    )
    await analytics.track_user_action(
        user.user_id,
        "offer_created",
        {"offer_id": offer["id"], "lot_id": payload.lot_id},
    )
    return {"offer": offer}


@store_errors("Failed to update offer")
async def update_offer(offer_id: UUID, payload: schemas.OfferUpdate, user: Identity) -> dict:
    assignments = build_assignments(payload.changes(), schemas.OFFER_UPDATE_COLUMNS, start=2)
    if assignments.is_empty:
        return {"message": "No changes"}

    await _ensure_offer_access(offer_id, user)
    offer = await repository.update_offer(offer_id, assignments)
    if offer is None:
        raise NotFoundError("Offer not found")
    return {"offer": offer}


@store_errors("Failed to delete offer")
async def delete_offer(offer_id: UUID, user: Identity) -> dict:
    await _ensure_offer_access(offer_id, user)
    await repository.delete_offer(offer_id)
    return {"message": "Offer withdrawn"}
