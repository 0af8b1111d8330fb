"""
Farmer business logic: lot ownership, partial updates and status changes.

Status changes are caller-directed; no transition table is enforced, so e.g.
a draft lot can be marked sold directly.
"""

from __future__ import annotations

from uuid import UUID

from equity_coffee.analytics import service as analytics
from equity_coffee.auth import repository as user_repository
from equity_coffee.auth.access import ensure_owner_or_admin
from equity_coffee.auth.security import Identity
from equity_coffee.core.errors import NotFoundError, store_errors
from equity_coffee.core.sql import build_assignments

from . import repository, schemas

NO_CHANGES = {"message": "No changes"}

# Endpoint action -> resulting lot status.
STATUS_ACTIONS: dict[str, str] = {
    "publish": "published",
    "unpublish": "draft",
    "hide": "hidden",
    "mark-booked": "booked",
    "mark-sold": "sold",
}


async def _ensure_lot_access(lot_id: UUID, user: Identity) -> None:
    # Existence first, then ownership: a missing lot is 404 even for non-owners.
    owner_id = await repository.get_lot_owner(lot_id)
    if owner_id is None:
        raise NotFoundError("Lot not found")
    ensure_owner_or_admin(owner_id, user, message="Not your lot")


@store_errors("Failed to load lots")
async def list_lots(user: Identity, *, status: str | None = None, farmer_id: UUID | None = None) -> dict:
    if user.is_admin:
        scope = farmer_id
    else:
        scope = user.user_id
    lots = await repository.list_lots(farmer_id=scope, status=status)
    return {"lots": lots}


@store_errors("Failed to load lot")
async def get_lot(lot_id: UUID, user: Identity) -> dict:
    lot = await repository.get_lot(lot_id)
    if lot is None:
        raise NotFoundError("Lot not found")
    ensure_owner_or_admin(lot["farmer_id"], user, message="Not your lot")
    return {"lot": lot}


@store_errors("Failed to create lot")
async def create_lot(payload: schemas.LotCreate, user: Identity) -> dict:
    farmer_id = payload.farmer_id if (user.is_admin and payload.farmer_id) else user.user_id
    if farmer_id != user.user_id and await user_repository.get_user_by_id(farmer_id) is None:
        raise NotFoundError("Farmer not found")
    fields = payload.model_dump(exclude={"farmer_id"})
    lot = await repository.insert_lot(farmer_id=farmer_id, fields=fields)
    await analytics.track_user_action(user.user_id, "lot_created", {"lot_id": lot["id"]})
    return {"lot": lot}


@store_errors("Failed to update lot")
async def update_lot(lot_id: UUID, payload: schemas.LotUpdate, user: Identity) -> dict:
    assignments = build_assignments(payload.changes(), schemas.LOT_UPDATE_COLUMNS, start=2)
    if assignments.is_empty:
        return dict(NO_CHANGES)

    await _ensure_lot_access(lot_id, user)
    lot = await repository.update_lot(lot_id, assignments)
    if lot is None:
        raise NotFoundError("Lot not found")
    return {"lot": lot}


@store_errors("Failed to delete lot")
async def delete_lot(lot_id: UUID, user: Identity) -> dict:
    await _ensure_lot_access(lot_id, user)
    await repository.delete_lot(lot_id)
    return {"message": "Lot deleted"}


@store_errors("Failed to update status")
async def set_lot_status(lot_id: UUID, status: str, user: Identity) -> dict:
    await _ensure_lot_access(lot_id, user)
    lot = await repository.set_lot_status(lot_id, status)
    if lot is None:
        raise NotFoundError("Lot not found")
    return {"lot": lot}


@store_errors("Failed to load offers")
async def list_offers(user: Identity, *, status: str | None = None) -> dict:
    scope = None if user.is_admin else user.user_id
    offers = await repository.list_offers_for_farmer(farmer_id=scope, status=status)
    return {"offers": offers}


@store_errors("Failed to update offer")
async def respond_to_offer(offer_id: UUID, status: str, user: Identity) -> dict:
    row = await repository.get_offer_lot_owner(offer_id)
    if row is None:
        raise NotFoundError("Offer not found")
    ensure_owner_or_admin(row["farmer_id"], user, message="Not an offer on your lot")
    offer = await repository.set_offer_status(offer_id, status)
    if offer is None:
        raise NotFoundError("Offer not found")
    return {"offer": offer}


@store_errors("Failed to load dashboard data")
async def dashboard(user: Identity) -> dict:
    stats = await repository.dashboard_stats(user.user_id)
    return {
        "stats": {
            "active_lots": int(stats.get("active_lots") or 0),
            "draft_lots": int(stats.get("draft_lots") or 0),
            "published_lots": int(stats.get("published_lots") or 0),
            "total_bags": int(stats.get("total_bags") or 0),
        },
        "recent_offers": await repository.recent_offers(user.user_id),
        "recent_contracts": await repository.recent_contracts(user.user_id),
    }
