"""
Contract and inventory business logic.

`total_value` is always computed here, at write time, from the quantity,
bag size and price being written; it is never re-derived on read.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timezone
from uuid import UUID

from equity_coffee.analytics import service as analytics
from equity_coffee.auth.access import ensure_owner_or_admin
from equity_coffee.auth.security import Identity
from equity_coffee.core.errors import NotFoundError, ValidationError, store_errors
from equity_coffee.core.sql import build_assignments
from equity_coffee.farmer import repository as lot_repository

from . import repository, schemas


def generate_contract_number() -> str:
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"EC-{today}-{secrets.token_hex(3).upper()}"


@store_errors("Failed to load contracts")
async def list_contracts(user: Identity, *, status: str | None = None, buyer_id: UUID | None = None) -> dict:
    if user.is_admin:
        contracts = await repository.list_contracts(buyer_id=buyer_id, status=status)
    elif user.role == "farmer":
        contracts = await repository.list_contracts(farmer_id=user.user_id, status=status)
    else:
        contracts = await repository.list_contracts(buyer_id=user.user_id, status=status)
    return {"contracts": contracts}


@store_errors("Failed to create contract")
async def create_contract(payload: schemas.ContractCreate, user: Identity) -> dict:
    lot_farmer_id = await lot_repository.get_lot_owner(payload.lot_id)
    if lot_farmer_id is None:
        raise NotFoundError("Lot not found")
    if payload.farmer_id is not None and str(payload.farmer_id) != str(lot_farmer_id):
        raise ValidationError("farmer_id does not match the lot's farmer")

    total_value = schemas.contract_total(payload.quantity_bags, payload.bag_size_kg, payload.price_per_kg)
    contract = await repository.insert_contract(
        contract_number=payload.contract_number or generate_contract_number(),
        lot_id=payload.lot_id,
        farmer_id=lot_farmer_id,
        buyer_id=user.user_id,
        quantity_bags=payload.quantity_bags,
        bag_size_kg=payload.bag_size_kg,
        price_per_kg=payload.price_per_kg,
        currency=payload.currency,
        total_value=total_value,
        notes=payload.notes,
    )
    await analytics.track_user_action(
        user.user_id,
        "contract_created",
        {"contract_id": contract["id"], "total_value": str(total_value)},
    )
    return {"message": "Contract created successfully", "contract": contract}


@store_errors("Failed to update contract")
async def update_contract(contract_id: UUID, payload: schemas.ContractUpdate, user: Identity) -> dict:
    changes = payload.changes()
    if build_assignments(changes, schemas.CONTRACT_UPDATE_COLUMNS).is_empty:
        return {"message": "No changes"}

    terms = await repository.get_contract_terms(contract_id)
    if terms is None:
        raise NotFoundError("Contract not found")
    ensure_owner_or_admin(terms["buyer_id"], user, message="Not your contract")

    if "quantity_bags" in changes or "price_per_kg" in changes:
        changes["total_value"] = schemas.contract_total(
            changes.get("quantity_bags", terms["quantity_bags"]),
            terms["bag_size_kg"],
            changes.get("price_per_kg", terms["price_per_kg"]),
        )

    assignments = build_assignments(changes, schemas.CONTRACT_UPDATE_COLUMNS, start=2)
    contract = await repository.update_contract(contract_id, assignments)
    if contract is None:
        raise NotFoundError("Contract not found")
    return {"message": "Contract updated successfully", "contract": contract}


@store_errors("Failed to load inventory")
async def list_inventory(user: Identity) -> dict:
    return {"inventory": await repository.list_inventory(user.user_id)}


@store_errors("Failed to add inventory item")
async def create_inventory(payload: schemas.InventoryCreate, user: Identity) -> dict:
    if not await repository.contract_exists(payload.contract_id):
        raise NotFoundError("Contract not found")
    if not await lot_repository.lot_exists(payload.lot_id):
        raise NotFoundError("Lot not found")

    item = await repository.insert_inventory(
        roaster_id=user.user_id,
        contract_id=payload.contract_id,
        lot_id=payload.lot_id,
        current_bags=payload.current_bags,
        bag_size_kg=payload.bag_size_kg,
        location=payload.location,
        notes=payload.notes,
    )
    return {"message": "Inventory item added successfully", "inventory": item}


async def _ensure_inventory_access(inventory_id: UUID, user: Identity) -> None:
    owner_id = await repository.get_inventory_owner(inventory_id)
    if owner_id is None:
        raise NotFoundError("Inventory item not found")
    ensure_owner_or_admin(owner_id, user, message="Not your inventory item")


@store_errors("Failed to update inventory item")
async def update_inventory(inventory_id: UUID, payload: schemas.InventoryUpdate, user: Identity) -> dict:
    assignments = build_assignments(payload.changes(), schemas.INVENTORY_UPDATE_COLUMNS, start=2)
    if assignments.is_empty:
        return {"message": "No changes"}

    await _ensure_inventory_access(inventory_id, user)
    item = await repository.update_inventory(inventory_id, assignments)
    if item is None:
        raise NotFoundError("Inventory item not found")
    return {"message": "Inventory item updated successfully", "inventory": item}


@store_errors("Failed to delete inventory item")
async def delete_inventory(inventory_id: UUID, user: Identity) -> dict:
    await _ensure_inventory_access(inventory_id, user)
    await repository.delete_inventory(inventory_id)
    return {"message": "Inventory item deleted successfully", "deleted_id": inventory_id}
