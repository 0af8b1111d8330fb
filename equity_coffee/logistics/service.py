"""
Shipment business logic.
"""

from __future__ import annotations

from uuid import UUID

from equity_coffee.core.errors import NotFoundError, store_errors
from equity_coffee.core.sql import build_assignments
from equity_coffee.roaster import repository as contract_repository

from . import repository, schemas


@store_errors("Failed to load shipments")
async def list_shipments(*, contract_id: UUID | None = None, status: str | None = None) -> dict:
    return {"shipments": await repository.list_shipments(contract_id=contract_id, status=status)}


@store_errors("Failed to create shipment")
async def create_shipment(payload: schemas.ShipmentCreate) -> dict:
    if not await contract_repository.contract_exists(payload.contract_id):
        raise NotFoundError("Contract not found")
    shipment = await repository.insert_shipment(payload.model_dump())
    return {"shipment": shipment}


@store_errors("Failed to update shipment")
async def update_shipment(shipment_id: UUID, payload: schemas.ShipmentUpdate) -> dict:
    assignments = build_assignments(payload.changes(), schemas.SHIPMENT_UPDATE_COLUMNS, start=2)
    if assignments.is_empty:
        return {"message": "No changes"}

    if not await repository.shipment_exists(shipment_id):
        raise NotFoundError("Shipment not found")
    shipment = await repository.update_shipment(shipment_id, assignments)
    if shipment is None:
        raise NotFoundError("Shipment not found")
    return {"shipment": shipment}
