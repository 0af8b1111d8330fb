"""
Logistics API endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import schemas, service

router = APIRouter(prefix="/api/logistics")

logistics_or_admin = auth_dependencies.require_roles("logistics", "admin")


@router.get("/", response_model=None)
async def root() -> dict:
    return {"message": "Logistics API root"}


@router.get("/shipments", response_model=None)
async def list_shipments(
    contract_id: UUID | None = Query(default=None, alias="contractId"),
    shipment_status: str | None = Query(default=None, alias="status", max_length=30),
    _: Identity = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_shipments(contract_id=contract_id, status=shipment_status)


@router.post("/shipments", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    payload: schemas.ShipmentCreate,
    _: Identity = Depends(logistics_or_admin),
) -> dict:
    return await service.create_shipment(payload)


@router.put("/shipments/{shipment_id}", response_model=None)
async def update_shipment(
    shipment_id: UUID,
    payload: schemas.ShipmentUpdate,
    _: Identity = Depends(logistics_or_admin),
) -> dict:
    return await service.update_shipment(shipment_id, payload)
