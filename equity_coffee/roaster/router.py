"""
Roaster API endpoints: contracts and green-coffee inventory.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import schemas, service

router = APIRouter(prefix="/api/roaster")

contract_buyers = auth_dependencies.require_roles("roaster", "trader", "admin")
inventory_holders = auth_dependencies.require_roles("roaster", "admin")


@router.get("/", response_model=None)
async def root() -> dict:
    return {"message": "Roaster API root"}


@router.get("/contracts", response_model=None)
async def list_contracts(
    contract_status: str | None = Query(default=None, alias="status", max_length=30),
    buyer_id: UUID | None = Query(default=None, alias="buyerId"),
    current_user: Identity = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Buyers see their own contracts, farmers those on their lots, admins all.
    """
    return await service.list_contracts(current_user, status=contract_status, buyer_id=buyer_id)


@router.post("/contracts", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_contract(
    payload: schemas.ContractCreate,
    current_user: Identity = Depends(contract_buyers),
) -> dict:
    return await service.create_contract(payload, current_user)


@router.put("/contracts/{contract_id}", response_model=None)
async def update_contract(
    contract_id: UUID,
    payload: schemas.ContractUpdate,
    current_user: Identity = Depends(contract_buyers),
) -> dict:
    return await service.update_contract(contract_id, payload, current_user)


@router.get("/inventory", response_model=None)
async def list_inventory(current_user: Identity = Depends(inventory_holders)) -> dict:
    return await service.list_inventory(current_user)


@router.post("/inventory", response_model=None, status_code=status.HTTP_201_CREATED)
async def create_inventory(
    payload: schemas.InventoryCreate,
    current_user: Identity = Depends(inventory_holders),
) -> dict:
    return await service.create_inventory(payload, current_user)


@router.put("/inventory/{inventory_id}", response_model=None)
async def update_inventory(
    inventory_id: UUID,
    payload: schemas.InventoryUpdate,
    current_user: Identity = Depends(inventory_holders),
) -> dict:
    return await service.update_inventory(inventory_id, payload, current_user)


@router.delete("/inventory/{inventory_id}", response_model=None)
async def delete_inventory(inventory_id: UUID, current_user: Identity = Depends(inventory_holders)) -> dict:
    return await service.delete_inventory(inventory_id, current_user)
