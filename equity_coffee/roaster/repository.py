"""
Contract and roaster inventory persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from equity_coffee.core import db
from equity_coffee.core.sql import Assignments, QueryParams

CONTRACT_COLUMNS = """
    id, contract_number, lot_id, farmer_id, buyer_id, quantity_bags, bag_size_kg,
    price_per_kg, currency, total_value, status, contract_date, notes,
    created_at, updated_at
"""

INVENTORY_COLUMNS = """
    id, roaster_id, contract_id, lot_id, current_bags, bag_size_kg, location,
    notes, created_at, updated_at
"""


async def list_contracts(
    *,
    buyer_id: UUID | None = None,
    farmer_id: UUID | None = None,
    status: str | None = None,
) -> list[dict[str, Any]]:
    qp = QueryParams()
    if buyer_id is not None:
        qp.where("buyer_id = {}", buyer_id)
    if farmer_id is not None:
        qp.where("farmer_id = {}", farmer_id)
    if status:
        qp.where("status = {}", status)

    return await db.fetch_all(
        f"""
        SELECT {CONTRACT_COLUMNS}
        FROM contracts
        {qp.where_sql()}
        ORDER BY contract_date DESC NULLS LAST, created_at DESC
        """,
        *qp.values,
    )


async def get_contract_terms(contract_id: UUID) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, buyer_id, quantity_bags, bag_size_kg, price_per_kg
        FROM contracts
        WHERE id = $1
        """,
        contract_id,
    )


async def contract_exists(contract_id: UUID) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM contracts WHERE id = $1", contract_id)
    return row is not None


async def insert_contract(
    *,
    contract_number: str,
    lot_id: UUID,
    farmer_id: UUID,
    buyer_id: UUID,
    quantity_bags: int,
    bag_size_kg: Decimal,
    price_per_kg: Decimal,
    currency: str,
    total_value: Decimal,
    notes: str,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO contracts
          (contract_number, lot_id, farmer_id, buyer_id, quantity_bags,
           bag_size_kg, price_per_kg, currency, total_value, status, notes)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, 'pending', $10)
        RETURNING {CONTRACT_COLUMNS}
        """,
        contract_number,
        lot_id,
        farmer_id,
        buyer_id,
        quantity_bags,
        bag_size_kg,
        price_per_kg,
        currency,
        total_value,
        notes,
    )
    if row is None:
        raise RuntimeError("Failed to insert contract.")
    return row


async def update_contract(contract_id: UUID, assignments: Assignments) -> dict[str, Any] | None:
    # Placeholders in `assignments` start at $2; $1 is the contract id.
    return await db.fetch_one(
        f"""
        UPDATE contracts
        SET {assignments.sql}, updated_at = NOW()
        WHERE id = $1
        RETURNING {CONTRACT_COLUMNS}
        """,
        contract_id,
        *assignments.params,
    )


async def list_inventory(roaster_id: UUID) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {INVENTORY_COLUMNS}
        FROM roaster_inventory
        WHERE roaster_id = $1
        ORDER BY created_at DESC
        """,
        roaster_id,
    )


async def get_inventory_owner(inventory_id: UUID) -> UUID | None:
    row = await db.fetch_one("SELECT roaster_id FROM roaster_inventory WHERE id = $1", inventory_id)
    return row["roaster_id"] if row is not None else None


async def insert_inventory(
    *,
    roaster_id: UUID,
    contract_id: UUID,
    lot_id: UUID,
    current_bags: int,
    bag_size_kg: Decimal,
    location: str | None,
    notes: str,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO roaster_inventory
          (roaster_id, contract_id, lot_id, current_bags, bag_size_kg, location, notes)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING {INVENTORY_COLUMNS}
        """,
        roaster_id,
        contract_id,
        lot_id,
        current_bags,
        bag_size_kg,
        location,
        notes,
    )
    if row is None:
        raise RuntimeError("Failed to insert inventory item.")
    return row


async def update_inventory(inventory_id: UUID, assignments: Assignments) -> dict[str, Any] | None:
    # Placeholders in `assignments` start at $2; $1 is the inventory id.
    return await db.fetch_one(
        f"""
        UPDATE roaster_inventory
        SET {assignments.sql}, updated_at = NOW()
        WHERE id = $1
        RETURNING {INVENTORY_COLUMNS}
        """,
        inventory_id,
        *assignments.params,
    )


async def delete_inventory(inventory_id: UUID) -> int:
    return await db.execute("DELETE FROM roaster_inventory WHERE id = $1", inventory_id)
