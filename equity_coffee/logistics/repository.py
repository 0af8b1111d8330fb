"""
Shipment persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from equity_coffee.core import db
from equity_coffee.core.sql import Assignments, QueryParams

SHIPMENT_COLUMNS = """
    id, contract_id, reference, origin_port, destination_port, container_number,
    vessel_name, carrier, etd, eta, status, tracking_url, notes, created_at, updated_at
"""


async def list_shipments(*, contract_id: UUID | None = None, status: str | None = None) -> list[dict[str, Any]]:
    qp = QueryParams()
    if contract_id is not None:
        qp.where("contract_id = {}", contract_id)
    if status:
        qp.where("status = {}", status)

    return await db.fetch_all(
        f"""
        SELECT {SHIPMENT_COLUMNS}
        FROM shipments
        {qp.where_sql()}
        ORDER BY created_at DESC
        """,
        *qp.values,
    )


async def insert_shipment(fields: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO shipments
          (contract_id, reference, origin_port, destination_port, container_number,
           vessel_name, carrier, etd, eta, status, tracking_url, notes)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12)
        RETURNING {SHIPMENT_COLUMNS}
        """,
        fields["contract_id"],
        fields["reference"],
        fields.get("origin_port"),
        fields.get("destination_port"),
        fields.get("container_number"),
        fields.get("vessel_name"),
        fields.get("carrier"),
        fields.get("etd"),
        fields.get("eta"),
        fields["status"],
        fields.get("tracking_url"),
        fields.get("notes"),
    )
    if row is None:
        raise RuntimeError("Failed to insert shipment.")
    return row


async def shipment_exists(shipment_id: UUID) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM shipments WHERE id = $1", shipment_id)
    return row is not None


async def update_shipment(shipment_id: UUID, assignments: Assignments) -> dict[str, Any] | None:
    # Placeholders in `assignments` start at $2; $1 is the shipment id.
    return await db.fetch_one(
        f"""
        UPDATE shipments
        SET {assignments.sql}, updated_at = NOW()
        WHERE id = $1
        RETURNING {SHIPMENT_COLUMNS}
        """,
        shipment_id,
        *assignments.params,
    )
