"""
Offer persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from equity_coffee.core import db
from equity_coffee.core.sql import Assignments, QueryParams

OFFER_COLUMNS = """
    id, lot_id, buyer_id, price_per_kg, quantity_bags, currency, incoterm,
    message, status, created_at, updated_at
"""


async def list_offers(
    *,
    lot_id: UUID | None = None,
    buyer_id: UUID | None = None,
    status: str | None = None,
) -> list[dict[str, Any]]:
    qp = QueryParams()
    if lot_id is not None:
        qp.where("lot_id = {}", lot_id)
    if buyer_id is not None:
        qp.where("buyer_id = {}", buyer_id)
    if status:
        qp.where("status = {}", status)

    return await db.fetch_all(
        f"""
        SELECT {OFFER_COLUMNS}
        FROM offers
        {qp.where_sql()}
        ORDER BY created_at DESC
        """,
        *qp.values,
    )


async def insert_offer(
    *,
    lot_id: UUID,
    buyer_id: UUID,
    price_per_kg: Any,
    quantity_bags: int | None,
    currency: str,
    incoterm: str | None,
    message: str | None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO offers (lot_id, buyer_id, price_per_kg, quantity_bags, currency, incoterm, message, status)
        VALUES ($1, $2, $3, $4, $5, $6, $7, 'pending')
        RETURNING {OFFER_COLUMNS}
        """,
        lot_id,
        buyer_id,
        price_per_kg,
        quantity_bags,
        currency,
        incoterm,
        message,
    )
    if row is None:
        raise RuntimeError("Failed to insert offer.")
    return row


async def get_offer_buyer(offer_id: UUID) -> UUID | None:
    row = await db.fetch_one("SELECT buyer_id FROM offers WHERE id = $1", offer_id)
    return row["buyer_id"] if row is not None else None


async def update_offer(offer_id: UUID, assignments: Assignments) -> dict[str, Any] | None:
    # Placeholders in `assignments` start at $2; $1 is the offer id.
    return await db.fetch_one(
        f"""
        UPDATE offers
        SET {assignments.sql}, updated_at = CURRENT_TIMESTAMP
        WHERE id = $1
        RETURNING {OFFER_COLUMNS}
        """,
        offer_id,
        *assignments.params,
    )


async def delete_offer(offer_id: UUID) -> int:
    return await db.execute("DELETE FROM offers WHERE id = $1", offer_id)
