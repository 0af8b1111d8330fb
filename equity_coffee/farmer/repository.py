"""
Coffee lot persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from equity_coffee.core import db
from equity_coffee.core.sql import Assignments, QueryParams

LOT_COLUMNS = """
    id, farmer_id, lot_name, crop_year, country, region, altitude_meters,
    grade, certification, process, variety, harvest_month, ready_location,
    tasting_notes, bags_available, bag_size_kg, cup_score, price_per_kg, currency,
    status, visibility, created_at, updated_at
"""


async def list_lots(*, farmer_id: UUID | None = None, status: str | None = None) -> list[dict[str, Any]]:
    qp = QueryParams()
    if farmer_id is not None:
        qp.where("farmer_id = {}", farmer_id)
    if status:
        qp.where("status = {}", status)

    return await db.fetch_all(
        f"""
        SELECT {LOT_COLUMNS}
        FROM coffee_lots
        {qp.where_sql()}
        ORDER BY created_at DESC NULLS LAST
        """,
        *qp.values,
    )


async def get_lot(lot_id: UUID) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {LOT_COLUMNS}
        FROM coffee_lots
        WHERE id = $1
        """,
        lot_id,
    )


async def get_lot_owner(lot_id: UUID) -> UUID | None:
    row = await db.fetch_one("SELECT farmer_id FROM coffee_lots WHERE id = $1", lot_id)
    return row["farmer_id"] if row is not None else None


async def lot_exists(lot_id: UUID) -> bool:
    row = await db.fetch_one("SELECT 1 AS ok FROM coffee_lots WHERE id = $1", lot_id)
    return row is not None


async def insert_lot(*, farmer_id: UUID, fields: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO coffee_lots
          (farmer_id, lot_name, crop_year, country, region, altitude_meters,
           grade, certification, process, variety, harvest_month, ready_location,
           tasting_notes, bags_available, bag_size_kg, cup_score, price_per_kg, currency,
           status, visibility)
        VALUES
          ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15, $16, $17, $18,
           'draft', $19)
        RETURNING {LOT_COLUMNS}
        """,
        farmer_id,
        fields["lot_name"],
        fields["crop_year"],
        fields["country"],
        fields.get("region"),
        fields.get("altitude_meters"),
        fields.get("grade"),
        fields.get("certification"),
        fields.get("process"),
        fields.get("variety"),
        fields.get("harvest_month"),
        fields.get("ready_location"),
        fields.get("tasting_notes"),
        fields["bags_available"],
        fields["bag_size_kg"],
        fields.get("cup_score"),
        fields.get("price_per_kg"),
        fields["currency"],
        fields["visibility"],
    )
    if row is None:
        raise RuntimeError("Failed to insert lot.")
    return row


async def update_lot(lot_id: UUID, assignments: Assignments) -> dict[str, Any] | None:
    # Placeholders in `assignments` start at $2; $1 is the lot id.
    return await db.fetch_one(
        f"""
        UPDATE coffee_lots
        SET {assignments.sql}, updated_at = CURRENT_TIMESTAMP
        WHERE id = $1
        RETURNING {LOT_COLUMNS}
        """,
        lot_id,
        *assignments.params,
    )


async def set_lot_status(lot_id: UUID, status: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE coffee_lots
        SET status = $1, updated_at = CURRENT_TIMESTAMP
        WHERE id = $2
        RETURNING {LOT_COLUMNS}
        """,
        status,
        lot_id,
    )


async def delete_lot(lot_id: UUID) -> int:
    return await db.execute("DELETE FROM coffee_lots WHERE id = $1", lot_id)


async def list_offers_for_farmer(
    *,
    farmer_id: UUID | None,
    status: str | None = None,
) -> list[dict[str, Any]]:
    qp = QueryParams()
    if farmer_id is not None:
        qp.where("cl.farmer_id = {}", farmer_id)
    if status:
        qp.where("o.status = {}", status)

    return await db.fetch_all(
        f"""
        SELECT
          o.id, o.lot_id, cl.lot_name, o.buyer_id, u.company_name AS buyer_company,
          o.price_per_kg, o.quantity_bags, o.currency, o.incoterm, o.message,
          o.status, o.created_at, o.updated_at
        FROM offers o
        JOIN coffee_lots cl ON cl.id = o.lot_id
        JOIN users u ON u.id = o.buyer_id
        {qp.where_sql()}
        ORDER BY o.created_at DESC
        """,
        *qp.values,
    )


async def get_offer_lot_owner(offer_id: UUID) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT o.id, cl.farmer_id
        FROM offers o
        JOIN coffee_lots cl ON cl.id = o.lot_id
        WHERE o.id = $1
        """,
        offer_id,
    )


async def set_offer_status(offer_id: UUID, status: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        UPDATE offers
        SET status = $1, updated_at = CURRENT_TIMESTAMP
        WHERE id = $2
        RETURNING id, lot_id, buyer_id, price_per_kg, quantity_bags, currency,
                  incoterm, message, status, created_at, updated_at
        """,
        status,
        offer_id,
    )


async def dashboard_stats(farmer_id: UUID) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        SELECT
          COUNT(*) FILTER (WHERE status IN ('published', 'booked')) AS active_lots,
          COUNT(*) FILTER (WHERE status = 'draft') AS draft_lots,
          COUNT(*) FILTER (WHERE status = 'published') AS published_lots,
          COALESCE(SUM(bags_available), 0) AS total_bags
        FROM coffee_lots
        WHERE farmer_id = $1
        """,
        farmer_id,
    )
    return row or {}


async def recent_offers(farmer_id: UUID, *, limit: int = 5) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT o.id, o.buyer_id, u.company_name, o.lot_id, cl.lot_name,
               o.price_per_kg, o.quantity_bags, o.status, o.created_at
        FROM offers o
        JOIN users u ON u.id = o.buyer_id
        JOIN coffee_lots cl ON cl.id = o.lot_id
        WHERE cl.farmer_id = $1
        ORDER BY o.created_at DESC
        LIMIT $2
        """,
        farmer_id,
        limit,
    )


async def recent_contracts(farmer_id: UUID, *, limit: int = 5) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT c.id, c.contract_number, u.company_name AS buyer_name,
               cl.lot_name, c.quantity_bags, c.total_value, c.status
        FROM contracts c
        JOIN users u ON u.id = c.buyer_id
        JOIN coffee_lots cl ON cl.id = c.lot_id
        WHERE c.farmer_id = $1
        ORDER BY c.created_at DESC
        LIMIT $2
        """,
        farmer_id,
        limit,
    )
