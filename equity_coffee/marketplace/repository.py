"""
Marketplace SQL (raw).

Only lots that are both published and public are ever listed; caller filters
are appended as extra AND clauses with their own parameters.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from uuid import UUID

from equity_coffee.core import db
from equity_coffee.core.sql import QueryParams

LISTING_SELECT = """
    SELECT
      cl.id,
      cl.lot_name,
      cl.crop_year,
      cl.country,
      cl.region,
      cl.altitude_meters,
      cl.grade,
      cl.certification,
      cl.process,
      cl.variety,
      cl.harvest_month,
      cl.ready_location,
      cl.tasting_notes,
      cl.bags_available,
      cl.bag_size_kg,
      cl.cup_score,
      cl.price_per_kg,
      cl.currency,
      cl.status,
      cl.visibility,
      cl.created_at,
      u.id AS farmer_id,
      u.company_name AS farmer_company,
      u.first_name AS farmer_first_name,
      u.last_name AS farmer_last_name,
      u.country AS farmer_country
    FROM coffee_lots cl
    JOIN users u ON u.id = cl.farmer_id
"""


def _listed_lots() -> QueryParams:
    qp = QueryParams()
    qp.where("cl.status = {}", "published")
    qp.where("cl.visibility = {}", "public")
    return qp


async def list_lots(
    *,
    country: str | None = None,
    min_score: Decimal | None = None,
    max_price: Decimal | None = None,
) -> list[dict[str, Any]]:
    qp = _listed_lots()
    if country:
        qp.where("cl.country = {}", country)
    if min_score is not None:
        qp.where("cl.cup_score >= {}", min_score)
    if max_price is not None:
        # Lots without a price are "price on request" and stay listed.
        qp.where("(cl.price_per_kg IS NULL OR cl.price_per_kg <= {})", max_price)

    return await db.fetch_all(
        f"""
        {LISTING_SELECT}
        {qp.where_sql()}
        ORDER BY cl.created_at DESC NULLS LAST
        """,
        *qp.values,
    )


async def get_lot(lot_id: UUID) -> dict[str, Any] | None:
    qp = _listed_lots()
    qp.where("cl.id = {}", lot_id)
    return await db.fetch_one(
        f"""
        {LISTING_SELECT}
        {qp.where_sql()}
        """,
        *qp.values,
    )
