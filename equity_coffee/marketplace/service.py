"""
Marketplace business logic.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from equity_coffee.core.errors import NotFoundError, store_errors

from . import repository


@store_errors("Failed to load marketplace lots")
async def list_lots(
    *,
    country: str | None = None,
    min_score: Decimal | None = None,
    max_price: Decimal | None = None,
) -> dict:
    lots = await repository.list_lots(
        country=(country or "").strip() or None,
        min_score=min_score,
        max_price=max_price,
    )
    return {"lots": lots}


@store_errors("Failed to load marketplace lot")
async def get_lot(lot_id: UUID) -> dict:
    lot = await repository.get_lot(lot_id)
    if lot is None:
        raise NotFoundError("Lot not found")
    return {"lot": lot}
