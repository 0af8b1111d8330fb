"""
Analytics business logic.

Tracking is best effort: a failed insert is logged and never reaches the
request that triggered it.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any
from uuid import UUID

from equity_coffee.core.errors import STORE_ERRORS, store_errors

from . import repository

logger = logging.getLogger(__name__)

TIME_RANGES: dict[str, timedelta] = {
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
    "90d": timedelta(days=90),
    "1y": timedelta(days=365),
}
DEFAULT_TIME_RANGE = "30d"


async def track_user_action(
    user_id: UUID | None,
    action: str,
    metadata: dict[str, Any] | None = None,
) -> None:
    try:
        await repository.insert_user_action(user_id, action, metadata or {})
    except STORE_ERRORS:
        logger.exception("analytics_tracking_failed action=%s user_id=%s", action, user_id)


@store_errors("Failed to load metrics")
async def dashboard_metrics(time_range: str) -> dict:
    key = time_range if time_range in TIME_RANGES else DEFAULT_TIME_RANGE
    row = await repository.dashboard_metrics(TIME_RANGES[key])
    return {
        "range": key,
        "total_users": int(row.get("total_users") or 0),
        "active_listings": int(row.get("active_listings") or 0),
        "total_volume_bags": int(row.get("total_volume_bags") or 0),
        "total_value": row.get("total_value") or 0,
    }
