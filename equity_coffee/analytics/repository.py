"""
Analytics persistence (raw SQL).
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any
from uuid import UUID

from equity_coffee.core import db


async def insert_user_action(user_id: UUID | None, action: str, metadata: dict[str, Any]) -> None:
    await db.execute(
        """
        INSERT INTO user_analytics (user_id, action, metadata)
        VALUES ($1, $2, $3::jsonb)
        """,
        user_id,
        action,
        json.dumps(metadata, default=str),
    )


async def dashboard_metrics(window: timedelta) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        SELECT
          (SELECT COUNT(*) FROM users
            WHERE created_at >= NOW() - $1::interval) AS total_users,
          (SELECT COUNT(*) FROM coffee_lots
            WHERE status = 'published'
              AND updated_at >= NOW() - $1::interval) AS active_listings,
          (SELECT COALESCE(SUM(quantity_bags), 0) FROM contracts
            WHERE status = 'completed'
              AND created_at >= NOW() - $1::interval) AS total_volume_bags,
          (SELECT COALESCE(SUM(total_value), 0) FROM contracts
            WHERE status = 'completed'
              AND created_at >= NOW() - $1::interval) AS total_value
        """,
        window,
    )
    return row or {}
