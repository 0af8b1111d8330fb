"""
Contact message persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from equity_coffee.core import db


async def insert_message(
    *,
    name: str,
    email: str,
    reason: str,
    phone: str,
    message: str,
    ip: str | None,
    user_agent: str | None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO contact_messages (name, email, reason, phone, message, ip, user_agent)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        RETURNING id, created_at
        """,
        name,
        email,
        reason,
        phone,
        message,
        ip,
        user_agent,
    )
    if row is None:
        raise RuntimeError("Failed to insert contact message.")
    return row


async def list_messages(*, limit: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, name, email, reason, phone, message, created_at
        FROM contact_messages
        ORDER BY created_at DESC
        LIMIT $1
        """,
        limit,
    )
