"""
Contact business logic.
"""

from __future__ import annotations

from equity_coffee.core.errors import store_errors

from . import repository, schemas

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 500


def clamp_limit(limit: int | None) -> int:
    if not limit or limit < 1:
        return DEFAULT_LIST_LIMIT
    return min(limit, MAX_LIST_LIMIT)


@store_errors("Server error")
async def create_message(
    payload: schemas.ContactMessageCreate,
    *,
    ip: str | None,
    user_agent: str | None,
) -> dict:
    row = await repository.insert_message(
        name=payload.name,
        email=payload.email.lower(),
        reason=payload.reason,
        phone=payload.phone,
        message=payload.message,
        ip=ip,
        user_agent=user_agent,
    )
    return {"ok": True, "id": row["id"], "created_at": row["created_at"]}


@store_errors("Server error")
async def list_messages(limit: int | None = None) -> dict:
    return {"ok": True, "items": await repository.list_messages(limit=clamp_limit(limit))}
