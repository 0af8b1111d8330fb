"""
Contact API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import schemas, service

router = APIRouter(prefix="/api/contact")


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else None


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_message(payload: schemas.ContactMessageCreate, request: Request) -> dict:
    """
    Public: store a contact message.
    """
    return await service.create_message(
        payload,
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/messages")
async def list_messages(
    limit: int | None = Query(default=None),
    _: Identity = Depends(auth_dependencies.require_roles("admin")),
) -> dict:
    return await service.list_messages(limit)
