"""
Analytics API endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

from . import service

router = APIRouter(prefix="/api/analytics")


@router.get("/metrics", response_model=None)
async def get_metrics(
    time_range: str = Query(service.DEFAULT_TIME_RANGE, alias="range", max_length=10),
    _: Identity = Depends(auth_dependencies.require_roles("admin")),
) -> dict:
    return {"metrics": await service.dashboard_metrics(time_range)}
