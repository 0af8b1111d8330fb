"""
Educator API endpoints (prototype).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from equity_coffee.auth import dependencies as auth_dependencies
from equity_coffee.auth.security import Identity

router = APIRouter(prefix="/api/educator")

# Placeholder figures until cupping and training data are recorded.
SAMPLE_METRICS = {
    "cuppings_this_month": 8,
    "lots_evaluated": 24,
    "trainings_planned": 5,
}


@router.get("/")
async def root(_: Identity = Depends(auth_dependencies.get_current_user)) -> dict:
    return {"message": "Educator API root - prototype only"}


@router.get("/sample-metrics")
async def sample_metrics(_: Identity = Depends(auth_dependencies.get_current_user)) -> dict:
    return dict(SAMPLE_METRICS)
