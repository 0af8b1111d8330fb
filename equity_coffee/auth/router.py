"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import dependencies, schemas, service
from .reset_tokens import ResetTokenStore
from .security import Identity

router = APIRouter(prefix="/api/auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> dict:
    return await service.register(payload)


@router.post("/login")
async def login(payload: schemas.LoginRequest) -> dict:
    return await service.login(payload)


@router.post("/forgot-password")
async def forgot_password(
    payload: schemas.ForgotPasswordRequest,
    store: ResetTokenStore = Depends(dependencies.get_reset_token_store),
) -> dict:
    return await service.request_password_reset(payload, store=store)


@router.post("/reset-password")
async def reset_password(
    payload: schemas.ResetPasswordRequest,
    store: ResetTokenStore = Depends(dependencies.get_reset_token_store),
) -> dict:
    return await service.reset_password(payload, store=store)


@router.get("/me")
async def me(current_user: Identity = Depends(dependencies.get_current_user)) -> dict:
    return await service.me(current_user)
