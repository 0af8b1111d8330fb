"""
Auth business logic.
"""

from __future__ import annotations

import logging

import asyncpg

from equity_coffee.analytics import service as analytics
from equity_coffee.core import config
from equity_coffee.core.errors import (
    AuthError,
    ConflictError,
    InvalidOrExpiredToken,
    NotFoundError,
    store_errors,
)

from . import repository, schemas, security
from .reset_tokens import ResetRecord, ResetTokenStore

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If that email exists, reset instructions were sent."


def _public_user(user_row: dict) -> dict:
    return {key: value for key, value in user_row.items() if key != "password_hash"}


def _token_for(user_row: dict) -> str:
    return security.issue_access_token(
        user_id=user_row["id"],
        role=str(user_row["role"]),
        email=str(user_row["email"]),
    )


@store_errors("Server error during registration")
async def register(payload: schemas.RegisterRequest) -> dict:
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        raise ConflictError("Email already registered")

    password_hash = security.hash_password(payload.password)
    try:
        user_row = await repository.create_user(
            email=payload.email,
            password_hash=password_hash,
            role=payload.role,
            first_name=payload.first_name,
            last_name=payload.last_name,
            company_name=payload.company_name,
            country=payload.country,
            phone=payload.phone,
        )
    except asyncpg.UniqueViolationError as exc:
        # Lost a race with a concurrent registration for the same email.
        raise ConflictError("Email already registered") from exc

    await analytics.track_user_action(user_row["id"], "register", {"role": payload.role})
    return {"message": "Account created", "user": user_row, "token": _token_for(user_row)}


@store_errors("Server error during login")
async def login(payload: schemas.LoginRequest) -> dict:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        raise AuthError("Invalid email or password")

    is_valid = security.verify_password(payload.password, str(user_row.get("password_hash") or ""))
    if not is_valid:
        raise AuthError("Invalid email or password")

    user = _public_user(user_row)
    token = _token_for(user)
    await repository.touch_last_login(user["id"])
    await analytics.track_user_action(user["id"], "login")
    return {"message": "Login successful", "user": user, "token": token}


@store_errors("Server error")
async def request_password_reset(
    payload: schemas.ForgotPasswordRequest,
    *,
    store: ResetTokenStore,
) -> dict:
    response: dict = {"message": RESET_REQUESTED_MESSAGE}
    if not payload.email:
        return response

    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        return response

    token = security.build_reset_token()
    record = ResetRecord(
        user_id=user_row["id"],
        expires_at=security.now_epoch_s() + store.ttl_seconds,
    )
    await store.put(token, record)
    logger.info("password_reset_requested user_id=%s", record.user_id)

    # Without outbound email, development hands the token straight back.
    if config.is_development():
        response["token"] = token
    return response


@store_errors("Server error")
async def reset_password(
    payload: schemas.ResetPasswordRequest,
    *,
    store: ResetTokenStore,
) -> dict:
    # Claimed before any other await; a failed update still burns the token.
    record = await store.take(payload.token)
    if record is None:
        raise InvalidOrExpiredToken()

    password_hash = security.hash_password(payload.new_password)
    await repository.update_password_hash(record.user_id, password_hash)
    logger.info("password_reset_completed user_id=%s", record.user_id)
    return {"message": "Password updated successfully"}


@store_errors("Server error")
async def me(identity: security.Identity) -> dict:
    user_row = await repository.get_user_by_id(identity.user_id)
    if user_row is None:
        raise NotFoundError("User not found")
    return {"user": user_row}
