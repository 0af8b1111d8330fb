"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from equity_coffee.core.errors import ForbiddenError, MissingToken

from . import security
from .reset_tokens import ResetTokenStore


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise MissingToken()

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise MissingToken()

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise MissingToken()
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> security.Identity:
    return security.verify_access_token(access_token)


def require_roles(*roles: str) -> Callable:
    """
    Dependency factory: authenticated caller whose role is one of `roles`.
    """
    allowed = set(roles)
    label = "/".join(r for r in roles if r != "admin") or "admin"

    async def dependency(
        current_user: security.Identity = Depends(get_current_user),
    ) -> security.Identity:
        if current_user.role not in allowed:
            raise ForbiddenError(f"Forbidden: {label} role required")
        return current_user

    return dependency


def get_reset_token_store(request: Request) -> ResetTokenStore:
    return request.app.state.reset_token_store
