"""
Auth security helpers.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from typing import Any
from uuid import UUID

import bcrypt
import jwt

from equity_coffee.core import config
from equity_coffee.core.errors import InvalidOrExpiredToken

DEV_JWT_SECRET = "dev-secret-change-me"
BCRYPT_ROUNDS = 12


class AuthSecurityError(RuntimeError):
    pass


@dataclass(frozen=True)
class Identity:
    """
    The authenticated caller, as carried in the access token.
    """

    user_id: UUID
    role: str
    email: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def jwt_secret() -> str:
    secret = config.env_str("JWT_SECRET", "")
    if secret:
        return secret
    if config.is_production():
        raise AuthSecurityError("JWT_SECRET is required in production")
    # Local default keeps development simple.
    return DEV_JWT_SECRET


def jwt_algorithm() -> str:
    return config.env_str("JWT_ALG", "HS256")


def access_token_expire_days() -> int:
    return config.env_int("ACCESS_TOKEN_EXPIRE_DAYS", 7)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def issue_access_token(*, user_id: UUID | str, role: str, email: str) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_days() * 24 * 60 * 60)

    payload = {
        "sub": str(user_id),
        "role": role,
        "email": email,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise InvalidOrExpiredToken()

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise InvalidOrExpiredToken() from exc

    token_type = str(payload.get("type") or "").strip().lower()
    if token_type != "access":
        raise InvalidOrExpiredToken()

    return payload


def verify_access_token(token: str) -> Identity:
    payload = decode_access_token(token)
    try:
        user_id = UUID(str(payload.get("sub") or ""))
    except ValueError as exc:
        raise InvalidOrExpiredToken() from exc

    role = str(payload.get("role") or "").strip().lower()
    if not role:
        raise InvalidOrExpiredToken()
    return Identity(user_id=user_id, role=role, email=str(payload.get("email") or ""))


def build_reset_token() -> str:
    return secrets.token_hex(32)
