"""
Auth API schemas (request models).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Role = Literal["farmer", "trader", "logistics", "roaster", "admin", "educator"]

ROLES: tuple[str, ...] = ("farmer", "trader", "logistics", "roaster", "admin", "educator")


class AuthModel(BaseModel):
    # Passwords are taken verbatim, so no whitespace stripping here.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(AuthModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=72)
    role: Role
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    company_name: str | None = Field(default=None, max_length=200)
    country: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)


class LoginRequest(AuthModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class ForgotPasswordRequest(AuthModel):
    email: str | None = Field(default=None, max_length=320)


class ResetPasswordRequest(AuthModel):
    token: str = Field(..., min_length=1, max_length=200)
    new_password: str = Field(..., min_length=8, max_length=72)
