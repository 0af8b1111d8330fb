"""
Contact API schemas (request models).
"""

from __future__ import annotations

from pydantic import Field

from equity_coffee.core.schemas import RequestModel


class ContactMessageCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    message: str = Field(..., min_length=1, max_length=5000)
    reason: str = Field(default="", max_length=100)
    phone: str = Field(default="", max_length=50)
