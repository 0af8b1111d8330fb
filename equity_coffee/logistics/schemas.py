"""
Logistics API schemas (request models).
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import Field

from equity_coffee.core.schemas import RequestModel

SHIPMENT_UPDATE_COLUMNS: tuple[str, ...] = (
    "reference",
    "origin_port",
    "destination_port",
    "container_number",
    "vessel_name",
    "carrier",
    "etd",
    "eta",
    "status",
    "tracking_url",
    "notes",
)


class ShipmentCreate(RequestModel):
    contract_id: UUID
    reference: str = Field(..., min_length=1, max_length=100)
    origin_port: str | None = Field(default=None, max_length=100)
    destination_port: str | None = Field(default=None, max_length=100)
    container_number: str | None = Field(default=None, max_length=50)
    vessel_name: str | None = Field(default=None, max_length=100)
    carrier: str | None = Field(default=None, max_length=100)
    etd: date | None = None
    eta: date | None = None
    status: str = Field(default="booked", min_length=1, max_length=30)
    tracking_url: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=4000)


class ShipmentUpdate(RequestModel):
    reference: str | None = Field(default=None, min_length=1, max_length=100)
    origin_port: str | None = Field(default=None, max_length=100)
    destination_port: str | None = Field(default=None, max_length=100)
    container_number: str | None = Field(default=None, max_length=50)
    vessel_name: str | None = Field(default=None, max_length=100)
    carrier: str | None = Field(default=None, max_length=100)
    etd: date | None = None
    eta: date | None = None
    status: str | None = Field(default=None, min_length=1, max_length=30)
    tracking_url: str | None = Field(default=None, max_length=500)
    notes: str | None = Field(default=None, max_length=4000)

    non_nullable_fields = ("reference", "status")
