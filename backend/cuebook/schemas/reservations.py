# backend/cuebook/schemas/reservations.py

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, field_validator

from ..services.slots.config import hours_to_minutes, minutes_to_time_str, time_str_to_minutes
from ..services.slots.types import RESERVATION_STATUSES


class ReservationCreate(BaseModel):
    table_id: int
    reservation_date: date
    start_time: str
    duration_hours: Decimal

    customer_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, v: str) -> str:
        """Normalize to "HH:MM:SS"."""
        return minutes_to_time_str(time_str_to_minutes(v))

    @field_validator("duration_hours")
    @classmethod
    def validate_duration(cls, v: Decimal) -> Decimal:
        hours_to_minutes(v)
        return v

    model_config = {"from_attributes": True}


class ReservationStatusUpdate(BaseModel):
    status: str

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in RESERVATION_STATUSES:
            raise ValueError(f"status must be one of {', '.join(RESERVATION_STATUSES)}")
        return v


class ReservationRead(BaseModel):
    id: int

    table_id: int
    reservation_date: date
    start_time: str
    end_time: str
    duration_hours: float

    status: str
    customer_name: Optional[str] = None
    notes: Optional[str] = None

    created_at: str
    updated_at: str

    model_config = {"from_attributes": True}
