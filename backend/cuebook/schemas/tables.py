# backend/cuebook/schemas/tables.py

from typing import Optional
from pydantic import BaseModel, field_validator

from ..services.slots.types import TABLE_STATUSES


def _validate_status(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in TABLE_STATUSES:
        raise ValueError(f"status must be one of {', '.join(TABLE_STATUSES)}")
    return v


class BilliardTableCreate(BaseModel):
    name: str
    billiard_type: str
    status: str = "Available"
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _validate_status(v)

    model_config = {"from_attributes": True}


class BilliardTableUpdate(BaseModel):
    name: Optional[str] = None
    billiard_type: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return _validate_status(v)

    model_config = {"from_attributes": True}


class BilliardTableRead(BaseModel):
    id: int
    name: str
    billiard_type: str
    status: str
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class DurationCreate(BaseModel):
    hours: float

    @field_validator("hours")
    @classmethod
    def validate_hours(cls, v: float) -> float:
        if v <= 0 or (v * 2) != int(v * 2):
            raise ValueError("hours must be a positive multiple of 0.5")
        return v

    model_config = {"from_attributes": True}


class DurationRead(BaseModel):
    id: int
    hours: float

    model_config = {"from_attributes": True}
