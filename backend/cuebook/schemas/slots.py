"""
Pydantic schemas for slots API.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class SlotInfo(BaseModel):
    """A single candidate start time."""
    label: str = Field(description='Display label, e.g. "2:30 PM"')
    time: str = Field(description='Canonical "HH:MM:SS"')
    is_past: bool
    is_available: bool
    is_reserved: bool
    has_gap_issue: bool

    model_config = {"from_attributes": True}


class SlotsDayResponse(BaseModel):
    """Annotated slots of one table on one day."""
    table_id: int
    date: date
    slots: list[SlotInfo]
    available_count: int

    model_config = {"from_attributes": True}


class MaxDurationResponse(BaseModel):
    """Longest bookable duration from a start time, and the catalog that fits."""
    table_id: int
    date: date
    start_time: str
    max_hours: Decimal
    durations: list[Decimal] = Field(description="Catalog entries with hours <= max_hours")
    can_book: bool

    model_config = {"from_attributes": True}


class SlotCheckResponse(BaseModel):
    """Bookability of [start_time, start_time + duration_hours)."""
    table_id: int
    date: date
    start_time: str
    end_time: Optional[str] = None
    duration_hours: Decimal
    availability: str = Field(description="available / unavailable / unknown")
    is_bookable: bool


class EndTimeResponse(BaseModel):
    start_time: str
    duration_hours: Decimal
    end_time: str


class SlotsDayStatus(BaseModel):
    """Status of a single day in calendar."""
    date: date
    is_open: bool
    has_slots: bool
    open_slots_count: int = 0
    occupancy: float = 0.0

    model_config = {"from_attributes": True}


class SlotsCalendarResponse(BaseModel):
    """Response with calendar of available days."""
    table_id: int
    start_date: date
    end_date: date
    days: list[SlotsDayStatus]

    # Metadata
    horizon_days: int
    slot_step_minutes: int = Field(description="Grid step in minutes (15/30/60)")

    model_config = {"from_attributes": True}


class TableStatusResponse(BaseModel):
    table_id: int
    status: str
    display_text: str
    is_selectable: bool
    next_available_date: Optional[date] = None


class InvalidateRequest(BaseModel):
    dates: Optional[list[date]] = None
