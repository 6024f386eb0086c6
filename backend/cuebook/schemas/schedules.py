# backend/cuebook/schemas/schedules.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, field_validator, model_validator

from ..services.slots.config import WEEKDAY_NAMES, minutes_to_time_str, time_str_to_minutes


def _normalize_time(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return minutes_to_time_str(time_str_to_minutes(v))


def check_window(open_time: Optional[str], close_time: Optional[str]) -> None:
    if open_time is None or close_time is None:
        return
    close_min = time_str_to_minutes(close_time) or 24 * 60  # "00:00" = midnight
    if time_str_to_minutes(open_time) >= close_min:
        raise ValueError("open_time must be earlier than close_time")


class OperatingScheduleCreate(BaseModel):
    weekday: str
    open_time: str
    close_time: str
    is_active: bool = True
    is_closed: bool = False

    @field_validator("weekday")
    @classmethod
    def validate_weekday(cls, v: str) -> str:
        name = v.strip().capitalize()
        if name not in WEEKDAY_NAMES:
            raise ValueError(f"weekday must be one of {', '.join(WEEKDAY_NAMES)}")
        return name

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return _normalize_time(v)

    @model_validator(mode="after")
    def validate_window(self):
        check_window(self.open_time, self.close_time)
        return self

    model_config = {"from_attributes": True}


class OperatingScheduleUpdate(BaseModel):
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    is_active: Optional[bool] = None
    is_closed: Optional[bool] = None

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_time(v)

    model_config = {"from_attributes": True}


class OperatingScheduleRead(BaseModel):
    id: int
    weekday: str
    open_time: str
    close_time: str
    is_active: bool
    is_closed: bool

    model_config = {"from_attributes": True}


class ClosedDateCreate(BaseModel):
    closed_date: date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class ClosedDateRead(BaseModel):
    id: int
    closed_date: date
    reason: Optional[str] = None

    model_config = {"from_attributes": True}
