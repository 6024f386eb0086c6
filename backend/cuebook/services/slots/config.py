# backend/cuebook/services/slots/config.py
"""
Booking configuration and time helpers for slots calculation.

All scheduling arithmetic is done in minutes since midnight. Strings are
parsed at the edges only: "HH:MM[:SS]" for times, "YYYY-MM-DD" for dates.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from functools import lru_cache

from .errors import InvalidInput

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class BookingConfig:
    """
    Configuration for the booking/slots system.

    One policy shared by every caller (booking, reschedule, front desk).

    Attributes:
        slot_step_minutes: Grid step for candidate start times
        min_tail_minutes: Minimum time a slot must leave before closing
        gap_minutes: An idle remainder of exactly this length before a slot
            blocks it
        next_booking_buffer_minutes: Buffer kept free ahead of the next
            reservation when resolving the maximum duration
        duration_step_minutes: Maximum durations are rounded down to this
        horizon_days: How many days ahead the calendar shows
        lookahead_days: Days checked before a table is "Fully Booked"
        cache_ttl_seconds: Upper bound for cached day windows
    """
    slot_step_minutes: int = 30
    min_tail_minutes: int = 30
    gap_minutes: int = 30
    next_booking_buffer_minutes: int = 60
    duration_step_minutes: int = 30
    horizon_days: int = 60
    lookahead_days: int = 7
    cache_ttl_seconds: int = 86400  # 24 hours

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")
        if self.duration_step_minutes <= 0 or 60 % self.duration_step_minutes:
            raise ValueError(f"duration_step_minutes must divide 60, got {self.duration_step_minutes}")
        for name in ("min_tail_minutes", "gap_minutes", "next_booking_buffer_minutes"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@lru_cache
def get_booking_config() -> BookingConfig:
    """Get booking configuration (singleton)."""
    return BookingConfig()


# ── Time helpers ─────────────────────────────────────────────────────────


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" or "HH:MM:SS" to minutes since midnight (seconds dropped)."""
    if not isinstance(value, str):
        raise InvalidInput(f"Time must be a string, got {type(value).__name__}")
    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidInput(f"Time must be in HH:MM or HH:MM:SS format, got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to canonical "HH:MM:SS"."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidInput(f"Time out of day range: {minutes} minutes")
    return f"{minutes // 60:02d}:{minutes % 60:02d}:00"


def format_slot_label(minutes: int) -> str:
    """12-hour display label, e.g. 870 -> "2:30 PM". Display only."""
    hour, minute = divmod(minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {period}"


def parse_date(value) -> date:
    """
    Parse "YYYY-MM-DD" into a calendar date.

    Built from explicit year/month/day integers; no timezone is involved.
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value.strip()):
        raise InvalidInput(f"Date must be in YYYY-MM-DD format, got {value!r}")
    year, month, day = (int(part) for part in value.strip().split("-"))
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidInput(f"Invalid calendar date {value!r}: {exc}") from exc


def weekday_name(target_date: date) -> str:
    """Weekday name ("Monday" .. "Sunday") from the date's own fields."""
    return WEEKDAY_NAMES[target_date.weekday()]


def to_hours(value) -> Decimal:
    """Coerce a duration in hours to Decimal without float noise."""
    if isinstance(value, bool):
        raise InvalidInput("Duration must be a number of hours")
    try:
        hours = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInput(f"Invalid duration: {value!r}") from exc
    if not hours.is_finite():
        raise InvalidInput(f"Invalid duration: {value!r}")
    return hours


def hours_to_minutes(value) -> int:
    """
    Convert a positive duration in hours (0.25 h resolution) to minutes.

    Raises InvalidInput for zero, negative or off-resolution durations.
    """
    hours = to_hours(value)
    if hours <= 0:
        raise InvalidInput(f"Duration must be positive, got {value!r}")
    minutes = hours * 60
    if minutes != minutes.to_integral_value() or int(minutes) % 15:
        raise InvalidInput(f"Duration must be a multiple of 0.25 hours, got {value!r}")
    return int(minutes)


def minutes_to_hours(minutes: int) -> Decimal:
    """Minutes to Decimal hours, e.g. 90 -> Decimal("1.5")."""
    return Decimal(minutes) / Decimal(60)


def end_time_str(minutes: int) -> str:
    """Like minutes_to_time_str, but an end exactly at midnight is "00:00:00"."""
    if minutes == MINUTES_PER_DAY:
        return "00:00:00"
    return minutes_to_time_str(minutes)
