# backend/cuebook/services/slots/duration.py
"""
Max-duration resolution and duration catalog helpers.

max = min(close - start, next_start - buffer - start), floored at 0,
rounded down to duration_step_minutes.
"""

from decimal import Decimal
from typing import Iterable

from .config import (
    BookingConfig,
    MINUTES_PER_DAY,
    end_time_str,
    get_booking_config,
    hours_to_minutes,
    minutes_to_hours,
    time_str_to_minutes,
    to_hours,
)
from .errors import InvalidInput
from .types import ReservationSpan


def max_duration_minutes(
    start_min: int,
    close_min: int,
    reservations: list[ReservationSpan],
    config: BookingConfig | None = None,
) -> int:
    """Longest bookable duration in minutes, already rounded down."""
    config = config or get_booking_config()

    until_close = close_min - start_min
    if until_close <= 0:
        return 0

    limit = until_close
    next_start = next_reservation_start(start_min, reservations)
    if next_start is not None:
        until_next = max(0, next_start - start_min - config.next_booking_buffer_minutes)
        limit = min(limit, until_next)

    step = config.duration_step_minutes
    return (limit // step) * step


def max_duration_hours(
    start_min: int,
    close_min: int,
    reservations: list[ReservationSpan],
    config: BookingConfig | None = None,
) -> Decimal:
    """Same as max_duration_minutes, in hours (e.g. Decimal("2.5"))."""
    return minutes_to_hours(max_duration_minutes(start_min, close_min, reservations, config))


def next_reservation_start(start_min: int, reservations: list[ReservationSpan]) -> int | None:
    """Earliest reservation start strictly after start_min."""
    later = [r.start_minutes for r in reservations if r.start_minutes > start_min]
    return min(later) if later else None


def filter_durations(catalog: Iterable, max_hours) -> list[Decimal]:
    """
    Keep catalog entries with hours <= max_hours, ascending.

    Entries may be numbers or objects with an ``hours`` attribute.
    An empty result means no duration can be offered.
    """
    limit = to_hours(max_hours)
    hours = sorted({
        to_hours(getattr(item, "hours", item))
        for item in catalog
    })
    return [h for h in hours if 0 < h <= limit]


def calculate_end_time(start_time: str, duration_hours) -> str:
    """
    End time of a session, "HH:MM:SS".

    A session may end exactly at midnight ("00:00:00") but not later.
    """
    start_min = time_str_to_minutes(start_time)
    end_min = start_min + hours_to_minutes(duration_hours)
    if end_min > MINUTES_PER_DAY:
        raise InvalidInput(
            f"Session starting {start_time} for {duration_hours}h would cross midnight"
        )
    return end_time_str(end_min)
