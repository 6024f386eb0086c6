# backend/cuebook/services/slots/types.py
"""
Value types passed between the slots engine and its collaborators.

All times are minutes since midnight.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


ACTIVE_STATUSES = ("pending", "approved", "rescheduled", "ongoing")
SETTLED_STATUSES = ("completed", "synced")
RESERVATION_STATUSES = ACTIVE_STATUSES + SETTLED_STATUSES + ("cancelled",)

TABLE_STATUSES = ("Available", "Maintenance", "Unavailable")
BLOCKED_TABLE_STATUSES = ("Maintenance", "Unavailable")


@dataclass(frozen=True)
class ScheduleWindow:
    """A weekday schedule as stored by venue staff."""
    open_minutes: int
    close_minutes: int
    is_active: bool = True


@dataclass(frozen=True)
class DayWindow:
    """Resolved opening window for one calendar date."""
    open_minutes: int
    close_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.close_minutes - self.open_minutes


@dataclass(frozen=True)
class ReservationSpan:
    """An active reservation as seen by the engine."""
    start_minutes: int
    end_minutes: int
    duration_hours: Decimal | None = None

    def covers(self, minutes: int) -> bool:
        return self.start_minutes <= minutes < self.end_minutes

    def overlaps(self, start: int, end: int) -> bool:
        return self.start_minutes < end and start < self.end_minutes


@dataclass(frozen=True)
class CandidateSlot:
    """One start time on the grid, annotated with its availability."""
    minutes: int
    label: str  # "2:30 PM"
    canonical_time: str  # "14:30:00"
    is_past: bool = False
    is_available: bool = False
    is_reserved: bool = False
    has_gap_issue: bool = False


class Availability(str, Enum):
    """
    Result of a bookability check.

    UNKNOWN means a source could not be read; callers treat it as
    non-bookable.
    """
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"

    @property
    def is_bookable(self) -> bool:
        return self is Availability.AVAILABLE


@dataclass(frozen=True)
class DayStatus:
    """Availability summary for one table on one date."""
    date: date
    is_open: bool
    open_slots_count: int
    occupancy: float  # booked minutes / open minutes, 0..1

    @property
    def has_slots(self) -> bool:
        return self.open_slots_count > 0


@dataclass(frozen=True)
class TableStatus:
    """What the booking screen shows for a table."""
    status: str  # "Available" / "Fully Booked" / "Maintenance" / "Unavailable"
    is_selectable: bool
    next_available_date: date | None = None

    @property
    def display_text(self) -> str:
        return self.status.upper()
