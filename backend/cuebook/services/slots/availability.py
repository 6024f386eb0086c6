# backend/cuebook/services/slots/availability.py
"""
Conflict & gap evaluation.

Annotates candidate slots against the active reservations of one
table/date:

1. Reserved:  slot start inside [reservation.start, reservation.end)
2. Gap issue: slot start is exactly gap_minutes after the latest occupied
              boundary (opening time or an earlier reservation end).
              Booking it would strand an unusable sliver.
3. Otherwise available (unless the slot is in the past).

Pure functions: no I/O, no logging. A failed reservation fetch raises
before these are called.
"""

from dataclasses import replace

from .config import BookingConfig, get_booking_config
from .types import CandidateSlot, DayWindow, ReservationSpan


def evaluate_slots(
    slots: list[CandidateSlot],
    reservations: list[ReservationSpan],
    open_min: int,
    config: BookingConfig | None = None,
) -> list[CandidateSlot]:
    """Return annotated copies of slots, in the same order."""
    config = config or get_booking_config()
    return [
        _evaluate_slot(slot, reservations, open_min, config.gap_minutes)
        for slot in slots
    ]


def _evaluate_slot(
    slot: CandidateSlot,
    reservations: list[ReservationSpan],
    open_min: int,
    gap_minutes: int,
) -> CandidateSlot:
    t = slot.minutes

    if any(res.covers(t) for res in reservations):
        return replace(slot, is_available=False, is_reserved=True, has_gap_issue=False)

    boundary = latest_occupied_boundary(t, reservations, open_min)
    if gap_minutes and t - boundary == gap_minutes:
        return replace(slot, is_available=False, is_reserved=False, has_gap_issue=True)

    return replace(
        slot,
        is_available=not slot.is_past,
        is_reserved=False,
        has_gap_issue=False,
    )


def latest_occupied_boundary(
    minutes: int,
    reservations: list[ReservationSpan],
    open_min: int,
) -> int:
    """Latest of open_min and every reservation end <= minutes."""
    boundary = open_min
    for res in reservations:
        if boundary < res.end_minutes <= minutes:
            boundary = res.end_minutes
    return boundary


def is_interval_free(
    window: DayWindow,
    reservations: list[ReservationSpan],
    start_min: int,
    duration_min: int,
) -> bool:
    """
    True when [start, start + duration) lies inside the opening window and
    overlaps no active reservation.
    """
    end_min = start_min + duration_min
    if start_min < window.open_minutes or end_min > window.close_minutes:
        return False
    return not any(res.overlaps(start_min, end_min) for res in reservations)


def booked_minutes(window: DayWindow, reservations: list[ReservationSpan]) -> int:
    """Minutes of the opening window covered by reservations (overlaps merged)."""
    spans = sorted(
        (max(r.start_minutes, window.open_minutes), min(r.end_minutes, window.close_minutes))
        for r in reservations
    )
    total = 0
    cursor = window.open_minutes
    for start, end in spans:
        start = max(start, cursor)
        if end > start:
            total += end - start
            cursor = end
    return total
