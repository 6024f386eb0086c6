# backend/cuebook/services/slots/calculator.py
"""
Slot generator.

Produces the candidate start times of one day on a fixed grid:
  open, open + step, ... while start < close
  and at least min_tail_minutes remain before close.

Contains:
✓ opening window (from the schedule calendar)
✓ "past" marking for the current day

Does NOT contain:
✗ Reservations (checked by the evaluator)
✗ Gap policy (checked by the evaluator)
"""

from datetime import date, datetime

from .config import BookingConfig, format_slot_label, get_booking_config, minutes_to_time_str
from .types import CandidateSlot


def generate_slots(
    open_min: int,
    close_min: int,
    target_date: date,
    now: datetime,
    config: BookingConfig | None = None,
) -> list[CandidateSlot]:
    """
    Enumerate candidate slots for a day.

    Returns:
        Ordered list of CandidateSlot, not yet evaluated against
        reservations. Empty list = no slots.
    """
    config = config or get_booking_config()

    today = now.date()
    now_min = now.hour * 60 + now.minute

    slots: list[CandidateSlot] = []
    t = open_min
    while t < close_min and close_min - t >= config.min_tail_minutes:
        slots.append(CandidateSlot(
            minutes=t,
            label=format_slot_label(t),
            canonical_time=minutes_to_time_str(t),
            is_past=target_date < today or (target_date == today and t <= now_min),
        ))
        t += config.slot_step_minutes

    return slots
