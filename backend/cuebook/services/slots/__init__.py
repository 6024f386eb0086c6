# backend/cuebook/services/slots/__init__.py
"""
Slots calculation module.

Schedule calendar → slot generator → conflict & gap evaluator
→ max-duration resolver, behind SlotEngine.
"""

from .config import BookingConfig, get_booking_config
from .calculator import generate_slots
from .availability import evaluate_slots
from .duration import calculate_end_time, filter_durations, max_duration_hours
from .engine import SlotEngine
from .errors import InvalidInput, SchedulingError, UpstreamFetchFailure
from .redis_store import SlotsRedisStore
from .invalidator import invalidate_schedule_cache
from .sources import DbReservationSource, DbScheduleSource
from .types import Availability, CandidateSlot

__all__ = [
    "BookingConfig",
    "get_booking_config",
    "generate_slots",
    "evaluate_slots",
    "calculate_end_time",
    "filter_durations",
    "max_duration_hours",
    "SlotEngine",
    "InvalidInput",
    "SchedulingError",
    "UpstreamFetchFailure",
    "SlotsRedisStore",
    "invalidate_schedule_cache",
    "DbReservationSource",
    "DbScheduleSource",
    "Availability",
    "CandidateSlot",
]
