# backend/cuebook/services/slots/engine.py
"""
Slots engine: the single entry point used by every caller
(booking, reschedule, front desk).

    ScheduleSource ─→ resolve_day_window ─→ generate_slots ─→ evaluate_slots
                                                  │
    ReservationSource ────────────────────────────┴─→ max_duration / is_slot_bookable

Every query reads a fresh snapshot from the sources; nothing is kept
between calls except the optional day-window cache.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

from redis import RedisError

from .availability import booked_minutes, evaluate_slots, is_interval_free
from .calculator import generate_slots
from .calendar import resolve_day_window
from .config import (
    BookingConfig,
    get_booking_config,
    hours_to_minutes,
    parse_date,
    time_str_to_minutes,
)
from .duration import max_duration_hours
from .errors import UpstreamFetchFailure
from .invalidator import get_affected_dates
from .redis_store import MISS, SlotsRedisStore
from .sources import ReservationSource, ScheduleSource
from .types import (
    BLOCKED_TABLE_STATUSES,
    Availability,
    CandidateSlot,
    DayStatus,
    DayWindow,
    TableStatus,
)

logger = logging.getLogger(__name__)


class SlotEngine:
    """Availability, slot and duration queries for billiard tables."""

    def __init__(
        self,
        schedules: ScheduleSource,
        reservations: ReservationSource,
        config: BookingConfig | None = None,
        store: SlotsRedisStore | None = None,
    ):
        self.schedules = schedules
        self.reservations = reservations
        self.config = config or get_booking_config()
        self.store = store

    # ── Schedule calendar ────────────────────────────────────────────────

    def day_window(self, target_date) -> DayWindow | None:
        """Opening window of a date, using the Redis cache when available."""
        target_date = parse_date(target_date)

        if self.store is not None:
            try:
                cached = self.store.get_day_window(target_date)
            except RedisError:
                logger.warning("Day window cache unavailable, reading schedule from DB")
                return resolve_day_window(self.schedules, target_date)
            if cached is not MISS:
                return cached

            window = resolve_day_window(self.schedules, target_date)
            try:
                self.store.store_day_window(target_date, window)
            except RedisError:
                logger.warning("Failed to cache day window for %s", target_date)
            return window

        return resolve_day_window(self.schedules, target_date)

    def day_windows(self, dates: list[date]) -> dict[date, DayWindow | None]:
        """Opening windows of several dates, read from the cache in one round trip."""
        if self.store is None:
            return {dt: resolve_day_window(self.schedules, dt) for dt in dates}

        try:
            cached = self.store.mget_day_windows(dates)
        except RedisError:
            logger.warning("Day window cache unavailable, reading schedules from DB")
            return {dt: resolve_day_window(self.schedules, dt) for dt in dates}

        missing = {
            dt: resolve_day_window(self.schedules, dt)
            for dt, window in cached.items()
            if window is MISS
        }
        if missing:
            try:
                self.store.store_multiple_days(missing)
            except RedisError:
                logger.warning("Failed to cache %s day windows", len(missing))
        return {**cached, **missing}

    # ── Exposed operations ───────────────────────────────────────────────

    def list_available_slots(self, table_id: int, target_date, now: datetime) -> list[CandidateSlot]:
        """
        All candidate slots of a day, annotated.

        Closed or unscheduled day → []. Raises UpstreamFetchFailure when a
        source cannot be read; never guesses availability.
        """
        target_date = parse_date(target_date)
        window = self.day_window(target_date)
        if window is None:
            return []

        slots = generate_slots(
            window.open_minutes, window.close_minutes, target_date, now, self.config
        )
        if not slots:
            return []

        active = self.reservations.get_active_reservations(table_id, target_date)
        return evaluate_slots(slots, active, window.open_minutes, self.config)

    def max_duration(self, table_id: int, target_date, start_time: str) -> Decimal:
        """
        Longest bookable duration (hours, 0.5 granularity) from start_time.

        0 when the day is closed, the start is outside the opening window,
        or the start is inside an active reservation.
        """
        target_date = parse_date(target_date)
        start_min = time_str_to_minutes(start_time)

        window = self.day_window(target_date)
        if window is None or start_min < window.open_minutes:
            return Decimal(0)

        active = self.reservations.get_active_reservations(table_id, target_date)
        if any(res.covers(start_min) for res in active):
            return Decimal(0)

        return max_duration_hours(start_min, window.close_minutes, active, self.config)

    def is_slot_bookable(self, table_id: int, target_date, start_time: str, duration_hours) -> Availability:
        """
        Whether [start, start + duration) can be booked.

        Malformed input raises InvalidInput. A source failure yields
        Availability.UNKNOWN, which callers must treat as non-bookable.
        """
        target_date = parse_date(target_date)
        start_min = time_str_to_minutes(start_time)
        duration_min = hours_to_minutes(duration_hours)

        try:
            window = self.day_window(target_date)
            if window is None:
                return Availability.UNAVAILABLE
            active = self.reservations.get_active_reservations(table_id, target_date)
        except UpstreamFetchFailure:
            logger.warning(
                "Availability unknown for table=%s date=%s start=%s",
                table_id, target_date, start_time,
            )
            return Availability.UNKNOWN

        if is_interval_free(window, active, start_min, duration_min):
            return Availability.AVAILABLE
        return Availability.UNAVAILABLE

    # ── Derived queries ──────────────────────────────────────────────────

    def day_status(self, table_id: int, target_date, now: datetime) -> DayStatus:
        """Available slot count and occupancy of one day."""
        target_date = parse_date(target_date)
        return self._day_status(table_id, target_date, self.day_window(target_date), now)

    def _day_status(self, table_id: int, target_date: date, window: DayWindow | None, now: datetime) -> DayStatus:
        if window is None:
            return DayStatus(date=target_date, is_open=False, open_slots_count=0, occupancy=0.0)

        slots = generate_slots(
            window.open_minutes, window.close_minutes, target_date, now, self.config
        )
        active = self.reservations.get_active_reservations(table_id, target_date)
        evaluated = evaluate_slots(slots, active, window.open_minutes, self.config)

        occupancy = booked_minutes(window, active) / window.total_minutes
        return DayStatus(
            date=target_date,
            is_open=True,
            open_slots_count=sum(1 for s in evaluated if s.is_available),
            occupancy=round(occupancy, 4),
        )

    def calendar(
        self,
        table_id: int,
        start_date,
        end_date,
        now: datetime,
    ) -> list[DayStatus]:
        """Per-day status for [start_date, end_date], capped to horizon_days."""
        start_date = parse_date(start_date)
        end_date = parse_date(end_date)
        horizon_end = now.date() + timedelta(days=self.config.horizon_days)
        if end_date > horizon_end:
            end_date = horizon_end
        if start_date > end_date:
            return []

        dates = get_affected_dates(start_date, end_date)
        windows = self.day_windows(dates)
        return [self._day_status(table_id, dt, windows[dt], now) for dt in dates]

    def table_status(self, table_id: int, table_state: str, now: datetime) -> TableStatus:
        """
        Selectable status of a table.

        Maintenance/Unavailable tables are never selectable. Otherwise the
        table is Available when today or one of the next lookahead_days has
        an available slot, and Fully Booked when none does.
        """
        if table_state in BLOCKED_TABLE_STATUSES:
            return TableStatus(status=table_state, is_selectable=False)

        today = now.date()
        for offset in range(self.config.lookahead_days + 1):
            dt = today + timedelta(days=offset)
            slots = self.list_available_slots(table_id, dt, now)
            if any(slot.is_available for slot in slots):
                return TableStatus(status="Available", is_selectable=True, next_available_date=dt)

        return TableStatus(status="Fully Booked", is_selectable=False)

