from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from helpers import BrokenRedis, FakeRedis, FakeReservationSource, FakeScheduleSource, span

from cuebook.services.slots import (
    Availability,
    InvalidInput,
    SlotEngine,
    SlotsRedisStore,
    UpstreamFetchFailure,
)
from cuebook.services.slots.types import DayWindow

NOW = datetime(2026, 10, 19, 8, 0)
TOMORROW = date(2026, 10, 20)


def _engine(reservations=(), **schedule_kwargs):
    return SlotEngine(FakeScheduleSource(**schedule_kwargs), FakeReservationSource(reservations))


def test_closed_date_has_no_slots():
    engine = _engine(closed={TOMORROW})
    assert engine.list_available_slots(1, TOMORROW, NOW) == []


def test_unscheduled_weekday_has_no_slots():
    engine = _engine(weekdays={"Monday"})
    assert engine.list_available_slots(1, "2026-10-20", NOW) == []
    assert engine.list_available_slots(1, "2026-10-19", NOW) != []


def test_midnight_close():
    engine = _engine(open_time="18:00", close_time="00:00")
    slots = engine.list_available_slots(1, TOMORROW, NOW)
    assert slots[-1].canonical_time == "23:30:00"
    assert engine.max_duration(1, TOMORROW, "22:00") == Decimal("2")


def test_listing_is_idempotent():
    engine = _engine([span("14:00", "16:00")])
    assert engine.list_available_slots(1, TOMORROW, NOW) == engine.list_available_slots(1, TOMORROW, NOW)


def test_listing_fails_closed():
    engine = SlotEngine(FakeScheduleSource(), FakeReservationSource(fail=True))
    with pytest.raises(UpstreamFetchFailure):
        engine.list_available_slots(1, TOMORROW, NOW)


def test_max_duration():
    engine = _engine([span("17:00", "18:00")])
    assert engine.max_duration(1, TOMORROW, "14:00") == Decimal("2")
    assert engine.max_duration(1, TOMORROW, "18:00") == Decimal("4")


def test_max_duration_zero_outside_the_window():
    engine = _engine([span("17:00", "18:00")])
    assert engine.max_duration(1, TOMORROW, "08:00") == 0
    assert engine.max_duration(1, TOMORROW, "17:30") == 0
    assert _engine(closed={TOMORROW}).max_duration(1, TOMORROW, "14:00") == 0


def test_is_slot_bookable():
    engine = _engine([span("14:00", "16:00")])
    assert engine.is_slot_bookable(1, TOMORROW, "12:00", 2) is Availability.AVAILABLE
    assert engine.is_slot_bookable(1, TOMORROW, "13:00", 1.5) is Availability.UNAVAILABLE
    assert engine.is_slot_bookable(1, TOMORROW, "21:00", 2) is Availability.UNAVAILABLE
    assert _engine(closed={TOMORROW}).is_slot_bookable(1, TOMORROW, "12:00", 1) is Availability.UNAVAILABLE


def test_is_slot_bookable_unknown_on_source_failure():
    engine = SlotEngine(FakeScheduleSource(), FakeReservationSource(fail=True))
    result = engine.is_slot_bookable(1, TOMORROW, "12:00", 1)
    assert result is Availability.UNKNOWN
    assert not result.is_bookable


def test_is_slot_bookable_rejects_malformed_input():
    engine = _engine()
    with pytest.raises(InvalidInput):
        engine.is_slot_bookable(1, TOMORROW, "12:00", 0)
    with pytest.raises(InvalidInput):
        engine.is_slot_bookable(1, "tomorrow", "12:00", 1)


def test_day_status():
    status = _engine([span("14:00", "16:00")]).day_status(1, TOMORROW, NOW)
    assert status.is_open
    # 26 slots, 4 reserved, 09:30 and 16:30 gap-blocked
    assert status.open_slots_count == 20
    assert status.occupancy == round(120 / 780, 4)


def test_calendar_is_capped_to_the_horizon():
    days = _engine(closed={TOMORROW}).calendar(1, NOW.date(), NOW.date() + timedelta(days=100), NOW)
    assert len(days) == 61
    assert not days[1].is_open
    assert not days[1].has_slots
    assert _engine().calendar(1, TOMORROW, NOW.date(), NOW) == []


def test_table_status():
    assert _engine().table_status(1, "Available", NOW).next_available_date == NOW.date()

    blocked = _engine().table_status(1, "Maintenance", NOW)
    assert not blocked.is_selectable
    assert blocked.display_text == "MAINTENANCE"

    full = _engine([span("09:00", "22:00")]).table_status(1, "Available", NOW)
    assert full.status == "Fully Booked"
    assert not full.is_selectable


def test_day_window_is_cached():
    schedules = FakeScheduleSource()
    store = SlotsRedisStore(FakeRedis())
    engine = SlotEngine(schedules, FakeReservationSource(), store=store)

    assert engine.day_window(TOMORROW) == DayWindow(540, 1320)
    assert engine.day_window(TOMORROW) == DayWindow(540, 1320)
    assert schedules.calls == 1


def test_day_window_falls_back_when_redis_is_down():
    engine = SlotEngine(FakeScheduleSource(), FakeReservationSource(), store=SlotsRedisStore(BrokenRedis()))
    assert engine.day_window(TOMORROW) == DayWindow(540, 1320)


def test_calendar_reads_day_windows_in_one_batch():
    schedules = FakeScheduleSource()
    redis = FakeRedis()
    engine = SlotEngine(schedules, FakeReservationSource(), store=SlotsRedisStore(redis))
    end = TOMORROW + timedelta(days=6)

    first = engine.calendar(1, TOMORROW, end, NOW)
    assert schedules.calls == 7
    assert len(redis.data) == 7

    assert engine.calendar(1, TOMORROW, end, NOW) == first
    assert schedules.calls == 7


def test_calendar_falls_back_when_redis_is_down():
    engine = SlotEngine(FakeScheduleSource(), FakeReservationSource(), store=SlotsRedisStore(BrokenRedis()))
    days = engine.calendar(1, TOMORROW, TOMORROW + timedelta(days=2), NOW)
    assert [d.is_open for d in days] == [True, True, True]
