from datetime import date
from decimal import Decimal

import pytest

from cuebook.services.slots import BookingConfig, InvalidInput
from cuebook.services.slots.config import (
    format_slot_label,
    hours_to_minutes,
    minutes_to_time_str,
    parse_date,
    time_str_to_minutes,
    weekday_name,
)


@pytest.mark.parametrize("value, expected", [
    ("09:00", 540),
    ("09:00:00", 540),
    ("21:30:59", 1290),
    ("00:00", 0),
])
def test_time_str_to_minutes_accepts_both_formats(value, expected):
    assert time_str_to_minutes(value) == expected


@pytest.mark.parametrize("value", ["9am", "24:00", "12:60", "", "12-30", None])
def test_time_str_to_minutes_rejects_malformed(value):
    with pytest.raises(InvalidInput):
        time_str_to_minutes(value)


def test_canonical_time_and_label():
    assert minutes_to_time_str(870) == "14:30:00"
    assert format_slot_label(870) == "2:30 PM"
    assert format_slot_label(0) == "12:00 AM"
    assert format_slot_label(720) == "12:00 PM"


def test_parse_date_is_strict():
    assert parse_date("2026-10-20") == date(2026, 10, 20)
    with pytest.raises(InvalidInput):
        parse_date("2026-02-30")
    with pytest.raises(InvalidInput):
        parse_date("20/10/2026")


def test_weekday_comes_from_the_calendar_date():
    assert weekday_name(date(2026, 10, 19)) == "Monday"
    assert weekday_name(date(2026, 10, 25)) == "Sunday"


def test_hours_to_minutes():
    assert hours_to_minutes(Decimal("1.5")) == 90
    assert hours_to_minutes(0.25) == 15
    for bad in (0, -1, "0.1", True):
        with pytest.raises(InvalidInput):
            hours_to_minutes(bad)


def test_booking_config_validates_steps():
    assert BookingConfig().slot_step_minutes == 30
    with pytest.raises(ValueError):
        BookingConfig(slot_step_minutes=20)
    with pytest.raises(ValueError):
        BookingConfig(gap_minutes=-30)
