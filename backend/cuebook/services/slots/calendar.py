# backend/cuebook/services/slots/calendar.py
"""
Schedule calendar: resolves the opening window of a date.

Closed date              → None
No active weekday schedule → None (zero slots, not an error)
Otherwise                → DayWindow(open, close)
"""

from datetime import date

from .config import MINUTES_PER_DAY, weekday_name
from .sources import ScheduleSource
from .types import DayWindow


def resolve_day_window(source: ScheduleSource, target_date: date) -> DayWindow | None:
    """Get the opening window for target_date, or None when closed."""
    if source.is_date_closed(target_date):
        return None

    schedule = source.get_schedule(weekday_name(target_date))
    if schedule is None or not schedule.is_active:
        return None

    open_min = schedule.open_minutes
    # "00:00" as closing time means the venue closes at midnight
    close_min = schedule.close_minutes or MINUTES_PER_DAY

    if open_min >= close_min:
        return None

    return DayWindow(open_minutes=open_min, close_minutes=close_min)
