# backend/cuebook/services/slots/invalidator.py
"""
Cache invalidation for day windows.

Triggers:
✓ Operating schedule created/changed/deleted → invalidate all dates
✓ Closed date created/deleted → invalidate that date

Does NOT trigger:
✗ Reservation created/cancelled (reservations are never cached)
✗ Table status changes
"""

import logging
from datetime import date, timedelta

from redis import Redis, RedisError

from .redis_store import SlotsRedisStore

logger = logging.getLogger(__name__)


def invalidate_schedule_cache(
    redis: Redis | None,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached day windows.

    Args:
        redis: Redis client (None = cache disabled, nothing to do)
        dates: List of specific dates to invalidate,
               or None to invalidate all cached dates

    Returns:
        Number of deleted cache keys
    """
    if redis is None:
        return 0

    store = SlotsRedisStore(redis)
    try:
        deleted = store.delete_day_windows(dates)
    except RedisError:
        logger.exception("Failed to invalidate day window cache")
        raise

    logger.info(
        "Day window cache invalidated: dates=%s deleted=%s",
        [d.isoformat() for d in dates] if dates else "all",
        deleted,
    )
    return deleted


def get_affected_dates(
    date_start: date,
    date_end: date,
) -> list[date]:
    """
    Get list of dates in range [date_start, date_end].

    Args:
        date_start: Start date (inclusive)
        date_end: End date (inclusive)

    Returns:
        List of dates
    """
    if date_start > date_end:
        date_start, date_end = date_end, date_start

    dates = []
    current = date_start
    while current <= date_end:
        dates.append(current)
        current += timedelta(days=1)

    return dates
