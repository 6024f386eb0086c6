# backend/cuebook/redis_client.py
"""
Shared Redis client for the day-window cache.

redis_url is optional: without it the slots engine reads schedules
straight from the database.
"""

from typing import Optional

import redis

from .config import settings

redis_client: Optional[redis.Redis] = (
    redis.from_url(settings.redis_url, decode_responses=True)
    if settings.redis_url
    else None
)


def get_redis() -> Optional[redis.Redis]:
    """FastAPI dependency; overridden in tests."""
    return redis_client
