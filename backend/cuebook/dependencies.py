# backend/cuebook/dependencies.py
"""
FastAPI dependencies shared by routers.
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends
from redis import Redis
from sqlalchemy.orm import Session

from .database import get_db
from .redis_client import get_redis
from .services.slots import (
    DbReservationSource,
    DbScheduleSource,
    SlotEngine,
    SlotsRedisStore,
    get_booking_config,
)


def get_now() -> datetime:
    """Venue-local wall clock. Overridden in tests."""
    return datetime.now()


def get_slot_engine(
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
) -> SlotEngine:
    """Engine for read queries: day windows may come from the Redis cache."""
    config = get_booking_config()
    store = SlotsRedisStore(redis, config) if redis is not None else None
    return SlotEngine(
        DbScheduleSource(db),
        DbReservationSource(db),
        config=config,
        store=store,
    )


def build_write_engine(db: Session) -> SlotEngine:
    """Engine for the reservation write path: reads only the database."""
    return SlotEngine(
        DbScheduleSource(db),
        DbReservationSource(db),
        config=get_booking_config(),
    )
