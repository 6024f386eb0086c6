from datetime import date

import pytest
from redis import RedisError

from helpers import BrokenRedis, FakeRedis

from cuebook.services.slots import SlotsRedisStore, invalidate_schedule_cache
from cuebook.services.slots.invalidator import get_affected_dates
from cuebook.services.slots.redis_store import MISS
from cuebook.services.slots.types import DayWindow

DAY = date(2026, 10, 20)


def test_store_and_read_windows():
    redis = FakeRedis()
    store = SlotsRedisStore(redis)

    assert store.get_day_window(DAY) is MISS

    store.store_multiple_days({DAY: DayWindow(540, 1320), date(2026, 10, 21): None})
    assert store.get_day_window(DAY) == DayWindow(540, 1320)
    assert store.get_day_window(date(2026, 10, 21)) is None
    assert "slots:window:2026-10-20" in redis.expiry


def test_mget_day_windows():
    store = SlotsRedisStore(FakeRedis())
    store.store_day_window(DAY, DayWindow(600, 1200))

    result = store.mget_day_windows([DAY, date(2026, 10, 22)])
    assert result[DAY] == DayWindow(600, 1200)
    assert result[date(2026, 10, 22)] is MISS


def test_corrupt_entry_is_a_miss():
    redis = FakeRedis()
    redis.hset("slots:window:2026-10-20", mapping={"open": "nine"})
    assert SlotsRedisStore(redis).get_day_window(DAY) is MISS


def test_invalidate_specific_dates_and_all():
    redis = FakeRedis()
    store = SlotsRedisStore(redis)
    store.store_multiple_days({d: DayWindow(540, 1320) for d in get_affected_dates(DAY, date(2026, 10, 23))})

    assert invalidate_schedule_cache(redis, [DAY]) == 1
    assert store.get_day_window(DAY) is MISS
    assert invalidate_schedule_cache(redis) == 3
    assert redis.data == {}


def test_invalidate_without_redis():
    assert invalidate_schedule_cache(None) == 0


def test_invalidate_propagates_redis_errors():
    with pytest.raises(RedisError):
        invalidate_schedule_cache(BrokenRedis(), [DAY])


def test_affected_dates_are_inclusive():
    assert get_affected_dates(date(2026, 10, 22), DAY) == [DAY, date(2026, 10, 21), date(2026, 10, 22)]
