from datetime import datetime
from fnmatch import fnmatch

from redis import ConnectionError as RedisConnectionError

from cuebook.services.slots import UpstreamFetchFailure
from cuebook.services.slots.config import time_str_to_minutes
from cuebook.services.slots.types import ReservationSpan, ScheduleWindow

# Monday morning, before opening
NOW = datetime(2026, 10, 19, 8, 0)
TOMORROW = "2026-10-20"


def span(start: str, end: str) -> ReservationSpan:
    return ReservationSpan(time_str_to_minutes(start), time_str_to_minutes(end))


class FakeScheduleSource:
    def __init__(self, open_time="09:00", close_time="22:00", closed=(), weekdays=None, fail=False):
        self.window = ScheduleWindow(time_str_to_minutes(open_time), time_str_to_minutes(close_time))
        self.closed = set(closed)
        self.weekdays = weekdays
        self.fail = fail
        self.calls = 0

    def get_schedule(self, weekday):
        self.calls += 1
        if self.fail:
            raise UpstreamFetchFailure("schedule store down")
        if self.weekdays is not None and weekday not in self.weekdays:
            return None
        return self.window

    def is_date_closed(self, target_date):
        if self.fail:
            raise UpstreamFetchFailure("schedule store down")
        return target_date in self.closed


class FakeReservationSource:
    def __init__(self, spans=(), fail=False):
        self.spans = list(spans)
        self.fail = fail

    def get_active_reservations(self, table_id, target_date):
        if self.fail:
            raise UpstreamFetchFailure("reservation store down")
        return list(self.spans)


class FakePipeline:
    def __init__(self, redis):
        self.redis = redis
        self.calls = []

    def __getattr__(self, name):
        def queue(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return queue

    def execute(self):
        results = [getattr(self.redis, name)(*args, **kwargs) for name, args, kwargs in self.calls]
        self.calls = []
        return results


class FakeRedis:
    """Just enough of redis.Redis (decode_responses=True) for the day-window store."""

    def __init__(self):
        self.data = {}
        self.expiry = {}

    def pipeline(self):
        return FakePipeline(self)

    def hset(self, key, mapping):
        self.data.setdefault(key, {}).update({k: str(v) for k, v in mapping.items()})
        return len(mapping)

    def hgetall(self, key):
        return dict(self.data.get(key, {}))

    def expireat(self, key, when):
        self.expiry[key] = when
        return key in self.data

    def delete(self, *keys):
        deleted = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                deleted += 1
            self.expiry.pop(key, None)
        return deleted

    def scan_iter(self, match="*"):
        return [key for key in list(self.data) if fnmatch(key, match)]


class BrokenRedis:
    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise RedisConnectionError("connection refused")
        return fail
