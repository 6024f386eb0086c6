# backend/cuebook/services/slots/redis_store.py
"""
Redis storage for resolved day windows.

Key format: slots:window:{date}
Value: Hash {"open": minutes, "close": minutes}
Sentinel: Hash {"__closed__": "1"} marks "resolved, venue closed".

Reservations are never cached: they change with every booking and are
read fresh for every query.
"""

from datetime import date, datetime, timedelta
from redis import Redis

from .config import BookingConfig, get_booking_config
from .types import DayWindow


CLOSED_SENTINEL = "__closed__"

# Returned by get_day_window on a cache miss (None means "closed")
MISS = object()


class SlotsRedisStore:
    """Redis storage wrapper for day windows."""

    KEY_PREFIX = "slots:window"

    def __init__(self, redis: Redis, config: BookingConfig | None = None):
        self.redis = redis
        self.config = config or get_booking_config()

    def _key(self, dt: date) -> str:
        return f"{self.KEY_PREFIX}:{dt.isoformat()}"

    def _expire_ts(self, dt: date) -> int:
        # Key lives until the end of its day, capped by cache_ttl_seconds
        end_of_day = datetime.combine(dt + timedelta(days=1), datetime.min.time())
        cap = datetime.now() + timedelta(seconds=self.config.cache_ttl_seconds)
        return int(min(end_of_day, cap).timestamp()) + 60

    # ── Write ────────────────────────────────────────────────────────────

    def store_day_window(self, dt: date, window: DayWindow | None) -> None:
        """
        Store the resolved window for a day.

        Args:
            dt: Target date
            window: Opening window, or None for a closed day
                    (sentinel is stored).
        """
        self.store_multiple_days({dt: window})

    def store_multiple_days(self, windows: dict[date, DayWindow | None]) -> None:
        """Batch store windows for multiple days via pipeline."""
        if not windows:
            return

        pipe = self.redis.pipeline()
        for dt, window in windows.items():
            key = self._key(dt)
            pipe.delete(key)
            if window is None:
                pipe.hset(key, mapping={CLOSED_SENTINEL: "1"})
            else:
                pipe.hset(key, mapping={
                    "open": window.open_minutes,
                    "close": window.close_minutes,
                })
            pipe.expireat(key, self._expire_ts(dt))
        pipe.execute()

    # ── Read ─────────────────────────────────────────────────────────────

    def get_day_window(self, dt: date):
        """
        Get the cached window for a day.

        Returns:
            DayWindow, None for a closed day, or MISS when not cached.
        """
        raw = self.redis.hgetall(self._key(dt))
        return _decode_window(raw)

    def mget_day_windows(self, dates: list[date]) -> dict:
        """
        Batch get windows for multiple dates.

        Returns:
            Dict mapping date → DayWindow / None / MISS.
        """
        if not dates:
            return {}

        pipe = self.redis.pipeline()
        for dt in dates:
            pipe.hgetall(self._key(dt))
        results = pipe.execute()

        return {dt: _decode_window(raw) for dt, raw in zip(dates, results)}

    # ── Delete ───────────────────────────────────────────────────────────

    def delete_day_windows(self, dates: list[date] | None = None) -> int:
        """
        Delete cached windows.

        Args:
            dates: Specific dates, or None to delete every cached day.

        Returns:
            Number of deleted keys.
        """
        if dates:
            keys = [self._key(dt) for dt in dates]
        else:
            keys = list(self.redis.scan_iter(match=f"{self.KEY_PREFIX}:*"))

        if not keys:
            return 0

        return self.redis.delete(*keys)


def _decode_window(raw: dict | None):
    if not raw:
        return MISS

    data = {
        (k.decode() if isinstance(k, bytes) else k): (v.decode() if isinstance(v, bytes) else v)
        for k, v in raw.items()
    }
    if CLOSED_SENTINEL in data:
        return None

    try:
        return DayWindow(open_minutes=int(data["open"]), close_minutes=int(data["close"]))
    except (KeyError, ValueError):
        # Corrupt entry: treat as a miss so it gets recalculated
        return MISS
