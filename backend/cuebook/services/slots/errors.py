"""
Exceptions raised by the slots engine.

Routers never catch these directly: main.py maps them to HTTP responses.
"""


class SchedulingError(Exception):
    """Base exception for all slots engine errors."""
    pass


class InvalidInput(SchedulingError, ValueError):
    """Raised for malformed dates, times or durations. Never coerced."""
    pass


class UpstreamFetchFailure(SchedulingError):
    """
    Raised when the schedule or reservation snapshot could not be read.

    The engine fails closed: a failed fetch never yields an available slot.
    """
    pass
