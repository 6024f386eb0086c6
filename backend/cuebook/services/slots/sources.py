# backend/cuebook/services/slots/sources.py
"""
Read collaborators of the slots engine.

ScheduleSource      - weekday schedules and closed dates
ReservationSource   - active reservations for a table/date

The Db* implementations read through a SQLAlchemy Session. Any database
error is re-raised as UpstreamFetchFailure so that the engine fails closed.
"""

import logging
from datetime import date
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import time_str_to_minutes, to_hours
from .errors import InvalidInput, UpstreamFetchFailure
from .types import ACTIVE_STATUSES, ReservationSpan, ScheduleWindow

logger = logging.getLogger(__name__)


class ScheduleSource(Protocol):
    def get_schedule(self, weekday: str) -> ScheduleWindow | None:
        ...

    def is_date_closed(self, target_date: date) -> bool:
        ...


class ReservationSource(Protocol):
    def get_active_reservations(self, table_id: int, target_date: date) -> list[ReservationSpan]:
        ...


class DbScheduleSource:
    """ScheduleSource backed by operating_schedules / closed_dates."""

    def __init__(self, db: Session):
        self.db = db

    def get_schedule(self, weekday: str) -> ScheduleWindow | None:
        from ...models.generated import OperatingSchedules

        try:
            row = (
                self.db.query(OperatingSchedules)
                .filter(
                    OperatingSchedules.weekday == weekday,
                    OperatingSchedules.is_active == 1,
                    OperatingSchedules.is_closed == 0,
                )
                .order_by(OperatingSchedules.id)
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to read schedule for %s", weekday)
            raise UpstreamFetchFailure(f"Schedule for {weekday} could not be read") from exc

        if row is None:
            return None

        try:
            return ScheduleWindow(
                open_minutes=time_str_to_minutes(row.open_time),
                close_minutes=time_str_to_minutes(row.close_time),
                is_active=bool(row.is_active),
            )
        except InvalidInput as exc:
            raise UpstreamFetchFailure(f"Schedule {row.id} has malformed times") from exc

    def is_date_closed(self, target_date: date) -> bool:
        from ...models.generated import ClosedDates

        try:
            row = (
                self.db.query(ClosedDates.id)
                .filter(ClosedDates.closed_date == target_date.isoformat())
                .first()
            )
        except SQLAlchemyError as exc:
            logger.exception("Failed to read closed dates for %s", target_date)
            raise UpstreamFetchFailure(f"Closed dates for {target_date} could not be read") from exc

        return row is not None


class DbReservationSource:
    """ReservationSource backed by the reservations table."""

    def __init__(self, db: Session):
        self.db = db

    def get_active_reservations(self, table_id: int, target_date: date) -> list[ReservationSpan]:
        from ...models.generated import Reservations

        try:
            rows = (
                self.db.query(Reservations)
                .filter(
                    Reservations.table_id == table_id,
                    Reservations.reservation_date == target_date.isoformat(),
                    Reservations.status.in_(ACTIVE_STATUSES),
                )
                .order_by(Reservations.start_time)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception(
                "Failed to read reservations for table=%s date=%s", table_id, target_date
            )
            raise UpstreamFetchFailure(
                f"Reservations for table {table_id} on {target_date} could not be read"
            ) from exc

        try:
            return [reservation_to_span(row) for row in rows]
        except InvalidInput as exc:
            raise UpstreamFetchFailure(
                f"Reservation snapshot for table {table_id} has malformed times"
            ) from exc


def reservation_to_span(row) -> ReservationSpan:
    """Convert a Reservations row (or anything with the same fields)."""
    return ReservationSpan(
        start_minutes=time_str_to_minutes(row.start_time),
        end_minutes=_end_minutes(row.end_time),
        duration_hours=to_hours(row.duration_hours) if row.duration_hours is not None else None,
    )


def _end_minutes(value: str) -> int:
    # A session ending at midnight is stored as "00:00:00"
    minutes = time_str_to_minutes(value)
    return minutes if minutes > 0 else 24 * 60
