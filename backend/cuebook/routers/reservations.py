# backend/cuebook/routers/reservations.py
# DELETE = 405: reservations are cancelled, never removed

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import build_write_engine, get_now
from ..models.generated import (
    BilliardTables as DBBilliardTables,
    Reservations as DBReservations,
)
from ..schemas.reservations import (
    ReservationCreate,
    ReservationRead,
    ReservationStatusUpdate,
)
from ..services.slots import Availability, calculate_end_time
from ..services.slots.config import time_str_to_minutes
from ..services.slots.types import ACTIVE_STATUSES, BLOCKED_TABLE_STATUSES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("/", response_model=list[ReservationRead])
def list_reservations(
    table_id: Optional[int] = None,
    reservation_date: Optional[date] = Query(None, alias="date"),
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    query = db.query(DBReservations)
    if table_id is not None:
        query = query.filter(DBReservations.table_id == table_id)
    if reservation_date is not None:
        query = query.filter(DBReservations.reservation_date == reservation_date.isoformat())
    if active_only:
        query = query.filter(DBReservations.status.in_(ACTIVE_STATUSES))
    return query.order_by(DBReservations.reservation_date, DBReservations.start_time).all()


@router.get("/{id}", response_model=ReservationRead)
def get_reservation(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBReservations, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Create a reservation.

    The availability check and the insert run in one transaction with the
    table row locked, so two concurrent requests cannot both take the same
    time. Anything the slots endpoints returned earlier is advisory only.
    """
    _ensure_not_past(data.reservation_date, data.start_time, now)
    end_time = calculate_end_time(data.start_time, data.duration_hours)

    _begin_write(db)
    table = _lock_table(db, data.table_id)
    if table.status in BLOCKED_TABLE_STATUSES:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Table is {table.status.lower()}",
        )

    _ensure_bookable(
        db, data.table_id, data.reservation_date, data.start_time, data.duration_hours
    )

    obj = DBReservations(
        table_id=data.table_id,
        reservation_date=data.reservation_date.isoformat(),
        start_time=data.start_time,
        end_time=end_time,
        duration_hours=float(data.duration_hours),
        status="pending",
        customer_name=data.customer_name,
        notes=data.notes,
    )
    db.add(obj)
    _commit(db)
    db.refresh(obj)

    logger.info(
        f"Reservation created: id={obj.id}, table_id={obj.table_id}, "
        f"time={obj.reservation_date} {obj.start_time}-{obj.end_time}"
    )
    return obj


@router.patch("/{id}/status", response_model=ReservationRead)
def update_reservation_status(
    id: int,
    data: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    now: datetime = Depends(get_now),
):
    """
    Move a reservation to another status.

    Re-activating a cancelled or settled reservation re-checks that its
    time is still free.
    """
    _begin_write(db)
    obj = db.get(DBReservations, id)
    if not obj:
        db.rollback()
        raise HTTPException(status_code=404, detail="Not found")

    old_status = obj.status
    if old_status not in ACTIVE_STATUSES and data.status in ACTIVE_STATUSES:
        _lock_table(db, obj.table_id)
        _ensure_bookable(
            db, obj.table_id, obj.reservation_date, obj.start_time, obj.duration_hours
        )

    obj.status = data.status
    obj.updated_at = now.strftime("%Y-%m-%d %H:%M:%S")
    _commit(db)
    db.refresh(obj)

    logger.info(f"Reservation {obj.id} status: {old_status} → {obj.status}")
    return obj


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


# ── Helpers ──────────────────────────────────────────────────────────────


def _begin_write(db: Session) -> None:
    """Open the request's transaction as a write transaction (IMMEDIATE on SQLite)."""
    db.connection(execution_options={"sqlite_begin": "IMMEDIATE"})


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Reservation write failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reservation could not be saved, try again",
        )


def _lock_table(db: Session, table_id: int) -> DBBilliardTables:
    table = (
        db.query(DBBilliardTables)
        .filter(DBBilliardTables.id == table_id)
        .with_for_update()
        .first()
    )
    if not table:
        db.rollback()
        raise HTTPException(status_code=404, detail="Table not found")
    return table


def _ensure_bookable(db: Session, table_id: int, target_date, start_time: str, duration_hours) -> None:
    availability = build_write_engine(db).is_slot_bookable(
        table_id, target_date, start_time, duration_hours
    )
    if availability is Availability.AVAILABLE:
        return

    db.rollback()
    if availability is Availability.UNKNOWN:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Availability could not be verified, try again",
        )

    logger.warning(
        f"Reservation conflict: table_id={table_id}, date={target_date}, "
        f"start={start_time}, hours={duration_hours}"
    )
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Table is not available for this time",
    )


def _ensure_not_past(target_date: date, start_time: str, now: datetime) -> None:
    today = now.date()
    if target_date < today:
        raise HTTPException(status_code=400, detail="Date cannot be in the past")
    if target_date == today and time_str_to_minutes(start_time) <= now.hour * 60 + now.minute:
        raise HTTPException(status_code=400, detail="Time cannot be in the past")
