"""
Slots API endpoints.

GET  /slots/day           - Annotated slots of a table on a day
GET  /slots/max-duration  - Longest bookable duration from a start time
GET  /slots/check         - Is [start, start + duration) bookable
GET  /slots/end-time      - End time of a session
GET  /slots/calendar      - Per-day availability over the horizon
GET  /slots/table-status  - Selectable status of a table
POST /slots/invalidate    - Drop cached day windows
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_now, get_slot_engine
from ..models.generated import BilliardTables as DBBilliardTables, Durations as DBDurations
from ..redis_client import get_redis
from ..schemas.slots import (
    EndTimeResponse,
    InvalidateRequest,
    MaxDurationResponse,
    SlotCheckResponse,
    SlotInfo,
    SlotsCalendarResponse,
    SlotsDayResponse,
    SlotsDayStatus,
    TableStatusResponse,
)
from ..services.slots import (
    Availability,
    SlotEngine,
    InvalidInput,
    calculate_end_time,
    filter_durations,
    invalidate_schedule_cache,
)


router = APIRouter(prefix="/slots", tags=["slots"])


def _get_table(db: Session, table_id: int) -> DBBilliardTables:
    table = db.get(DBBilliardTables, table_id)
    if not table:
        raise HTTPException(status_code=404, detail="Table not found")
    return table


@router.get("/day", response_model=SlotsDayResponse)
def get_slots_day(
    table_id: int,
    target_date: date = Query(..., alias="date"),
    only_available: bool = False,
    db: Session = Depends(get_db),
    engine: SlotEngine = Depends(get_slot_engine),
    now: datetime = Depends(get_now),
):
    """Get annotated time slots of a table on a specific day."""
    _get_table(db, table_id)

    slots = engine.list_available_slots(table_id, target_date, now)
    if only_available:
        slots = [s for s in slots if s.is_available]

    return SlotsDayResponse(
        table_id=table_id,
        date=target_date,
        slots=[
            SlotInfo(
                label=s.label,
                time=s.canonical_time,
                is_past=s.is_past,
                is_available=s.is_available,
                is_reserved=s.is_reserved,
                has_gap_issue=s.has_gap_issue,
            )
            for s in slots
        ],
        available_count=sum(1 for s in slots if s.is_available),
    )


@router.get("/max-duration", response_model=MaxDurationResponse)
def get_max_duration(
    table_id: int,
    start_time: str,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    engine: SlotEngine = Depends(get_slot_engine),
):
    """Longest bookable duration from start_time and the catalog entries that fit."""
    _get_table(db, table_id)

    max_hours = engine.max_duration(table_id, target_date, start_time)
    catalog = db.query(DBDurations).order_by(DBDurations.hours).all()
    durations = filter_durations(catalog, max_hours)

    return MaxDurationResponse(
        table_id=table_id,
        date=target_date,
        start_time=start_time,
        max_hours=max_hours,
        durations=durations,
        can_book=bool(durations),
    )


@router.get("/check", response_model=SlotCheckResponse)
def check_slot(
    table_id: int,
    start_time: str,
    duration_hours: Decimal,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    engine: SlotEngine = Depends(get_slot_engine),
):
    """Check whether a session can be booked (advisory; the write path re-checks)."""
    _get_table(db, table_id)

    availability = engine.is_slot_bookable(table_id, target_date, start_time, duration_hours)
    try:
        end_time = calculate_end_time(start_time, duration_hours)
    except InvalidInput:
        # Past midnight; is_slot_bookable already reported it unavailable
        end_time = None

    return SlotCheckResponse(
        table_id=table_id,
        date=target_date,
        start_time=start_time,
        end_time=end_time,
        duration_hours=duration_hours,
        availability=availability.value,
        is_bookable=availability is Availability.AVAILABLE,
    )


@router.get("/end-time", response_model=EndTimeResponse)
def get_end_time(start_time: str, duration_hours: Decimal):
    """Calculate the end time of a session."""
    return EndTimeResponse(
        start_time=start_time,
        duration_hours=duration_hours,
        end_time=calculate_end_time(start_time, duration_hours),
    )


@router.get("/calendar", response_model=SlotsCalendarResponse)
def get_slots_calendar(
    table_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db),
    engine: SlotEngine = Depends(get_slot_engine),
    now: datetime = Depends(get_now),
):
    """Get calendar of available days for a table."""
    _get_table(db, table_id)
    config = engine.config

    today = now.date()
    if start_date is None or start_date < today:
        start_date = today
    if end_date is None:
        end_date = start_date + timedelta(days=config.horizon_days)

    if end_date > today + timedelta(days=config.horizon_days):
        end_date = today + timedelta(days=config.horizon_days)
    if end_date < start_date:
        end_date = start_date

    days = engine.calendar(table_id, start_date, end_date, now)

    return SlotsCalendarResponse(
        table_id=table_id,
        start_date=start_date,
        end_date=end_date,
        days=[
            SlotsDayStatus(
                date=d.date,
                is_open=d.is_open,
                has_slots=d.has_slots,
                open_slots_count=d.open_slots_count,
                occupancy=d.occupancy,
            )
            for d in days
        ],
        horizon_days=config.horizon_days,
        slot_step_minutes=config.slot_step_minutes,
    )


@router.get("/table-status", response_model=TableStatusResponse)
def get_table_status(
    table_id: int,
    db: Session = Depends(get_db),
    engine: SlotEngine = Depends(get_slot_engine),
    now: datetime = Depends(get_now),
):
    """Whether the table can be selected on the booking screen."""
    table = _get_table(db, table_id)
    status = engine.table_status(table_id, table.status, now)

    return TableStatusResponse(
        table_id=table_id,
        status=status.status,
        display_text=status.display_text,
        is_selectable=status.is_selectable,
        next_available_date=status.next_available_date,
    )


@router.post("/invalidate")
def invalidate_slots_cache(
    data: InvalidateRequest,
    redis: Optional[Redis] = Depends(get_redis),
):
    """Manually invalidate cached day windows (admin endpoint)."""
    deleted = invalidate_schedule_cache(redis, data.dates)

    return {
        "deleted_keys": deleted,
        "dates": [d.isoformat() for d in data.dates] if data.dates else "all",
    }
