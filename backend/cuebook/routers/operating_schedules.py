# backend/cuebook/routers/operating_schedules.py
# Any change invalidates every cached day window

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import OperatingSchedules as DBOperatingSchedules
from ..redis_client import get_redis
from ..schemas.schedules import (
    OperatingScheduleCreate,
    OperatingScheduleRead,
    OperatingScheduleUpdate,
    check_window,
)
from ..services.slots import invalidate_schedule_cache

router = APIRouter(prefix="/operating_schedules", tags=["operating_schedules"])


@router.get("/", response_model=list[OperatingScheduleRead])
def list_operating_schedules(db: Session = Depends(get_db)):
    return db.query(DBOperatingSchedules).order_by(DBOperatingSchedules.id).all()


@router.get("/{id}", response_model=OperatingScheduleRead)
def get_operating_schedule(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBOperatingSchedules, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post(
    "/", response_model=OperatingScheduleRead, status_code=status.HTTP_201_CREATED
)
def create_operating_schedule(
    data: OperatingScheduleCreate,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    if data.is_active and not data.is_closed:
        _ensure_single_active(db, data.weekday)

    obj = DBOperatingSchedules(
        weekday=data.weekday,
        open_time=data.open_time,
        close_time=data.close_time,
        is_active=int(data.is_active),
        is_closed=int(data.is_closed),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)

    invalidate_schedule_cache(redis)
    return obj


@router.patch("/{id}", response_model=OperatingScheduleRead)
def update_operating_schedule(
    id: int,
    data: OperatingScheduleUpdate,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    obj = db.get(DBOperatingSchedules, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    changes = data.model_dump(exclude_unset=True)
    try:
        check_window(
            changes.get("open_time", obj.open_time),
            changes.get("close_time", obj.close_time),
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    is_active = obj.is_active if changes.get("is_active") is None else changes["is_active"]
    is_closed = obj.is_closed if changes.get("is_closed") is None else changes["is_closed"]
    if is_active and not is_closed:
        _ensure_single_active(db, obj.weekday, exclude_id=obj.id)

    for field, value in changes.items():
        if isinstance(value, bool):
            value = int(value)
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)

    invalidate_schedule_cache(redis)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_operating_schedule(
    id: int,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    obj = db.get(DBOperatingSchedules, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()

    invalidate_schedule_cache(redis)


def _ensure_single_active(db: Session, weekday: str, exclude_id: Optional[int] = None) -> None:
    """Only one active, non-closed schedule may resolve a weekday."""
    query = db.query(DBOperatingSchedules).filter(
        DBOperatingSchedules.weekday == weekday,
        DBOperatingSchedules.is_active == 1,
        DBOperatingSchedules.is_closed == 0,
    )
    if exclude_id is not None:
        query = query.filter(DBOperatingSchedules.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{weekday} already has an active schedule",
        )
