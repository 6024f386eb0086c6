# backend/cuebook/routers/closed_dates.py
# PATCH = 405, DELETE = ALLOWED (hard)

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import ClosedDates as DBClosedDates
from ..redis_client import get_redis
from ..schemas.schedules import ClosedDateCreate, ClosedDateRead
from ..services.slots import invalidate_schedule_cache

router = APIRouter(prefix="/closed_dates", tags=["closed_dates"])


@router.get("/", response_model=list[ClosedDateRead])
def list_closed_dates(db: Session = Depends(get_db)):
    return db.query(DBClosedDates).order_by(DBClosedDates.closed_date).all()


@router.get("/{id}", response_model=ClosedDateRead)
def get_closed_date(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBClosedDates, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post(
    "/", response_model=ClosedDateRead, status_code=status.HTTP_201_CREATED
)
def create_closed_date(
    data: ClosedDateCreate,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    iso = data.closed_date.isoformat()
    if db.query(DBClosedDates).filter(DBClosedDates.closed_date == iso).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Date already closed")

    obj = DBClosedDates(closed_date=iso, reason=data.reason)
    db.add(obj)
    db.commit()
    db.refresh(obj)

    invalidate_schedule_cache(redis, [data.closed_date])
    return obj


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_closed_date(
    id: int,
    db: Session = Depends(get_db),
    redis: Optional[Redis] = Depends(get_redis),
):
    obj = db.get(DBClosedDates, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    closed = date.fromisoformat(obj.closed_date)
    db.delete(obj)
    db.commit()

    invalidate_schedule_cache(redis, [closed])
