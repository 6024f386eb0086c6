# backend/cuebook/routers/durations.py
# PATCH = 405, DELETE = ALLOWED (hard)

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import Durations as DBDurations
from ..schemas.tables import DurationCreate, DurationRead

router = APIRouter(prefix="/durations", tags=["durations"])


@router.get("/", response_model=list[DurationRead])
def list_durations(db: Session = Depends(get_db)):
    return db.query(DBDurations).order_by(DBDurations.hours).all()


@router.post("/", response_model=DurationRead, status_code=status.HTTP_201_CREATED)
def create_duration(
    data: DurationCreate,
    db: Session = Depends(get_db),
):
    if db.query(DBDurations).filter(DBDurations.hours == data.hours).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Duration already exists")

    obj = DBDurations(hours=data.hours)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_duration(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBDurations, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    db.delete(obj)
    db.commit()
