# backend/cuebook/routers/billiard_tables.py
# DELETE = 405: set status to "Unavailable" instead

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import BilliardTables as DBBilliardTables
from ..schemas.tables import (
    BilliardTableCreate,
    BilliardTableRead,
    BilliardTableUpdate,
)

router = APIRouter(prefix="/billiard_tables", tags=["billiard_tables"])


@router.get("/", response_model=list[BilliardTableRead])
def list_billiard_tables(db: Session = Depends(get_db)):
    return db.query(DBBilliardTables).order_by(DBBilliardTables.id).all()


@router.get("/{id}", response_model=BilliardTableRead)
def get_billiard_table(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBBilliardTables, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=BilliardTableRead, status_code=status.HTTP_201_CREATED)
def create_billiard_table(
    data: BilliardTableCreate,
    db: Session = Depends(get_db),
):
    if db.query(DBBilliardTables).filter(DBBilliardTables.name == data.name).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table name already exists")

    obj = DBBilliardTables(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=BilliardTableRead)
def update_billiard_table(
    id: int,
    data: BilliardTableUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBBilliardTables, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
