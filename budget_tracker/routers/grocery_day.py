from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.shopping import GroceryDayCreate, GroceryDayPublic

router = APIRouter()


@router.get("/", response_model=Optional[GroceryDayPublic])
def get_grocery_day(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.get_latest_grocery_day(db, user.id)


@router.post("/", response_model=GroceryDayPublic, status_code=status.HTTP_201_CREATED)
def set_grocery_day(data: GroceryDayCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.create_grocery_day(db, user.id, data.date)
