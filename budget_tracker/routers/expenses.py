from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.expense import (
    CategoryTotal,
    ExpenseCreate,
    ExpenseCreated,
    ExpenseList,
    ExpensePublic,
    ExpenseUpdate,
)
from budget_tracker.utils.analyzer import range_bounds

router = APIRouter()

RANGE_PATTERN = "^(day|week|month)$"


def _bounds(range_name: Optional[str]):
    bounds = range_bounds(range_name, datetime.utcnow())
    return bounds if bounds else (None, None)


@router.post("/", response_model=ExpenseCreated, status_code=status.HTTP_201_CREATED)
def create_expense(expense: ExpenseCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    data = expense.model_dump()
    data["category"] = expense.category.value
    created = crud.create_expense(db, user.id, data)
    return {"message": "Expense created successfully", "expense": created}


@router.get("/", response_model=ExpenseList)
def list_expenses(
    range_name: Optional[str] = Query(default=None, alias="range", pattern=RANGE_PATTERN),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Expenses newest first. ``range`` limits them to today, this week
    (starting Sunday) or this month.
    """
    start, end = _bounds(range_name)
    return {"expenses": crud.get_expenses_for_user(db, user.id, start, end)}


@router.get("/summary", response_model=List[CategoryTotal])
def expense_summary(
    range_name: Optional[str] = Query(default=None, alias="range", pattern=RANGE_PATTERN),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    start, end = _bounds(range_name)
    return crud.get_expense_summary(db, user.id, start, end)


@router.put("/{expense_id}", response_model=ExpensePublic)
def update_expense(
    expense_id: str,
    expense_update: ExpenseUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    mutable_fields = {
        k: v for k, v in expense_update.model_dump(exclude_unset=True).items()
        if v is not None or k == "custom_category_name"
    }
    if not mutable_fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    if "category" in mutable_fields:
        mutable_fields["category"] = expense_update.category.value

    existing = crud.get_expense(db, user.id, expense_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Expense not found")

    category = mutable_fields.get("category", existing.category)
    custom_name = mutable_fields.get("custom_category_name", existing.custom_category_name)
    if category == "other" and not (custom_name or "").strip():
        raise HTTPException(status_code=400, detail="Custom category name is required when category is other")

    return crud.update_expense(db, user.id, expense_id, mutable_fields)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    deleted = crud.delete_expense(db, user.id, expense_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Expense not found")
    return None
