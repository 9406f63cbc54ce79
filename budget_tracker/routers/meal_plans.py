import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models._base import to_naive_utc
from budget_tracker.models.meal_plan import MealPlanCreate, MealPlanPublic, MealPlanUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[MealPlanPublic])
def list_meal_plans(
    start_date: Optional[datetime] = Query(default=None),
    end_date: Optional[datetime] = Query(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Meal plans by date; the range filter applies only when both bounds are given."""
    start = to_naive_utc(start_date) if start_date else None
    end = to_naive_utc(end_date) if end_date else None
    return crud.list_meal_plans(db, user.id, start, end)


@router.post("/", response_model=MealPlanPublic, status_code=status.HTTP_201_CREATED)
def create_meal_plan(meal_plan: MealPlanCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if crud.find_meal_plan(db, user.id, meal_plan.date, meal_plan.meal_type):
        logger.info(f"Meal plan already exists for {meal_plan.date} {meal_plan.meal_type}")
        raise HTTPException(status_code=400, detail="Meal plan already exists")

    created = crud.create_meal_plan(
        db,
        user.id,
        date=meal_plan.date,
        meal_type=meal_plan.meal_type,
        ingredients=[ingredient.model_dump() for ingredient in meal_plan.ingredients],
    )
    if created is None:
        raise HTTPException(status_code=400, detail="Meal plan already exists")
    logger.info(f"Meal plan created: {created.id}")
    return created


@router.patch("/{meal_plan_id}", response_model=MealPlanPublic)
def update_meal_plan(
    meal_plan_id: str,
    update: MealPlanUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    meal_plan = crud.get_meal_plan(db, user.id, meal_plan_id)
    if not meal_plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")

    updates = {k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None}
    if "ingredients" in updates:
        updates["ingredients"] = [ingredient.model_dump() for ingredient in update.ingredients]

    date = updates.get("date", meal_plan.date)
    meal_type = updates.get("meal_type", meal_plan.meal_type)
    clash = crud.find_meal_plan(db, user.id, date, meal_type)
    if clash and clash.id != meal_plan.id:
        raise HTTPException(status_code=400, detail="Meal plan already exists")

    updated = crud.update_meal_plan(db, meal_plan, updates)
    if updated is None:
        raise HTTPException(status_code=400, detail="Meal plan already exists")
    return updated


@router.delete("/{meal_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(meal_plan_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    meal_plan = crud.get_meal_plan(db, user.id, meal_plan_id)
    if not meal_plan:
        raise HTTPException(status_code=404, detail="Meal plan not found")
    crud.delete_meal_plan(db, meal_plan)
    return None
