import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.shopping import GroceryListGenerate, ShoppingListPublic
from budget_tracker.utils.shopping import aggregate_ingredients, normalize_items, total_cost

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=ShoppingListPublic, status_code=status.HTTP_201_CREATED)
def generate_grocery_list(data: GroceryListGenerate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Turn the meal plans between two dates into a shopping list with one grocery per ingredient."""
    if data.end_date < data.start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    meal_plans = crud.list_meal_plans(db, user.id, data.start_date, data.end_date)
    logger.info(f"Found meal plans: {len(meal_plans)}")

    items = normalize_items(aggregate_ingredients(meal_plans))
    return crud.create_shopping_list(db, user.id, "", items, total_cost(items), with_groceries=True)
