import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.shopping import ShoppingListCreate, ShoppingListPublic, ShoppingListUpdate
from budget_tracker.utils.shopping import normalize_items, total_cost

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=ShoppingListPublic)
def get_latest_shopping_list(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The user's most recent list, or an empty one when none exists yet."""
    shopping_list = crud.get_latest_shopping_list(db, user.id)
    if shopping_list:
        return shopping_list

    now = datetime.utcnow()
    return {"id": "", "store": "", "items": [], "total_cost": 0, "created_at": now, "updated_at": now}


@router.post("/", response_model=ShoppingListPublic, status_code=status.HTTP_201_CREATED)
def create_shopping_list(data: ShoppingListCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = normalize_items(item.model_dump() for item in data.items)
    shopping_list = crud.create_shopping_list(db, user.id, data.store, items, total_cost(items))
    logger.info(f"Shopping list created: {shopping_list.id}")
    return shopping_list


@router.patch("/", response_model=ShoppingListPublic)
def update_latest_shopping_list(
    data: ShoppingListUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the latest list, keeping fields that are not sent; create one if there is none."""
    existing = crud.get_latest_shopping_list(db, user.id)

    if data.items is not None:
        items = normalize_items(item.model_dump() for item in data.items)
    else:
        items = list(existing.items or []) if existing else []

    if existing:
        logger.info("Updating existing shopping list")
        store = data.store if data.store is not None else existing.store
        return crud.update_shopping_list(db, existing, store, items, total_cost(items))

    logger.info("Creating new shopping list")
    return crud.create_shopping_list(db, user.id, data.store or "", items, total_cost(items))


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_list(list_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    shopping_list = crud.get_shopping_list(db, user.id, list_id)
    if not shopping_list:
        raise HTTPException(status_code=404, detail="Shopping list not found")
    crud.delete_shopping_list(db, shopping_list)
    return None
