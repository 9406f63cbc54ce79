from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.shopping import GroceryPublic, GroceryUpdate

router = APIRouter()


@router.patch("/{grocery_id}", response_model=GroceryPublic)
def check_grocery(
    grocery_id: str,
    update: GroceryUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    grocery = crud.get_grocery(db, user.id, grocery_id)
    if not grocery:
        raise HTTPException(status_code=404, detail="Grocery item not found")
    return crud.set_grocery_checked(db, grocery, update.checked)


@router.delete("/{grocery_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_grocery(grocery_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    grocery = crud.get_grocery(db, user.id, grocery_id)
    if not grocery:
        raise HTTPException(status_code=404, detail="Grocery item not found")
    crud.delete_grocery(db, grocery)
    return None
