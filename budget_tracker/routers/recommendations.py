from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.shopping import RecommendationRequest, Recommendations
from budget_tracker.utils.recommendations import generate_recommendations

router = APIRouter()


@router.get("/", response_model=Recommendations)
def recommendations_for_latest_list(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    shopping_list = crud.get_latest_shopping_list(db, user.id)
    if not shopping_list:
        return generate_recommendations(None, [])
    return generate_recommendations(shopping_list.store, shopping_list.items or [])


@router.post("/", response_model=Recommendations)
def recommendations_for_items(data: RecommendationRequest, user: User = Depends(get_current_user)):
    return generate_recommendations(data.store, [item.model_dump() for item in data.items])
