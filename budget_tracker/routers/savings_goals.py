from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from budget_tracker.core.security import get_current_user
from budget_tracker.db import crud
from budget_tracker.db.session import get_db
from budget_tracker.db.tables import User
from budget_tracker.models.savings_goal import SavingsGoalCreate, SavingsGoalPublic, SavingsGoalUpdate

router = APIRouter()


@router.post("/", response_model=SavingsGoalPublic, status_code=status.HTTP_201_CREATED)
def create_savings_goal(goal: SavingsGoalCreate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return crud.create_savings_goal(db, user.id, goal.model_dump())


@router.get("/", response_model=List[SavingsGoalPublic])
def list_savings_goals(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Open goals first, then by nearest target date, newest first on ties."""
    return crud.list_savings_goals(db, user.id)


@router.patch("/{goal_id}", response_model=SavingsGoalPublic)
def update_savings_goal(
    goal_id: str,
    update: SavingsGoalUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = crud.get_savings_goal(db, user.id, goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Savings goal not found")

    # reaching the target completes the goal unless the client says otherwise
    is_completed = update.current_amount >= goal.target_amount
    if update.is_completed is not None:
        is_completed = update.is_completed

    return crud.update_savings_goal(db, goal, update.current_amount, is_completed)


@router.delete("/{goal_id}")
def delete_savings_goal(goal_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    goal = crud.get_savings_goal(db, user.id, goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Savings goal not found")
    crud.delete_savings_goal(db, goal)
    return {"message": "Savings goal deleted successfully"}
