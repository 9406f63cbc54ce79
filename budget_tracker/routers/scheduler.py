"""
Scheduler Router
Status of the weekly budget job, a manual trigger for development, and the
current user's budget check.
"""
import logging
from datetime import datetime
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status

from budget_tracker.core.config import settings
from budget_tracker.core.security import get_current_user
from budget_tracker.db.tables import User
from budget_tracker.models.alert import BudgetCheck
from budget_tracker.utils.scheduler import BudgetScheduler

router = APIRouter()
logger = logging.getLogger(__name__)


def get_budget_scheduler() -> BudgetScheduler:
    return BudgetScheduler.get_instance()


@router.post("/test")
def trigger_weekly_tasks(
    user: User = Depends(get_current_user),
    budget_scheduler: BudgetScheduler = Depends(get_budget_scheduler),
) -> Dict:
    """Run the weekly alert check and digest generation now. Development only."""
    if settings.ENVIRONMENT != "development":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only available in development")

    if not budget_scheduler.trigger_weekly_tasks():
        raise HTTPException(status_code=500, detail="Weekly tasks failed")

    return {
        "message": "Weekly tasks triggered successfully",
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/status")
def scheduler_status(
    user: User = Depends(get_current_user),
    budget_scheduler: BudgetScheduler = Depends(get_budget_scheduler),
) -> Dict:
    return budget_scheduler.status()


@router.get("/budget", response_model=BudgetCheck)
def check_my_budget(
    user: User = Depends(get_current_user),
    budget_scheduler: BudgetScheduler = Depends(get_budget_scheduler),
):
    result = budget_scheduler.check_budget_for_user(user.id)
    if result is None:
        raise HTTPException(status_code=404, detail="User not found")
    return result.to_dict()
