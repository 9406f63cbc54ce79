from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from budget_tracker.models._base import ORMModel, to_naive_utc


class SavingsGoalCreate(BaseModel):
    goal_name: str = Field(min_length=1)
    target_amount: float = Field(ge=0.01)
    target_date: datetime
    category: Optional[str] = None

    @field_validator("target_date")
    @classmethod
    def normalize_target_date(cls, value):
        return to_naive_utc(value)


class SavingsGoalUpdate(BaseModel):
    current_amount: float = Field(ge=0)
    is_completed: Optional[bool] = None


class SavingsGoalPublic(ORMModel):
    id: str
    goal_name: str
    target_amount: float
    current_amount: float
    target_date: datetime
    category: Optional[str] = None
    is_completed: bool
    created_at: datetime
    updated_at: datetime
