from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from budget_tracker.models._base import ORMModel, to_naive_utc


class Ingredient(BaseModel):
    name: str = Field(min_length=1)
    quantity: float = Field(default=1, gt=0)
    unit: str = ""
    category: str = ""
    price: float = Field(default=0, ge=0)


class MealPlanCreate(BaseModel):
    date: datetime
    meal_type: str = Field(min_length=1)
    ingredients: List[Ingredient] = []

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)

    @field_validator("meal_type")
    @classmethod
    def lowercase_meal_type(cls, value):
        return value.strip().lower()


class MealPlanUpdate(BaseModel):
    date: Optional[datetime] = None
    meal_type: Optional[str] = Field(default=None, min_length=1)
    ingredients: Optional[List[Ingredient]] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value) if value is not None else value

    @field_validator("meal_type")
    @classmethod
    def lowercase_meal_type(cls, value):
        return value.strip().lower() if value is not None else value


class MealPlanPublic(ORMModel):
    id: str
    date: datetime
    meal_type: str
    ingredients: List[Ingredient] = []
    created_at: datetime
