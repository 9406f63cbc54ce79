from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from budget_tracker.models._base import ORMModel, to_naive_utc


class ExpenseCategory(str, Enum):
    academic = "academic"
    groceries = "groceries"
    transport = "transport"
    leisure = "leisure"
    rent = "rent"
    other = "other"


class ExpenseCreate(BaseModel):
    amount: float = Field(ge=0.01)
    description: str = Field(min_length=1)
    category: ExpenseCategory
    custom_category_name: Optional[str] = None
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def require_custom_name_for_other(self):
        if self.category == ExpenseCategory.other:
            if not self.custom_category_name or not self.custom_category_name.strip():
                raise ValueError("Custom category name is required when category is other")
        return self


class ExpenseUpdate(BaseModel):
    amount: Optional[float] = Field(default=None, ge=0.01)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[ExpenseCategory] = None
    custom_category_name: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value) if value is not None else value


class ExpensePublic(ORMModel):
    id: str
    amount: float
    description: str
    category: str
    custom_category_name: Optional[str] = None
    date: datetime
    created_at: datetime


class ExpenseCreated(BaseModel):
    message: str
    expense: ExpensePublic


class ExpenseList(BaseModel):
    expenses: List[ExpensePublic]


class CategoryTotal(BaseModel):
    category: str
    total: float
