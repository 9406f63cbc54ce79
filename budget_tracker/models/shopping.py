from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from budget_tracker.models._base import ORMModel, to_naive_utc


class ShoppingItem(BaseModel):
    """An item of a shopping list; unknown keys sent by clients are kept."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str = ""
    quantity: float = 1
    unit: str = ""
    category: str = ""
    price: float = 0
    checked: bool = False


class ShoppingListCreate(BaseModel):
    store: str = ""
    items: List[ShoppingItem] = []


class ShoppingListUpdate(BaseModel):
    store: Optional[str] = None
    items: Optional[List[ShoppingItem]] = None


class ShoppingListPublic(ORMModel):
    id: str
    store: str
    items: List[ShoppingItem]
    total_cost: float
    created_at: datetime
    updated_at: datetime


class GroceryUpdate(BaseModel):
    checked: bool


class GroceryPublic(ORMModel):
    id: str
    shopping_list_id: Optional[str] = None
    name: str
    quantity: float
    unit: str
    category: str
    price: float
    checked: bool


class GroceryDayCreate(BaseModel):
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value):
        return to_naive_utc(value)


class GroceryDayPublic(ORMModel):
    id: str
    date: datetime
    created_at: datetime


class GroceryListGenerate(BaseModel):
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)


class RecommendationRequest(BaseModel):
    store: str = ""
    items: List[ShoppingItem] = []


class RecipeSuggestion(BaseModel):
    title: str
    description: str
    ingredients: List[str]
    difficulty: str
    prep_time: str
    cook_time: str
    source: str
    url: str


class Recommendations(BaseModel):
    health_and_nutrition: List[str]
    financial_optimization: List[str]
    shopping_strategy: List[str]
    recipe_suggestions: List[RecipeSuggestion] = Field(default_factory=list)
