from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from budget_tracker.models._base import ORMModel


class AlertPublic(ORMModel):
    id: str
    type: str
    message: str
    amount: float
    budget: float
    percentage: float
    is_read: bool
    created_at: datetime


class AlertList(BaseModel):
    alerts: List[AlertPublic]


class AlertMarkRead(BaseModel):
    alert_id: Optional[str] = None


class AlertUpdated(BaseModel):
    alert: AlertPublic


class DigestPublic(ORMModel):
    id: str
    week_start: datetime
    week_end: datetime
    total_spent: float
    category_breakdown: Dict[str, float]
    message: str
    created_at: datetime


class DigestList(BaseModel):
    digests: List[DigestPublic]


class BudgetCheck(BaseModel):
    user_id: str
    user_email: str
    user_name: str
    total_spent: float
    percentage_used: float
    is_over_80_percent: bool
    is_over_budget: bool
