from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional, Tuple

Period = Tuple[datetime, datetime]

ALERT_BUDGET_WARNING = "budget_warning"
ALERT_BUDGET_EXCEEDED = "budget_exceeded"


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)


def month_bounds(now: datetime) -> Period:
    """First and last instant of the month containing ``now``."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    return _start_of_day(now.replace(day=1)), _end_of_day(now.replace(day=last_day))


def week_bounds(now: datetime) -> Period:
    """Sunday 00:00 to Saturday 23:59:59.999999 of the week containing ``now``."""
    days_since_sunday = (now.weekday() + 1) % 7
    start = _start_of_day(now) - timedelta(days=days_since_sunday)
    return start, _end_of_day(start + timedelta(days=6))


def previous_week_bounds(now: datetime) -> Period:
    return week_bounds(now - timedelta(weeks=1))


def range_bounds(range_name: Optional[str], now: datetime) -> Optional[Period]:
    """Resolve the ``day``/``week``/``month`` filter used by expense listings."""
    if range_name == "day":
        return _start_of_day(now), _end_of_day(now)
    if range_name == "week":
        return week_bounds(now)
    if range_name == "month":
        return month_bounds(now)
    return None


@dataclass
class BudgetCheckResult:
    """Current-month spend of one user measured against the monthly budget."""

    user_id: str
    user_email: str
    user_name: str
    total_spent: float
    percentage_used: float
    is_over_80_percent: bool
    is_over_budget: bool

    @property
    def alert_type(self) -> Optional[str]:
        if self.is_over_budget:
            return ALERT_BUDGET_EXCEEDED
        if self.is_over_80_percent:
            return ALERT_BUDGET_WARNING
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class WeeklyDigestData:
    user_id: str
    total_spent: float
    category_breakdown: Dict[str, float] = field(default_factory=dict)
    week_start: Optional[datetime] = None
    week_end: Optional[datetime] = None

    @property
    def message(self) -> str:
        return f"You spent ${self.total_spent:.2f} this week."


class BudgetAnalyzer:
    """
    Budget rules shared by the weekly scheduler and the API: monthly budget
    evaluation, alert wording and category aggregation for digests.

    Expenses are anything with ``amount``, ``category`` and
    ``custom_category_name`` attributes (ORM rows) or keys (plain dicts).
    """

    def __init__(self, monthly_budget: float = 500.0, warning_percent: float = 80.0) -> None:
        if monthly_budget <= 0:
            raise ValueError("monthly_budget must be positive")
        self.monthly_budget = monthly_budget
        self.warning_percent = warning_percent

    @staticmethod
    def _field(expense: Any, name: str, default: Any = None) -> Any:
        if isinstance(expense, dict):
            return expense.get(name, default)
        return getattr(expense, name, default)

    def total(self, expenses: Iterable[Any]) -> float:
        return sum(float(self._field(exp, "amount", 0) or 0) for exp in expenses)

    def evaluate(self, user: Any, expenses: Iterable[Any]) -> BudgetCheckResult:
        total_spent = self.total(expenses)
        percentage_used = (total_spent / self.monthly_budget) * 100

        return BudgetCheckResult(
            user_id=self._field(user, "id"),
            user_email=self._field(user, "email"),
            user_name=self._field(user, "name") or "User",
            total_spent=total_spent,
            percentage_used=percentage_used,
            is_over_80_percent=percentage_used >= self.warning_percent,
            is_over_budget=percentage_used >= 100,
        )

    def alert_message(self, result: BudgetCheckResult) -> str:
        budget = self.monthly_budget
        if result.is_over_budget:
            return (
                f"You've exceeded your monthly budget! You've spent ${result.total_spent:.2f} "
                f"out of ${budget:.2f} ({result.percentage_used:.1f}%)."
            )
        return (
            f"Budget warning: You've used {result.percentage_used:.1f}% of your monthly budget. "
            f"You've spent ${result.total_spent:.2f} out of ${budget:.2f}."
        )

    def alert_record(self, result: BudgetCheckResult) -> Optional[Dict[str, Any]]:
        """Fields of the alert to persist, or None while below the warning level."""
        alert_type = result.alert_type
        if alert_type is None:
            return None
        return {
            "type": alert_type,
            "message": self.alert_message(result),
            "amount": result.total_spent,
            "budget": self.monthly_budget,
            "percentage": result.percentage_used,
        }

    def category_label(self, expense: Any) -> str:
        category = self._field(expense, "category")
        if category == "other":
            return self._field(expense, "custom_category_name") or "Other"
        return category

    def category_breakdown(self, expenses: Iterable[Any]) -> Dict[str, float]:
        totals: Dict[str, float] = defaultdict(float)
        for exp in expenses:
            totals[self.category_label(exp)] += float(self._field(exp, "amount", 0) or 0)
        return dict(totals)

    def weekly_digest(
        self,
        user_id: str,
        expenses: Iterable[Any],
        week_start: datetime,
        week_end: datetime,
    ) -> Optional[WeeklyDigestData]:
        expenses = list(expenses)
        if not expenses:
            return None

        return WeeklyDigestData(
            user_id=user_id,
            total_spent=self.total(expenses),
            category_breakdown=self.category_breakdown(expenses),
            week_start=week_start,
            week_end=week_end,
        )
