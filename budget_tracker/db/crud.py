"""
Database access layer.

One function per read or write. Every function takes the request's (or the
scheduler's) ``Session`` and, where the record belongs to a user, the owning
``user_id`` so that lookups never cross accounts.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from budget_tracker.db.tables import (
    BudgetAlert,
    Expense,
    Grocery,
    GroceryDay,
    MealPlan,
    SavingsGoal,
    ShoppingList,
    User,
    WeeklyDigest,
)

logger = logging.getLogger(__name__)


def _commit(db: Session, *instances):
    """Flush pending changes, rolling back the session if the write fails."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database write failed: {e}")
        raise
    for instance in instances:
        db.refresh(instance)


# Users

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash)
    db.add(user)
    _commit(db, user)
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at).all()


# Expenses

def create_expense(db: Session, user_id: str, data: Dict[str, Any]) -> Expense:
    expense = Expense(user_id=user_id, **data)
    db.add(expense)
    _commit(db, expense)
    return expense


def get_expenses_for_user(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Expense]:
    """
    All expenses of a user, newest first.
    When both bounds are given only expenses dated inside [start, end] are returned.
    """
    query = db.query(Expense).filter(Expense.user_id == user_id)
    if start is not None and end is not None:
        query = query.filter(Expense.date >= start, Expense.date <= end)
    return query.order_by(Expense.date.desc()).all()


def get_expense_summary(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """Totals per category, optionally restricted to a date range."""
    query = db.query(Expense.category, func.sum(Expense.amount)).filter(Expense.user_id == user_id)
    if start is not None and end is not None:
        query = query.filter(Expense.date >= start, Expense.date <= end)
    rows = query.group_by(Expense.category).order_by(Expense.category).all()
    return [{"category": category, "total": total or 0} for category, total in rows]


def get_expense(db: Session, user_id: str, expense_id: str) -> Optional[Expense]:
    return db.query(Expense).filter(Expense.id == expense_id, Expense.user_id == user_id).first()


def update_expense(db: Session, user_id: str, expense_id: str, updates: Dict[str, Any]) -> Optional[Expense]:
    """Apply partial updates to an expense. Returns the updated row or None."""
    expense = get_expense(db, user_id, expense_id)
    if not expense:
        return None
    for key, value in updates.items():
        setattr(expense, key, value)
    _commit(db, expense)
    return expense


def delete_expense(db: Session, user_id: str, expense_id: str) -> bool:
    expense = get_expense(db, user_id, expense_id)
    if not expense:
        return False
    db.delete(expense)
    _commit(db)
    return True


# Savings goals

def create_savings_goal(db: Session, user_id: str, data: Dict[str, Any]) -> SavingsGoal:
    goal = SavingsGoal(user_id=user_id, current_amount=0.0, is_completed=False, **data)
    db.add(goal)
    _commit(db, goal)
    return goal


def list_savings_goals(db: Session, user_id: str) -> List[SavingsGoal]:
    return (
        db.query(SavingsGoal)
        .filter(SavingsGoal.user_id == user_id)
        .order_by(
            SavingsGoal.is_completed.asc(),
            SavingsGoal.target_date.asc(),
            SavingsGoal.created_at.desc(),
        )
        .all()
    )


def get_savings_goal(db: Session, user_id: str, goal_id: str) -> Optional[SavingsGoal]:
    return db.query(SavingsGoal).filter(SavingsGoal.id == goal_id, SavingsGoal.user_id == user_id).first()


def update_savings_goal(db: Session, goal: SavingsGoal, current_amount: float, is_completed: bool) -> SavingsGoal:
    goal.current_amount = current_amount
    goal.is_completed = is_completed
    _commit(db, goal)
    return goal


def delete_savings_goal(db: Session, goal: SavingsGoal):
    db.delete(goal)
    _commit(db)


# Meal plans

def list_meal_plans(
    db: Session,
    user_id: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[MealPlan]:
    query = db.query(MealPlan).filter(MealPlan.user_id == user_id)
    if start is not None and end is not None:
        query = query.filter(MealPlan.date >= start, MealPlan.date <= end)
    return query.order_by(MealPlan.date.asc()).all()


def find_meal_plan(db: Session, user_id: str, date: datetime, meal_type: str) -> Optional[MealPlan]:
    return (
        db.query(MealPlan)
        .filter(MealPlan.user_id == user_id, MealPlan.date == date, MealPlan.meal_type == meal_type)
        .first()
    )


def get_meal_plan(db: Session, user_id: str, meal_plan_id: str) -> Optional[MealPlan]:
    return db.query(MealPlan).filter(MealPlan.id == meal_plan_id, MealPlan.user_id == user_id).first()


def create_meal_plan(
    db: Session, user_id: str, date: datetime, meal_type: str, ingredients: List[Dict]
) -> Optional[MealPlan]:
    """Insert a meal plan. Returns None when the (date, meal_type) slot is already taken."""
    meal_plan = MealPlan(user_id=user_id, date=date, meal_type=meal_type, ingredients=ingredients)
    db.add(meal_plan)
    try:
        _commit(db, meal_plan)
    except IntegrityError:
        return None
    return meal_plan


def update_meal_plan(db: Session, meal_plan: MealPlan, updates: Dict[str, Any]) -> Optional[MealPlan]:
    """Apply updates. Returns None when they would move the plan onto a taken slot."""
    for key, value in updates.items():
        setattr(meal_plan, key, value)
    try:
        _commit(db, meal_plan)
    except IntegrityError:
        return None
    return meal_plan


def delete_meal_plan(db: Session, meal_plan: MealPlan):
    db.delete(meal_plan)
    _commit(db)


# Shopping lists and groceries

def get_latest_shopping_list(db: Session, user_id: str) -> Optional[ShoppingList]:
    return (
        db.query(ShoppingList)
        .filter(ShoppingList.user_id == user_id)
        .order_by(ShoppingList.created_at.desc())
        .first()
    )


def get_shopping_list(db: Session, user_id: str, list_id: str) -> Optional[ShoppingList]:
    return db.query(ShoppingList).filter(ShoppingList.id == list_id, ShoppingList.user_id == user_id).first()


def create_shopping_list(
    db: Session,
    user_id: str,
    store: str,
    items: List[Dict[str, Any]],
    total_cost: float,
    with_groceries: bool = False,
) -> ShoppingList:
    """
    Persist a shopping list. With ``with_groceries`` one Grocery row is
    created per item so that items can be checked off individually.
    """
    shopping_list = ShoppingList(user_id=user_id, store=store, items=items, total_cost=total_cost)
    if with_groceries:
        shopping_list.groceries = [
            Grocery(
                user_id=user_id,
                name=item["name"],
                quantity=item.get("quantity", 1),
                unit=item.get("unit", ""),
                category=item.get("category", ""),
                price=item.get("price", 0),
                checked=False,
            )
            for item in items
        ]
    db.add(shopping_list)
    _commit(db, shopping_list)
    return shopping_list


def update_shopping_list(
    db: Session,
    shopping_list: ShoppingList,
    store: str,
    items: List[Dict[str, Any]],
    total_cost: float,
) -> ShoppingList:
    shopping_list.store = store
    shopping_list.items = items
    shopping_list.total_cost = total_cost
    _commit(db, shopping_list)
    return shopping_list


def delete_shopping_list(db: Session, shopping_list: ShoppingList):
    """Delete a list; its groceries go with it through the relationship cascade."""
    db.delete(shopping_list)
    _commit(db)


def get_grocery(db: Session, user_id: str, grocery_id: str) -> Optional[Grocery]:
    return db.query(Grocery).filter(Grocery.id == grocery_id, Grocery.user_id == user_id).first()


def set_grocery_checked(db: Session, grocery: Grocery, checked: bool) -> Grocery:
    grocery.checked = checked
    _commit(db, grocery)
    return grocery


def delete_grocery(db: Session, grocery: Grocery):
    db.delete(grocery)
    _commit(db)


def get_latest_grocery_day(db: Session, user_id: str) -> Optional[GroceryDay]:
    return db.query(GroceryDay).filter(GroceryDay.user_id == user_id).order_by(GroceryDay.date.desc()).first()


def create_grocery_day(db: Session, user_id: str, date: datetime) -> GroceryDay:
    grocery_day = GroceryDay(user_id=user_id, date=date)
    db.add(grocery_day)
    _commit(db, grocery_day)
    return grocery_day


# Alerts and digests (create-only from the scheduler)

def create_budget_alert(db: Session, user_id: str, data: Dict[str, Any]) -> BudgetAlert:
    alert = BudgetAlert(user_id=user_id, **data)
    db.add(alert)
    _commit(db, alert)
    return alert


def list_budget_alerts(db: Session, user_id: str) -> List[BudgetAlert]:
    return (
        db.query(BudgetAlert)
        .filter(BudgetAlert.user_id == user_id)
        .order_by(BudgetAlert.created_at.desc())
        .all()
    )


def mark_alert_read(db: Session, user_id: str, alert_id: str) -> Optional[BudgetAlert]:
    alert = db.query(BudgetAlert).filter(BudgetAlert.id == alert_id, BudgetAlert.user_id == user_id).first()
    if not alert:
        return None
    alert.is_read = True
    _commit(db, alert)
    return alert


def create_weekly_digest(db: Session, user_id: str, data: Dict[str, Any]) -> WeeklyDigest:
    digest = WeeklyDigest(user_id=user_id, **data)
    db.add(digest)
    _commit(db, digest)
    return digest


def list_weekly_digests(db: Session, user_id: str, limit: int) -> List[WeeklyDigest]:
    return (
        db.query(WeeklyDigest)
        .filter(WeeklyDigest.user_id == user_id)
        .order_by(WeeklyDigest.created_at.desc())
        .limit(limit)
        .all()
    )
