"""
Shopping list helpers: cost totals, item normalization and the aggregation
of meal-plan ingredients into a grocery list.
"""
from collections import OrderedDict
from typing import Any, Dict, Iterable, List
from uuid import uuid4


def total_cost(items: Iterable[Dict[str, Any]]) -> float:
    """Sum of price x quantity; a missing quantity counts as one."""
    return round(
        sum(float(item.get("price") or 0) * float(item.get("quantity") or 1) for item in items),
        2,
    )


def normalize_items(items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Give every item an id and a checked flag so the UI can toggle it."""
    normalized = []
    for item in items:
        entry = dict(item)
        entry["id"] = entry.get("id") or uuid4().hex[:9]
        entry.setdefault("checked", False)
        normalized.append(entry)
    return normalized


def aggregate_ingredients(meal_plans: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Combine the ingredients of several meal plans into one list.
    Ingredients with the same name (case-insensitive) and unit are merged and
    their quantities added up; the first price seen is kept.
    """
    combined: "OrderedDict[tuple, Dict[str, Any]]" = OrderedDict()
    for plan in meal_plans:
        for ingredient in plan.ingredients or []:
            name = ingredient["name"].strip()
            unit = ingredient.get("unit", "")
            key = (name.lower(), unit)
            quantity = float(ingredient.get("quantity") or 1)
            if key in combined:
                combined[key]["quantity"] += quantity
            else:
                combined[key] = {
                    "name": name,
                    "quantity": quantity,
                    "unit": unit,
                    "category": ingredient.get("category", ""),
                    "price": float(ingredient.get("price") or 0),
                }
    return list(combined.values())
