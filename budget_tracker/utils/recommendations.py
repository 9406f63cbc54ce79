"""
Shopping recommendations built from a user's latest shopping list.

The suggestions are rule based: a fixed set of general tips, extended with a
few hints derived from what is actually on the list.
"""
from typing import Any, Dict, Iterable, List, Optional

from budget_tracker.utils.shopping import total_cost

RECIPE_WEBSITES = [
    "allrecipes.com",
    "foodnetwork.com",
    "epicurious.com",
    "bonappetit.com",
    "seriouseats.com",
    "cooking.nytimes.com",
    "jamieoliver.com",
    "bbcgoodfood.com",
]

PRODUCE_CATEGORIES = {"produce", "vegetables", "fruit", "fruits"}

RECIPES = [
    {
        "title": "Quick and Healthy Stir Fry",
        "description": "A nutritious meal using your shopping list items",
        "ingredients": [
            "2 cups mixed vegetables",
            "1 cup protein of choice",
            "2 tbsp cooking oil",
            "2 tbsp soy sauce",
        ],
        "difficulty": "Easy",
        "prep_time": "15 minutes",
        "cook_time": "10 minutes",
    },
    {
        "title": "Simple Salad Bowl",
        "description": "A refreshing and customizable salad",
        "ingredients": [
            "4 cups mixed greens",
            "1 cup protein of choice",
            "1/4 cup nuts or seeds",
            "2 tbsp dressing",
        ],
        "difficulty": "Easy",
        "prep_time": "10 minutes",
        "cook_time": "0 minutes",
    },
]


def generate_recommendations(store: Optional[str], items: Iterable[Dict[str, Any]]) -> Dict[str, List]:
    items = list(items or [])
    health = [
        "Consider adding more leafy greens to your list",
        "Try to include a variety of colorful vegetables",
        "Look for whole grain options when available",
    ]
    financial = [
        "Check for store brand alternatives",
        "Consider buying in bulk for frequently used items",
        "Look for items on sale or with coupons",
    ]
    strategy = [
        "Group similar items together for efficient shopping",
        "Check store layout to minimize backtracking",
        "Consider shopping during off-peak hours",
    ]

    if items and not any(str(item.get("category", "")).lower() in PRODUCE_CATEGORIES for item in items):
        health.insert(0, "Your list has no fresh produce yet")

    if items:
        priciest = max(items, key=lambda item: float(item.get("price") or 0) * float(item.get("quantity") or 1))
        if priciest.get("name"):
            financial.insert(0, f"{priciest['name']} is the most expensive item on your list; compare prices")
        financial.append(f"Estimated total: ${total_cost(items):.2f}")

    if store:
        strategy.append(f"Check the weekly flyer for {store} before you go")

    recipes = []
    for index, recipe in enumerate(RECIPES):
        site = RECIPE_WEBSITES[index % len(RECIPE_WEBSITES)]
        recipes.append(dict(recipe, source=site, url=f"https://www.{site}"))

    return {
        "health_and_nutrition": health,
        "financial_optimization": financial,
        "shopping_strategy": strategy,
        "recipe_suggestions": recipes,
    }
