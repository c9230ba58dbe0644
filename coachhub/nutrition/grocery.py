# -*- coding: utf-8 -*-
"""Grocery list aggregation over a week of meals."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

# Checked in this order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "Proteins": [
        "chicken", "beef", "turkey", "salmon", "fish", "pork", "eggs", "egg", "shrimp", "tuna",
        "tilapia", "cod", "steak", "ground", "bacon", "sausage", "tofu", "tempeh",
    ],
    "Vegetables": [
        "broccoli", "spinach", "pepper", "peppers", "asparagus", "zucchini", "onion", "garlic",
        "tomato", "tomatoes", "lettuce", "kale", "carrots", "carrot", "celery", "cucumber",
        "mushroom", "mushrooms", "cabbage", "cauliflower", "green beans", "peas", "corn",
        "avocado", "sweet potato", "potato",
    ],
    "Fruits": [
        "apple", "banana", "orange", "berries", "strawberries", "blueberries", "mango",
        "pineapple", "grapes", "lemon", "lime", "watermelon", "peach", "pear",
    ],
    "Grains": [
        "rice", "quinoa", "bread", "oats", "oatmeal", "pasta", "noodles", "tortilla", "wrap",
        "cereal", "flour", "bagel", "english muffin",
    ],
    "Dairy": [
        "milk", "cheese", "yogurt", "cottage cheese", "cream", "butter", "sour cream",
        "mozzarella", "cheddar", "feta", "parmesan", "greek yogurt",
    ],
    "Pantry": [
        "oil", "olive oil", "salt", "pepper", "spices", "sauce", "honey", "maple syrup",
        "peanut butter", "almond butter", "almonds", "nuts", "seeds", "protein powder",
        "soy sauce", "vinegar", "mustard", "mayo", "dressing",
    ],
}

OTHER = "Other"
CATEGORY_ORDER = [*CATEGORY_KEYWORDS, OTHER]


def categorize_ingredient(item: str) -> str:
    lower = item.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return category
    return OTHER


def grocery_list(meals: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    """Merge ingredients by lower-cased name, keeping every amount.

    Returns ``{category: [{item, amounts, category}, ...]}`` in ``CATEGORY_ORDER``,
    with items sorted by name and empty categories left out.
    """
    merged: Dict[str, Dict[str, Any]] = {}
    for meal in meals:
        ingredients = meal.get("ingredients")
        if not isinstance(ingredients, list):
            continue
        for ing in ingredients:
            if not isinstance(ing, dict) or not str(ing.get("item") or "").strip():
                continue
            key = ing["item"].lower().strip()
            amount = str(ing.get("amount") or "")
            if key in merged:
                merged[key]["amounts"].append(amount)
            else:
                merged[key] = {
                    "item": ing["item"].strip(),
                    "amounts": [amount],
                    "category": categorize_ingredient(ing["item"]),
                }

    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for category in CATEGORY_ORDER:
        items = [i for i in merged.values() if i["category"] == category]
        if items:
            grouped[category] = sorted(items, key=lambda i: i["item"].lower())
    return grouped


def render_text(grouped: Dict[str, List[Dict[str, Any]]], week_number: int) -> str:
    lines = [f"Week {week_number} Grocery List", ""]
    for category in CATEGORY_ORDER:
        items = grouped.get(category)
        if not items:
            continue
        lines.append(category.upper())
        for item in items:
            amounts = item["amounts"]
            amount = f"({' + '.join(amounts)})" if len(amounts) > 1 else amounts[0]
            lines.append(f"- {item['item']}: {amount}")
        lines.append("")
    return "\n".join(lines)
