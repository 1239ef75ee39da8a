# -*- coding: utf-8 -*-
"""Food catalog: chain restaurant items plus common whole foods.

Nutrition values are per serving. Ids are stable slugs so log entries can reference them.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .models import CatalogFood, Nutrition

_RAW_BRANDS = {
    "McDonald's": [
        ("Big Mac", "1 sandwich", 550, 25, 45, 33, 3, 9, 1010),
        ("Quarter Pounder", "1 sandwich", 520, 26, 42, 26, 3, 10, 950),
        ("McChicken", "1 sandwich", 400, 14, 39, 22, 2, 5, 750),
        ("French Fries (Medium)", "1 medium", 320, 4, 43, 15, 4, 0, 260),
        ("Apple Pie", "1 pie", 240, 2, 33, 11, 1, 13, 170),
    ],
    "KFC": [
        ("Original Recipe Chicken (2 pieces)", "2 pieces", 360, 30, 11, 22, 0, 0, 1080),
        ("Extra Crispy Chicken (2 pieces)", "2 pieces", 460, 32, 12, 32, 0, 0, 1200),
        ("Popcorn Chicken (Large)", "1 large", 530, 24, 28, 36, 2, 0, 1400),
        ("Mashed Potatoes with Gravy", "1 serving", 120, 3, 18, 4, 1, 2, 530),
    ],
    "Subway": [
        ('Turkey Breast 6"', '1 6" sub', 280, 18, 46, 3.5, 5, 8, 810),
        ('Chicken Teriyaki 6"', '1 6" sub', 370, 26, 46, 8, 5, 16, 830),
        ('Veggie Delite 6"', '1 6" sub', 200, 9, 40, 2, 5, 8, 280),
        ('Meatball Marinara 6"', '1 6" sub', 480, 20, 48, 20, 5, 12, 1280),
    ],
    "Starbucks": [
        ("Grande Caffè Latte", "1 grande", 190, 13, 18, 7, 0, 18, 170),
        ("Grande Cappuccino", "1 grande", 120, 8, 12, 4, 0, 10, 115),
        ("Grande Mocha", "1 grande", 360, 13, 35, 19, 3, 32, 170),
        ("Blueberry Muffin", "1 muffin", 350, 5, 49, 14, 1, 25, 420),
    ],
}

# Generic foods carry a descriptive "brand" (Fresh, Organic, ...) and a default meal slot.
_RAW_GENERIC = [
    ("Chicken Breast", "Fresh", "100g", "lunch", 165, 31, 0, 3.6, 0, 0, 74),
    ("Brown Rice", "Organic", "1 cup cooked", "lunch", 216, 5, 45, 1.8, 3.5, 0.7, 10),
    ("Greek Yogurt", "Plain", "1 cup", "breakfast", 130, 23, 9, 0, 0, 9, 65),
    ("Almonds", "Raw", "28g (23 almonds)", "snack", 164, 6, 6, 14, 3.5, 1.2, 1),
    ("Banana", "Fresh", "1 medium", "snack", 105, 1.3, 27, 0.4, 3.1, 14, 1),
    ("Apple", "Fresh", "1 medium", "snack", 95, 0.5, 25, 0.3, 4.4, 19, 2),
    ("Rolled Oats", "Whole Grain", "1/2 cup dry", "breakfast", 150, 5, 27, 2.5, 4, 1, 0),
    ("Egg", "Large", "1 egg", "breakfast", 72, 6.3, 0.4, 4.8, 0, 0.2, 71),
    ("Salmon Fillet", "Fresh", "100g", "dinner", 208, 20, 0, 13, 0, 0, 59),
    ("Broccoli", "Fresh", "1 cup chopped", "dinner", 31, 2.5, 6, 0.3, 2.4, 1.5, 30),
    ("Quinoa", "Organic", "1 cup cooked", "dinner", 222, 8, 39, 3.6, 5, 1.6, 13),
    ("Whole Wheat Bread", "Whole Grain", "1 slice", "breakfast", 81, 4, 14, 1.1, 1.9, 1.4, 146),
    ("Avocado", "Fresh", "1/2 fruit", "lunch", 120, 1.5, 6, 11, 5, 0.5, 5),
    ("Milk (2%)", "Dairy", "1 cup", "breakfast", 122, 8, 12, 4.8, 0, 12, 115),
]


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _build() -> Dict[str, CatalogFood]:
    foods: Dict[str, CatalogFood] = {}
    for brand, items in _RAW_BRANDS.items():
        for name, serving, kcal, p, c, f, fib, sug, na in items:
            food = CatalogFood(
                id=f"{_slug(brand)}-{_slug(name)}",
                name=name,
                brand=brand,
                serving_size=serving,
                category="restaurant",
                nutrition=Nutrition(
                    calories=kcal, protein_g=p, carbs_g=c, fat_g=f, fiber_g=fib, sugar_g=sug, sodium_mg=na
                ),
            )
            foods[food.id] = food
    for name, brand, serving, meal, kcal, p, c, f, fib, sug, na in _RAW_GENERIC:
        food = CatalogFood(
            id=_slug(name),
            name=name,
            brand=brand,
            serving_size=serving,
            category=meal,
            nutrition=Nutrition(
                calories=kcal, protein_g=p, carbs_g=c, fat_g=f, fiber_g=fib, sugar_g=sug, sodium_mg=na
            ),
        )
        foods[food.id] = food
    return foods


FOODS: Dict[str, CatalogFood] = _build()

BRANDS: List[str] = list(_RAW_BRANDS)

# Returned by the nutrition lookup when nothing in the catalog matches.
GENERIC_PLACEHOLDER = Nutrition(
    calories=150, protein_g=8, carbs_g=20, fat_g=5, fiber_g=3, sugar_g=12, sodium_mg=200
)
GENERIC_SERVING = "100g"


def get_food(food_id: str) -> Optional[CatalogFood]:
    return FOODS.get(food_id)


def search_foods(query: str = "", *, brand: Optional[str] = None, limit: int = 20) -> List[CatalogFood]:
    """Case-insensitive substring match on name or brand."""
    q = (query or "").strip().lower()
    b = (brand or "").strip().lower()
    out: List[CatalogFood] = []
    for food in FOODS.values():
        if b and food.brand.lower() != b:
            continue
        if q and q not in food.name.lower() and q not in food.brand.lower():
            continue
        out.append(food)
        if len(out) >= limit:
            break
    return out


def lookup_nutrition(food: str, quantity: float = 1.0) -> Dict[str, object]:
    """Nutrition for a food name or id, scaled by ``quantity`` servings."""
    if quantity <= 0:
        raise ValueError("quantity must be positive")
    match = get_food(food) or next(iter(search_foods(food, limit=1)), None)
    if match is not None:
        return {
            "food": match.name,
            "food_id": match.id,
            "serving_size": match.serving_size,
            "quantity": quantity,
            "matched": True,
            "nutrition": match.nutrition.scaled(quantity),
        }
    return {
        "food": food,
        "food_id": None,
        "serving_size": GENERIC_SERVING,
        "quantity": quantity,
        "matched": False,
        "nutrition": GENERIC_PLACEHOLDER.scaled(quantity),
    }
