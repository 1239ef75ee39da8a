# -*- coding: utf-8 -*-
"""
Template-based meal planner

Each slot (breakfast, lunch, dinner, snacks) gets a fixed share of the daily calorie
target. Templates are filtered by diet type, ranked by the user's preferences, and
swapped for an allergen-free alternative when the first choice contains an allergen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

DIET_TYPES = ("balanced", "vegetarian", "vegan", "keto", "mediterranean", "high_protein")

MIN_CALORIES = 800
MAX_CALORIES = 6000

# slot key, template slot, share of daily calories (%)
SLOT_PLANS: Dict[int, List[Tuple[str, str, int]]] = {
    3: [("breakfast", "breakfast", 30), ("lunch", "lunch", 40), ("dinner", "dinner", 30)],
    4: [("breakfast", "breakfast", 25), ("lunch", "lunch", 35), ("dinner", "dinner", 30), ("snacks", "snack", 10)],
    5: [
        ("breakfast", "breakfast", 25),
        ("morning_snack", "snack", 5),
        ("lunch", "lunch", 30),
        ("dinner", "dinner", 30),
        ("afternoon_snack", "snack", 10),
    ],
}

_ALLERGEN_ALIASES = {
    "nut": "nuts",
    "tree_nuts": "nuts",
    "tree nuts": "nuts",
    "peanut": "peanuts",
    "milk": "dairy",
    "lactose": "dairy",
    "egg": "eggs",
    "wheat": "gluten",
    "seafood": "fish",
    "sesame_seeds": "sesame",
}


@dataclass(frozen=True)
class MealTemplate:
    name: str
    slot: str
    # percent of calories from protein / carbs / fat
    macros: Tuple[int, int, int]
    ingredients: Tuple[Tuple[str, str], ...]
    diets: Tuple[str, ...]
    allergens: Tuple[str, ...] = ()


TEMPLATES: List[MealTemplate] = [
    # breakfast
    MealTemplate(
        "Oatmeal with Berries", "breakfast", (15, 65, 20),
        (("Rolled oats", "grains"), ("Mixed berries", "produce"), ("Almond milk", "dairy & alternatives"), ("Honey", "pantry")),
        ("balanced", "vegetarian", "mediterranean"), ("nuts",),
    ),
    MealTemplate(
        "Chia Pudding with Mango", "breakfast", (12, 48, 40),
        (("Chia seeds", "pantry"), ("Coconut milk", "dairy & alternatives"), ("Mango", "produce")),
        ("balanced", "vegetarian", "vegan"),
    ),
    MealTemplate(
        "Greek Yogurt Parfait", "breakfast", (30, 50, 20),
        (("Greek yogurt", "dairy & alternatives"), ("Granola", "grains"), ("Mixed berries", "produce"), ("Honey", "pantry")),
        ("balanced", "vegetarian", "mediterranean", "high_protein"), ("dairy", "gluten"),
    ),
    MealTemplate(
        "Tofu Scramble with Spinach", "breakfast", (30, 35, 35),
        (("Firm tofu", "protein"), ("Spinach", "produce"), ("Onion", "produce"), ("Whole wheat toast", "grains")),
        ("balanced", "vegetarian", "vegan", "high_protein"), ("soy", "gluten"),
    ),
    MealTemplate(
        "Spinach and Feta Omelette", "breakfast", (30, 5, 65),
        (("Eggs", "protein"), ("Spinach", "produce"), ("Feta cheese", "dairy & alternatives"), ("Olive oil", "pantry")),
        ("balanced", "vegetarian", "keto", "mediterranean", "high_protein"), ("eggs", "dairy"),
    ),
    MealTemplate(
        "Avocado Egg Bowl", "breakfast", (20, 10, 70),
        (("Eggs", "protein"), ("Avocado", "produce"), ("Cherry tomatoes", "produce")),
        ("keto", "vegetarian"), ("eggs",),
    ),
    # lunch
    MealTemplate(
        "Grilled Chicken Salad", "lunch", (40, 20, 40),
        (("Chicken breast", "protein"), ("Mixed greens", "produce"), ("Cherry tomatoes", "produce"), ("Olive oil", "pantry"), ("Lemon", "produce")),
        ("balanced", "keto", "mediterranean", "high_protein"),
    ),
    MealTemplate(
        "Quinoa Chickpea Bowl", "lunch", (18, 55, 27),
        (("Quinoa", "grains"), ("Chickpeas", "protein"), ("Cucumber", "produce"), ("Tahini", "pantry"), ("Lemon", "produce")),
        ("balanced", "vegetarian", "vegan", "mediterranean"), ("sesame",),
    ),
    MealTemplate(
        "Lentil and Vegetable Soup", "lunch", (25, 60, 15),
        (("Lentils", "protein"), ("Carrots", "produce"), ("Celery", "produce"), ("Onion", "produce"), ("Vegetable broth", "pantry")),
        ("balanced", "vegetarian", "vegan", "mediterranean"),
    ),
    MealTemplate(
        "Turkey and Hummus Wrap", "lunch", (35, 40, 25),
        (("Whole wheat tortilla", "grains"), ("Turkey breast", "protein"), ("Hummus", "pantry"), ("Spinach", "produce")),
        ("balanced", "high_protein"), ("gluten", "sesame"),
    ),
    MealTemplate(
        "Tuna Stuffed Avocado", "lunch", (30, 8, 62),
        (("Canned tuna", "protein"), ("Avocado", "produce"), ("Celery", "produce"), ("Mayonnaise", "pantry")),
        ("keto", "high_protein"), ("fish", "eggs"),
    ),
    MealTemplate(
        "Halloumi and Zucchini Plate", "lunch", (25, 8, 67),
        (("Halloumi", "dairy & alternatives"), ("Zucchini", "produce"), ("Olive oil", "pantry"), ("Mixed greens", "produce")),
        ("keto", "vegetarian", "mediterranean"), ("dairy",),
    ),
    # dinner
    MealTemplate(
        "Salmon with Quinoa", "dinner", (35, 35, 30),
        (("Salmon fillet", "protein"), ("Quinoa", "grains"), ("Broccoli", "produce"), ("Garlic", "produce"), ("Herbs", "produce")),
        ("balanced", "mediterranean", "high_protein"), ("fish",),
    ),
    MealTemplate(
        "Tofu Stir-Fry with Brown Rice", "dinner", (22, 53, 25),
        (("Firm tofu", "protein"), ("Brown rice", "grains"), ("Bell peppers", "produce"), ("Broccoli", "produce"), ("Soy sauce", "pantry")),
        ("balanced", "vegetarian", "vegan"), ("soy",),
    ),
    MealTemplate(
        "Chickpea and Spinach Curry", "dinner", (16, 56, 28),
        (("Chickpeas", "protein"), ("Spinach", "produce"), ("Coconut milk", "dairy & alternatives"), ("Brown rice", "grains"), ("Curry spices", "pantry")),
        ("balanced", "vegetarian", "vegan"),
    ),
    MealTemplate(
        "Baked Cod with Roasted Vegetables", "dinner", (40, 15, 45),
        (("Cod fillet", "protein"), ("Zucchini", "produce"), ("Cherry tomatoes", "produce"), ("Olive oil", "pantry"), ("Herbs", "produce")),
        ("balanced", "keto", "mediterranean", "high_protein"), ("fish",),
    ),
    MealTemplate(
        "Lean Beef and Vegetable Skillet", "dinner", (35, 10, 55),
        (("Lean beef", "protein"), ("Zucchini", "produce"), ("Bell peppers", "produce"), ("Olive oil", "pantry")),
        ("balanced", "keto", "high_protein"),
    ),
    MealTemplate(
        "Eggplant and Mozzarella Bake", "dinner", (22, 12, 66),
        (("Eggplant", "produce"), ("Mozzarella", "dairy & alternatives"), ("Tomato sauce", "pantry"), ("Olive oil", "pantry")),
        ("keto", "vegetarian", "mediterranean"), ("dairy",),
    ),
    # snacks
    MealTemplate(
        "Greek Yogurt with Nuts", "snack", (25, 30, 45),
        (("Greek yogurt", "dairy & alternatives"), ("Mixed nuts", "nuts & seeds"), ("Mixed berries", "produce")),
        ("balanced", "vegetarian", "mediterranean", "high_protein"), ("dairy", "nuts"),
    ),
    MealTemplate(
        "Apple with Peanut Butter", "snack", (12, 48, 40),
        (("Apple", "produce"), ("Peanut butter", "nuts & seeds")),
        ("balanced", "vegetarian", "vegan"), ("peanuts",),
    ),
    MealTemplate(
        "Hummus with Veggie Sticks", "snack", (15, 45, 40),
        (("Hummus", "pantry"), ("Carrots", "produce"), ("Cucumber", "produce")),
        ("balanced", "vegetarian", "vegan", "mediterranean"), ("sesame",),
    ),
    MealTemplate(
        "Roasted Chickpeas", "snack", (20, 60, 20),
        (("Chickpeas", "protein"), ("Olive oil", "pantry"), ("Paprika", "pantry")),
        ("balanced", "vegetarian", "vegan", "mediterranean", "high_protein"),
    ),
    MealTemplate(
        "Cheese and Almonds", "snack", (22, 8, 70),
        (("Cheddar cheese", "dairy & alternatives"), ("Almonds", "nuts & seeds")),
        ("keto", "vegetarian", "high_protein"), ("dairy", "nuts"),
    ),
    MealTemplate(
        "Hard-Boiled Eggs", "snack", (35, 3, 62),
        (("Eggs", "protein"),),
        ("balanced", "keto", "vegetarian", "high_protein"), ("eggs",),
    ),
    MealTemplate(
        "Olives and Cucumber", "snack", (5, 20, 75),
        (("Olives", "pantry"), ("Cucumber", "produce")),
        ("keto", "vegan", "vegetarian", "mediterranean"),
    ),
]


def normalize_allergen(value: str) -> str:
    key = (value or "").strip().lower()
    return _ALLERGEN_ALIASES.get(key, key.replace(" ", "_"))


def _matches_preferences(t: MealTemplate, prefs: Sequence[str]) -> bool:
    haystack = " ".join([t.name] + [i for i, _ in t.ingredients]).lower()
    return any(p in haystack for p in prefs)


def _candidates(slot: str, diet: str, prefs: Sequence[str]) -> List[MealTemplate]:
    pool = [t for t in TEMPLATES if t.slot == slot and diet in t.diets]
    # Stable sort keeps library order within each group.
    return sorted(pool, key=lambda t: 0 if _matches_preferences(t, prefs) else 1)


def _meal_nutrition(calories: float, macros: Tuple[int, int, int]) -> Dict[str, float]:
    p, c, f = macros
    return {
        "calories": round(calories),
        "protein_g": round(calories * p / 100 / 4),
        "carbs_g": round(calories * c / 100 / 4),
        "fat_g": round(calories * f / 100 / 9),
    }


def generate_meal_plan(
    calories: float,
    diet_type: str = "balanced",
    allergies: Optional[Sequence[str]] = None,
    preferences: Optional[Sequence[str]] = None,
    meals_per_day: int = 4,
    days: int = 1,
) -> dict:
    """
    Build a deterministic meal plan.

    Args:
        calories: daily calorie target
        diet_type: one of DIET_TYPES
        allergies: allergen names to avoid (e.g. "nuts", "dairy", "gluten")
        preferences: free-text keywords; matching templates are chosen first
        meals_per_day: 3, 4 or 5
        days: 1-7; templates rotate between days

    Returns:
        dict: days (meals + totals), substitutions, warnings, shopping_list
    """
    if calories is None or not MIN_CALORIES <= calories <= MAX_CALORIES:
        raise ValueError(f"calories must be between {MIN_CALORIES} and {MAX_CALORIES}")
    diet = (diet_type or "balanced").strip().lower()
    if diet not in DIET_TYPES:
        raise ValueError(f"diet_type must be one of: {', '.join(DIET_TYPES)}")
    if meals_per_day not in SLOT_PLANS:
        raise ValueError("meals_per_day must be 3, 4 or 5")
    if not 1 <= days <= 7:
        raise ValueError("days must be between 1 and 7")

    avoid = sorted({normalize_allergen(a) for a in (allergies or []) if a and a.strip()})
    prefs = [p.strip().lower() for p in (preferences or []) if p and p.strip()]

    plan_days = []
    substitutions: List[Dict[str, object]] = []
    warnings: List[str] = []
    shopping: Dict[str, Dict[str, int]] = {}

    for day in range(days):
        meals = []
        for key, slot, share in SLOT_PLANS[meals_per_day]:
            pool = _candidates(slot, diet, prefs)
            if not pool:
                warnings.append(f"Day {day + 1}: no {diet} option for {key}; meal omitted")
                continue
            first = pool[day % len(pool)]
            chosen: Optional[MealTemplate] = first
            hit = [a for a in first.allergens if a in avoid]
            if hit:
                rotated = pool[day % len(pool):] + pool[: day % len(pool)]
                chosen = next((t for t in rotated if not set(t.allergens) & set(avoid)), None)
                if chosen is None:
                    warnings.append(
                        f"Day {day + 1}: no {diet} {key} without {', '.join(avoid)}; meal omitted"
                    )
                    continue
                substitutions.append(
                    {"day": day + 1, "meal": key, "original": first.name, "replacement": chosen.name, "allergens": hit}
                )

            meal_kcal = calories * share / 100
            meals.append(
                {
                    "meal": key,
                    "name": chosen.name,
                    "share_percent": share,
                    **_meal_nutrition(meal_kcal, chosen.macros),
                    "ingredients": [name for name, _ in chosen.ingredients],
                }
            )
            for name, category in chosen.ingredients:
                bucket = shopping.setdefault(category, {})
                bucket[name] = bucket.get(name, 0) + 1

        totals = {
            k: sum(m[k] for m in meals) for k in ("calories", "protein_g", "carbs_g", "fat_g")
        }
        plan_days.append({"day": day + 1, "meals": meals, "totals": totals})

    return {
        "calories_target": round(calories),
        "diet_type": diet,
        "meals_per_day": meals_per_day,
        "allergies": avoid,
        "preferences": prefs,
        "days": plan_days,
        "substitutions": substitutions,
        "warnings": warnings,
        "shopping_list": {
            category: [{"item": item, "meals": count} for item, count in sorted(items.items())]
            for category, items in sorted(shopping.items())
        },
    }
