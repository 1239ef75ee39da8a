# -*- coding: utf-8 -*-
"""
Energy expenditure and nutrient target calculators

BMR (Mifflin-St Jeor / revised Harris-Benedict), TDEE, goal-based calorie needs,
macro splits and protein needs.
"""

from __future__ import annotations

from typing import Dict, Optional

from .units import require_choice, require_positive, require_sex

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

ACTIVITY_ALIASES: Dict[str, str] = {
    "lightly_active": "light",
    "moderately_active": "moderate",
    "extremely_active": "very_active",
    "extra": "very_active",
}

CALORIE_GOALS: Dict[str, int] = {
    "maintain": 0,
    "lose_slow": -250,
    "lose_moderate": -500,
    "lose_fast": -750,
    "gain_slow": 250,
    "gain_moderate": 500,
}

_GOAL_LABELS = {
    "maintain": "Maintain Weight",
    "lose_slow": "Lose Weight (Slow)",
    "lose_moderate": "Lose Weight (Moderate)",
    "lose_fast": "Lose Weight (Fast)",
    "gain_slow": "Gain Weight (Slow)",
    "gain_moderate": "Gain Weight (Moderate)",
}

# protein / carbs / fat, in percent of calories
MACRO_SPLITS: Dict[str, Dict[str, int]] = {
    "weight-loss": {"protein": 30, "carbs": 35, "fat": 35},
    "maintenance": {"protein": 25, "carbs": 45, "fat": 30},
    "muscle-gain": {"protein": 30, "carbs": 40, "fat": 30},
    "athletic": {"protein": 25, "carbs": 50, "fat": 25},
    "keto": {"protein": 25, "carbs": 5, "fat": 70},
    "low-carb": {"protein": 30, "carbs": 20, "fat": 50},
}

PROTEIN_G_PER_KG: Dict[str, float] = {
    "sedentary": 0.8,
    "light": 1.0,
    "moderate": 1.2,
    "active": 1.4,
    "very_active": 1.6,
}

KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

# 1 lb of body fat ~ 3500 kcal
KCAL_PER_LB = 3500


def normalize_activity(level: str) -> str:
    key = (level or "").strip().lower()
    key = ACTIVITY_ALIASES.get(key, key)
    return require_choice("activity_level", key, tuple(ACTIVITY_MULTIPLIERS))


def calculate_bmr(weight: float, height: float, age: float, sex: str, formula: str = "mifflin") -> float:
    """
    Basal metabolic rate (kcal/day), unrounded.

    Args:
        weight: kg
        height: cm
        age: years
        sex: "male" | "female"
        formula: "mifflin" (Mifflin-St Jeor) or "harris_benedict" (revised, 1984)
    """
    weight = require_positive("weight", weight)
    height = require_positive("height", height)
    age = require_positive("age", age)
    sex = require_sex(sex)
    formula = require_choice("formula", formula, ("mifflin", "harris_benedict"))

    if formula == "harris_benedict":
        if sex == "male":
            return 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
        return 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age

    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if sex == "male" else base - 161


def _macro_breakdown(calories: float, split: Dict[str, int]) -> Dict[str, Dict[str, float]]:
    out = {}
    for macro, pct in split.items():
        kcal = calories * pct / 100
        out[macro] = {
            "grams": round(kcal / KCAL_PER_GRAM[macro]),
            "calories": round(kcal),
            "percentage": pct,
        }
    return out


def calculate_tdee(weight: float, height: float, age: float, sex: str, activity_level: str) -> dict:
    level = normalize_activity(activity_level)
    bmr = calculate_bmr(weight, height, age, sex)
    multiplier = ACTIVITY_MULTIPLIERS[level]
    tdee = bmr * multiplier
    return {
        "bmr": round(bmr),
        "tdee": round(tdee),
        "activity_level": level,
        "activity_multiplier": multiplier,
        "calorie_goals": {
            "maintain": round(tdee),
            "mild_weight_loss": round(tdee - 250),
            "weight_loss": round(tdee - 500),
            "extreme_weight_loss": round(tdee - 750),
            "mild_weight_gain": round(tdee + 250),
            "weight_gain": round(tdee + 500),
            "extreme_weight_gain": round(tdee + 750),
        },
        "macro_breakdown": _macro_breakdown(tdee, {"protein": 25, "carbs": 45, "fat": 30}),
    }


def calculate_calorie_needs(
    weight: float,
    height: float,
    age: float,
    sex: str,
    activity_level: str,
    goal: str = "maintain",
    timeframe_weeks: Optional[int] = None,
) -> dict:
    """
    Daily calorie target for a weight goal.

    Returns:
        dict: bmr, tdee, target_calories, macro_breakdown (30/40/30),
        weekly_change_lbs, projected_change_lbs (with a timeframe) and an
        interpretation sentence
    """
    goal = require_choice("goal", (goal or "").strip().lower(), tuple(CALORIE_GOALS))
    if timeframe_weeks is not None and timeframe_weeks <= 0:
        raise ValueError("timeframe_weeks must be positive")
    level = normalize_activity(activity_level)

    bmr = calculate_bmr(weight, height, age, sex)
    tdee = bmr * ACTIVITY_MULTIPLIERS[level]
    delta = CALORIE_GOALS[goal]
    target = tdee + delta

    weekly = abs(delta) * 7 / KCAL_PER_LB
    projected = weekly * timeframe_weeks if timeframe_weeks and delta else None

    text = (
        f"Based on your goal to {_GOAL_LABELS[goal].lower()}, you should consume "
        f"{round(target)} calories per day. "
    )
    if goal.startswith("lose"):
        text += f"This creates a deficit that should result in approximately {weekly:.1f} lbs of weight loss per week."
    elif goal.startswith("gain"):
        text += f"This creates a surplus that should result in approximately {weekly:.1f} lbs of weight gain per week."
    else:
        text += "This will help you maintain your current weight while supporting your activity level."
    if projected is not None:
        verb = "lose" if delta < 0 else "gain"
        text += f" Over {timeframe_weeks} weeks, you could expect to {verb} approximately {projected:.1f} lbs."

    return {
        "bmr": round(bmr),
        "tdee": round(tdee),
        "goal": goal,
        "calorie_adjustment": delta,
        "target_calories": round(target),
        "macro_breakdown": _macro_breakdown(target, {"protein": 30, "carbs": 40, "fat": 30}),
        "weekly_change_lbs": round(weekly, 1),
        "projected_change_lbs": round(projected, 1) if projected is not None else None,
        "interpretation": text,
    }


def calculate_macros(
    goal: str,
    calories: Optional[float] = None,
    *,
    weight: Optional[float] = None,
    height: Optional[float] = None,
    age: Optional[float] = None,
    sex: Optional[str] = None,
    activity_level: Optional[str] = None,
) -> dict:
    """Split daily calories into protein, carbs and fat grams for a training goal.

    Without ``calories`` the total comes from Harris-Benedict TDEE, trimmed 20 % for
    weight-loss and raised 10 % for muscle-gain.
    """
    goal = require_choice("goal", (goal or "").strip().lower(), tuple(MACRO_SPLITS))
    if calories is not None:
        total = require_positive("calories", calories)
        source = "custom"
    else:
        if None in (weight, height, age, sex, activity_level):
            raise ValueError("weight, height, age, sex and activity_level are required without calories")
        level = normalize_activity(activity_level)
        total = calculate_bmr(weight, height, age, sex, formula="harris_benedict") * ACTIVITY_MULTIPLIERS[level]
        if goal == "weight-loss":
            total *= 0.8
        elif goal == "muscle-gain":
            total *= 1.1
        source = "tdee"

    return {
        "goal": goal,
        "calorie_source": source,
        "total_calories": round(total),
        **_macro_breakdown(total, MACRO_SPLITS[goal]),
    }


def calculate_protein_needs(weight_kg: float, activity_level: str) -> dict:
    weight_kg = require_positive("weight_kg", weight_kg)
    level = normalize_activity(activity_level)
    per_kg = PROTEIN_G_PER_KG[level]
    return {
        "activity_level": level,
        "grams_per_kg": per_kg,
        "protein_g": round(weight_kg * per_kg),
    }
