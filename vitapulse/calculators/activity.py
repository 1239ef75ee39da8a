# -*- coding: utf-8 -*-
"""
Activity calculators: hydration, daily step goal and heart-rate training zones.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from .energy import ACTIVITY_ALIASES
from .units import KM_TO_MILES, require_choice, require_positive, to_kg

HYDRATION_ACTIVITY: Dict[str, float] = {
    "sedentary": 1.0,
    "light": 1.2,
    "moderate": 1.4,
    "active": 1.6,
    "very_active": 1.8,
}

CLIMATE_ADJUSTMENT_ML: Dict[str, int] = {
    "temperate": 0,
    "warm": 500,
    "hot": 1000,
    "humid": 750,
    "cold": -200,
}

# (time, share of daily total, label)
HYDRATION_SCHEDULE = [
    ("6:00 AM", 0.15, "Wake up hydration"),
    ("8:00 AM", 0.10, "Pre-breakfast"),
    ("10:00 AM", 0.10, "Mid-morning"),
    ("12:00 PM", 0.15, "Pre-lunch"),
    ("2:00 PM", 0.10, "Afternoon"),
    ("4:00 PM", 0.10, "Pre-workout"),
    ("6:00 PM", 0.15, "Evening"),
    ("8:00 PM", 0.10, "Dinner time"),
    ("10:00 PM", 0.05, "Before bed"),
]

GLASS_ML = 250


def hydration_level(total_ml: float) -> str:
    if total_ml < 2000:
        return "Low"
    if total_ml < 2500:
        return "Adequate"
    if total_ml < 3500:
        return "Good"
    return "High"


def hydration_status(percentage: float) -> str:
    if percentage < 50:
        return "Severely Dehydrated"
    if percentage < 75:
        return "Mildly Dehydrated"
    if percentage < 100:
        return "Adequately Hydrated"
    return "Well Hydrated"


def calculate_hydration(
    weight_kg: float,
    activity_level: str = "sedentary",
    climate: str = "temperate",
    exercise_minutes: float = 0,
    caffeine_mg: float = 0,
    alcohol_ml: float = 0,
    current_intake_ml: float = 0,
    cultural_background: Optional[str] = None,
) -> dict:
    """
    Daily water target (ml) with an hourly drinking schedule.

    Base is 35 ml/kg scaled by activity, then climate, exercise, caffeine and
    alcohol adjustments are added on top.
    """
    weight_kg = require_positive("weight_kg", weight_kg)
    level = (activity_level or "").strip().lower()
    level = ACTIVITY_ALIASES.get(level, level)
    level = require_choice("activity_level", level, tuple(HYDRATION_ACTIVITY))
    climate = require_choice("climate", (climate or "").strip().lower(), tuple(CLIMATE_ADJUSTMENT_ML))
    for name, value in (
        ("exercise_minutes", exercise_minutes),
        ("caffeine_mg", caffeine_mg),
        ("alcohol_ml", alcohol_ml),
        ("current_intake_ml", current_intake_ml),
    ):
        if value < 0:
            raise ValueError(f"{name} cannot be negative")

    base = weight_kg * 35
    adjustments = {
        "activity": base * HYDRATION_ACTIVITY[level] - base,
        "climate": float(CLIMATE_ADJUSTMENT_ML[climate]),
        "exercise": exercise_minutes / 30 * 500,
        "caffeine": caffeine_mg / 100 * 100,
        "alcohol": alcohol_ml / 14 * 250,
    }
    total = base + sum(adjustments.values())

    percentage = min(round(current_intake_ml / total * 100), 100) if total > 0 else 0

    text = f"Your daily water intake should be {round(total)}ml ({total / 1000:.1f} liters). "
    if total > 3500:
        text += "This is a high intake due to your activity level and environmental factors. "
    elif total < 2000:
        text += "This is a moderate intake suitable for your lifestyle. "
    if exercise_minutes > 60:
        text += "Remember to drink extra water during and after exercise. "
    if climate in ("hot", "humid"):
        text += "Hot/humid conditions increase your hydration needs significantly. "
    text += "Spread your intake throughout the day for optimal hydration."

    cultural: List[str] = []
    bg = (cultural_background or "").strip().lower()
    if bg in ("middle_eastern", "arab"):
        cultural = [
            "Consider Ramadan fasting periods for hydration planning",
            "Traditional teas and beverages can contribute to hydration",
        ]
    elif bg == "asian":
        cultural = [
            "Green tea and herbal teas are excellent hydration sources",
            "Warm beverages are culturally preferred and equally hydrating",
        ]

    return {
        "base_ml": round(base),
        "adjustments_ml": {k: round(v) for k, v in adjustments.items()},
        "total_ml": round(total),
        "total_liters": round(total / 1000, 1),
        "glasses": round(total / GLASS_ML),
        "level": hydration_level(total),
        "schedule": [
            {"time": t, "amount_ml": round(total * share), "activity": label}
            for t, share, label in HYDRATION_SCHEDULE
        ],
        "current_intake_ml": current_intake_ml,
        "percentage": percentage,
        "status": hydration_status(percentage),
        "interpretation": text,
        "recommendations": [
            "Drink water regularly throughout the day",
            "Monitor urine color as hydration indicator",
            "Increase intake during exercise and hot weather",
            "Include water-rich foods in your diet",
        ],
        "cultural_considerations": cultural or None,
    }


# Step goal -------------------------------------------------------------------

STEP_BASE: Dict[str, int] = {
    "sedentary": 3000,
    "lightly_active": 5000,
    "moderately_active": 7500,
    "very_active": 10000,
    "extremely_active": 12500,
}

STEP_AGE_BANDS = [
    (18, 29, 1.1),
    (30, 39, 1.05),
    (40, 49, 1.0),
    (50, 59, 0.95),
    (60, 69, 0.9),
    (70, 100, 0.8),
]

STEP_GOAL_MULTIPLIERS: Dict[str, float] = {
    "maintain": 1.0,
    "weight_loss": 1.3,
    "fitness_improvement": 1.2,
    "heart_health": 1.25,
    "diabetes_prevention": 1.4,
    "general_wellness": 1.1,
}

_STEP_CATEGORIES = [
    (5000, "Starter Goal", "Great starting point for building a walking habit"),
    (7500, "Active Goal", "Good level of daily activity for health benefits"),
    (10000, "Fitness Goal", "Excellent target for fitness and weight management"),
    (12500, "Athletic Goal", "High activity level for serious fitness enthusiasts"),
]


def step_category(steps: float) -> Dict[str, str]:
    for upper, category, description in _STEP_CATEGORIES:
        if steps < upper:
            return {"category": category, "description": description}
    return {"category": "Elite Goal", "description": "Very high activity level for athletes and fitness pros"}


def _age_multiplier(age: float) -> float:
    for low, high, mult in STEP_AGE_BANDS:
        if low <= age <= high:
            return mult
    return 1.0


def calculate_step_goal(
    age: float,
    weight: float,
    fitness_level: str = "moderately_active",
    health_goal: str = "maintain",
    current_steps: float = 0,
    has_health_conditions: bool = False,
    unit: str = "metric",
) -> dict:
    age = require_positive("age", age)
    weight = require_positive("weight", weight)
    fitness_level = require_choice("fitness_level", fitness_level, tuple(STEP_BASE))
    health_goal = require_choice("health_goal", health_goal, tuple(STEP_GOAL_MULTIPLIERS))
    unit = require_choice("unit", unit, ("metric", "imperial"))
    if current_steps < 0:
        raise ValueError("current_steps cannot be negative")

    target = float(
        round(
            STEP_BASE[fitness_level]
            * _age_multiplier(age)
            * STEP_GOAL_MULTIPLIERS[health_goal]
            * (0.8 if has_health_conditions else 1.0)
        )
    )
    # Ramp up from the current daily average instead of jumping straight to target.
    if current_steps > 0:
        increase = min(2000.0, max(500.0, (target - current_steps) * 0.3))
        target = max(target, current_steps + increase)
    daily = int(round(max(2000.0, min(20000.0, target))))

    weight_kg = to_kg(weight, unit)
    km = daily * 0.762 / 1000

    recommendations: List[str] = []
    if daily > current_steps + 3000:
        recommendations.append("Increase gradually by 500-1000 steps per week")
    if daily >= 10000:
        recommendations.append("Consider breaking into 2-3 walking sessions throughout the day")
    if health_goal == "weight_loss":
        recommendations.append("Combine with strength training for better results")
    if age >= 60:
        recommendations.append("Focus on consistency rather than intensity")
    recommendations.append("Track your steps with a smartphone app or fitness tracker")
    recommendations.append("Take the stairs instead of elevators when possible")

    return {
        "daily_steps": daily,
        "weekly_steps": daily * 7,
        "monthly_steps": daily * 30,
        "calories_burned": round(daily * 0.04 * weight_kg),
        "distance_km": round(km, 2),
        "distance_miles": round(km * KM_TO_MILES, 2),
        "time_minutes": round(km / 5 * 60),
        **step_category(daily),
        "recommendations": recommendations,
    }


# Heart rate zones -------------------------------------------------------------

HR_FITNESS_ADJUSTMENT: Dict[str, int] = {
    "beginner": 0,
    "intermediate": -5,
    "advanced": -10,
    "elite": -15,
}

_HR_ZONES = [
    ("Zone 1: Recovery", "Active Recovery", "Warm-up, cool-down, recovery runs", 0.50, 0.60),
    ("Zone 2: Aerobic Base", "Easy Aerobic", "Base building, fat burning, easy runs", 0.60, 0.70),
    ("Zone 3: Aerobic", "Moderate Aerobic", "Tempo runs, moderate efforts", 0.70, 0.80),
    ("Zone 4: Lactate Threshold", "Hard Aerobic", "Lactate threshold, race pace training", 0.80, 0.90),
    ("Zone 5: VO2 Max", "Maximum Effort", "VO2 max intervals, neuromuscular power", 0.90, 1.00),
]

DEFAULT_RESTING_HR = 70


def resting_hr_category(resting_hr: float) -> str:
    if resting_hr < 60:
        return "Bradycardia (Low)"
    if resting_hr <= 100:
        return "Normal"
    return "Tachycardia (High)"


def calculate_heart_rate_zones(
    age: float,
    resting_hr: Optional[float] = None,
    fitness_level: str = "beginner",
    use_karvonen: bool = True,
) -> dict:
    """
    Five training zones from an age-predicted maximum heart rate.

    The Karvonen (heart-rate reserve) method applies only when a resting heart rate
    is supplied; otherwise zones are plain percentages of max HR.
    """
    age = require_positive("age", age)
    fitness_level = require_choice("fitness_level", fitness_level, tuple(HR_FITNESS_ADJUSTMENT))
    if resting_hr is not None and not 0 < resting_hr < 300:
        raise ValueError("resting_hr must be between 0 and 300")

    max_hr = 220 - age + HR_FITNESS_ADJUSTMENT[fitness_level]
    rhr = resting_hr if resting_hr else DEFAULT_RESTING_HR
    karvonen = bool(use_karvonen and resting_hr)
    if karvonen and rhr >= max_hr:
        raise ValueError("resting_hr must be below the predicted maximum heart rate")

    zones = []
    for name, description, purpose, lo, hi in _HR_ZONES:
        if karvonen:
            reserve = max_hr - rhr
            lo_bpm = round(rhr + reserve * lo)
            hi_bpm = round(rhr + reserve * hi)
        else:
            lo_bpm = round(max_hr * lo)
            hi_bpm = round(max_hr * hi)
        zones.append(
            {
                "name": name,
                "description": description,
                "purpose": purpose,
                "min_bpm": lo_bpm,
                "max_bpm": hi_bpm,
                "percentage": f"{int(lo * 100)}-{int(hi * 100)}%",
            }
        )

    return {
        "max_hr": round(max_hr),
        "resting_hr": rhr,
        "resting_category": resting_hr_category(rhr),
        "method": "karvonen" if karvonen else "percent_max",
        "zones": zones,
        "recommendations": [
            "Monitor heart rate during exercise",
            "Stay within target zones for optimal benefits",
            "Consult healthcare provider if experiencing irregular heartbeat",
            "Regular cardiovascular exercise can improve heart health",
        ],
    }
