# -*- coding: utf-8 -*-
"""
Body composition calculators

BMI (standard and Asian cut-offs), circumference-based body fat, ideal weight,
waist-hip ratio, total body water and lean body mass.
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

from .units import require_choice, require_positive, require_sex, to_cm, to_kg

ASIAN_ETHNICITIES = ("asian", "chinese", "japanese", "korean", "indian", "southeast_asian")

# (upper bound, label)
BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (25.0, "Normal Weight"),
    (30.0, "Overweight"),
    (35.0, "Obesity Class I"),
    (40.0, "Obesity Class II"),
    (math.inf, "Obesity Class III"),
]

ASIAN_BMI_CATEGORIES = [
    (18.5, "Underweight"),
    (23.0, "Normal Weight"),
    (27.5, "Overweight"),
    (math.inf, "Obese"),
]


def _band(value: float, bands) -> str:
    for upper, label in bands:
        if value < upper:
            return label
    return bands[-1][1]


def calculate_bmi(weight_kg: float, height_cm: float, ethnicity: Optional[str] = None) -> dict:
    """
    Body mass index with culture-aware cut-offs.

    Args:
        weight_kg: body weight (kg)
        height_cm: height (cm)
        ethnicity: optional; Asian groups use the lower WHO Asia-Pacific thresholds

    Returns:
        dict: bmi, category, healthy_weight_range, recommendations,
        cultural_considerations (None when there are none)
    """
    weight_kg = require_positive("weight_kg", weight_kg)
    height_cm = require_positive("height_cm", height_cm)

    eth = (ethnicity or "").strip().lower()
    is_asian = eth in ASIAN_ETHNICITIES
    height_m = height_cm / 100
    bmi = weight_kg / (height_m ** 2)

    category = _band(bmi, ASIAN_BMI_CATEGORIES if is_asian else BMI_CATEGORIES)
    normal_max = 23.0 if is_asian else 25.0
    overweight_max = 27.5 if is_asian else 30.0

    if bmi < 18.5:
        recommendations = [
            "Consider consulting a healthcare provider about healthy weight gain",
            "Focus on nutrient-dense foods and regular meals",
            "Include strength training to build muscle mass",
            "Monitor for underlying health conditions",
        ]
    elif bmi < normal_max:
        recommendations = [
            "Maintain your current healthy weight",
            "Continue regular physical activity",
            "Follow a balanced, nutritious diet",
            "Regular health check-ups",
        ]
    elif bmi < overweight_max:
        recommendations = [
            "Consider gradual weight loss through diet and exercise",
            "Increase physical activity to 150+ minutes per week",
            "Focus on portion control and nutrient-dense foods",
            "Consult healthcare provider for personalized plan",
        ]
    else:
        recommendations = [
            "Consult healthcare provider for comprehensive weight management plan",
            "Consider supervised weight loss program",
            "Focus on sustainable lifestyle changes",
            "Regular monitoring of health markers",
        ]

    cultural: List[str] = []
    if is_asian:
        cultural = [
            "Asian populations may have higher health risks at lower BMI levels",
            "Traditional Asian diets emphasize rice, vegetables, and lean proteins",
            "Consider family and cultural food practices in weight management",
        ]
    if eth in ("middle_eastern", "arab"):
        cultural = [
            "Consider traditional Middle Eastern dietary patterns",
            "Ramadan fasting may affect weight management strategies",
            "Include culturally appropriate physical activities",
        ]

    return {
        "bmi": round(bmi, 1),
        "category": category,
        "uses_asian_thresholds": is_asian,
        "healthy_weight_range": {
            "min": round(18.5 * height_m ** 2, 1),
            "max": round(normal_max * height_m ** 2, 1),
        },
        "recommendations": recommendations,
        "cultural_considerations": cultural or None,
    }


# Body fat ----------------------------------------------------------------

BODY_FAT_METHODS = ("navy", "army", "ymca")

_BODY_FAT_BANDS = {
    "male": [
        (6, "Essential Fat", "Below essential fat levels", "Health risk - too low"),
        (14, "Athletes", "Athletic body fat range", "Excellent"),
        (18, "Fitness", "Fit and healthy range", "Good"),
        (25, "Average", "Average body fat range", "Fair"),
        (math.inf, "Obese", "Above healthy range", "Health risk - too high"),
    ],
    "female": [
        (14, "Essential Fat", "Below essential fat levels", "Health risk - too low"),
        (21, "Athletes", "Athletic body fat range", "Excellent"),
        (25, "Fitness", "Fit and healthy range", "Good"),
        (32, "Average", "Average body fat range", "Fair"),
        (math.inf, "Obese", "Above healthy range", "Health risk - too high"),
    ],
}


def body_fat_category(percentage: float, sex: str) -> Dict[str, object]:
    for upper, category, description, risk in _BODY_FAT_BANDS[sex]:
        if percentage < upper:
            return {
                "percentage": round(percentage, 1),
                "category": category,
                "description": description,
                "health_risk": risk,
            }
    raise AssertionError("unreachable")


def _clamp_pct(value: float) -> float:
    return max(0.0, min(50.0, value))


def _circumference_body_fat(sex: str, height_cm: float, waist_cm: float, neck_cm: float, hip_cm: float) -> float:
    if sex == "male":
        if waist_cm <= neck_cm:
            raise ValueError("waist must be larger than neck")
        pct = 495 / (1.0324 - 0.19077 * math.log10(waist_cm - neck_cm) + 0.15456 * math.log10(height_cm)) - 450
    else:
        if waist_cm + hip_cm <= neck_cm:
            raise ValueError("waist + hip must be larger than neck")
        pct = 495 / (1.29579 - 0.35004 * math.log10(waist_cm + hip_cm - neck_cm) + 0.22100 * math.log10(height_cm)) - 450
    return _clamp_pct(pct)


def _ymca_body_fat(sex: str, weight_kg: float, waist_cm: float) -> float:
    if sex == "male":
        pct = waist_cm * 0.74 - weight_kg * 0.082 - 44.74
    else:
        pct = waist_cm * 0.55 - weight_kg * 0.084 - 35.69
    return _clamp_pct(pct)


def _missing(**fields) -> List[str]:
    return [k for k, v in fields.items() if v is None or v <= 0]


def calculate_body_fat(
    sex: str,
    methods: Sequence[str] = ("navy",),
    *,
    weight: Optional[float] = None,
    height: Optional[float] = None,
    waist: Optional[float] = None,
    neck: Optional[float] = None,
    hip: Optional[float] = None,
    unit: str = "metric",
) -> dict:
    """
    Estimate body fat percentage with one or more methods.

    Navy and Army share the circumference equation; YMCA uses waist and weight only.
    Every method result is clamped to 0-50 %. With several methods, the reported
    percentage (and the fat/lean split) uses their average.
    """
    sex = require_sex(sex)
    unit = require_choice("unit", unit, ("metric", "imperial"))
    selected = [m.strip().lower() for m in methods] if methods else []
    if not selected:
        raise ValueError("at least one method is required")
    for m in selected:
        require_choice("method", m, BODY_FAT_METHODS)

    weight_kg = to_kg(weight, unit) if weight else None
    height_cm = to_cm(height, unit) if height else None
    waist_cm = to_cm(waist, unit) if waist else None
    neck_cm = to_cm(neck, unit) if neck else None
    hip_cm = to_cm(hip, unit) if hip else None

    results: Dict[str, Dict[str, object]] = {}
    percentages: List[float] = []
    for method in dict.fromkeys(selected):
        if method in ("navy", "army"):
            needed = {"height": height_cm, "waist": waist_cm, "neck": neck_cm}
            if sex == "female":
                needed["hip"] = hip_cm
            missing = _missing(**needed)
            if missing:
                raise ValueError(f"{method} method requires: {', '.join(missing)}")
            pct = _circumference_body_fat(sex, height_cm, waist_cm, neck_cm, hip_cm or 0.0)
        else:
            missing = _missing(weight=weight_kg, waist=waist_cm)
            if missing:
                raise ValueError(f"ymca method requires: {', '.join(missing)}")
            pct = _ymca_body_fat(sex, weight_kg, waist_cm)
        results[method] = body_fat_category(pct, sex)
        percentages.append(pct)

    average = sum(percentages) / len(percentages)
    summary = body_fat_category(average, sex)

    out = {
        "sex": sex,
        "methods": results,
        "body_fat_percentage": summary["percentage"],
        "category": summary["category"],
        "description": summary["description"],
        "health_risk": summary["health_risk"],
        "average": summary if len(percentages) > 1 else None,
        "fat_mass_kg": None,
        "lean_mass_kg": None,
        "recommendations": _body_fat_recommendations(average, sex),
    }
    if weight_kg:
        fat_mass = weight_kg * average / 100
        out["fat_mass_kg"] = round(fat_mass, 1)
        out["lean_mass_kg"] = round(weight_kg - fat_mass, 1)
    return out


def _body_fat_recommendations(pct: float, sex: str) -> List[str]:
    low, high = (6, 25) if sex == "male" else (14, 32)
    if pct < low:
        return [
            "Body fat may be too low for optimal health",
            "Consider consulting a healthcare provider",
            "Focus on maintaining adequate nutrition",
        ]
    if pct > high:
        return [
            "Consider a structured exercise and nutrition program",
            "Focus on both cardiovascular and strength training",
            "Consult healthcare provider for personalized plan",
        ]
    return [
        "Maintain current fitness level with regular exercise",
        "Continue balanced nutrition and active lifestyle",
    ]


# Other body composition helpers ------------------------------------------------


def calculate_ideal_weight(height_cm: float) -> dict:
    """Weight range (kg) for a BMI of 18.5-24.9."""
    height_m = require_positive("height_cm", height_cm) / 100
    return {
        "height_cm": height_cm,
        "min_kg": round(18.5 * height_m ** 2, 1),
        "max_kg": round(24.9 * height_m ** 2, 1),
    }


def calculate_waist_hip_ratio(waist_cm: float, hip_cm: float, sex: str) -> dict:
    waist_cm = require_positive("waist_cm", waist_cm)
    hip_cm = require_positive("hip_cm", hip_cm)
    sex = require_sex(sex)
    ratio = waist_cm / hip_cm
    # WHO cut-offs for substantially increased metabolic risk.
    threshold = 0.90 if sex == "male" else 0.85
    return {
        "ratio": round(ratio, 2),
        "threshold": threshold,
        "risk": "High" if ratio >= threshold else "Low",
    }


def calculate_body_water(weight_kg: float, height_cm: float, age: float, sex: str) -> dict:
    """Total body water in litres (Watson formula)."""
    weight_kg = require_positive("weight_kg", weight_kg)
    height_cm = require_positive("height_cm", height_cm)
    age = require_positive("age", age)
    sex = require_sex(sex)
    if sex == "male":
        tbw = 2.447 - 0.09156 * age + 0.1074 * height_cm + 0.3362 * weight_kg
    else:
        tbw = -2.097 + 0.1069 * height_cm + 0.2466 * weight_kg
    return {
        "total_body_water_l": round(tbw, 1),
        "percentage_of_weight": round(tbw / weight_kg * 100, 1),
    }


def calculate_lean_body_mass(weight_kg: float, body_fat_percentage: float) -> dict:
    weight_kg = require_positive("weight_kg", weight_kg)
    if not 0 <= body_fat_percentage < 100:
        raise ValueError("body_fat_percentage must be between 0 and 100")
    fat_mass = weight_kg * body_fat_percentage / 100
    return {
        "lean_body_mass_kg": round(weight_kg - fat_mass, 1),
        "fat_mass_kg": round(fat_mass, 1),
    }
