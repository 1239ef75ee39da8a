# -*- coding: utf-8 -*-
"""Calculator catalog: URL slug, title, category and the points a signed-in user earns."""

from __future__ import annotations

from typing import Dict, List

DEFAULT_AWARD_POINTS = 10

CALCULATORS: Dict[str, Dict[str, object]] = {
    "bmi": {"title": "BMI Calculator", "category": "body", "points": 10},
    "body-fat": {"title": "Body Fat Calculator", "category": "body", "points": 15},
    "ideal-weight": {"title": "Ideal Weight", "category": "body", "points": 10},
    "waist-hip-ratio": {"title": "Waist-to-Hip Ratio", "category": "body", "points": 10},
    "body-water": {"title": "Total Body Water", "category": "body", "points": 10},
    "lean-body-mass": {"title": "Lean Body Mass", "category": "body", "points": 10},
    "bmr": {"title": "BMR Calculator", "category": "energy", "points": 10},
    "tdee": {"title": "TDEE Calculator", "category": "energy", "points": 10},
    "calorie-needs": {"title": "Calorie Needs", "category": "energy", "points": 10},
    "macro-splitter": {"title": "Macro Splitter", "category": "energy", "points": 15},
    "protein-needs": {"title": "Protein Needs", "category": "energy", "points": 10},
    "hydration": {"title": "Hydration Calculator", "category": "activity", "points": 10},
    "step-goal": {"title": "Step Goal", "category": "activity", "points": 10},
    "heart-rate": {"title": "Heart Rate Zones", "category": "activity", "points": 12},
    "stress": {"title": "Stress Estimator", "category": "wellness", "points": 15},
    "sleep-needs": {"title": "Sleep Needs", "category": "wellness", "points": 10},
    "sleep-analysis": {"title": "Sleep Analysis", "category": "wellness", "points": 10},
    "blood-pressure": {"title": "Blood Pressure", "category": "wellness", "points": 10},
    "pregnancy": {"title": "Pregnancy Tracker", "category": "wellness", "points": 10},
}


def award_points(slug: str) -> int:
    return int(CALCULATORS.get(slug, {}).get("points", DEFAULT_AWARD_POINTS))


def list_calculators() -> List[Dict[str, object]]:
    return [
        {"name": slug, "path": f"/api/calculators/{slug}", **meta}
        for slug, meta in CALCULATORS.items()
    ]
