# -*- coding: utf-8 -*-
"""
Fitness progress analysis

Compares the earliest and latest logged value of each metric and turns the percent
changes into categories, achievements and recommendations.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

BODY_METRICS = ("weight_kg", "body_fat_pct", "muscle_mass_kg")
STRENGTH_METRICS = ("bench_press_kg", "squat_kg", "deadlift_kg")
ENDURANCE_METRICS = ("run_5k_minutes", "push_ups", "pull_ups")
MEASUREMENT_METRICS = ("waist_cm", "chest_cm", "arms_cm", "thighs_cm")
ALL_METRICS = BODY_METRICS + STRENGTH_METRICS + ENDURANCE_METRICS + MEASUREMENT_METRICS

# Lower is better for these.
_INVERTED = {"run_5k_minutes"}


def progress_category(change_pct: float) -> str:
    if change_pct > 10:
        return "Excellent"
    if change_pct > 5:
        return "Great"
    if change_pct > 0:
        return "Good"
    if change_pct > -5:
        return "Maintain"
    return "Needs Focus"


def _first_last(entries: Sequence[Dict[str, Any]], metric: str) -> Optional[tuple]:
    values = [e[metric] for e in entries if e.get(metric)]
    if len(values) < 2:
        return None
    return values[0], values[-1]


def metric_change(entries: Sequence[Dict[str, Any]], metric: str) -> float:
    """Percent change between the first and last entry carrying ``metric``; 0 without two values."""
    pair = _first_last(entries, metric)
    if pair is None:
        return 0.0
    first, last = pair
    change = (first - last) if metric in _INVERTED else (last - first)
    return round(change / first * 100, 1)


def analyze_progress(entries: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    if len(entries) < 2:
        raise ValueError("At least two progress entries are needed for analysis")

    ordered = sorted(entries, key=lambda e: e["entry_date"])
    start = date.fromisoformat(ordered[0]["entry_date"])
    end = date.fromisoformat(ordered[-1]["entry_date"])
    span_days = (end - start).days

    changes = {m: metric_change(ordered, m) for m in ALL_METRICS}
    lifts = [changes[m] for m in STRENGTH_METRICS if _first_last(ordered, m)]
    strength_total = round(sum(lifts) / len(lifts), 1) if lifts else 0.0

    weight = changes["weight_kg"]
    body_fat = changes["body_fat_pct"]
    run = changes["run_5k_minutes"]
    waist, chest, arms = changes["waist_cm"], changes["chest_cm"], changes["arms_cm"]

    achievements: List[str] = []
    recommendations: List[str] = []
    if strength_total > 10:
        achievements.append("Outstanding strength gains!")
    elif strength_total > 5:
        achievements.append("Great strength improvements!")
    elif strength_total < 0:
        recommendations.append("Focus on progressive overload in strength training")

    if run > 5:
        achievements.append("Excellent cardiovascular improvement!")
    elif run < 0:
        recommendations.append("Increase cardio training frequency and intensity")

    if body_fat < -5:
        achievements.append("Significant body fat reduction!")
    elif body_fat > 5:
        recommendations.append("Review nutrition plan and increase cardio")

    if waist < -3:
        achievements.append("Great waist reduction!")
    if chest > 2 or arms > 2:
        achievements.append("Excellent muscle building progress!")

    if span_days > 30:
        recommendations.append("Consider updating your workout routine for continued progress")
    recommendations.extend(
        [
            "Maintain consistent tracking for better insights",
            "Ensure adequate rest and recovery between workouts",
            "Stay hydrated and maintain proper nutrition",
        ]
    )

    positives = sum([strength_total > 0, run > 0, body_fat < 0, chest > 0 or arms > 0])
    if positives >= 3:
        overall = "Excellent Progress"
    elif positives == 2:
        overall = "Good Progress"
    elif positives == 1:
        overall = "Some Progress"
    else:
        overall = "Needs Improvement"

    return {
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "days_tracked": span_days,
        "entry_count": len(ordered),
        "body": {m: changes[m] for m in BODY_METRICS},
        "strength": {**{m: changes[m] for m in STRENGTH_METRICS}, "total": strength_total},
        "endurance": {m: changes[m] for m in ENDURANCE_METRICS},
        "measurements": {m: changes[m] for m in MEASUREMENT_METRICS},
        "categories": {
            "weight": progress_category(abs(weight)),
            "strength": progress_category(strength_total),
            "body_fat": progress_category(-body_fat),
        },
        "overall_progress": overall,
        "achievements": achievements,
        "recommendations": recommendations,
    }
