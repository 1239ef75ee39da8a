# -*- coding: utf-8 -*-
"""
Wellness calculators: stress questionnaire, sleep needs and sleep analysis,
blood pressure classification and pregnancy tracking.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .units import require_choice, require_positive

# Stress ----------------------------------------------------------------------

STRESS_QUESTIONS: Dict[str, str] = {
    "sleep_quality": "How would you rate your sleep quality?",
    "work_pressure": "How much pressure do you feel at work/school?",
    "relationships": "How are your personal relationships?",
    "financial_stress": "How concerned are you about finances?",
    "physical_symptoms": "Do you experience physical symptoms of stress?",
    "emotional_state": "How would you describe your emotional state?",
    "coping_mechanisms": "How do you typically cope with stress?",
    "time_management": "How well do you manage your time?",
}

MAX_STRESS_SCORE = len(STRESS_QUESTIONS) * 3

_STRESS_CATEGORIES = [
    (6, "Low Stress", "You appear to be managing stress well with good coping mechanisms"),
    (12, "Moderate Stress", "You have some stress factors that could benefit from attention"),
    (18, "High Stress", "You are experiencing significant stress that may impact your health"),
]

_STRESS_TIERS = [
    (6, [
        "Continue your current stress management practices",
        "Consider sharing your strategies with others",
        "Maintain regular exercise and healthy sleep habits",
    ]),
    (12, [
        "Develop a consistent stress management routine",
        "Practice deep breathing or meditation for 10-15 minutes daily",
        "Ensure you get 7-9 hours of quality sleep",
        "Consider talking to a counselor or therapist",
    ]),
    (18, [
        "Prioritize stress reduction as a health necessity",
        "Seek professional counseling or therapy",
        "Consider stress management workshops or programs",
        "Evaluate and reduce major stressors where possible",
        "Practice relaxation techniques multiple times daily",
    ]),
]

_SEVERE_STRESS_RECOMMENDATIONS = [
    "Seek immediate professional mental health support",
    "Consider speaking with your doctor about stress-related health impacts",
    "Explore stress management programs or intensive therapy",
    "Prioritize self-care and stress reduction above other commitments",
    "Build a strong support network of family, friends, or support groups",
]

_ANSWER_RECOMMENDATIONS = [
    ("sleep_quality", "Focus on improving sleep hygiene and creating a bedtime routine"),
    ("work_pressure", "Discuss workload management with your supervisor or HR"),
    ("relationships", "Consider relationship counseling or communication workshops"),
    ("financial_stress", "Seek financial counseling or budgeting assistance"),
]

_COPING_STRATEGIES = [
    "Practice deep breathing exercises (4-7-8 technique)",
    "Try progressive muscle relaxation",
    "Use mindfulness meditation apps like Headspace or Calm",
    "Engage in regular physical exercise (even 10-minute walks help)",
    "Maintain a gratitude journal",
    "Limit caffeine and alcohol intake",
    "Connect with supportive friends and family",
    "Set boundaries and learn to say no to excessive demands",
]

_EXTRA_COPING_STRATEGIES = [
    "Practice grounding techniques (5-4-3-2-1 sensory method)",
    "Consider professional therapy (CBT, mindfulness-based stress reduction)",
    "Explore stress-reduction hobbies (art, music, gardening)",
    "Join support groups or stress management classes",
]

# score threshold -> (risk factors, physical symptoms, mental symptoms)
_STRESS_SIGNS = [
    (6, ["Increased risk of anxiety and depression"],
        ["Headaches and muscle tension"],
        ["Difficulty concentrating"]),
    (12, ["Higher risk of cardiovascular problems", "Weakened immune system"],
         ["Digestive issues", "Sleep disturbances"],
         ["Irritability and mood swings", "Memory problems"]),
    (18, ["Significant risk of burnout", "Increased risk of chronic health conditions"],
         ["Chronic fatigue", "Frequent illness"],
         ["Overwhelming anxiety", "Feelings of hopelessness"]),
]


def estimate_stress(answers: Mapping[str, int]) -> dict:
    """
    Score the eight-question stress questionnaire.

    Args:
        answers: question id -> answer 1 (best) .. 4 (worst); every question is required

    Returns:
        dict: score (0-24), stress_level (percent), category, description,
        recommendations, coping_strategies (max 6), risk_factors,
        physical_symptoms, mental_symptoms
    """
    missing = [q for q in STRESS_QUESTIONS if q not in answers]
    if missing:
        raise ValueError(f"please answer all questions; missing: {', '.join(missing)}")
    unknown = [k for k in answers if k not in STRESS_QUESTIONS]
    if unknown:
        raise ValueError(f"unknown questions: {', '.join(sorted(unknown))}")
    for q, v in answers.items():
        if not isinstance(v, int) or isinstance(v, bool) or not 1 <= v <= 4:
            raise ValueError(f"answer for {q} must be an integer from 1 to 4")

    score = sum(v - 1 for v in answers.values())

    category, description = "Very High Stress", "You are under severe stress and should consider professional support"
    for upper, cat, desc in _STRESS_CATEGORIES:
        if score <= upper:
            category, description = cat, desc
            break

    recommendations = list(_SEVERE_STRESS_RECOMMENDATIONS)
    for upper, tier in _STRESS_TIERS:
        if score <= upper:
            recommendations = list(tier)
            break
    recommendations += [text for q, text in _ANSWER_RECOMMENDATIONS if answers[q] >= 3]

    strategies = list(_COPING_STRATEGIES)
    if score > 12:
        strategies += _EXTRA_COPING_STRATEGIES

    risk: List[str] = []
    physical: List[str] = []
    mental: List[str] = []
    for threshold, r, p, m in _STRESS_SIGNS:
        if score >= threshold:
            risk += r
            physical += p
            mental += m

    return {
        "score": score,
        "max_score": MAX_STRESS_SCORE,
        "stress_level": round(score / MAX_STRESS_SCORE * 100),
        "category": category,
        "description": description,
        "recommendations": recommendations,
        "coping_strategies": strategies[:6],
        "risk_factors": risk,
        "physical_symptoms": physical,
        "mental_symptoms": mental,
    }


# Sleep -----------------------------------------------------------------------

SLEEP_AGE_GROUPS: Dict[str, Dict[str, float]] = {
    "newborn": {"min": 14, "max": 17, "optimal": 15.5},
    "infant": {"min": 12, "max": 15, "optimal": 13.5},
    "toddler": {"min": 11, "max": 14, "optimal": 12.5},
    "preschool": {"min": 10, "max": 13, "optimal": 11.5},
    "school": {"min": 9, "max": 11, "optimal": 10},
    "teen": {"min": 8, "max": 10, "optimal": 9},
    "young-adult": {"min": 7, "max": 9, "optimal": 8},
    "adult": {"min": 7, "max": 9, "optimal": 8},
    "older-adult": {"min": 7, "max": 8, "optimal": 7.5},
}

SLEEP_FACTORS: Dict[str, float] = {
    "exercise": 0.5,
    "stress": 0.5,
    "illness": 1.0,
    "pregnancy": 1.0,
    "shift-work": 0.5,
    "caffeine": -0.5,
    "alcohol": 0.5,
}


def calculate_sleep_needs(age_group: str, factors: Sequence[str] = (), sleep_quality: int = 5) -> dict:
    """Recommended nightly sleep for an age group, adjusted for lifestyle and quality (1-10)."""
    age_group = require_choice("age_group", age_group, tuple(SLEEP_AGE_GROUPS))
    if not 1 <= sleep_quality <= 10:
        raise ValueError("sleep_quality must be between 1 and 10")
    base = SLEEP_AGE_GROUPS[age_group]

    adjustment = 0.0
    for f in dict.fromkeys(factors):
        adjustment += SLEEP_FACTORS[require_choice("factor", f, tuple(SLEEP_FACTORS))]
    if sleep_quality <= 3:
        adjustment += 1
    elif sleep_quality >= 8:
        adjustment -= 0.5

    low = max(base["min"] + adjustment - 0.5, 4)
    high = min(base["max"] + adjustment + 0.5, 12)
    optimal = max(min(base["optimal"] + adjustment, high), low)

    if adjustment > 1:
        category = "Extended"
        description = "You may need more sleep than average due to lifestyle factors or health conditions."
    elif adjustment < -0.5:
        category = "Reduced"
        description = "You may function well with slightly less sleep, but ensure quality remains high."
    else:
        category = "Normal"
        description = "Your sleep needs are within the typical range for your age group."

    return {
        "age_group": age_group,
        "adjustment_hours": adjustment,
        "min_hours": round(low, 1),
        "max_hours": round(high, 1),
        "optimal_hours": round(optimal, 1),
        "category": category,
        "description": description,
    }


SLEEP_EFFICIENCY = {"excellent": 95, "good": 85, "fair": 75, "poor": 60}


def _parse_clock(value: str) -> timedelta:
    try:
        t = datetime.strptime(value.strip(), "%H:%M")
    except ValueError as exc:
        raise ValueError(f"time must be HH:MM, got {value!r}") from exc
    return timedelta(hours=t.hour, minutes=t.minute)


def analyze_sleep(bedtime: str, wake_time: str, age: float, quality: str = "good") -> dict:
    """Duration (wrapping past midnight), efficiency and age-appropriate adequacy of one night."""
    age = require_positive("age", age)
    quality = require_choice("quality", quality, tuple(SLEEP_EFFICIENCY))
    start = _parse_clock(bedtime)
    end = _parse_clock(wake_time)
    if end <= start:
        end += timedelta(days=1)
    hours = (end - start).total_seconds() / 3600

    if age >= 65:
        rec_min, rec_max = 7, 8
    elif age >= 18:
        rec_min, rec_max = 7, 9
    else:
        rec_min, rec_max = 8, 10

    if hours < rec_min:
        category = "Insufficient Sleep"
    elif hours > rec_max:
        category = "Excessive Sleep"
    else:
        category = "Adequate Sleep"

    return {
        "duration_hours": round(hours, 1),
        "efficiency": SLEEP_EFFICIENCY[quality],
        "recommended": {"min": rec_min, "max": rec_max},
        "category": category,
        "recommendations": [
            "Maintain consistent sleep schedule",
            "Create a relaxing bedtime routine",
            "Avoid screens 1 hour before bedtime",
            "Keep bedroom cool, dark, and quiet",
            "Limit caffeine intake after 2 PM",
        ],
    }


# Blood pressure --------------------------------------------------------------


def analyze_blood_pressure(
    systolic: float,
    diastolic: float,
    age: Optional[float] = None,
    ethnicity: Optional[str] = None,
) -> dict:
    systolic = require_positive("systolic", systolic)
    diastolic = require_positive("diastolic", diastolic)
    if systolic <= diastolic:
        raise ValueError("systolic must be greater than diastolic")

    if systolic < 120 and diastolic < 80:
        category, risk = "Normal", "low"
        recommendations = ["Maintain healthy lifestyle", "Regular exercise", "Balanced diet"]
    elif systolic < 130 and diastolic < 80:
        category, risk = "Elevated", "medium"
        recommendations = ["Lifestyle modifications", "Reduce sodium intake", "Increase physical activity"]
    elif 130 <= systolic < 140 or 80 <= diastolic < 90:
        category, risk = "High Blood Pressure Stage 1", "medium"
        recommendations = ["Consult healthcare provider", "Lifestyle changes", "Monitor regularly"]
    elif 140 <= systolic < 180 or 90 <= diastolic < 120:
        category, risk = "High Blood Pressure Stage 2", "high"
        recommendations = ["Immediate medical attention", "Medication may be needed", "Strict lifestyle modifications"]
    else:
        category, risk = "Hypertensive Crisis", "critical"
        recommendations = ["SEEK IMMEDIATE MEDICAL ATTENTION", "Call emergency services", "Do not wait"]

    if age and age > 65:
        recommendations += ["Regular monitoring important for older adults", "Consider medication interactions"]

    cultural: List[str] = []
    eth = (ethnicity or "").strip().lower()
    if eth == "african_american":
        cultural = [
            "African Americans have higher risk of hypertension",
            "Earlier and more aggressive treatment may be needed",
            "Traditional foods may be high in sodium - consider modifications",
        ]
    elif eth in ("hispanic", "latino"):
        cultural = [
            "Hispanic populations may have increased diabetes risk with hypertension",
            "Consider traditional dietary patterns in management",
        ]

    return {
        "systolic": systolic,
        "diastolic": diastolic,
        "category": category,
        "risk_level": risk,
        "recommendations": recommendations,
        "cultural_considerations": cultural or None,
    }


# Pregnancy -------------------------------------------------------------------

PREGNANCY_DAYS = 280

_MILESTONES = {
    1: ["Neural tube development", "Heart begins beating", "Major organs forming"],
    2: ["Gender can be determined", "Movement can be felt", "Hearing develops"],
    3: ["Rapid brain development", "Lungs maturing", "Preparing for birth"],
}

_EXTRA_KCAL = {1: 0, 2: 340, 3: 450}


def _as_date(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise ValueError(f"invalid date: {value!r}") from exc


def calculate_pregnancy(
    lmp_date: Union[str, date],
    pre_weight: float,
    current_weight: float,
    height: float,
    today: Optional[Union[str, date]] = None,
) -> dict:
    """
    Gestational age, due date and IOM weight gain targets.

    Args:
        lmp_date: first day of the last menstrual period
        pre_weight: pre-pregnancy weight (kg)
        current_weight: current weight (kg)
        height: cm
        today: reference date, defaults to the current date
    """
    lmp = _as_date(lmp_date)
    ref = _as_date(today) if today else date.today()
    pre_weight = require_positive("pre_weight", pre_weight)
    current_weight = require_positive("current_weight", current_weight)
    height = require_positive("height", height)

    elapsed = (ref - lmp).days
    if elapsed < 0:
        raise ValueError("lmp_date cannot be in the future")
    if elapsed > 300:
        raise ValueError("lmp_date is more than 300 days ago")
    weeks, days = divmod(elapsed, 7)
    trimester = 1 if weeks < 13 else 2 if weeks < 27 else 3

    pre_bmi = pre_weight / (height / 100) ** 2
    if pre_bmi < 18.5:
        total, weekly = (12.5, 18.0), (0.5, 0.6)
    elif pre_bmi < 25:
        total, weekly = (11.5, 16.0), (0.4, 0.5)
    elif pre_bmi < 30:
        total, weekly = (7.0, 11.5), (0.2, 0.3)
    else:
        total, weekly = (5.0, 9.0), (0.2, 0.3)

    return {
        "gestational_age": {"weeks": weeks, "days": days},
        "trimester": trimester,
        "due_date": (lmp + timedelta(days=PREGNANCY_DAYS)).isoformat(),
        "days_remaining": max(PREGNANCY_DAYS - elapsed, 0),
        "pre_pregnancy_bmi": round(pre_bmi, 1),
        "weight_gained_kg": round(current_weight - pre_weight, 1),
        "weight_gain_recommendation": {
            "total": {"min": total[0], "max": total[1]},
            "weekly": {"min": weekly[0], "max": weekly[1]},
        },
        "developmental_milestones": _MILESTONES[trimester],
        "nutritional_needs": {
            "extra_calories": _EXTRA_KCAL[trimester],
            "protein_g": 71,
            "folate_mcg": 600,
            "iron_mg": 27,
            "calcium_mg": 1000,
        },
    }
