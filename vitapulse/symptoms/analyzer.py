# -*- coding: utf-8 -*-
"""
Rule-based symptom analysis

Conditions are scored by how many of their characteristic symptoms the user reported.
The result is informational only and always carries a disclaimer.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Union

DISCLAIMER = (
    "This is not a medical diagnosis. Please consult a healthcare professional for proper medical advice."
)

EMERGENCY_SYMPTOMS = ("chest pain", "difficulty breathing", "severe headache", "high fever")

SYMPTOM_CATALOG = [
    "Headache", "Fever", "Cough", "Sore throat", "Runny nose",
    "Fatigue", "Nausea", "Vomiting", "Diarrhea", "Stomach pain",
    "Muscle aches", "Joint pain", "Dizziness", "Shortness of breath",
    "Chest pain", "Back pain", "Skin rash", "Itching", "Sneezing",
    "Congestion", "Loss of appetite", "Weight loss", "Weight gain",
    "Sleep problems", "Anxiety", "Depression", "Memory problems",
]

CONDITIONS: List[Dict[str, object]] = [
    {
        "name": "Common Cold",
        "severity": "mild",
        "description": "A viral infection of the upper respiratory tract",
        "symptoms": ("runny nose", "sore throat", "cough", "congestion", "sneezing", "fatigue"),
        "recommendations": [
            "Get plenty of rest",
            "Stay hydrated",
            "Use over-the-counter pain relievers if needed",
            "Consider seeing a doctor if symptoms worsen",
        ],
    },
    {
        "name": "Seasonal Allergies",
        "severity": "mild",
        "description": "Allergic reaction to environmental allergens",
        "symptoms": ("sneezing", "runny nose", "itching", "congestion", "skin rash"),
        "recommendations": [
            "Avoid known allergens",
            "Use antihistamines",
            "Keep windows closed during high pollen days",
            "Consult an allergist for testing",
        ],
    },
    {
        "name": "Influenza",
        "severity": "moderate",
        "description": "A contagious respiratory illness caused by influenza viruses",
        "symptoms": ("fever", "cough", "muscle aches", "fatigue", "headache", "sore throat"),
        "recommendations": [
            "Rest and recover",
            "Drink plenty of fluids",
            "Ask a doctor about antiviral medication within 48 hours of onset",
            "Stay isolated to prevent spread",
        ],
    },
    {
        "name": "Viral Gastroenteritis",
        "severity": "moderate",
        "description": "Inflammation of the stomach and intestines, usually from a viral infection",
        "symptoms": ("nausea", "vomiting", "diarrhea", "stomach pain", "fever", "loss of appetite"),
        "recommendations": [
            "Sip water or oral rehydration solution frequently",
            "Eat bland foods as tolerated",
            "Wash hands often to prevent spread",
            "Seek care if you cannot keep fluids down",
        ],
    },
    {
        "name": "Tension Headache",
        "severity": "mild",
        "description": "A common headache caused by muscle tension and stress",
        "symptoms": ("headache", "back pain", "fatigue", "sleep problems", "anxiety"),
        "recommendations": [
            "Take regular breaks from screens",
            "Practice relaxation techniques",
            "Use over-the-counter pain relievers sparingly",
            "Maintain good posture",
        ],
    },
    {
        "name": "Migraine",
        "severity": "moderate",
        "description": "Recurring headaches often accompanied by nausea and sensitivity to light",
        "symptoms": ("headache", "nausea", "vomiting", "dizziness", "fatigue"),
        "recommendations": [
            "Rest in a dark, quiet room",
            "Track possible triggers in a diary",
            "Stay hydrated and keep regular meals",
            "Talk to a doctor about preventive treatment",
        ],
    },
    {
        "name": "Muscle Strain",
        "severity": "mild",
        "description": "Overstretching or tearing of muscle fibers",
        "symptoms": ("muscle aches", "back pain", "joint pain"),
        "recommendations": [
            "Rest the affected area",
            "Apply ice for the first 48 hours",
            "Stretch gently once the pain eases",
            "See a doctor if pain persists beyond two weeks",
        ],
    },
    {
        "name": "Anxiety",
        "severity": "moderate",
        "description": "Persistent worry or fear that can cause physical symptoms",
        "symptoms": ("anxiety", "sleep problems", "dizziness", "shortness of breath", "fatigue", "chest pain"),
        "recommendations": [
            "Practice breathing exercises",
            "Limit caffeine and alcohol",
            "Keep a regular sleep schedule",
            "Consider speaking with a mental health professional",
        ],
    },
]

_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(hour|day|week|month|year)s?", re.IGNORECASE)
_UNIT_DAYS = {"hour": 1 / 24, "day": 1, "week": 7, "month": 30, "year": 365}


def duration_in_days(duration: Union[int, float, str, None]) -> Optional[float]:
    """Accepts a number of days or text such as "3 days" or "2 weeks"."""
    if duration is None:
        return None
    if isinstance(duration, (int, float)):
        return float(duration)
    m = _DURATION_RE.search(duration)
    if not m:
        return None
    return float(m.group(1)) * _UNIT_DAYS[m.group(2).lower()]


def _normalize(symptoms: Sequence[str]) -> List[str]:
    return [" ".join(s.lower().split()) for s in symptoms if s and s.strip()]


def _contains_phrase(text: str, phrase: str) -> bool:
    return f" {phrase} " in f" {text} "


def _matched_symptoms(reported: List[str], keys: Sequence[str]) -> List[str]:
    """Condition symptoms found whole inside the reported texts; each report is used once."""
    used = set()
    matched = []
    for key in keys:
        for idx, text in enumerate(reported):
            if idx not in used and _contains_phrase(text, key):
                used.add(idx)
                matched.append(key)
                break
    return matched


def analyze_symptoms(
    symptoms: Sequence[str],
    age: Optional[int] = None,
    gender: Optional[str] = None,
    duration: Union[int, float, str, None] = None,
    severity: Optional[int] = None,
) -> dict:
    reported = _normalize(symptoms or [])
    if not reported:
        raise ValueError("At least one symptom is required")
    if severity is not None and not 1 <= severity <= 10:
        raise ValueError("severity must be between 1 and 10")

    conditions = []
    for cond in CONDITIONS:
        keys = cond["symptoms"]
        matched = _matched_symptoms(reported, keys)
        if not matched:
            continue
        conditions.append(
            {
                "name": cond["name"],
                "probability": round(len(matched) / len(keys) * 100),
                "severity": cond["severity"],
                "description": cond["description"],
                "matched_symptoms": matched,
                "recommendations": list(cond["recommendations"]),
            }
        )
    conditions.sort(key=lambda c: (-c["probability"], c["name"]))

    days = duration_in_days(duration)
    recommendations = [
        "Monitor your symptoms",
        "Rest and stay hydrated",
        "Consult a healthcare provider if symptoms worsen or persist",
    ]
    if any(e in r for r in reported for e in EMERGENCY_SYMPTOMS):
        urgency = "high"
        recommendations.insert(0, "Seek immediate medical attention")
    elif (severity is not None and severity >= 7) or (days is not None and days > 7):
        urgency = "moderate"
        recommendations.insert(0, "Schedule an appointment with your doctor soon")
    else:
        urgency = "low"

    return {
        "symptoms": list(symptoms),
        "patient_info": {"age": age, "gender": gender, "duration_days": days, "severity": severity},
        "possible_conditions": conditions,
        "urgency_level": urgency,
        "recommendations": recommendations,
        "disclaimer": DISCLAIMER,
    }


def suggest_symptoms(search: Optional[str] = None, limit: int = 20) -> dict:
    q = (search or "").strip().lower()
    found = [s for s in SYMPTOM_CATALOG if q in s.lower()] if q else list(SYMPTOM_CATALOG)
    return {"symptoms": found[:limit], "total": len(found)}
