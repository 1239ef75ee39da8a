# -*- coding: utf-8 -*-
"""
Unit conversion and input validation shared by the health calculators.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple

LB_TO_KG = 0.453592
KG_TO_LB = 2.20462
INCH_TO_CM = 2.54
OZ_TO_ML = 29.5735
CUP_TO_ML = 236.588
LITER_TO_OZ = 33.814
KM_TO_MILES = 0.621371


_CONVERSIONS: Dict[Tuple[str, str], Callable[[float], float]] = {
    ("lbs", "kg"): lambda v: v * LB_TO_KG,
    ("kg", "lbs"): lambda v: v * KG_TO_LB,
    ("inches", "cm"): lambda v: v * INCH_TO_CM,
    ("cm", "inches"): lambda v: v / INCH_TO_CM,
    ("fahrenheit", "celsius"): lambda v: (v - 32) * 5 / 9,
    ("celsius", "fahrenheit"): lambda v: v * 9 / 5 + 32,
    ("oz", "ml"): lambda v: v * OZ_TO_ML,
    ("ml", "oz"): lambda v: v / OZ_TO_ML,
    ("cups", "ml"): lambda v: v * CUP_TO_ML,
    ("liters", "oz"): lambda v: v * LITER_TO_OZ,
    ("km", "miles"): lambda v: v * KM_TO_MILES,
    ("miles", "km"): lambda v: v / KM_TO_MILES,
}

_UNIT_ALIASES = {
    "lb": "lbs",
    "pounds": "lbs",
    "kilograms": "kg",
    "in": "inches",
    "inch": "inches",
    "centimeters": "cm",
    "f": "fahrenheit",
    "c": "celsius",
    "l": "liters",
    "litres": "liters",
    "cup": "cups",
}


def _norm_unit(unit: str) -> str:
    u = (unit or "").strip().lower()
    return _UNIT_ALIASES.get(u, u)


def supported_conversions() -> list:
    return [f"{a}->{b}" for a, b in _CONVERSIONS]


def convert_units(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a value between two supported units.

    Args:
        value: magnitude in ``from_unit``
        from_unit: e.g. "lbs", "inches", "fahrenheit", "oz"
        to_unit: e.g. "kg", "cm", "celsius", "ml"

    Returns:
        float: the converted value (unrounded)

    Raises:
        ValueError: if the pair is not supported
    """
    src, dst = _norm_unit(from_unit), _norm_unit(to_unit)
    if src == dst:
        return float(value)
    fn = _CONVERSIONS.get((src, dst))
    if fn is None:
        raise ValueError(f"unsupported conversion: {from_unit} -> {to_unit}")
    return fn(float(value))


def feet_and_inches_to_cm(feet: float, inches: float) -> float:
    return (feet * 12 + inches) * INCH_TO_CM


def to_kg(weight: float, unit: str = "metric") -> float:
    return weight * LB_TO_KG if unit == "imperial" else weight


def to_cm(length: float, unit: str = "metric") -> float:
    return length * INCH_TO_CM if unit == "imperial" else length


def require_positive(name: str, value: Optional[float]) -> float:
    if value is None:
        raise ValueError(f"{name} is required")
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return float(value)


def require_choice(name: str, value: str, choices) -> str:
    if value not in choices:
        raise ValueError(f"{name} must be one of: {', '.join(choices)}")
    return value


def require_sex(sex: str) -> str:
    s = (sex or "").strip().lower()
    return require_choice("sex", s, ("male", "female"))


def validate_health_inputs(
    *,
    weight: Optional[float] = None,
    weight_unit: str = "kg",
    height: Optional[float] = None,
    height_unit: str = "cm",
    age: Optional[float] = None,
    systolic: Optional[float] = None,
    diastolic: Optional[float] = None,
    heart_rate: Optional[float] = None,
) -> Dict[str, Any]:
    """Range-check raw health inputs; only the fields provided are checked."""
    errors: Dict[str, str] = {}

    if weight is not None:
        kg = convert_units(weight, weight_unit, "kg")
        if not 0 < kg < 1000:
            errors["weight"] = "weight must be between 0 and 1000 kg"
    if height is not None:
        cm = convert_units(height, height_unit, "cm")
        if not 0 < cm < 300:
            errors["height"] = "height must be between 0 and 300 cm"
    if age is not None and not 0 < age < 150:
        errors["age"] = "age must be between 0 and 150"
    if systolic is not None or diastolic is not None:
        s = systolic or 0
        d = diastolic or 0
        if not (0 < s < 300 and 0 < d < 200 and s > d):
            errors["blood_pressure"] = "systolic must be 1-299, diastolic 1-199, and systolic above diastolic"
    if heart_rate is not None and not 0 < heart_rate < 300:
        errors["heart_rate"] = "heart rate must be between 0 and 300 bpm"

    return {"valid": not errors, "errors": errors}
