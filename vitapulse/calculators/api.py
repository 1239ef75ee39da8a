# -*- coding: utf-8 -*-
"""Calculators: API endpoints.

All calculators are public. Signed-in callers additionally get a ``calculation_used``
activity event and the calculator's award points.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_optional_user
from ..gamification.engine import award
from . import activity, body, energy, wellness
from .models import (
    BloodPressureRequest,
    BMIRequest,
    BMRRequest,
    BodyFatRequest,
    BodyWaterRequest,
    CalorieNeedsRequest,
    HeartRateRequest,
    HydrationRequest,
    IdealWeightRequest,
    LeanBodyMassRequest,
    MacroRequest,
    PregnancyRequest,
    ProteinNeedsRequest,
    SleepAnalysisRequest,
    SleepNeedsRequest,
    StepGoalRequest,
    StressRequest,
    TDEERequest,
    UnitConversionRequest,
    ValidateInputsRequest,
    WaistHipRequest,
)
from .registry import CALCULATORS, award_points, list_calculators
from .units import convert_units, supported_conversions, validate_health_inputs

router = APIRouter(prefix="/api/calculators", tags=["Calculators"])


def _run(slug: str, user: Optional[Dict[str, Any]], fn: Callable[..., Any], **kwargs: Any) -> Dict[str, Any]:
    try:
        result = fn(**kwargs)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    reward = None
    if user:
        title = CALCULATORS[slug]["title"]
        reward = award(
            user["id"],
            "calculation_used",
            subject=slug,
            points=award_points(slug),
            description=f"Used {title}",
        )
    return {"calculator": slug, "result": result, "reward": reward}


@router.get("", summary="List calculators")
def get_calculators():
    return {"calculators": list_calculators()}


@router.post("/bmi", summary="Body mass index")
def bmi(req: BMIRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("bmi", user, body.calculate_bmi, **req.model_dump())


@router.post("/body-fat", summary="Body fat percentage")
def body_fat(req: BodyFatRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("body-fat", user, body.calculate_body_fat, **req.model_dump())


@router.post("/ideal-weight", summary="Ideal weight range")
def ideal_weight(req: IdealWeightRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("ideal-weight", user, body.calculate_ideal_weight, **req.model_dump())


@router.post("/waist-hip-ratio", summary="Waist-to-hip ratio")
def waist_hip_ratio(req: WaistHipRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("waist-hip-ratio", user, body.calculate_waist_hip_ratio, **req.model_dump())


@router.post("/body-water", summary="Total body water (Watson)")
def body_water(req: BodyWaterRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run(
        "body-water",
        user,
        body.calculate_body_water,
        weight_kg=req.weight,
        height_cm=req.height,
        age=req.age,
        sex=req.sex,
    )


@router.post("/lean-body-mass", summary="Lean body mass")
def lean_body_mass(req: LeanBodyMassRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("lean-body-mass", user, body.calculate_lean_body_mass, **req.model_dump())


@router.post("/bmr", summary="Basal metabolic rate")
def bmr(req: BMRRequest, user: Optional[dict] = Depends(get_optional_user)):
    def _bmr(**kw):
        return {"bmr": round(energy.calculate_bmr(**kw)), "formula": kw["formula"]}

    return _run("bmr", user, _bmr, **req.model_dump())


@router.post("/tdee", summary="Total daily energy expenditure")
def tdee(req: TDEERequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("tdee", user, energy.calculate_tdee, **req.model_dump())


@router.post("/calorie-needs", summary="Daily calorie target for a weight goal")
def calorie_needs(req: CalorieNeedsRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("calorie-needs", user, energy.calculate_calorie_needs, **req.model_dump())


@router.post("/macro-splitter", summary="Macronutrient split")
def macro_splitter(req: MacroRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("macro-splitter", user, energy.calculate_macros, **req.model_dump())


@router.post("/protein-needs", summary="Daily protein needs")
def protein_needs(req: ProteinNeedsRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("protein-needs", user, energy.calculate_protein_needs, **req.model_dump())


@router.post("/hydration", summary="Daily water needs")
def hydration(req: HydrationRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("hydration", user, activity.calculate_hydration, **req.model_dump())


@router.post("/step-goal", summary="Daily step goal")
def step_goal(req: StepGoalRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("step-goal", user, activity.calculate_step_goal, **req.model_dump())


@router.post("/heart-rate", summary="Heart rate training zones")
def heart_rate(req: HeartRateRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("heart-rate", user, activity.calculate_heart_rate_zones, **req.model_dump())


@router.post("/stress", summary="Stress questionnaire")
def stress(req: StressRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("stress", user, wellness.estimate_stress, answers=req.answers)


@router.post("/sleep-needs", summary="Recommended sleep duration")
def sleep_needs(req: SleepNeedsRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("sleep-needs", user, wellness.calculate_sleep_needs, **req.model_dump())


@router.post("/sleep-analysis", summary="Analyze one night of sleep")
def sleep_analysis(req: SleepAnalysisRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("sleep-analysis", user, wellness.analyze_sleep, **req.model_dump())


@router.post("/blood-pressure", summary="Blood pressure category")
def blood_pressure(req: BloodPressureRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("blood-pressure", user, wellness.analyze_blood_pressure, **req.model_dump())


@router.post("/pregnancy", summary="Pregnancy progress and weight gain")
def pregnancy(req: PregnancyRequest, user: Optional[dict] = Depends(get_optional_user)):
    return _run("pregnancy", user, wellness.calculate_pregnancy, **req.model_dump())


@router.post("/convert", summary="Convert between units")
def convert(req: UnitConversionRequest):
    try:
        value = convert_units(req.value, req.from_unit, req.to_unit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"value": round(value, 4), "from_unit": req.from_unit, "to_unit": req.to_unit}


@router.get("/convert", summary="Supported unit conversions")
def conversions():
    return {"conversions": supported_conversions()}


@router.post("/validate", summary="Range-check health inputs")
def validate(req: ValidateInputsRequest):
    try:
        return validate_health_inputs(**req.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
