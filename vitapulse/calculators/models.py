# -*- coding: utf-8 -*-
"""Calculators: request models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Sex = Literal["male", "female"]
UnitSystem = Literal["metric", "imperial"]


class BMIRequest(BaseModel):
    weight_kg: float = Field(..., gt=0, lt=1000)
    height_cm: float = Field(..., gt=0, lt=300)
    ethnicity: Optional[str] = None


class BodyFatRequest(BaseModel):
    sex: Sex
    methods: List[str] = Field(default_factory=lambda: ["navy"], min_length=1)
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    waist: Optional[float] = Field(default=None, gt=0)
    neck: Optional[float] = Field(default=None, gt=0)
    hip: Optional[float] = Field(default=None, gt=0)
    unit: UnitSystem = "metric"


class IdealWeightRequest(BaseModel):
    height_cm: float = Field(..., gt=0, lt=300)


class WaistHipRequest(BaseModel):
    waist_cm: float = Field(..., gt=0)
    hip_cm: float = Field(..., gt=0)
    sex: Sex


class AnthropometricsRequest(BaseModel):
    weight: float = Field(..., gt=0, lt=1000, description="kg")
    height: float = Field(..., gt=0, lt=300, description="cm")
    age: float = Field(..., gt=0, lt=150)
    sex: Sex


class BodyWaterRequest(AnthropometricsRequest):
    pass


class LeanBodyMassRequest(BaseModel):
    weight_kg: float = Field(..., gt=0, lt=1000)
    body_fat_percentage: float = Field(..., ge=0, lt=100)


class BMRRequest(AnthropometricsRequest):
    formula: Literal["mifflin", "harris_benedict"] = "mifflin"


class TDEERequest(AnthropometricsRequest):
    activity_level: str = "sedentary"


class CalorieNeedsRequest(TDEERequest):
    goal: str = "maintain"
    timeframe_weeks: Optional[int] = Field(default=None, gt=0, le=104)


class MacroRequest(BaseModel):
    goal: str
    calories: Optional[float] = Field(default=None, gt=0)
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    age: Optional[float] = Field(default=None, gt=0)
    sex: Optional[Sex] = None
    activity_level: Optional[str] = None


class ProteinNeedsRequest(BaseModel):
    weight_kg: float = Field(..., gt=0, lt=1000)
    activity_level: str = "sedentary"


class HydrationRequest(BaseModel):
    weight_kg: float = Field(..., gt=0, lt=1000)
    activity_level: str = "sedentary"
    climate: str = "temperate"
    exercise_minutes: float = Field(default=0, ge=0)
    caffeine_mg: float = Field(default=0, ge=0)
    alcohol_ml: float = Field(default=0, ge=0)
    current_intake_ml: float = Field(default=0, ge=0)
    cultural_background: Optional[str] = None


class StepGoalRequest(BaseModel):
    age: float = Field(..., gt=0, lt=150)
    weight: float = Field(..., gt=0)
    fitness_level: str = "moderately_active"
    health_goal: str = "maintain"
    current_steps: float = Field(default=0, ge=0)
    has_health_conditions: bool = False
    unit: UnitSystem = "metric"


class HeartRateRequest(BaseModel):
    age: float = Field(..., gt=0, lt=150)
    resting_hr: Optional[float] = Field(default=None, gt=0, lt=300)
    fitness_level: str = "beginner"
    use_karvonen: bool = True


class StressRequest(BaseModel):
    answers: Dict[str, int]


class SleepNeedsRequest(BaseModel):
    age_group: str
    factors: List[str] = Field(default_factory=list)
    sleep_quality: int = Field(default=5, ge=1, le=10)


class SleepAnalysisRequest(BaseModel):
    bedtime: str = Field(..., examples=["23:00"])
    wake_time: str = Field(..., examples=["07:00"])
    age: float = Field(..., gt=0, lt=150)
    quality: Literal["poor", "fair", "good", "excellent"] = "good"


class BloodPressureRequest(BaseModel):
    systolic: float = Field(..., gt=0, lt=300)
    diastolic: float = Field(..., gt=0, lt=200)
    age: Optional[float] = Field(default=None, gt=0, lt=150)
    ethnicity: Optional[str] = None


class PregnancyRequest(BaseModel):
    lmp_date: str = Field(..., description="YYYY-MM-DD")
    pre_weight: float = Field(..., gt=0)
    current_weight: float = Field(..., gt=0)
    height: float = Field(..., gt=0, lt=300)
    today: Optional[str] = Field(default=None, description="YYYY-MM-DD; defaults to today")


class UnitConversionRequest(BaseModel):
    value: float
    from_unit: str
    to_unit: str


class ValidateInputsRequest(BaseModel):
    weight: Optional[float] = None
    weight_unit: str = "kg"
    height: Optional[float] = None
    height_unit: str = "cm"
    age: Optional[float] = None
    systolic: Optional[float] = None
    diastolic: Optional[float] = None
    heart_rate: Optional[float] = None
