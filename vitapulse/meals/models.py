# -*- coding: utf-8 -*-
"""Meal planner: Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .generator import DIET_TYPES


class MealPlanRequest(BaseModel):
    calories: Optional[float] = Field(None, description="Daily calorie target")
    diet_type: str = Field("balanced", description=f"One of: {', '.join(DIET_TYPES)}")
    allergies: List[str] = Field(default_factory=list)
    preferences: List[str] = Field(default_factory=list)
    meals_per_day: int = Field(4, ge=3, le=5)
    days: int = Field(1, ge=1, le=7)


class MealPlanSaveRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    plan_date: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="Defaults to today (UTC)")
    plan: Optional[Dict[str, Any]] = Field(None, description="A previously generated plan")
    request: Optional[MealPlanRequest] = Field(None, description="Generate and save in one call")


class SavedMealPlan(BaseModel):
    plan_id: str
    title: Optional[str] = None
    plan_date: str
    created_at: str
    plan: Dict[str, Any]


class SavedMealPlanList(BaseModel):
    count: int
    plans: List[SavedMealPlan]
