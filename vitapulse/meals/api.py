# -*- coding: utf-8 -*-
"""Meal planner endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth.security import get_current_user
from .generator import generate_meal_plan
from .models import MealPlanRequest, MealPlanSaveRequest, SavedMealPlan, SavedMealPlanList
from .storage import delete_plan, get_plan, list_plans, save_plan

router = APIRouter(prefix="/api/meals", tags=["Meals"])


def _generate(request: MealPlanRequest) -> dict:
    if request.calories is None:
        raise HTTPException(status_code=400, detail="Daily calorie target is required")
    try:
        return generate_meal_plan(
            request.calories,
            diet_type=request.diet_type,
            allergies=request.allergies,
            preferences=request.preferences,
            meals_per_day=request.meals_per_day,
            days=request.days,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/generate", summary="Generate a meal plan")
def generate(request: MealPlanRequest):
    return _generate(request)


@router.post("/plans", response_model=SavedMealPlan, summary="Save a meal plan")
def create_plan(request: MealPlanSaveRequest, user: dict = Depends(get_current_user)):
    if request.plan is not None:
        plan = request.plan
    elif request.request is not None:
        plan = _generate(request.request)
    else:
        raise HTTPException(status_code=400, detail="Provide a plan or a generation request")
    return save_plan(user_id=user["id"], plan=plan, title=request.title, plan_date=request.plan_date)


@router.get("/plans", response_model=SavedMealPlanList, summary="List saved meal plans")
def get_plans(user: dict = Depends(get_current_user)):
    plans = list_plans(user["id"])
    return {"count": len(plans), "plans": plans}


@router.get("/plans/{plan_id}", response_model=SavedMealPlan, summary="Get a saved meal plan")
def get_one(plan_id: str, user: dict = Depends(get_current_user)):
    plan = get_plan(user["id"], plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    return plan


@router.delete("/plans/{plan_id}", summary="Delete a saved meal plan")
def remove(plan_id: str, user: dict = Depends(get_current_user)):
    if not delete_plan(user["id"], plan_id):
        raise HTTPException(status_code=404, detail="Plan not found")
    return {"status": "ok", "plan_id": plan_id}
