# -*- coding: utf-8 -*-
"""Profile endpoints: preferences, water intake, daily dashboard."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from ..calculators.activity import hydration_status
from ..food.storage import get_entries, sum_nutrition
from ..gamification.engine import build_progress
from ..gamification.storage import list_user_events
from .models import Preferences, PreferencesUpdateRequest, WaterLogRequest
from .storage import add_water, get_preferences, save_preferences, water_logs_for_day

router = APIRouter(prefix="/api/profile", tags=["Profile"])

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _water_summary(user_id: str, day: str, target_ml: int) -> dict:
    logs = water_logs_for_day(user_id, day)
    total = round(sum(float(log["amount_ml"]) for log in logs), 1)
    percentage = round(min(total / target_ml * 100, 100), 1) if target_ml else 0.0
    return {
        "date": day,
        "current_intake_ml": total,
        "target_ml": target_ml,
        "percentage": percentage,
        "status": hydration_status(percentage),
        "logs": logs,
    }


@router.get("/preferences", response_model=Preferences, summary="Get my preferences")
def read_preferences(user: dict = Depends(get_current_user)):
    return get_preferences(user["id"])


@router.put("/preferences", response_model=Preferences, summary="Update my preferences")
def update_preferences(request: PreferencesUpdateRequest, user: dict = Depends(get_current_user)):
    return save_preferences(user["id"], request.model_dump())


@router.post("/water", summary="Log water intake")
def log_water(request: WaterLogRequest, user: dict = Depends(get_current_user)):
    entry = add_water(user["id"], request.amount_ml, request.logged_at)
    prefs = get_preferences(user["id"])
    return {"entry": entry, "summary": _water_summary(user["id"], entry["logged_at"][:10], prefs.water_target_ml)}


@router.get("/water", summary="Water intake for a day")
def read_water(
    date: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    user: dict = Depends(get_current_user),
):
    prefs = get_preferences(user["id"])
    return _water_summary(user["id"], date or _today(), prefs.water_target_ml)


@router.get("/dashboard", summary="Daily overview")
def dashboard(
    date: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    user: dict = Depends(get_current_user),
):
    day = date or _today()
    prefs = get_preferences(user["id"])
    totals = sum_nutrition(get_entries(user["id"], start=day, end=day))
    progress = build_progress(user["id"])
    return {
        "date": day,
        "user": {"id": user["id"], "full_name": user["full_name"]},
        "calories": {
            "eaten": totals.calories,
            "goal": prefs.calorie_goal,
            "remaining": round(prefs.calorie_goal - totals.calories, 1),
        },
        "macros": {"protein_g": totals.protein_g, "carbs_g": totals.carbs_g, "fat_g": totals.fat_g},
        "water": _water_summary(user["id"], day, prefs.water_target_ml),
        "step_goal": prefs.step_goal,
        "points": progress["total_points"],
        "level": progress["level"],
        "streak": progress["streak"],
        "recent_activity": list_user_events(user["id"], limit=10),
    }
