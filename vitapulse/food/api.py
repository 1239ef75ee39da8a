# -*- coding: utf-8 -*-
"""Food: API endpoints (catalog search, food log, summaries)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..gamification.engine import MEAL_LOGGED_POINTS, award
from .catalog import BRANDS, get_food, lookup_nutrition, search_foods
from .models import FoodEntriesResponse, FoodEntry, FoodEntryCreateRequest, FoodSummaryResponse
from .storage import create_entry_record, delete_entry, get_entries, get_summary, save_entry, sum_nutrition

router = APIRouter(prefix="/api/food", tags=["Food"])

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/search", summary="Search the food catalog")
def search(
    q: str = Query("", max_length=100),
    brand: Optional[str] = Query(None, max_length=100),
    limit: int = Query(20, ge=1, le=100),
):
    foods = search_foods(q, brand=brand, limit=limit)
    return {"query": q, "count": len(foods), "foods": foods}


@router.get("/brands", summary="Restaurant brands in the catalog")
def brands():
    return {"brands": BRANDS}


@router.get("/nutrition", summary="Nutrition lookup for a single food")
def nutrition(
    food: str = Query(..., min_length=1, max_length=200),
    quantity: float = Query(1.0, gt=0, le=100),
):
    return lookup_nutrition(food, quantity)


@router.post("/entries", response_model=FoodEntry, summary="Log a food")
def create_entry(request: FoodEntryCreateRequest, user: dict = Depends(get_current_user)):
    if request.food_id:
        food = get_food(request.food_id)
        if not food:
            raise HTTPException(status_code=404, detail="Unknown food_id")
        entry = create_entry_record(
            user_id=user["id"],
            consumed_at=request.consumed_at,
            meal_type=request.meal_type,
            name=food.name,
            per_serving=food.nutrition,
            quantity=request.quantity,
            food_id=food.id,
            brand=food.brand,
            serving_size=food.serving_size,
            notes=request.notes,
        )
    else:
        entry = create_entry_record(
            user_id=user["id"],
            consumed_at=request.consumed_at,
            meal_type=request.meal_type,
            name=(request.name or "").strip(),
            per_serving=request.nutrition,
            quantity=request.quantity,
            serving_size=request.serving_size,
            notes=request.notes,
        )

    save_entry(entry)
    award(user["id"], "meal_logged", subject=entry.meal_type.value, points=MEAL_LOGGED_POINTS, description=f"Logged {entry.name}")
    return entry


@router.get("/entries", response_model=FoodEntriesResponse, summary="List food entries")
def list_entries(
    date: Optional[str] = Query(None, pattern=_DATE_PATTERN, description="YYYY-MM-DD (UTC); defaults to today"),
    user: dict = Depends(get_current_user),
):
    day = date or datetime.now(timezone.utc).date().isoformat()
    entries = get_entries(user["id"], start=day, end=day)
    return FoodEntriesResponse(date=day, count=len(entries), entries=entries, totals=sum_nutrition(entries))


@router.delete("/entries/{entry_id}", summary="Delete a food entry")
def remove_entry(entry_id: str, user: dict = Depends(get_current_user)):
    if not delete_entry(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    return {"status": "ok", "entry_id": entry_id}


@router.get("/summary", response_model=FoodSummaryResponse, summary="Nutrition summary over a date range")
def summary(
    start: str = Query(..., pattern=_DATE_PATTERN),
    end: str = Query(..., pattern=_DATE_PATTERN),
    user: dict = Depends(get_current_user),
):
    if start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return get_summary(user["id"], start=start, end=end)
