# -*- coding: utf-8 -*-
"""Fitness progress endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..gamification.engine import PROGRESS_LOGGED_POINTS, award
from .analysis import ALL_METRICS, analyze_progress
from .models import ProgressEntry, ProgressEntryCreateRequest, ProgressEntryList
from .storage import delete_entry, list_entries, save_entry

router = APIRouter(prefix="/api/fitness-progress", tags=["Fitness progress"])

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.post("/entries", response_model=ProgressEntry, summary="Log body, strength or endurance measurements")
def create_entry(request: ProgressEntryCreateRequest, user: dict = Depends(get_current_user)):
    entry = save_entry(
        user_id=user["id"],
        metrics={m: getattr(request, m) for m in ALL_METRICS},
        entry_date=request.entry_date.isoformat() if request.entry_date else None,
        notes=request.notes,
    )
    award(user["id"], "progress_logged", subject=entry["entry_date"], points=PROGRESS_LOGGED_POINTS)
    return entry


@router.get("/entries", response_model=ProgressEntryList, summary="List my progress entries")
def get_entries(
    start: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    end: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    user: dict = Depends(get_current_user),
):
    entries = list_entries(user["id"], start=start, end=end)
    return {"count": len(entries), "entries": entries}


@router.delete("/entries/{entry_id}", summary="Delete a progress entry")
def remove_entry(entry_id: str, user: dict = Depends(get_current_user)):
    if not delete_entry(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    return {"status": "ok", "entry_id": entry_id}


@router.get("/analysis", summary="Change over time with a progress category")
def analysis(
    start: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    end: Optional[str] = Query(None, pattern=_DATE_PATTERN),
    user: dict = Depends(get_current_user),
):
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must not be after end")
    try:
        return analyze_progress(list_entries(user["id"], start=start, end=end))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
