# -*- coding: utf-8 -*-
"""Gamification endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ..auth.security import get_current_user
from .engine import ACHIEVEMENTS, build_progress
from .storage import list_user_events

router = APIRouter(prefix="/api/gamification", tags=["Gamification"])


@router.get("/progress", summary="Points, level, streak and achievements")
def progress(user: dict = Depends(get_current_user)):
    return build_progress(user["id"])


@router.get("/achievements", summary="Achievement catalog")
def achievements():
    return {
        "achievements": [
            {"id": a.id, "name": a.name, "description": a.description, "points": a.points, "target": a.target}
            for a in ACHIEVEMENTS
        ]
    }


@router.get("/events", summary="My activity ledger")
def events(
    limit: int = Query(50, ge=1, le=500),
    user: dict = Depends(get_current_user),
):
    items = list_user_events(user["id"], limit=limit)
    return {"count": len(items), "events": items}
