# -*- coding: utf-8 -*-
"""Fitness progress: Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .analysis import ALL_METRICS


class ProgressMetrics(BaseModel):
    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    body_fat_pct: Optional[float] = Field(None, gt=0, le=75)
    muscle_mass_kg: Optional[float] = Field(None, gt=0, le=200)
    bench_press_kg: Optional[float] = Field(None, gt=0, le=500)
    squat_kg: Optional[float] = Field(None, gt=0, le=600)
    deadlift_kg: Optional[float] = Field(None, gt=0, le=600)
    run_5k_minutes: Optional[float] = Field(None, gt=0, le=180)
    push_ups: Optional[int] = Field(None, gt=0, le=1000)
    pull_ups: Optional[int] = Field(None, gt=0, le=500)
    waist_cm: Optional[float] = Field(None, gt=0, le=300)
    chest_cm: Optional[float] = Field(None, gt=0, le=300)
    arms_cm: Optional[float] = Field(None, gt=0, le=100)
    thighs_cm: Optional[float] = Field(None, gt=0, le=150)


class ProgressEntryCreateRequest(ProgressMetrics):
    entry_date: Optional[date] = Field(None, description="Defaults to today (UTC)")
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def _has_metric(self) -> "ProgressEntryCreateRequest":
        if all(getattr(self, m) is None for m in ALL_METRICS):
            raise ValueError("log at least one measurement")
        return self


class ProgressEntry(ProgressMetrics):
    entry_id: str
    entry_date: str
    created_at: str
    notes: Optional[str] = None


class ProgressEntryList(BaseModel):
    count: int
    entries: List[ProgressEntry]
