# -*- coding: utf-8 -*-
"""Profile: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..i18n.core import LANGUAGES


def _check_language(v: str) -> str:
    v = (v or "").strip().lower()
    if v not in LANGUAGES:
        raise ValueError(f"language must be one of: {', '.join(LANGUAGES)}")
    return v


class Preferences(BaseModel):
    language: str = "en"
    theme: Literal["light", "dark", "system"] = "system"
    units: Literal["metric", "imperial"] = "metric"
    water_target_ml: int = Field(2000, ge=500, le=10000)
    step_goal: int = Field(10000, ge=1000, le=100000)
    calorie_goal: int = Field(2000, ge=800, le=6000)

    @field_validator("language")
    @classmethod
    def _supported_language(cls, v: str) -> str:
        return _check_language(v)


class PreferencesUpdateRequest(BaseModel):
    language: Optional[str] = None
    theme: Optional[Literal["light", "dark", "system"]] = None
    units: Optional[Literal["metric", "imperial"]] = None
    water_target_ml: Optional[int] = Field(None, ge=500, le=10000)
    step_goal: Optional[int] = Field(None, ge=1000, le=100000)
    calorie_goal: Optional[int] = Field(None, ge=800, le=6000)

    @field_validator("language")
    @classmethod
    def _supported_language(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _check_language(v)


class WaterLogRequest(BaseModel):
    amount_ml: float = Field(..., gt=0, le=5000)
    logged_at: Optional[datetime] = Field(None, description="ISO8601 timestamp; naive values are UTC; defaults to now")
