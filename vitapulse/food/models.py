# -*- coding: utf-8 -*-
"""Food: Pydantic models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

NUTRIENT_FIELDS = ("calories", "protein_g", "carbs_g", "fat_g", "fiber_g", "sugar_g", "sodium_mg")


class Nutrition(BaseModel):
    calories: float = Field(0.0, ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)
    fiber_g: float = Field(0.0, ge=0)
    sugar_g: float = Field(0.0, ge=0)
    sodium_mg: float = Field(0.0, ge=0)

    def scaled(self, factor: float) -> "Nutrition":
        return Nutrition(**{k: round(getattr(self, k) * factor, 1) for k in NUTRIENT_FIELDS})

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(**{k: getattr(self, k) + getattr(other, k) for k in NUTRIENT_FIELDS})

    def rounded(self) -> "Nutrition":
        return Nutrition(**{k: round(getattr(self, k), 1) for k in NUTRIENT_FIELDS})


class CatalogFood(BaseModel):
    id: str
    name: str
    brand: str
    serving_size: str
    category: str
    nutrition: Nutrition


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class FoodEntryCreateRequest(BaseModel):
    food_id: Optional[str] = Field(None, description="Catalog id; omit to log a custom food")
    name: Optional[str] = Field(None, max_length=200, description="Required for custom foods")
    serving_size: Optional[str] = Field(None, max_length=100)
    nutrition: Optional[Nutrition] = Field(None, description="Per-serving nutrition for custom foods")
    quantity: float = Field(1.0, gt=0, le=100, description="Number of servings")
    meal_type: MealType
    consumed_at: Optional[datetime] = Field(None, description="ISO8601 timestamp; naive values are UTC; defaults to now")
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def _food_or_custom(self) -> "FoodEntryCreateRequest":
        if not self.food_id and (self.nutrition is None or not (self.name or "").strip()):
            raise ValueError("provide either food_id or a custom name with nutrition")
        return self


class FoodEntry(BaseModel):
    entry_id: str
    user_id: str
    created_at: str
    consumed_at: str
    meal_type: MealType
    food_id: Optional[str] = None
    name: str
    brand: Optional[str] = None
    serving_size: Optional[str] = None
    quantity: float = 1.0
    nutrition: Nutrition = Nutrition()
    notes: Optional[str] = None


class FoodEntriesResponse(BaseModel):
    date: Optional[str] = None
    count: int
    entries: List[FoodEntry]
    totals: Nutrition


class FoodDaySummary(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    totals: Nutrition
    meals: Dict[str, Nutrition] = Field(default_factory=dict)
    entry_count: int = Field(0, ge=0)


class FoodSummaryResponse(BaseModel):
    start: str
    end: str
    totals: Nutrition
    meals: Dict[str, Nutrition] = Field(default_factory=dict)
    days: List[FoodDaySummary]
