# -*- coding: utf-8 -*-
"""Clinical reference: Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class EvidenceLevel(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class ClinicalGuideline(BaseModel):
    id: str
    title: str
    category: str
    organization: str
    last_updated: str = Field(..., description="YYYY-MM-DD")
    version: str
    evidence_level: EvidenceLevel
    summary: str
    key_recommendations: List[str]
    contraindications: List[str]
    references: List[str]
    web_url: Optional[str] = None
    tags: List[str]
    specialty: str
    age_group: str
    gender: str = "All"
    conditions: List[str]


class CalculatorInput(BaseModel):
    name: str
    label: str
    type: str
    unit: str = ""
    required: bool = True


class CalculatorOutput(BaseModel):
    name: str
    label: str
    unit: str = ""
    interpretation: str


class MedicalCalculator(BaseModel):
    id: str
    name: str
    description: str
    formula: str
    inputs: List[CalculatorInput]
    outputs: List[CalculatorOutput]
    references: List[str]
    last_updated: str


class GuidelineSearchResponse(BaseModel):
    count: int
    guidelines: List[ClinicalGuideline]
