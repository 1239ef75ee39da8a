# -*- coding: utf-8 -*-
"""Symptom checker: Pydantic models."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class SymptomAnalysisRequest(BaseModel):
    symptoms: List[str] = Field(default_factory=list, max_length=50)
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = Field(None, max_length=32)
    duration: Optional[Union[float, str]] = Field(None, description='Days, or text such as "2 weeks"')
    severity: Optional[int] = Field(None, ge=1, le=10)


class SymptomReportCreateRequest(SymptomAnalysisRequest):
    analysis: Optional[Dict[str, Any]] = Field(None, description="Stored as-is; computed when omitted")


class SymptomReport(BaseModel):
    report_id: str
    symptoms: List[str]
    analysis: Dict[str, Any]
    urgency: str
    reported_at: str


class SymptomReportList(BaseModel):
    count: int
    reports: List[SymptomReport]
