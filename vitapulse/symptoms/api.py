# -*- coding: utf-8 -*-
"""Symptom checker endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from .analyzer import analyze_symptoms, suggest_symptoms
from .models import SymptomAnalysisRequest, SymptomReport, SymptomReportCreateRequest, SymptomReportList
from .storage import list_reports, save_report

router = APIRouter(prefix="/api/symptoms", tags=["Symptoms"])


def _analyze(request: SymptomAnalysisRequest) -> dict:
    try:
        return analyze_symptoms(
            request.symptoms,
            age=request.age,
            gender=request.gender,
            duration=request.duration,
            severity=request.severity,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/analyze", summary="Analyze reported symptoms")
def analyze(request: SymptomAnalysisRequest):
    return _analyze(request)


@router.get("/suggestions", summary="Symptom name suggestions")
def suggestions(
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(20, ge=1, le=50),
):
    return suggest_symptoms(search, limit=limit)


@router.post("/reports", response_model=SymptomReport, summary="Save a symptom report")
def create_report(request: SymptomReportCreateRequest, user: dict = Depends(get_current_user)):
    if not request.symptoms:
        raise HTTPException(status_code=400, detail="At least one symptom is required")
    analysis = request.analysis if request.analysis is not None else _analyze(request)
    return save_report(user_id=user["id"], symptoms=request.symptoms, analysis=analysis)


@router.get("/reports", response_model=SymptomReportList, summary="List my symptom reports")
def get_reports(
    limit: int = Query(50, ge=1, le=500),
    user: dict = Depends(get_current_user),
):
    reports = list_reports(user["id"], limit=limit)
    return {"count": len(reports), "reports": reports}
