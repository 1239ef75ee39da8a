# -*- coding: utf-8 -*-
"""Clinical reference endpoints (read-only)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from .catalog import MEDICAL_CALCULATORS, get_guideline, get_medical_calculator, list_categories, search_guidelines
from .models import ClinicalGuideline, GuidelineSearchResponse, MedicalCalculator

router = APIRouter(prefix="/api/clinical", tags=["Clinical"])


@router.get("/guidelines", response_model=GuidelineSearchResponse, summary="Search clinical guidelines")
def guidelines(
    q: str = Query("", max_length=100),
    category: Optional[str] = Query(None),
    organization: Optional[str] = Query(None),
    evidence_level: Optional[str] = Query(None, pattern=r"^[A-Da-d]$"),
    specialty: Optional[str] = Query(None),
):
    found = search_guidelines(
        q, category=category, organization=organization, evidence_level=evidence_level, specialty=specialty
    )
    return GuidelineSearchResponse(count=len(found), guidelines=found)


@router.get("/guidelines/{guideline_id}", response_model=ClinicalGuideline, summary="Get one guideline")
def guideline(guideline_id: str):
    found = get_guideline(guideline_id)
    if not found:
        raise HTTPException(status_code=404, detail="Guideline not found")
    return found


@router.get("/categories", summary="Guideline categories and organizations")
def categories():
    return list_categories()


@router.get("/calculators", summary="Medical calculator reference")
def calculators():
    return {"count": len(MEDICAL_CALCULATORS), "calculators": MEDICAL_CALCULATORS}


@router.get("/calculators/{calculator_id}", response_model=MedicalCalculator, summary="Get one medical calculator")
def calculator(calculator_id: str):
    found = get_medical_calculator(calculator_id)
    if not found:
        raise HTTPException(status_code=404, detail="Calculator not found")
    return found
