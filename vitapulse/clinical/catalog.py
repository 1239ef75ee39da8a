# -*- coding: utf-8 -*-
"""Static clinical reference data: practice guidelines and medical calculator descriptions."""

from __future__ import annotations

from typing import Dict, List, Optional

from .models import ClinicalGuideline, MedicalCalculator

GUIDELINES: List[ClinicalGuideline] = [
    ClinicalGuideline(
        id="hypertension-2024",
        title="2024 Hypertension Management Guidelines",
        category="Cardiovascular",
        organization="AHA",
        last_updated="2024-01-15",
        version="2.1",
        evidence_level="A",
        summary=(
            "Comprehensive guidelines for the management of hypertension in adults, including diagnosis, "
            "treatment targets, and lifestyle modifications."
        ),
        key_recommendations=[
            "Target BP <130/80 mmHg for most adults",
            "Lifestyle modifications as first-line therapy",
            "ACE inhibitors or ARBs as first-line pharmacotherapy",
            "Regular monitoring every 3-6 months",
            "Consider combination therapy if single agent insufficient",
        ],
        contraindications=[
            "Pregnancy (avoid ACE inhibitors/ARBs)",
            "Bilateral renal artery stenosis",
            "Severe aortic stenosis",
            "Hyperkalemia >5.5 mEq/L",
        ],
        references=[
            "Whelton PK, et al. Hypertension. 2024;81(1):1-10.",
            "American Heart Association. Circulation. 2024;149:e1-e50.",
        ],
        web_url="https://www.heart.org/hypertension",
        tags=["hypertension", "blood pressure", "cardiovascular", "adults"],
        specialty="Cardiology",
        age_group="Adults",
        conditions=["Hypertension", "Prehypertension", "Cardiovascular Disease"],
    ),
    ClinicalGuideline(
        id="diabetes-2024",
        title="2024 Diabetes Care Standards",
        category="Endocrinology",
        organization="ADA",
        last_updated="2024-01-10",
        version="3.0",
        evidence_level="A",
        summary=(
            "Updated standards of medical care in diabetes, including screening, diagnosis, treatment, "
            "and complications management."
        ),
        key_recommendations=[
            "HbA1c target <7% for most adults",
            "Individualized treatment targets based on patient factors",
            "Metformin as first-line therapy for Type 2 diabetes",
            "Regular screening for complications",
            "Lifestyle intervention as cornerstone of treatment",
        ],
        contraindications=[
            "Severe renal impairment (eGFR <30)",
            "Contrast allergy (for imaging)",
            "Pregnancy (adjust targets)",
            "Severe hypoglycemia risk",
        ],
        references=[
            "American Diabetes Association. Diabetes Care. 2024;47(Suppl 1):S1-S200.",
            "International Diabetes Federation. Diabetes Res Clin Pract. 2024;108:109-120.",
        ],
        web_url="https://diabetes.org/standards-of-care",
        tags=["diabetes", "HbA1c", "endocrinology", "metabolism"],
        specialty="Endocrinology",
        age_group="All",
        conditions=["Type 1 Diabetes", "Type 2 Diabetes", "Prediabetes", "Gestational Diabetes"],
    ),
    ClinicalGuideline(
        id="covid-19-2024",
        title="COVID-19 Treatment Guidelines",
        category="Infectious Disease",
        organization="NIH",
        last_updated="2024-01-20",
        version="4.2",
        evidence_level="A",
        summary=(
            "Comprehensive guidelines for the treatment and management of COVID-19, including prevention, "
            "diagnosis, and treatment protocols."
        ),
        key_recommendations=[
            "Vaccination as primary prevention strategy",
            "Early antiviral treatment for high-risk patients",
            "Supportive care for mild to moderate cases",
            "Hospitalization for severe cases",
            "Post-COVID care and monitoring",
        ],
        contraindications=[
            "Known allergy to vaccine components",
            "Severe immunosuppression",
            "Pregnancy (consider risks/benefits)",
            "Recent COVID-19 infection",
        ],
        references=[
            "National Institutes of Health. COVID-19 Treatment Guidelines. 2024.",
            "World Health Organization. Clinical Management of COVID-19. 2024.",
        ],
        web_url="https://www.covid19treatmentguidelines.nih.gov",
        tags=["covid-19", "infectious disease", "vaccination", "treatment"],
        specialty="Infectious Disease",
        age_group="All",
        conditions=["COVID-19", "Post-COVID Syndrome", "Respiratory Infection"],
    ),
    ClinicalGuideline(
        id="pediatric-nutrition-2024",
        title="Pediatric Nutrition Guidelines",
        category="Pediatrics",
        organization="AAP",
        last_updated="2024-01-05",
        version="1.5",
        evidence_level="B",
        summary=(
            "Evidence-based guidelines for pediatric nutrition, growth monitoring, and feeding practices "
            "from birth through adolescence."
        ),
        key_recommendations=[
            "Exclusive breastfeeding for first 6 months",
            "Introduction of solid foods at 6 months",
            "Regular growth monitoring and assessment",
            "Age-appropriate portion sizes",
            "Limit added sugars and sodium",
        ],
        contraindications=[
            "Severe food allergies",
            "Metabolic disorders",
            "Severe malnutrition",
            "Parental refusal",
        ],
        references=[
            "American Academy of Pediatrics. Pediatrics. 2024;143(2):e2024-1234.",
            "World Health Organization. Infant and Young Child Feeding. 2024.",
        ],
        web_url="https://pediatrics.aappublications.org/nutrition",
        tags=["pediatrics", "nutrition", "growth", "feeding"],
        specialty="Pediatrics",
        age_group="Children",
        conditions=["Growth Failure", "Obesity", "Malnutrition", "Food Allergies"],
    ),
    ClinicalGuideline(
        id="mental-health-2024",
        title="Mental Health Screening Guidelines",
        category="Psychiatry",
        organization="APA",
        last_updated="2024-01-12",
        version="2.3",
        evidence_level="A",
        summary=(
            "Comprehensive guidelines for mental health screening, assessment, and treatment across all "
            "age groups."
        ),
        key_recommendations=[
            "Universal screening for depression and anxiety",
            "Early intervention for mental health concerns",
            "Integrated care approach",
            "Regular follow-up and monitoring",
            "Crisis intervention protocols",
        ],
        contraindications=[
            "Patient refusal",
            "Severe cognitive impairment",
            "Active substance abuse",
            "Acute psychiatric emergency",
        ],
        references=[
            "American Psychiatric Association. Diagnostic and Statistical Manual. 2024.",
            "National Institute of Mental Health. Mental Health Guidelines. 2024.",
        ],
        web_url="https://psychiatry.org/mental-health-guidelines",
        tags=["mental health", "depression", "anxiety", "screening"],
        specialty="Psychiatry",
        age_group="All",
        conditions=["Depression", "Anxiety", "Bipolar Disorder", "PTSD"],
    ),
]


def _inputs(*specs):
    # (name, label, type, unit)
    return [{"name": n, "label": label, "type": t, "unit": u} for n, label, t, u in specs]


MEDICAL_CALCULATORS: List[MedicalCalculator] = [
    MedicalCalculator(
        id="gfr-ckd-epi",
        name="GFR (CKD-EPI)",
        description="Estimated Glomerular Filtration Rate using CKD-EPI equation",
        formula=(
            "eGFR = 141 × min(SCr/κ, 1)^α × max(SCr/κ, 1)^-1.209 × 0.993^Age "
            "× 1.018 [if female] × 1.159 [if black]"
        ),
        inputs=_inputs(
            ("creatinine", "Serum Creatinine", "number", "mg/dL"),
            ("age", "Age", "number", "years"),
            ("gender", "Gender", "select", ""),
            ("race", "Race", "select", ""),
        ),
        outputs=[
            {
                "name": "gfr",
                "label": "eGFR",
                "unit": "mL/min/1.73m²",
                "interpretation": "Normal: ≥90, Mild: 60-89, Moderate: 30-59, Severe: 15-29, Kidney failure: <15",
            }
        ],
        references=["Levey AS, et al. Ann Intern Med. 2009;150(9):604-612."],
        last_updated="2024-01-15",
    ),
    MedicalCalculator(
        id="cha2ds2-vasc",
        name="CHA₂DS₂-VASc Score",
        description="Stroke risk assessment in atrial fibrillation",
        formula=(
            "C(ongestive heart failure) + H(ypertension) + A(ge ≥75) + D(iabetes) + S(troke/TIA) "
            "+ V(ascular disease) + A(ge 65-74) + S(ex category)"
        ),
        inputs=_inputs(
            ("chf", "Congestive Heart Failure", "select", ""),
            ("hypertension", "Hypertension", "select", ""),
            ("age", "Age", "number", "years"),
            ("diabetes", "Diabetes", "select", ""),
            ("stroke", "Stroke/TIA History", "select", ""),
            ("vascular", "Vascular Disease", "select", ""),
            ("gender", "Gender", "select", ""),
        ),
        outputs=[
            {
                "name": "score",
                "label": "CHA₂DS₂-VASc Score",
                "unit": "points",
                "interpretation": "0: No therapy, 1: Consider therapy, ≥2: Anticoagulation recommended",
            }
        ],
        references=["Lip GY, et al. Chest. 2010;137(2):263-272."],
        last_updated="2024-01-10",
    ),
    MedicalCalculator(
        id="ascvd-risk",
        name="ASCVD Risk Calculator",
        description="10-year atherosclerotic cardiovascular disease risk",
        formula="Pooled Cohort Equations for African American and White men and women",
        inputs=_inputs(
            ("age", "Age", "number", "years"),
            ("gender", "Gender", "select", ""),
            ("race", "Race", "select", ""),
            ("total_cholesterol", "Total Cholesterol", "number", "mg/dL"),
            ("hdl_cholesterol", "HDL Cholesterol", "number", "mg/dL"),
            ("systolic_bp", "Systolic BP", "number", "mmHg"),
            ("diabetes", "Diabetes", "select", ""),
            ("smoking", "Smoking", "select", ""),
        ),
        outputs=[
            {
                "name": "risk",
                "label": "10-year ASCVD Risk",
                "unit": "%",
                "interpretation": "Low: <5%, Borderline: 5-7.4%, Intermediate: 7.5-19.9%, High: ≥20%",
            }
        ],
        references=["Goff DC, et al. Circulation. 2014;129(25 suppl 2):S49-S73."],
        last_updated="2024-01-12",
    ),
    MedicalCalculator(
        id="meld-score",
        name="MELD Score",
        description="Model for End-stage Liver Disease score for liver transplant priority",
        formula="MELD = 3.78 × ln(serum bilirubin) + 11.2 × ln(INR) + 9.57 × ln(serum creatinine) + 6.43",
        inputs=_inputs(
            ("bilirubin", "Serum Bilirubin", "number", "mg/dL"),
            ("inr", "INR", "number", ""),
            ("creatinine", "Serum Creatinine", "number", "mg/dL"),
            ("dialysis", "On Dialysis", "select", ""),
        ),
        outputs=[
            {
                "name": "score",
                "label": "MELD Score",
                "unit": "points",
                "interpretation": "6-9: Low risk, 10-19: Intermediate risk, 20-29: High risk, ≥30: Very high risk",
            }
        ],
        references=["Wiesner R, et al. Hepatology. 2003;37(2):513-520."],
        last_updated="2024-01-08",
    ),
    MedicalCalculator(
        id="wells-score",
        name="Wells Score for PE",
        description="Clinical prediction rule for pulmonary embolism",
        formula="Sum of clinical features and risk factors",
        inputs=_inputs(
            ("clinical_symptoms", "Clinical Symptoms of DVT", "select", ""),
            ("pe_likely", "PE as Likely as Alternative", "select", ""),
            ("heart_rate", "Heart Rate >100", "select", ""),
            ("immobilization", "Immobilization/Surgery", "select", ""),
            ("previous_pe", "Previous PE/DVT", "select", ""),
            ("hemoptysis", "Hemoptysis", "select", ""),
            ("malignancy", "Active Malignancy", "select", ""),
        ),
        outputs=[
            {
                "name": "score",
                "label": "Wells Score",
                "unit": "points",
                "interpretation": "≤4: Low probability, 4.5-6: Moderate probability, >6: High probability",
            }
        ],
        references=["Wells PS, et al. N Engl J Med. 2000;343(6):416-420."],
        last_updated="2024-01-14",
    ),
]

_BY_ID: Dict[str, ClinicalGuideline] = {g.id: g for g in GUIDELINES}


def get_guideline(guideline_id: str) -> Optional[ClinicalGuideline]:
    return _BY_ID.get(guideline_id)


def get_medical_calculator(calculator_id: str) -> Optional[MedicalCalculator]:
    return next((c for c in MEDICAL_CALCULATORS if c.id == calculator_id), None)


def search_guidelines(
    query: str = "",
    *,
    category: Optional[str] = None,
    organization: Optional[str] = None,
    evidence_level: Optional[str] = None,
    specialty: Optional[str] = None,
) -> List[ClinicalGuideline]:
    """Substring search over title, summary, tags and conditions, narrowed by exact-match filters."""
    q = (query or "").strip().lower()
    out = []
    for g in GUIDELINES:
        if category and g.category.lower() != category.lower():
            continue
        if organization and g.organization.lower() != organization.lower():
            continue
        if evidence_level and g.evidence_level.value != evidence_level.upper():
            continue
        if specialty and g.specialty.lower() != specialty.lower():
            continue
        if q:
            haystack = [g.title, g.summary, *g.tags, *g.conditions]
            if not any(q in text.lower() for text in haystack):
                continue
        out.append(g)
    return out


def list_categories() -> Dict[str, List[str]]:
    return {
        "categories": sorted({g.category for g in GUIDELINES}),
        "organizations": sorted({g.organization for g in GUIDELINES}),
        "specialties": sorted({g.specialty for g in GUIDELINES}),
        "evidence_levels": ["A", "B", "C", "D"],
    }
