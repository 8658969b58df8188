# main.py

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dkaflow.constants import MEDICAL_DISCLAIMER, VERSION, FluidType, Locale
from dkaflow.demo import demo_severe_case
from dkaflow.engine import DKAEngine
from dkaflow.models import (
    AssessmentFlags,
    FluidPlan,
    InsulinPlan,
    InsulinRoute,
    Labs,
    OrderInputs,
    PatientProfile,
    PotassiumPlan,
    SafetyAlerts,
    Severity,
    TherapySettings,
    TrendPoint,
    TrendRow,
)
from dkaflow.orders import compose_order_set
from dkaflow.trends import summarize_trend

# --- 1. CONFIGURATION & LOGGING ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("dkaflow-api")

app = FastAPI(
    title="DKAFlow API",
    version=VERSION,
    description="Pediatric DKA fluid / insulin / potassium order assistant. \n\n"
                "**WARNING**: Decision Support Tool Only. Not for autonomous clinical use.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"status": "active", "message": "DKAFlow API is running", "disclaimer": MEDICAL_DISCLAIMER}

@app.get("/health")
def health_check():
    """K8s/AWS Health Probe"""
    return {"status": "active", "version": VERSION, "module": "dkaflow-decision-engine"}

# --- 2. STRICT INPUT SCHEMA (The Guardrails) ---
class PatientRequest(BaseModel):
    age_years: float = Field(..., ge=0, le=18, description="Age in years (0-18y)")
    weight_kg: float = Field(..., gt=0, le=200.0, description="Weight in kg")
    is_new_case: bool = Field(True, description="New onset vs known diabetic")
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)
    sex: str = Field("unknown", pattern="^(female|male|unknown)$")

class LabsRequest(BaseModel):
    # Absent = not measured. Never defaulted.
    bg_mg_dl: Optional[float] = Field(None, ge=10.0, le=3000.0, description="Blood glucose mg/dL")
    ph: Optional[float] = Field(None, ge=6.5, le=7.8)
    hco3: Optional[float] = Field(None, ge=0.0, le=40.0)
    na: Optional[float] = Field(None, ge=100.0, le=200.0)
    k: Optional[float] = Field(None, ge=1.0, le=10.0)
    bun: Optional[float] = Field(None, ge=0.0, le=200.0)
    pco2: Optional[float] = Field(None, ge=5.0, le=100.0)
    cr: Optional[float] = Field(None, ge=0.0, le=20.0)
    wbc: Optional[float] = Field(None, ge=0.0, le=200000.0)
    ketones: Optional[str] = Field(None, max_length=10)
    fever: Optional[bool] = None

class AssessmentRequest(BaseModel):
    polyuria: bool = False
    polydipsia: bool = False
    weight_loss: bool = False
    rapid_breathing: bool = False
    nausea: bool = False
    abd_pain: bool = False
    dehydration: bool = False
    loc: bool = False
    kussmaul: bool = False
    shock: bool = False
    coma: bool = False

class OrdersRequest(BaseModel):
    patient: PatientRequest
    labs: LabsRequest = Field(default_factory=LabsRequest)
    assessment: AssessmentRequest = Field(default_factory=AssessmentRequest)
    insulin_route: InsulinRoute = Field(default=InsulinRoute.SUBCUTANEOUS)
    shock_state: bool = False
    locale: Locale = Field(default=Locale.EN, description="Locale for advisory notes in /assess")

    model_config = {
        "json_schema_extra": {
            "example": {
                "patient": {"age_years": 12, "weight_kg": 40, "is_new_case": True},
                "labs": {"bg_mg_dl": 560, "ph": 6.95, "hco3": 4, "na": 130, "k": 5.6,
                         "bun": 25, "pco2": 18},
                "insulin_route": "sq",
                "shock_state": False,
            }
        }
    }

class TrendPointRequest(BaseModel):
    hours_from_start: float = Field(..., ge=0.0, le=240.0)
    labs: LabsRequest

class TrendRequest(BaseModel):
    points: List[TrendPointRequest]

# --- 3. EXPLICIT RESPONSE SCHEMA (The Contract) ---
class AssessResponse(BaseModel):
    severity: Severity
    corrected_na: Optional[float]
    effective_osmolality: Optional[float]
    fluid_type: FluidType
    fluids: FluidPlan
    potassium: PotassiumPlan
    insulin: InsulinPlan
    alerts: SafetyAlerts  # Pydantic handles nested Dataclasses automatically!

class OrdersResponse(BaseModel):
    fa: str
    en: str

class TrendResponse(BaseModel):
    rows: List[TrendRow]
    latest_severity: Severity
    corrected_na: Optional[float]
    effective_osmolality: Optional[float]
    resolved_at_hours: Optional[float]

def to_order_inputs(req: OrdersRequest) -> OrderInputs:
    """Request -> engine records. Engine-side validation still runs in __post_init__."""
    return OrderInputs(
        patient=PatientProfile(**req.patient.model_dump()),
        labs=Labs(**req.labs.model_dump()),
        settings=TherapySettings(insulin_route=req.insulin_route, shock_state=req.shock_state),
        assessment=AssessmentFlags(**req.assessment.model_dump()),
    )

def _orders_payload(inputs: OrderInputs) -> Dict[str, str]:
    docs = compose_order_set(inputs)
    return {locale.value: doc.text for locale, doc in docs.items()}

# --- 4. ENDPOINTS ---

@app.post("/assess", response_model=AssessResponse)
def assess_patient(req: OrdersRequest):
    """Numbers only: severity, derived chemistry, fluid / potassium / insulin plans, flags."""
    try:
        logger.info(f"Assessing Age: {req.patient.age_years}y, Wt: {req.patient.weight_kg}kg")
        inputs = to_order_inputs(req)
        a = DKAEngine.assess(inputs.patient, inputs.labs, inputs.settings, req.locale)
        if a.insulin.hold_for_potassium:
            logger.warning("Insulin HOLD: K < 3")
        return {
            "severity": a.severity,
            "corrected_na": a.corrected_na,
            "effective_osmolality": a.effective_osmolality,
            "fluid_type": a.fluid_type,
            "fluids": a.fluids,
            "potassium": a.potassium,
            "insulin": a.insulin,
            "alerts": a.alerts,
        }
    except ValueError as e:
        logger.warning(f"Clinical Validation Error: {str(e)}")
        raise HTTPException(status_code=422, detail=f"Clinical Validation Error: {str(e)}")
    except Exception as e:
        logger.error(f"Internal Engine Failure: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal DKA Engine Error")

@app.post("/orders", response_model=OrdersResponse)
def generate_orders(req: OrdersRequest):
    """Both locale renderings of the order set for one snapshot."""
    try:
        logger.info(f"Composing orders for Age: {req.patient.age_years}y, Wt: {req.patient.weight_kg}kg")
        return _orders_payload(to_order_inputs(req))
    except ValueError as e:
        logger.warning(f"Clinical Validation Error: {str(e)}")
        raise HTTPException(status_code=422, detail=f"Clinical Validation Error: {str(e)}")
    except Exception as e:
        logger.error(f"Internal Engine Failure: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal DKA Engine Error")

@app.post("/trend", response_model=TrendResponse)
def trend_summary(req: TrendRequest):
    try:
        points = [TrendPoint(p.hours_from_start, Labs(**p.labs.model_dump())) for p in req.points]
        summary = summarize_trend(points)
    except ValueError as e:
        logger.warning(f"Clinical Validation Error: {str(e)}")
        raise HTTPException(status_code=422, detail=f"Clinical Validation Error: {str(e)}")
    except Exception as e:
        logger.error(f"Internal Engine Failure: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal DKA Engine Error")
    return {
        "rows": summary.rows,
        "latest_severity": summary.latest_severity,
        "corrected_na": summary.corrected_na,
        "effective_osmolality": summary.effective_osmolality,
        "resolved_at_hours": summary.resolved_at_hours,
    }

@app.get("/demo")
def demo():
    """Orders and trend for the built-in demo case."""
    case = demo_severe_case()
    summary = summarize_trend(case.trend)
    return {
        "orders": _orders_payload(case.inputs),
        "latest_severity": summary.latest_severity.value,
        "resolved_at_hours": summary.resolved_at_hours,
    }
