"""
DKAFlow: Data Dictionary
========================
Value records passed into and returned from the DKA decision engine.

NO LOGIC is implemented here beyond input sanity checks. Every derived
record is recomputed from the caller's current snapshot of
patient + labs + settings; nothing here is cached or persisted.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List, Optional, Tuple

from dkaflow.constants import FluidType, Locale

class InvalidInputError(ValueError):
    """Raised when a value is numeric but clinically meaningless (weight <= 0, negative age)."""
    pass

class DataTypeError(TypeError):
    """Raised when inputs are wrong python types (str instead of float)."""
    pass

def _is_number(val) -> bool:
    # bool is an int subclass; a True pH is a caller bug
    return isinstance(val, (int, float)) and not isinstance(val, bool)

# --- 1. ENUMS ---

class Severity(Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    RESOLVED = "resolved"
    UNKNOWN = "unknown"

class InsulinRoute(Enum):
    SUBCUTANEOUS = "sq"
    INTRAVENOUS = "iv"

class PotassiumTone(Enum):
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"

class PotassiumTier(Enum):
    UNKNOWN = "unknown"          # not measured
    HIGH = "high"                # K > 5.5
    HIGH_NORMAL = "high_normal"  # 5 <= K <= 5.5
    NORMAL = "normal"            # 3.5 <= K < 5
    LOW = "low"                  # 3 <= K < 3.5
    CRITICAL = "critical"        # K < 3

# --- 2. INPUT LAYER ---

@dataclass
class Labs:
    """
    One snapshot of laboratory values. Every field is independently optional:
    None means "not yet measured", never zero.
    """
    bg_mg_dl: Optional[float] = None   # blood glucose
    ph: Optional[float] = None
    hco3: Optional[float] = None       # mEq/L
    na: Optional[float] = None         # mEq/L
    k: Optional[float] = None          # mEq/L
    bun: Optional[float] = None        # mg/dL
    pco2: Optional[float] = None       # mmHg
    cr: Optional[float] = None         # mg/dL
    wbc: Optional[float] = None        # /uL
    ketones: Optional[str] = None      # e.g. '+++'
    fever: Optional[bool] = None

    NUMERIC_FIELDS = ('bg_mg_dl', 'ph', 'hco3', 'na', 'k', 'bun', 'pco2', 'cr', 'wbc')

    def __post_init__(self):
        for name in self.NUMERIC_FIELDS:
            val = getattr(self, name)
            if val is not None and not _is_number(val):
                raise DataTypeError(f"Lab '{name}' must be numeric or None, got {type(val)}")
        if self.ketones is not None and not isinstance(self.ketones, str):
            raise DataTypeError(f"Lab 'ketones' must be a string, got {type(self.ketones)}")
        if self.fever is not None and not isinstance(self.fever, bool):
            raise DataTypeError(f"Lab 'fever' must be boolean, got {type(self.fever)}")

@dataclass
class PatientProfile:
    age_years: float
    weight_kg: float
    is_new_case: bool = True
    first_name: str = ""
    last_name: str = ""
    sex: str = "unknown"  # 'female' | 'male' | 'unknown'

    def __post_init__(self):
        # 1. Type Safety (prevent string math crashes)
        for name in ('age_years', 'weight_kg'):
            val = getattr(self, name)
            if not _is_number(val):
                raise DataTypeError(f"Field '{name}' must be numeric, got {type(val)}")

        # 2. Domain checks: reject, never clamp
        if self.weight_kg <= 0:
            raise InvalidInputError(f"Weight must be > 0 kg, got {self.weight_kg}")
        if self.age_years < 0:
            raise InvalidInputError(f"Age cannot be negative, got {self.age_years}")

        if self.sex not in ('female', 'male', 'unknown'):
            raise InvalidInputError("Sex must be 'female', 'male' or 'unknown'")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

@dataclass
class TherapySettings:
    insulin_route: InsulinRoute = InsulinRoute.SUBCUTANEOUS
    shock_state: bool = False

@dataclass
class AssessmentFlags:
    """Bedside signs. Descriptive only: echoed in the orders, never used in math."""
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

    def positives(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

@dataclass
class OrderInputs:
    patient: PatientProfile
    labs: Labs
    settings: TherapySettings = field(default_factory=TherapySettings)
    assessment: AssessmentFlags = field(default_factory=AssessmentFlags)

# --- 3. OUTPUT LAYER (immutable once computed) ---

@dataclass(frozen=True)
class FluidPlan:
    maintenance_per_day: int   # mL/day (Holliday-Segar)
    deficit: int               # mL
    bolus: int                 # mL
    rate_per_hour: float       # mL/h over 48h
    bolus_subtracted: bool     # False in shock
    note: str

@dataclass(frozen=True)
class PotassiumPlan:
    tone: PotassiumTone
    tier: PotassiumTier
    text: str
    add_meq_per_l: Optional[int]
    hold_insulin: bool

@dataclass(frozen=True)
class InsulinPlan:
    route: InsulinRoute
    # Subcutaneous branch
    sc_dose_units: Optional[float] = None
    sc_interval: Optional[str] = None
    # Intravenous branch
    iv_rate_u_kg_h: Optional[float] = None
    iv_rate_u_h: Optional[float] = None   # == mL/h at 1 U/mL
    hold_for_glucose: bool = False        # BS <= 100 on IV
    hold_for_potassium: bool = False      # K < 3 hard gate

    @property
    def held(self) -> bool:
        return self.hold_for_glucose or self.hold_for_potassium

@dataclass(frozen=True)
class SafetyAlerts:
    """Flags the composer must never drop. Tuples hold the matched risk labels."""
    hold_insulin: bool = False               # K < 3
    correct_potassium_first: bool = False    # 3 <= K < 3.5
    brain_edema_risk: Tuple[str, ...] = ()
    icu_indications: Tuple[str, ...] = ()

    @property
    def no_insulin_bolus(self) -> bool:
        # Standing order, every patient
        return True

@dataclass(frozen=True)
class DKAAssessment:
    """Everything the engine derives from one snapshot; the composer prints only this."""
    severity: Severity
    corrected_na: Optional[float]
    effective_osmolality: Optional[float]
    fluid_type: FluidType
    fluids: FluidPlan
    potassium: PotassiumPlan
    insulin: InsulinPlan
    alerts: SafetyAlerts
    locale: Locale = Locale.EN

@dataclass(frozen=True)
class OrderDocument:
    locale: Locale
    text: str

@dataclass(frozen=True)
class TrendPoint:
    hours_from_start: float
    labs: Labs

@dataclass(frozen=True)
class TrendRow:
    hours_from_start: float
    bg_mg_dl: Optional[float]
    ph: Optional[float]
    hco3: Optional[float]
    na: Optional[float]
    k: Optional[float]
    bun: Optional[float]
    pco2: Optional[float]
    severity: Severity

@dataclass(frozen=True)
class TrendSummary:
    rows: List[TrendRow]
    latest: Optional[TrendRow]
    latest_severity: Severity
    corrected_na: Optional[float]
    effective_osmolality: Optional[float]
    resolved_at_hours: Optional[float]

__all__ = [
    "InvalidInputError", "DataTypeError", "Severity", "InsulinRoute",
    "PotassiumTone", "PotassiumTier", "Labs", "PatientProfile",
    "TherapySettings", "AssessmentFlags", "OrderInputs", "FluidPlan",
    "PotassiumPlan", "InsulinPlan", "SafetyAlerts", "DKAAssessment", "OrderDocument",
    "TrendPoint", "TrendRow", "TrendSummary", "FluidType", "Locale",
]
