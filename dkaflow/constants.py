from enum import Enum

VERSION = "1.0.0"

MEDICAL_DISCLAIMER = """
⚠️ DECISION SUPPORT TOOL - NOT A PRESCRIPTION
• Final responsibility: Treating physician
• Not a substitute for clinical judgment
• Advisory orders only - review before use
"""

class Locale(Enum):
    FA = "fa"
    EN = "en"

class FluidType(Enum):
    """Values are the labels printed in the order text."""
    NS = "NaCl 0.9%"
    D5_HALF_NS = "D5W + NaCl 77 mEq/L"
    D7_5_HALF_NS = "D7.5W + NaCl 77 mEq/L"
    D10_HALF_NS = "D10W + NaCl 77 mEq/L"
    UNKNOWN = "—"

# Placeholder for any derivation that could not be computed
MISSING = "—"

class SEVERITY_THRESHOLDS:
    # Resolution: both channels must clear
    RESOLVED_PH = 7.3
    RESOLVED_HCO3 = 18.0

    SEVERE_PH = 7.1
    SEVERE_HCO3 = 5.0

    MODERATE_PH_UPPER = 7.2   # [7.1, 7.2)
    MODERATE_HCO3_UPPER = 10.0  # [5, 10]

    MILD_PH_UPPER = 7.3   # [7.2, 7.3]
    MILD_HCO3_UPPER = 18.0  # (10, 18]

class FLUID_CONSTANTS:
    # Holliday-Segar bands: (band width kg, mL/kg/day)
    HOLLIDAY_SEGAR_BANDS = ((10.0, 100.0), (10.0, 50.0))
    HOLLIDAY_SEGAR_REMAINDER_ML_KG = 20.0

    DEHYDRATION_FRACTION = {
        "mild": 0.05,
        "moderate": 0.07,
        "severe": 0.10,
    }
    DEFAULT_DEHYDRATION_FRACTION = 0.07

    BOLUS_ML_KG_MODERATE = 10.0
    BOLUS_ML_KG_SEVERE = 20.0
    BOLUS_MAX_ML = 1000

    REHYDRATION_HOURS = 48.0

    # Glucose cut-offs for fluid dextrose content (mg/dL)
    GLUCOSE_NS_ONLY = 300.0
    GLUCOSE_D5 = 200.0
    GLUCOSE_D7_5 = 100.0

class INSULIN_CONSTANTS:
    # (glucose strictly above mg/dL, U/kg/h)
    IV_RATE_TABLE = ((300.0, 0.1), (200.0, 0.075), (100.0, 0.05))
    IV_RATE_HOLD = 0.0
    SC_DOSE_U_KG = 0.15
    SC_INTERVAL_MILD = "Q4h"
    SC_INTERVAL_OTHER = "Q2h"
    DILUTION_UNITS = 50
    DILUTION_ML = 50

class POTASSIUM_CONSTANTS:
    HIGH = 5.5
    HIGH_NORMAL = 5.0
    NORMAL = 3.5
    LOW = 3.0

    ADD_HIGH_NORMAL = 20
    ADD_NORMAL = 40
    ADD_LOW = 55
    ADD_CRITICAL = 70

    RESCUE_KCL_MEQ_KG = 0.5
    RESCUE_KCL_MAX_MEQ = 10

class RISK_THRESHOLDS:
    # Brain edema
    BUN_MG_DL = 20.0
    PH = 7.1
    PCO2_MMHG = 21.0
    AGE_YEARS = 5.0

    # ICU
    ICU_AGE_YEARS = 2.0
    ICU_GLUCOSE_MG_DL = 700.0
    ICU_SODIUM = 150.0
    ICU_POTASSIUM = 3.0

class CEREBRAL_EDEMA_CONSTANTS:
    MANNITOL_EXAMPLE_G_KG = 0.75  # midpoint of 0.5-1 g/kg
    HYPERTONIC_SALINE_ML_KG = 3.0
