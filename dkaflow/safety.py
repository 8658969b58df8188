# safety.py
from typing import List

from dkaflow.constants import POTASSIUM_CONSTANTS, RISK_THRESHOLDS as R
from dkaflow.models import Labs, PotassiumPlan, SafetyAlerts, Severity
from dkaflow.protocols import PotassiumProtocol
from dkaflow.severity import classify_severity

# Risk labels, locale-neutral
BUN_HIGH = "BUN > 20"
PH_LOW = "pH < 7.1"
PCO2_LOW = "pCO2 < 21"
AGE_UNDER_5 = "Age < 5 years"

ICU_SEVERE_DKA = "Severe DKA (pH<7.1 or HCO3<5)"
ICU_AGE_UNDER_2 = "Age < 2 years"
ICU_GLUCOSE_HIGH = "Blood sugar > 700 mg/dL"
ICU_SODIUM_HIGH = "Serum Na > 150"
ICU_POTASSIUM_LOW = "Serum K < 3"

class SafetySupervisor:
    """
    Scans a lab snapshot for the findings that change where and how a child
    is treated. Returns matched labels; an empty list means no flags.
    """

    @staticmethod
    def brain_edema_risk_factors(labs: Labs, age_years: float) -> List[str]:
        out = []
        if labs.bun is not None and labs.bun > R.BUN_MG_DL:
            out.append(BUN_HIGH)
        if labs.ph is not None and labs.ph < R.PH:
            out.append(PH_LOW)
        if labs.pco2 is not None and labs.pco2 < R.PCO2_MMHG:
            out.append(PCO2_LOW)
        if age_years < R.AGE_YEARS:
            out.append(AGE_UNDER_5)
        return out

    @staticmethod
    def icu_indications(labs: Labs, age_years: float) -> List[str]:
        # Cerebral edema itself is a clinical call, never flagged from labs
        out = []
        if classify_severity(labs.ph, labs.hco3) == Severity.SEVERE:
            out.append(ICU_SEVERE_DKA)
        if age_years < R.ICU_AGE_YEARS:
            out.append(ICU_AGE_UNDER_2)
        if labs.bg_mg_dl is not None and labs.bg_mg_dl > R.ICU_GLUCOSE_MG_DL:
            out.append(ICU_GLUCOSE_HIGH)
        if labs.na is not None and labs.na > R.ICU_SODIUM:
            out.append(ICU_SODIUM_HIGH)
        if labs.k is not None and labs.k < R.ICU_POTASSIUM:
            out.append(ICU_POTASSIUM_LOW)
        return out

    @staticmethod
    def check(labs: Labs, age_years: float, potassium: PotassiumPlan = None) -> SafetyAlerts:
        """
        Collects every safety flag for one snapshot. The insulin hold comes
        from the potassium plan so the two can never disagree.
        """
        if potassium is None:
            potassium = PotassiumProtocol.potassium_plan(labs.k)

        correct_first = (
            labs.k is not None
            and POTASSIUM_CONSTANTS.LOW <= labs.k < POTASSIUM_CONSTANTS.NORMAL
        )
        return SafetyAlerts(
            hold_insulin=potassium.hold_insulin,
            correct_potassium_first=correct_first,
            brain_edema_risk=tuple(SafetySupervisor.brain_edema_risk_factors(labs, age_years)),
            icu_indications=tuple(SafetySupervisor.icu_indications(labs, age_years)),
        )

# Module-level aliases
brain_edema_risk_factors = SafetySupervisor.brain_edema_risk_factors
icu_indications = SafetySupervisor.icu_indications
