"""
DKAFlow: Physiologic Derivations
================================
Sodium / tonicity corrections and the glucose-driven lookups that decide
fluid dextrose content and IV insulin rate.

All functions return None (or FluidType.UNKNOWN) when a required lab is
missing. They never substitute zero for an absent value.
"""

import math
from typing import Optional

from dkaflow.constants import FLUID_CONSTANTS, INSULIN_CONSTANTS, FluidType

def round_half_up(x: float) -> int:
    """Integer rounding with .5 going up (Python's round() is banker's)."""
    return int(math.floor(x + 0.5))

def round1(x: float) -> float:
    return math.floor(x * 10 + 0.5) / 10

def round2(x: float) -> float:
    return math.floor(x * 100 + 0.5) / 100

class PhysiologyEngine:
    """Stateless derivations from a single lab snapshot."""

    @staticmethod
    def corrected_sodium(na: Optional[float], glucose_mg_dl: Optional[float]) -> Optional[float]:
        """
        Sodium corrected for hyperglycaemic dilution:
        Na + 1.6 * (glucose - 100) / 100, glucose below 100 adds nothing.
        """
        if na is None or glucose_mg_dl is None:
            return None
        delta = max(0.0, glucose_mg_dl - 100)
        return round1(na + 1.6 * (delta / 100))

    @staticmethod
    def effective_osmolality(na: Optional[float], glucose_mg_dl: Optional[float]) -> Optional[float]:
        """2*Na + glucose (mmol/L); mg/dL -> mmol/L is /18."""
        if na is None or glucose_mg_dl is None:
            return None
        return round1(2 * na + glucose_mg_dl / 18)

    @staticmethod
    def fluid_type_by_glucose(glucose_mg_dl: Optional[float]) -> FluidType:
        if glucose_mg_dl is None:
            return FluidType.UNKNOWN
        if glucose_mg_dl > FLUID_CONSTANTS.GLUCOSE_NS_ONLY:
            return FluidType.NS
        if glucose_mg_dl > FLUID_CONSTANTS.GLUCOSE_D5:
            return FluidType.D5_HALF_NS
        if glucose_mg_dl > FLUID_CONSTANTS.GLUCOSE_D7_5:
            return FluidType.D7_5_HALF_NS
        return FluidType.D10_HALF_NS

    @staticmethod
    def insulin_iv_rate(glucose_mg_dl: Optional[float]) -> Optional[float]:
        """
        IV regular insulin in U/kg/h. 0 means hold for one hour and recheck;
        None means glucose unknown, so the rate is undetermined.
        """
        if glucose_mg_dl is None:
            return None
        for above, rate in INSULIN_CONSTANTS.IV_RATE_TABLE:
            if glucose_mg_dl > above:
                return rate
        return INSULIN_CONSTANTS.IV_RATE_HOLD

# Module-level aliases
corrected_sodium = PhysiologyEngine.corrected_sodium
effective_osmolality = PhysiologyEngine.effective_osmolality
fluid_type_by_glucose = PhysiologyEngine.fluid_type_by_glucose
insulin_iv_rate = PhysiologyEngine.insulin_iv_rate
