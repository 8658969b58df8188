# severity.py
from typing import Optional

from dkaflow.constants import SEVERITY_THRESHOLDS as T
from dkaflow.models import Severity

def classify_severity(ph: Optional[float] = None, hco3: Optional[float] = None) -> Severity:
    """
    Maps pH / bicarbonate to a DKA severity class.

    The rules are checked in a fixed order and the first match wins; the pH
    and HCO3 channels are not reconciled against each other. A missing value
    never satisfies a condition.
    """
    has_ph = ph is not None
    has_hco3 = hco3 is not None

    if not has_ph and not has_hco3:
        return Severity.UNKNOWN

    # 1. Resolution needs both channels
    if has_ph and ph > T.RESOLVED_PH and has_hco3 and hco3 > T.RESOLVED_HCO3:
        return Severity.RESOLVED

    # 2. Severe: pH < 7.1 OR HCO3 < 5
    if (has_ph and ph < T.SEVERE_PH) or (has_hco3 and hco3 < T.SEVERE_HCO3):
        return Severity.SEVERE

    # 3. Moderate: pH 7.1-7.2 OR HCO3 5-10
    if (has_ph and T.SEVERE_PH <= ph < T.MODERATE_PH_UPPER) or \
       (has_hco3 and T.SEVERE_HCO3 <= hco3 <= T.MODERATE_HCO3_UPPER):
        return Severity.MODERATE

    # 4. Mild: pH 7.2-7.3 OR HCO3 10-18
    if (has_ph and T.MODERATE_PH_UPPER <= ph <= T.MILD_PH_UPPER) or \
       (has_hco3 and T.MODERATE_HCO3_UPPER < hco3 <= T.MILD_HCO3_UPPER):
        return Severity.MILD

    # 5. Still acidotic on either channel but no band matched
    if (has_ph and ph <= T.RESOLVED_PH) or (has_hco3 and hco3 <= T.RESOLVED_HCO3):
        return Severity.MODERATE

    return Severity.UNKNOWN
