"""
DKAFlow: Order Text Composer
============================
Turns one DKAAssessment into a copyable order set.

One composer serves every locale: the branching (which lines appear, in
which order, with which numbers) lives here once, and only the wording comes
from the locale table. Safety lines are driven by their clinical trigger,
never by layout.
"""

import logging
import math
from typing import Dict, List, Optional

from dkaflow.constants import CEREBRAL_EDEMA_CONSTANTS, INSULIN_CONSTANTS, MISSING, Locale
from dkaflow.engine import DKAEngine
from dkaflow.locales import RULE, strings_for
from dkaflow.models import (
    AssessmentFlags,
    DKAAssessment,
    InsulinRoute,
    OrderDocument,
    OrderInputs,
    PatientProfile,
    Severity,
)
from dkaflow.physiology import round2, round_half_up

logger = logging.getLogger(__name__)

def fmt(n: Optional[float]) -> str:
    """Prints a number the way it was computed; integral floats lose the '.0'."""
    if n is None or (isinstance(n, float) and math.isnan(n)):
        return MISSING
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)

class OrderComposer:

    @staticmethod
    def _header(s: dict, patient: PatientProfile) -> List[str]:
        return [
            s["title"],
            s["patient"].format(
                name=patient.display_name or MISSING,
                age=fmt(patient.age_years),
                weight=fmt(patient.weight_kg),
                case=s["case_new"] if patient.is_new_case else s["case_known"],
            ),
        ]

    @staticmethod
    def _safety(s: dict, a: DKAAssessment) -> List[str]:
        lines = [s["safety_header"], s["no_insulin_bolus"]]
        if a.alerts.hold_insulin:
            lines.append(s["hold_insulin_low_k"])
        elif a.alerts.correct_potassium_first:
            lines.append(s["caution_k"])
        return lines

    @staticmethod
    def _severity(s: dict, a: DKAAssessment) -> List[str]:
        lines = [
            s["severity"].format(severity=s["severity_" + a.severity.value]),
            s["derived"].format(cna=fmt(a.corrected_na), eosm=fmt(a.effective_osmolality)),
        ]
        if a.alerts.brain_edema_risk:
            lines.append(s["brain_edema_risk"].format(
                factors=s["list_sep"].join(a.alerts.brain_edema_risk)
            ))
        return lines

    @staticmethod
    def _fluids(s: dict, a: DKAAssessment, shock_state: bool) -> List[str]:
        f = a.fluids
        lines = [s["fluids_header"]]
        if f.bolus > 0:
            lines.append(s["bolus"].format(bolus=fmt(f.bolus)))
            if shock_state:
                lines.append(s["bolus_shock_reassess"])
        else:
            lines.append(s["no_bolus"])
        lines += [
            s["maintenance"].format(maintenance=fmt(f.maintenance_per_day)),
            s["deficit"].format(deficit=fmt(f.deficit)),
            s["rate"].format(rate=fmt(f.rate_per_hour), note=f.note),
            s["fluid_type"].format(fluid_type=a.fluid_type.value),
            s["no_vbg_titration"],
        ]
        return lines

    @staticmethod
    def _insulin(s: dict, a: DKAAssessment, patient: PatientProfile) -> List[str]:
        ins = a.insulin
        lines = [s["insulin_header"]]
        if ins.route == InsulinRoute.SUBCUTANEOUS:
            lines.append(s["sc_route"])
            lines.append(s["sc_dose"].format(dose=fmt(ins.sc_dose_units), interval=ins.sc_interval))
            if a.severity == Severity.SEVERE:
                lines.append(s["sc_severe"])
            if not patient.is_new_case and a.severity in (Severity.MILD, Severity.MODERATE):
                lines.append(s["sc_known_case"])
        else:
            lines += [
                s["iv_route"],
                s["iv_start"],
                s["iv_dilution"].format(units=INSULIN_CONSTANTS.DILUTION_UNITS,
                                        ml=INSULIN_CONSTANTS.DILUTION_ML),
            ]
            if ins.hold_for_glucose:
                lines.append(s["iv_hold_glucose"])
            else:
                lines.append(s["iv_rate"].format(rate=fmt(ins.iv_rate_u_kg_h),
                                                 rate_u_h=fmt(ins.iv_rate_u_h)))
        if ins.hold_for_potassium:
            lines.append(s["insulin_held_k"])
        return lines

    @staticmethod
    def _electrolytes(s: dict, a: DKAAssessment) -> List[str]:
        return [
            s["electrolytes_header"],
            s["bolus_no_k"],
            s["k_plan"].format(text=a.potassium.text),
            s["kphos_split"],
            s["phosphate"],
        ]

    @staticmethod
    def _cerebral_edema(s: dict, patient: PatientProfile) -> List[str]:
        mannitol = round2(CEREBRAL_EDEMA_CONSTANTS.MANNITOL_EXAMPLE_G_KG * patient.weight_kg)
        hts = round_half_up(CEREBRAL_EDEMA_CONSTANTS.HYPERTONIC_SALINE_ML_KG * patient.weight_kg)
        return [
            s["ce_header"],
            s["ce_no_delay"],
            s["ce_mannitol"].format(mannitol=fmt(mannitol)),
            s["ce_hts"].format(hts=fmt(hts)),
            s["ce_escalate"],
        ]

    @staticmethod
    def render(inputs: OrderInputs, a: DKAAssessment, locale: Locale) -> OrderDocument:
        s = strings_for(locale)
        patient = inputs.patient
        assessment = inputs.assessment or AssessmentFlags()

        sections = [
            OrderComposer._header(s, patient),
            OrderComposer._safety(s, a),
            OrderComposer._severity(s, a),
            OrderComposer._fluids(s, a, inputs.settings.shock_state),
            OrderComposer._insulin(s, a, patient),
            OrderComposer._electrolytes(s, a),
            [s["bicarb_header"], s["bicarb"]],
            OrderComposer._cerebral_edema(s, patient),
            [s["monitor_header"], *s["monitor_lines"]],
        ]

        positives = assessment.positives()
        if positives:
            sections.append([s["assessment_header"],
                             s["assessment"].format(flags=", ".join(positives))])

        sections.append([s["references"], s["disclaimer"]])

        lines: List[str] = []
        for i, section in enumerate(sections):
            if i > 0:
                lines.append(RULE)
            lines.extend(section)
        return OrderDocument(locale=locale, text="\n".join(lines))

def compose_orders(inputs: OrderInputs, locale: Locale = Locale.EN) -> OrderDocument:
    a = DKAEngine.assess(inputs.patient, inputs.labs, inputs.settings, locale)
    logger.debug(
        "Composing %s orders: severity=%s bolus=%s rate=%s K-tier=%s",
        locale.value, a.severity.value, a.fluids.bolus, a.fluids.rate_per_hour, a.potassium.tier.value,
    )
    return OrderComposer.render(inputs, a, locale)

def compose_order_set(inputs: OrderInputs) -> Dict[Locale, OrderDocument]:
    """Both renderings from the same snapshot."""
    return {locale: compose_orders(inputs, locale) for locale in Locale}
