# protocols.py
from typing import Optional

from dkaflow.constants import (
    FLUID_CONSTANTS,
    INSULIN_CONSTANTS,
    POTASSIUM_CONSTANTS,
    Locale,
)
from dkaflow.locales import strings_for
from dkaflow.models import (
    FluidPlan,
    InsulinPlan,
    InsulinRoute,
    PotassiumPlan,
    PotassiumTier,
    PotassiumTone,
    Severity,
)
from dkaflow.physiology import PhysiologyEngine, round1, round2, round_half_up

class FluidPlanner:
    """48-hour rehydration plan: maintenance x2 + deficit, spread evenly."""

    @staticmethod
    def maintenance_ml_per_day(weight_kg: float) -> float:
        """Holliday-Segar: 100 mL/kg first 10 kg, 50 next 10 kg, 20 thereafter."""
        if weight_kg <= 0:
            return 0.0
        ml = 0.0
        remaining = weight_kg
        for band_kg, ml_per_kg in FLUID_CONSTANTS.HOLLIDAY_SEGAR_BANDS:
            portion = min(band_kg, max(0.0, remaining))
            ml += portion * ml_per_kg
            remaining -= portion
        ml += max(0.0, remaining) * FLUID_CONSTANTS.HOLLIDAY_SEGAR_REMAINDER_ML_KG
        return ml

    @staticmethod
    def dehydration_fraction(severity: Severity) -> float:
        return FLUID_CONSTANTS.DEHYDRATION_FRACTION.get(
            severity.value, FLUID_CONSTANTS.DEFAULT_DEHYDRATION_FRACTION
        )

    @staticmethod
    def deficit_ml(weight_kg: float, severity: Severity) -> int:
        frac = FluidPlanner.dehydration_fraction(severity)
        return round_half_up(weight_kg * 1000 * frac)

    @staticmethod
    def bolus_ml(weight_kg: float, severity: Severity, shock_state: bool) -> int:
        capped_20 = min(FLUID_CONSTANTS.BOLUS_MAX_ML,
                        round_half_up(weight_kg * FLUID_CONSTANTS.BOLUS_ML_KG_SEVERE))
        if shock_state:
            return capped_20
        if severity == Severity.MODERATE:
            return round_half_up(weight_kg * FLUID_CONSTANTS.BOLUS_ML_KG_MODERATE)
        if severity == Severity.SEVERE:
            return capped_20
        # mild, resolved, unknown
        return 0

    @staticmethod
    def total_fluids_rate(weight_kg: float, severity: Severity, shock_state: bool,
                          locale: Locale = Locale.EN) -> FluidPlan:
        """
        Net hourly rate = (2 x maintenance + deficit - bolus) / 48.
        In shock the bolus is extra resuscitation volume and is NOT subtracted.
        """
        maintenance = FluidPlanner.maintenance_ml_per_day(weight_kg)
        deficit = FluidPlanner.deficit_ml(weight_kg, severity)
        bolus = FluidPlanner.bolus_ml(weight_kg, severity, shock_state)

        subtract = not shock_state
        numerator = 2 * maintenance + deficit - (bolus if subtract else 0)
        rate = numerator / FLUID_CONSTANTS.REHYDRATION_HOURS

        s = strings_for(locale)
        return FluidPlan(
            maintenance_per_day=round_half_up(maintenance),
            deficit=deficit,
            bolus=bolus,
            rate_per_hour=round1(rate),
            bolus_subtracted=subtract,
            note=s["note_subtract"] if subtract else s["note_shock"],
        )

class PotassiumProtocol:
    """Tiered KCl additive. First match wins, checked top-down."""

    @staticmethod
    def potassium_plan(k: Optional[float] = None, locale: Locale = Locale.EN) -> PotassiumPlan:
        s = strings_for(locale)
        P = POTASSIUM_CONSTANTS

        if k is None:
            return PotassiumPlan(PotassiumTone.YELLOW, PotassiumTier.UNKNOWN,
                                 s["k_unknown"], None, False)
        if k > P.HIGH:
            return PotassiumPlan(PotassiumTone.YELLOW, PotassiumTier.HIGH,
                                 s["k_high"], 0, False)
        if P.HIGH_NORMAL <= k <= P.HIGH:
            return PotassiumPlan(PotassiumTone.GREEN, PotassiumTier.HIGH_NORMAL,
                                 s["k_high_normal"].format(add=P.ADD_HIGH_NORMAL),
                                 P.ADD_HIGH_NORMAL, False)
        if P.NORMAL <= k < P.HIGH_NORMAL:
            return PotassiumPlan(PotassiumTone.GREEN, PotassiumTier.NORMAL,
                                 s["k_normal"].format(add=P.ADD_NORMAL),
                                 P.ADD_NORMAL, False)
        if P.LOW <= k < P.NORMAL:
            return PotassiumPlan(PotassiumTone.ORANGE, PotassiumTier.LOW,
                                 s["k_low"].format(add=P.ADD_LOW),
                                 P.ADD_LOW, False)

        # K < 3: hard stop on insulin
        text = s["k_critical"].format(
            add=P.ADD_CRITICAL, rescue=P.RESCUE_KCL_MEQ_KG, rescue_max=P.RESCUE_KCL_MAX_MEQ
        )
        return PotassiumPlan(PotassiumTone.RED, PotassiumTier.CRITICAL, text,
                             P.ADD_CRITICAL, True)

class InsulinProtocol:
    @staticmethod
    def sc_dose_units(weight_kg: float) -> float:
        return round2(INSULIN_CONSTANTS.SC_DOSE_U_KG * weight_kg)

    @staticmethod
    def sc_interval(severity: Severity) -> str:
        if severity == Severity.MILD:
            return INSULIN_CONSTANTS.SC_INTERVAL_MILD
        return INSULIN_CONSTANTS.SC_INTERVAL_OTHER

    @staticmethod
    def insulin_plan(weight_kg: float, severity: Severity, route: InsulinRoute,
                     glucose_mg_dl: Optional[float], potassium: PotassiumPlan) -> InsulinPlan:
        """
        Route decides the whole branch. The potassium hold flag is carried
        through on both routes so callers can gate the infusion on it.
        """
        if route == InsulinRoute.SUBCUTANEOUS:
            return InsulinPlan(
                route=route,
                sc_dose_units=InsulinProtocol.sc_dose_units(weight_kg),
                sc_interval=InsulinProtocol.sc_interval(severity),
                hold_for_potassium=potassium.hold_insulin,
            )

        rate = PhysiologyEngine.insulin_iv_rate(glucose_mg_dl)
        rate_u_h = round2(rate * weight_kg) if rate is not None else None
        return InsulinPlan(
            route=route,
            iv_rate_u_kg_h=rate,
            iv_rate_u_h=rate_u_h,
            hold_for_glucose=rate == INSULIN_CONSTANTS.IV_RATE_HOLD,
            hold_for_potassium=potassium.hold_insulin,
        )

# Module-level aliases
maintenance_ml_per_day = FluidPlanner.maintenance_ml_per_day
dehydration_fraction = FluidPlanner.dehydration_fraction
deficit_ml = FluidPlanner.deficit_ml
bolus_ml = FluidPlanner.bolus_ml
total_fluids_rate = FluidPlanner.total_fluids_rate
potassium_plan = PotassiumProtocol.potassium_plan
insulin_plan = InsulinProtocol.insulin_plan
