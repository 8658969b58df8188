"""
DKAFlow: Decision Engine
========================
Runs the calculators in order for one snapshot:
Severity -> Derivations -> Fluids, Potassium -> Insulin -> Safety.

Pure: reads only its arguments, returns a new DKAAssessment, never mutates
the caller's records.
"""

from dkaflow.constants import Locale
from dkaflow.models import DKAAssessment, Labs, PatientProfile, TherapySettings
from dkaflow.physiology import PhysiologyEngine
from dkaflow.protocols import FluidPlanner, InsulinProtocol, PotassiumProtocol
from dkaflow.safety import SafetySupervisor
from dkaflow.severity import classify_severity

class DKAEngine:

    @staticmethod
    def assess(patient: PatientProfile, labs: Labs, settings: TherapySettings,
               locale: Locale = Locale.EN) -> DKAAssessment:
        # 1. Severity first, everything downstream keys off it
        severity = classify_severity(labs.ph, labs.hco3)

        # 2. Derived chemistry
        cna = PhysiologyEngine.corrected_sodium(labs.na, labs.bg_mg_dl)
        eosm = PhysiologyEngine.effective_osmolality(labs.na, labs.bg_mg_dl)
        fluid_type = PhysiologyEngine.fluid_type_by_glucose(labs.bg_mg_dl)

        # 3. Fluids and potassium
        fluids = FluidPlanner.total_fluids_rate(
            patient.weight_kg, severity, settings.shock_state, locale
        )
        potassium = PotassiumProtocol.potassium_plan(labs.k, locale)

        # 4. Insulin, gated on potassium
        insulin = InsulinProtocol.insulin_plan(
            patient.weight_kg, severity, settings.insulin_route, labs.bg_mg_dl, potassium
        )

        # 5. Safety flags
        alerts = SafetySupervisor.check(labs, patient.age_years, potassium)

        return DKAAssessment(
            severity=severity,
            corrected_na=cna,
            effective_osmolality=eosm,
            fluid_type=fluid_type,
            fluids=fluids,
            potassium=potassium,
            insulin=insulin,
            alerts=alerts,
            locale=locale,
        )

assess = DKAEngine.assess
