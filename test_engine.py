import copy
import unittest

from dkaflow.constants import FluidType, Locale
from dkaflow.engine import DKAEngine
from dkaflow.locales import STRINGS
from dkaflow.models import (
    DataTypeError,
    InsulinRoute,
    InvalidInputError,
    Labs,
    PatientProfile,
    PotassiumTier,
    PotassiumTone,
    SafetyAlerts,
    Severity,
    TherapySettings,
)
from dkaflow.physiology import (
    corrected_sodium,
    effective_osmolality,
    fluid_type_by_glucose,
    insulin_iv_rate,
    round1,
    round2,
    round_half_up,
)
from dkaflow.protocols import (
    bolus_ml,
    deficit_ml,
    dehydration_fraction,
    insulin_plan,
    maintenance_ml_per_day,
    potassium_plan,
    total_fluids_rate,
)
from dkaflow.safety import (
    AGE_UNDER_5,
    BUN_HIGH,
    ICU_AGE_UNDER_2,
    ICU_GLUCOSE_HIGH,
    ICU_POTASSIUM_LOW,
    ICU_SEVERE_DKA,
    ICU_SODIUM_HIGH,
    PCO2_LOW,
    PH_LOW,
    SafetySupervisor,
    brain_edema_risk_factors,
    icu_indications,
)
from dkaflow.severity import classify_severity

class TestSeverityClassifier(unittest.TestCase):

    def test_01_no_data_is_unknown(self):
        self.assertEqual(classify_severity(), Severity.UNKNOWN)
        self.assertEqual(classify_severity(None, None), Severity.UNKNOWN)

    def test_02_fixed_order_first_match_wins(self):
        """Resolution needs both channels past threshold; otherwise the first acidotic band wins."""
        self.assertEqual(classify_severity(7.31, 18.1), Severity.RESOLVED)
        # pH alone looks resolved, HCO3 3 fails resolution and lands in severe
        self.assertEqual(classify_severity(7.35, 3), Severity.SEVERE)

    def test_03_resolution_needs_both_channels(self):
        self.assertEqual(classify_severity(7.35, None), Severity.UNKNOWN)
        self.assertEqual(classify_severity(None, 20), Severity.UNKNOWN)
        # HCO3 exactly 18 is still mild
        self.assertEqual(classify_severity(7.35, 18), Severity.MILD)

    def test_04_severe_band(self):
        self.assertEqual(classify_severity(7.05, 15), Severity.SEVERE)
        self.assertEqual(classify_severity(None, 4.9), Severity.SEVERE)
        # Severe HCO3 wins over mild pH
        self.assertEqual(classify_severity(7.25, 4), Severity.SEVERE)

    def test_05_moderate_band(self):
        self.assertEqual(classify_severity(7.1, None), Severity.MODERATE)
        self.assertEqual(classify_severity(7.15, None), Severity.MODERATE)
        self.assertEqual(classify_severity(None, 5), Severity.MODERATE)
        self.assertEqual(classify_severity(None, 10), Severity.MODERATE)
        # Moderate pH checked before HCO3 that is already above 18
        self.assertEqual(classify_severity(7.1, 20), Severity.MODERATE)

    def test_06_mild_band(self):
        self.assertEqual(classify_severity(7.2, None), Severity.MILD)
        self.assertEqual(classify_severity(7.3, None), Severity.MILD)
        self.assertEqual(classify_severity(None, 10.5), Severity.MILD)
        self.assertEqual(classify_severity(None, 18), Severity.MILD)
        self.assertEqual(classify_severity(7.4, 12), Severity.MILD)

    def test_07_not_acidotic_is_unknown(self):
        self.assertEqual(classify_severity(7.4, None), Severity.UNKNOWN)
        self.assertEqual(classify_severity(None, 24), Severity.UNKNOWN)

    def test_08_depends_only_on_ph_and_hco3(self):
        sparse = Labs(ph=7.15, hco3=8)
        full = Labs(ph=7.15, hco3=8, bg_mg_dl=650, na=152, k=2.1, bun=40, pco2=12, cr=2.0)
        self.assertEqual(classify_severity(sparse.ph, sparse.hco3),
                         classify_severity(full.ph, full.hco3))

class TestPhysiologicDerivations(unittest.TestCase):

    def test_01_round_half_up(self):
        # Python's round() would give 2.2 and 2
        self.assertEqual(round1(2.25), 2.3)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round2(0.125), 0.13)
        self.assertEqual(round1(6400 / 48), 133.3)

    def test_02_corrected_sodium(self):
        self.assertEqual(corrected_sodium(140, 600), 148.0)
        self.assertEqual(corrected_sodium(130, 560), 137.4)
        # Glucose under 100 adds nothing
        self.assertEqual(corrected_sodium(140, 80), 140.0)

    def test_03_corrected_sodium_missing(self):
        self.assertIsNone(corrected_sodium(None, 600))
        self.assertIsNone(corrected_sodium(140, None))

    def test_04_effective_osmolality(self):
        self.assertEqual(effective_osmolality(140, 180), 290.0)
        self.assertEqual(effective_osmolality(130, 560), 291.1)
        self.assertIsNone(effective_osmolality(None, 180))
        self.assertIsNone(effective_osmolality(140, None))

    def test_05_fluid_type_by_glucose(self):
        self.assertEqual(fluid_type_by_glucose(301), FluidType.NS)
        self.assertEqual(fluid_type_by_glucose(300), FluidType.D5_HALF_NS)
        self.assertEqual(fluid_type_by_glucose(201), FluidType.D5_HALF_NS)
        self.assertEqual(fluid_type_by_glucose(200), FluidType.D7_5_HALF_NS)
        self.assertEqual(fluid_type_by_glucose(101), FluidType.D7_5_HALF_NS)
        self.assertEqual(fluid_type_by_glucose(100), FluidType.D10_HALF_NS)
        self.assertEqual(fluid_type_by_glucose(None), FluidType.UNKNOWN)

    def test_06_insulin_iv_rate(self):
        self.assertEqual(insulin_iv_rate(350), 0.1)
        self.assertEqual(insulin_iv_rate(250), 0.075)
        self.assertEqual(insulin_iv_rate(150), 0.05)
        self.assertEqual(insulin_iv_rate(100), 0.0)
        self.assertIsNone(insulin_iv_rate(None))

    def test_07_idempotent(self):
        self.assertEqual(corrected_sodium(133, 487), corrected_sodium(133, 487))
        self.assertEqual(effective_osmolality(133, 487), effective_osmolality(133, 487))

class TestFluidPlan(unittest.TestCase):

    def test_01_holliday_segar(self):
        self.assertEqual(maintenance_ml_per_day(25), 1600)
        self.assertEqual(maintenance_ml_per_day(40), 1900)
        self.assertEqual(maintenance_ml_per_day(10), 1000)
        self.assertEqual(maintenance_ml_per_day(15), 1250)
        self.assertEqual(maintenance_ml_per_day(5), 500)
        self.assertEqual(maintenance_ml_per_day(0), 0)
        self.assertEqual(maintenance_ml_per_day(-3), 0)

    def test_02_dehydration_fraction(self):
        self.assertEqual(dehydration_fraction(Severity.MILD), 0.05)
        self.assertEqual(dehydration_fraction(Severity.MODERATE), 0.07)
        self.assertEqual(dehydration_fraction(Severity.SEVERE), 0.10)
        self.assertEqual(dehydration_fraction(Severity.UNKNOWN), 0.07)
        self.assertEqual(dehydration_fraction(Severity.RESOLVED), 0.07)

    def test_03_bolus_rules(self):
        self.assertEqual(bolus_ml(20, Severity.MILD, False), 0)
        self.assertEqual(bolus_ml(20, Severity.MODERATE, False), 200)
        self.assertEqual(bolus_ml(20, Severity.SEVERE, False), 400)
        self.assertEqual(bolus_ml(60, Severity.SEVERE, False), 1000)
        self.assertEqual(bolus_ml(20, Severity.UNKNOWN, False), 0)
        # Shock overrides severity
        self.assertEqual(bolus_ml(20, Severity.MILD, True), 400)
        self.assertEqual(bolus_ml(80, Severity.UNKNOWN, True), 1000)

    def test_04_severe_40kg_end_to_end(self):
        plan = total_fluids_rate(40, Severity.SEVERE, False)
        self.assertEqual(plan.bolus, 800)
        self.assertEqual(plan.maintenance_per_day, 1900)
        self.assertEqual(plan.deficit, 4000)
        self.assertEqual(plan.rate_per_hour, 145.8)
        self.assertTrue(plan.bolus_subtracted)
        self.assertEqual(plan.note, STRINGS[Locale.EN]["note_subtract"])

    def test_05_shock_bolus_not_subtracted(self):
        plan = total_fluids_rate(40, Severity.SEVERE, True)
        self.assertEqual(plan.bolus, 800)
        self.assertEqual(plan.rate_per_hour, 162.5)
        self.assertFalse(plan.bolus_subtracted)
        self.assertEqual(plan.note, STRINGS[Locale.EN]["note_shock"])

    def test_06_other_bands(self):
        mild = total_fluids_rate(20, Severity.MILD, False)
        self.assertEqual((mild.bolus, mild.deficit, mild.rate_per_hour), (0, 1000, 83.3))

        moderate = total_fluids_rate(20, Severity.MODERATE, False)
        self.assertEqual((moderate.bolus, moderate.deficit, moderate.rate_per_hour), (200, 1400, 87.5))

        unknown = total_fluids_rate(20, Severity.UNKNOWN, False)
        self.assertEqual((unknown.bolus, unknown.deficit, unknown.rate_per_hour), (0, 1400, 91.7))

        capped = total_fluids_rate(60, Severity.SEVERE, False)
        self.assertEqual((capped.bolus, capped.maintenance_per_day, capped.rate_per_hour), (1000, 2300, 200.0))

    def test_07_note_follows_locale(self):
        fa = total_fluids_rate(40, Severity.SEVERE, False, Locale.FA)
        en = total_fluids_rate(40, Severity.SEVERE, False, Locale.EN)
        self.assertEqual(fa.note, STRINGS[Locale.FA]["note_subtract"])
        self.assertEqual((fa.bolus, fa.deficit, fa.rate_per_hour), (en.bolus, en.deficit, en.rate_per_hour))

    def test_08_deficit(self):
        self.assertEqual(deficit_ml(40, Severity.SEVERE), 4000)
        self.assertEqual(deficit_ml(12.5, Severity.MODERATE), 875)

class TestPotassiumPlan(unittest.TestCase):

    def assertPlan(self, k, tone, tier, add, hold):
        plan = potassium_plan(k)
        self.assertEqual(plan.tone, tone, f"tone for K={k}")
        self.assertEqual(plan.tier, tier, f"tier for K={k}")
        self.assertEqual(plan.add_meq_per_l, add, f"additive for K={k}")
        self.assertEqual(plan.hold_insulin, hold, f"hold for K={k}")

    def test_01_missing(self):
        self.assertPlan(None, PotassiumTone.YELLOW, PotassiumTier.UNKNOWN, None, False)

    def test_02_high(self):
        self.assertPlan(5.6, PotassiumTone.YELLOW, PotassiumTier.HIGH, 0, False)

    def test_03_high_normal(self):
        self.assertPlan(5.5, PotassiumTone.GREEN, PotassiumTier.HIGH_NORMAL, 20, False)
        self.assertPlan(5.0, PotassiumTone.GREEN, PotassiumTier.HIGH_NORMAL, 20, False)

    def test_04_normal(self):
        self.assertPlan(4.9, PotassiumTone.GREEN, PotassiumTier.NORMAL, 40, False)
        self.assertPlan(3.5, PotassiumTone.GREEN, PotassiumTier.NORMAL, 40, False)

    def test_05_low_boundary_inclusive(self):
        """K = 3.0 belongs to the 3-3.5 tier, not the red tier."""
        self.assertPlan(3.4, PotassiumTone.ORANGE, PotassiumTier.LOW, 55, False)
        self.assertPlan(3.0, PotassiumTone.ORANGE, PotassiumTier.LOW, 55, False)

    def test_06_critical_holds_insulin(self):
        self.assertPlan(2.9, PotassiumTone.RED, PotassiumTier.CRITICAL, 70, True)
        text = potassium_plan(2.9).text
        self.assertIn("HOLD insulin", text)
        self.assertIn("0.5 mEq/kg", text)
        self.assertIn("max 10 mEq", text)

    def test_07_text_carries_additive(self):
        for k in (5.2, 4.0, 3.2, 2.5):
            plan = potassium_plan(k)
            self.assertIn(str(plan.add_meq_per_l), plan.text)
            self.assertIn(str(plan.add_meq_per_l), potassium_plan(k, Locale.FA).text)

class TestInsulinPlan(unittest.TestCase):

    def test_01_subcutaneous(self):
        k = potassium_plan(4.0)
        severe = insulin_plan(40, Severity.SEVERE, InsulinRoute.SUBCUTANEOUS, 560, k)
        self.assertEqual(severe.sc_dose_units, 6.0)
        self.assertEqual(severe.sc_interval, "Q2h")
        self.assertIsNone(severe.iv_rate_u_kg_h)

        mild = insulin_plan(20, Severity.MILD, InsulinRoute.SUBCUTANEOUS, 250, k)
        self.assertEqual(mild.sc_dose_units, 3.0)
        self.assertEqual(mild.sc_interval, "Q4h")

    def test_02_intravenous(self):
        k = potassium_plan(4.0)
        plan = insulin_plan(20, Severity.SEVERE, InsulinRoute.INTRAVENOUS, 350, k)
        self.assertEqual(plan.iv_rate_u_kg_h, 0.1)
        self.assertEqual(plan.iv_rate_u_h, 2.0)
        self.assertFalse(plan.held)

    def test_03_intravenous_glucose_hold(self):
        plan = insulin_plan(20, Severity.MILD, InsulinRoute.INTRAVENOUS, 90, potassium_plan(4.0))
        self.assertEqual(plan.iv_rate_u_kg_h, 0.0)
        self.assertTrue(plan.hold_for_glucose)
        self.assertTrue(plan.held)

    def test_04_intravenous_unknown_glucose(self):
        plan = insulin_plan(20, Severity.MILD, InsulinRoute.INTRAVENOUS, None, potassium_plan(4.0))
        self.assertIsNone(plan.iv_rate_u_kg_h)
        self.assertIsNone(plan.iv_rate_u_h)
        self.assertFalse(plan.hold_for_glucose)

    def test_05_potassium_gate_on_both_routes(self):
        k = potassium_plan(2.5)
        for route in InsulinRoute:
            plan = insulin_plan(30, Severity.SEVERE, route, 400, k)
            self.assertTrue(plan.hold_for_potassium, route)
            self.assertTrue(plan.held, route)

class TestSafetySupervisor(unittest.TestCase):

    def test_01_brain_edema_factors(self):
        labs = Labs(bg_mg_dl=560, ph=6.95, hco3=4, na=130, bun=25, pco2=18)
        self.assertEqual(brain_edema_risk_factors(labs, 12), [BUN_HIGH, PH_LOW, PCO2_LOW])
        self.assertEqual(brain_edema_risk_factors(Labs(), 4), [AGE_UNDER_5])
        self.assertEqual(brain_edema_risk_factors(Labs(), 10), [])

    def test_02_icu_indications(self):
        labs = Labs(ph=7.0, hco3=12, bg_mg_dl=800, na=155, k=2.5)
        self.assertEqual(icu_indications(labs, 1),
                         [ICU_SEVERE_DKA, ICU_AGE_UNDER_2, ICU_GLUCOSE_HIGH,
                          ICU_SODIUM_HIGH, ICU_POTASSIUM_LOW])
        self.assertEqual(icu_indications(Labs(), 10), [])

    def test_03_potassium_alerts(self):
        caution = SafetySupervisor.check(Labs(k=3.2), 10)
        self.assertTrue(caution.correct_potassium_first)
        self.assertFalse(caution.hold_insulin)

        hold = SafetySupervisor.check(Labs(k=2.8), 10)
        self.assertTrue(hold.hold_insulin)
        self.assertFalse(hold.correct_potassium_first)
        self.assertTrue(hold.no_insulin_bolus)

    def test_04_inputs_not_mutated(self):
        labs = Labs(ph=7.0, hco3=3, bg_mg_dl=800, na=155, k=2.5, bun=30, pco2=15)
        snapshot = copy.deepcopy(labs)
        SafetySupervisor.check(labs, 1)
        self.assertEqual(labs, snapshot)

    def test_05_alert_labels_are_immutable(self):
        alerts = SafetySupervisor.check(Labs(ph=6.95, hco3=4, bun=25, pco2=18, k=2.5), 1)
        self.assertIsInstance(alerts.brain_edema_risk, tuple)
        self.assertIsInstance(alerts.icu_indications, tuple)
        self.assertEqual(alerts.brain_edema_risk, (BUN_HIGH, PH_LOW, PCO2_LOW, AGE_UNDER_5))
        with self.assertRaises(AttributeError):
            alerts.brain_edema_risk.append("extra")
        self.assertEqual(SafetyAlerts().icu_indications, ())

class TestDKAEngine(unittest.TestCase):

    def setUp(self):
        self.patient = PatientProfile(age_years=12, weight_kg=40)
        self.settings = TherapySettings()

    def test_01_severity_ignores_unrelated_labs(self):
        """Only pH and HCO3 feed the severity; the rest of the panel never moves it."""
        sparse = Labs(ph=7.15, hco3=8)
        panels = [
            sparse,
            Labs(ph=7.15, hco3=8, bg_mg_dl=650, na=152, k=2.1, bun=40, pco2=12, cr=2.0),
            Labs(ph=7.15, hco3=8, na=128, k=6.2),
            Labs(ph=7.15, hco3=8, bg_mg_dl=90, bun=5, pco2=35),
        ]
        expected = DKAEngine.assess(self.patient, sparse, self.settings).severity
        self.assertEqual(expected, Severity.MODERATE)
        for labs in panels:
            self.assertEqual(DKAEngine.assess(self.patient, labs, self.settings).severity, expected, labs)

    def test_02_fluids_follow_severity(self):
        a = DKAEngine.assess(self.patient, Labs(ph=6.95, hco3=4, k=4.0), self.settings)
        self.assertEqual(a.severity, Severity.SEVERE)
        self.assertEqual((a.fluids.bolus, a.fluids.maintenance_per_day, a.fluids.rate_per_hour),
                         (800, 1900, 145.8))

    def test_03_assess_is_pure(self):
        labs = Labs(ph=7.0, hco3=3, bg_mg_dl=800, na=155, k=2.5)
        snapshot = copy.deepcopy(labs)
        first = DKAEngine.assess(self.patient, labs, self.settings)
        self.assertEqual(first, DKAEngine.assess(self.patient, labs, self.settings))
        self.assertEqual(labs, snapshot)

class TestInputValidation(unittest.TestCase):

    def test_01_weight_must_be_positive(self):
        with self.assertRaises(InvalidInputError):
            PatientProfile(age_years=5, weight_kg=0)
        with self.assertRaises(InvalidInputError):
            PatientProfile(age_years=5, weight_kg=-2)

    def test_02_negative_age_rejected(self):
        with self.assertRaises(InvalidInputError):
            PatientProfile(age_years=-1, weight_kg=10)

    def test_03_type_errors(self):
        with self.assertRaises(DataTypeError):
            PatientProfile(age_years="5", weight_kg=10)
        with self.assertRaises(DataTypeError):
            Labs(ph="7.1")
        with self.assertRaises(DataTypeError):
            Labs(k=True)

    def test_04_invalid_input_is_value_error(self):
        self.assertTrue(issubclass(InvalidInputError, ValueError))

if __name__ == '__main__':
    unittest.main()
