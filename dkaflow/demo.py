"""Demo episode for UI and API smoke testing. Not clinical data."""

from typing import List, NamedTuple

from dkaflow.models import (
    AssessmentFlags,
    InsulinRoute,
    Labs,
    OrderInputs,
    PatientProfile,
    TherapySettings,
    TrendPoint,
)

class DemoCase(NamedTuple):
    inputs: OrderInputs
    trend: List[TrendPoint]

def demo_severe_case() -> DemoCase:
    """12y / 40 kg new-onset severe DKA that resolves at ~12h."""
    patient = PatientProfile(
        age_years=12, weight_kg=40, is_new_case=True,
        first_name="Sara", last_name="Demo", sex="female",
    )
    assessment = AssessmentFlags(
        polyuria=True, polydipsia=True, weight_loss=True, rapid_breathing=True,
        nausea=True, abd_pain=True, dehydration=True, loc=True, kussmaul=True,
        shock=False, coma=False,
    )
    initial_labs = Labs(
        bg_mg_dl=560, ph=6.95, hco3=4, na=130, k=5.6, bun=25, pco2=18,
        cr=1.2, ketones="+++", wbc=24000, fever=False,
    )
    settings = TherapySettings(insulin_route=InsulinRoute.SUBCUTANEOUS, shock_state=False)

    # (hours, bg, pH, HCO3, Na, K, BUN, pCO2)
    series = [
        (2, 420, 7.02, 6.5, 132, 4.8, 23, 20),
        (4, 320, 7.10, 9.0, 134, 4.2, 21, 24),
        (6, 240, 7.18, 11.5, 136, 3.8, 18, 28),
        (8, 190, 7.25, 14.0, 137, 3.6, 16, 32),
        (10, 150, 7.29, 16.5, 138, 3.7, 14, 34),
        (12, 130, 7.32, 18.5, 138, 3.9, 12, 36),
    ]
    trend = [TrendPoint(hours_from_start=0, labs=initial_labs)]
    for h, bg, ph, hco3, na, k, bun, pco2 in series:
        trend.append(TrendPoint(
            hours_from_start=h,
            labs=Labs(bg_mg_dl=bg, ph=ph, hco3=hco3, na=na, k=k, bun=bun, pco2=pco2),
        ))

    return DemoCase(
        inputs=OrderInputs(patient=patient, labs=initial_labs,
                           settings=settings, assessment=assessment),
        trend=trend,
    )
