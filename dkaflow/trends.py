# trends.py
import logging
from typing import Iterable

from dkaflow.models import Severity, TrendPoint, TrendRow, TrendSummary
from dkaflow.physiology import PhysiologyEngine
from dkaflow.severity import classify_severity

logger = logging.getLogger(__name__)

def _row(point: TrendPoint) -> TrendRow:
    labs = point.labs
    return TrendRow(
        hours_from_start=point.hours_from_start,
        bg_mg_dl=labs.bg_mg_dl,
        ph=labs.ph,
        hco3=labs.hco3,
        na=labs.na,
        k=labs.k,
        bun=labs.bun,
        pco2=labs.pco2,
        severity=classify_severity(labs.ph, labs.hco3),
    )

def summarize_trend(points: Iterable[TrendPoint]) -> TrendSummary:
    """
    Classifies every lab snapshot of an episode in time order.
    Severity is recomputed per point; nothing stored upstream is trusted.
    """
    rows = [_row(p) for p in sorted(points, key=lambda p: p.hours_from_start)]
    if not rows:
        return TrendSummary(rows=[], latest=None, latest_severity=Severity.UNKNOWN,
                            corrected_na=None, effective_osmolality=None,
                            resolved_at_hours=None)

    latest = rows[-1]
    resolved_at = next(
        (r.hours_from_start for r in rows if r.severity == Severity.RESOLVED), None
    )
    logger.debug("Trend of %d points, latest=%s, resolved_at=%s",
                 len(rows), latest.severity.value, resolved_at)

    return TrendSummary(
        rows=rows,
        latest=latest,
        latest_severity=latest.severity,
        corrected_na=PhysiologyEngine.corrected_sodium(latest.na, latest.bg_mg_dl),
        effective_osmolality=PhysiologyEngine.effective_osmolality(latest.na, latest.bg_mg_dl),
        resolved_at_hours=resolved_at,
    )
