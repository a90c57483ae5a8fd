"""
gauss/orchestrator.py

Wires the analysis stages into one synchronous, pure pipeline:

    raw records -> normalize -> filter          (prepare_batch)
                -> derive -> statistics
                -> classify -> recommend        (analyze_batch)

``prepare_batch`` does not depend on sigma or the CTR column preference,
so its output can be reused when only those parameters change.
``analyze_batch`` always recomputes derivation, statistics and
classification from scratch; nothing is cached between calls.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from gauss.classifier import classify_metric
from gauss.filtering import RESULTS_KEY_CANDIDATES, filter_eligible
from gauss.metrics import MetricDeriver
from gauss.normalizer import normalize_records
from gauss.recommender import ActionRecommender
from gauss.statistics import compute_population_stats
from gauss.types import (
    CLASSIFIED_METRICS,
    AnalysisResult,
    ClassifiedRow,
    CtrPreference,
    DerivedRecord,
    EligibleBatch,
    PopulationStats,
    RawRecord,
)

logger = logging.getLogger(__name__)

SIGMA_MIN: float = 0.5
SIGMA_MAX: float = 2.0
DEFAULT_SIGMA: float = 1.0


def normalize_sigma(value: float | None) -> float:
    """
    Clamp *value* into [0.5, 2.0] and round it to one decimal place.

    ``None`` or a non-finite value resolves to the default of 1.0.
    """

    if value is None:
        return DEFAULT_SIGMA
    try:
        sigma = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SIGMA
    if not math.isfinite(sigma):
        return DEFAULT_SIGMA
    return round(max(SIGMA_MIN, min(sigma, SIGMA_MAX)), 1)


def prepare_batch(raw_records: Iterable[RawRecord]) -> EligibleBatch:
    """Normalize headers and keep only eligible campaigns."""

    normalized = normalize_records(raw_records)
    eligible, results_key = filter_eligible(normalized, RESULTS_KEY_CANDIDATES)
    return EligibleBatch(records=eligible, results_key=results_key, total_records=len(normalized))


def analyze_batch(
    batch: EligibleBatch,
    sigma: float = DEFAULT_SIGMA,
    ctr_preference: CtrPreference = CtrPreference.LINK,
    recommender: ActionRecommender | None = None,
) -> AnalysisResult:
    """
    Derive, summarize, classify and recommend for an eligible batch.
    """

    sigma = normalize_sigma(sigma)
    recommender = recommender or ActionRecommender()

    derived = MetricDeriver(ctr_preference).derive_all(batch.records)
    classifiable = tuple(record for record in derived if record.is_classifiable)
    stats = compute_population_stats(classifiable)

    rows = tuple(
        _classify_record(record, stats, sigma, recommender) for record in classifiable
    )
    logger.debug(
        "Classified %d of %d eligible record(s) (sigma=%.1f, ctr=%s)",
        len(rows),
        len(batch.records),
        sigma,
        ctr_preference.value,
    )
    return AnalysisResult(
        rows=rows,
        stats=stats,
        sigma=sigma,
        ctr_preference=ctr_preference,
        results_key=batch.results_key,
        eligible_count=len(batch.records),
        total_records=batch.total_records,
    )


def run_analysis(
    raw_records: Iterable[RawRecord],
    sigma: float = DEFAULT_SIGMA,
    ctr_preference: CtrPreference = CtrPreference.LINK,
) -> AnalysisResult:
    """Run every stage for one uploaded dataset."""

    return analyze_batch(prepare_batch(raw_records), sigma=sigma, ctr_preference=ctr_preference)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _classify_record(
    record: DerivedRecord,
    stats: PopulationStats,
    sigma: float,
    recommender: ActionRecommender,
) -> ClassifiedRow:
    classes = {
        metric: classify_metric(metric, getattr(record, metric), stats.for_metric(metric), sigma)
        for metric in CLASSIFIED_METRICS
    }
    cpm_class = classes["cpm"]
    cpc_class = classes["cpc"]
    ctr_class = classes["ctr"]
    roas_class = classes["roas"]
    profit_class = classes["profit"]

    return ClassifiedRow(
        campaign_name=record.campaign_name,
        results=_rounded(record.results),
        spend=_rounded(record.spend),
        revenue=_rounded(record.revenue),
        profit=_rounded(record.profit),
        profit_class=profit_class,
        roas=_rounded(record.roas),
        roas_class=roas_class,
        cpm=_rounded(record.cpm),
        cpm_class=cpm_class,
        cpc=_rounded(record.cpc),
        cpc_class=cpc_class,
        ctr=_rounded(record.ctr),
        ctr_class=ctr_class,
        action=recommender.recommend(cpm_class, cpc_class, ctr_class, record.roas, record.profit),
    )


def _rounded(value: float) -> float | None:
    if not math.isfinite(value):
        return None
    return round(value, 2)
