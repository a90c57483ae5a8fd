"""
gauss/statistics.py

Batch-wide population statistics.

Standard deviation uses the population denominator (N, ``ddof=0``), not
the sample denominator (N - 1).
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np

from gauss.types import CLASSIFIED_METRICS, DerivedRecord, MetricStats, PopulationStats

logger = logging.getLogger(__name__)


def compute_stats(values: Iterable[float]) -> MetricStats:
    """
    Mean and population standard deviation of the finite entries of *values*.

    Non-finite entries are dropped, not treated as zero. Empty or
    all-non-finite input yields a :class:`MetricStats` with both fields NaN.
    """

    array = np.asarray(list(values), dtype=np.float64)
    finite = array[np.isfinite(array)]
    if finite.size == 0:
        return MetricStats()
    return MetricStats(mean=float(finite.mean()), stddev=float(finite.std(ddof=0)))


def compute_population_stats(records: Sequence[DerivedRecord]) -> PopulationStats:
    """
    Compute :class:`PopulationStats` over the classifiable *records*.

    Records that are not classifiable contribute nothing.
    """

    valid = [record for record in records if record.is_classifiable]
    per_metric = {
        metric: compute_stats(getattr(record, metric) for record in valid)
        for metric in CLASSIFIED_METRICS
    }
    logger.debug(
        "Population stats over %d record(s): %s",
        len(valid),
        {metric: (stats.mean, stats.stddev) for metric, stats in per_metric.items()},
    )
    return PopulationStats(count=len(valid), **per_metric)
