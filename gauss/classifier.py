"""
gauss/classifier.py

Z-score classification of a metric value against batch statistics.

    z = (value - mean) / stddev

    direction   | z > sigma   | z < -sigma  | otherwise
    ------------|-------------|-------------|----------
    ascending   | very_high   | very_low    | normal
    descending  | high        | low         | normal

Boundaries are strict: ``z == sigma`` is normal. Non-finite inputs or a
zero standard deviation yield ``not_applicable``.
"""

from __future__ import annotations

from gauss.coercion import is_finite
from gauss.types import Direction, MetricClass, MetricStats

METRIC_DIRECTIONS: dict[str, Direction] = {
    "cpm": Direction.DESCENDING,
    "cpc": Direction.DESCENDING,
    "ctr": Direction.ASCENDING,
    "roas": Direction.ASCENDING,
    "profit": Direction.ASCENDING,
}

_OUTLIER_CLASSES: dict[Direction, tuple[MetricClass, MetricClass]] = {
    Direction.ASCENDING: (MetricClass.VERY_HIGH, MetricClass.VERY_LOW),
    Direction.DESCENDING: (MetricClass.HIGH, MetricClass.LOW),
}


def classify(
    value: float,
    mean: float,
    stddev: float,
    sigma: float,
    direction: Direction = Direction.ASCENDING,
) -> MetricClass:
    if not (is_finite(value) and is_finite(mean) and is_finite(stddev)):
        return MetricClass.NOT_APPLICABLE
    if stddev == 0:
        return MetricClass.NOT_APPLICABLE

    z = (value - mean) / stddev
    above, below = _OUTLIER_CLASSES[direction]
    if z > sigma:
        return above
    if z < -sigma:
        return below
    return MetricClass.NORMAL


def classify_metric(metric: str, value: float, stats: MetricStats, sigma: float) -> MetricClass:
    """Classify *value* for a named metric using its registered direction."""

    return classify(value, stats.mean, stats.stddev, sigma, METRIC_DIRECTIONS[metric])
