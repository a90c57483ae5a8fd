"""
tests/test_classifier.py

Z-score classification: direction-aware labels, strict boundaries and
degenerate statistics.
"""

from __future__ import annotations

import math

import pytest

from gauss.classifier import METRIC_DIRECTIONS, classify, classify_metric
from gauss.types import Direction, MetricClass, MetricStats


class TestAscending:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (111.0, MetricClass.VERY_HIGH),
            (89.0, MetricClass.VERY_LOW),
            (100.0, MetricClass.NORMAL),
            (110.0, MetricClass.NORMAL),
            (90.0, MetricClass.NORMAL),
        ],
    )
    def test_labels(self, value: float, expected: MetricClass) -> None:
        assert classify(value, 100.0, 10.0, 1.0, Direction.ASCENDING) is expected

    def test_default_direction_is_ascending(self) -> None:
        assert classify(111.0, 100.0, 10.0, 1.0) is MetricClass.VERY_HIGH


class TestDescending:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (111.0, MetricClass.HIGH),
            (89.0, MetricClass.LOW),
            (100.0, MetricClass.NORMAL),
        ],
    )
    def test_labels(self, value: float, expected: MetricClass) -> None:
        assert classify(value, 100.0, 10.0, 1.0, Direction.DESCENDING) is expected


class TestSigma:
    def test_wider_sigma_absorbs_outlier(self) -> None:
        assert classify(115.0, 100.0, 10.0, 1.0) is MetricClass.VERY_HIGH
        assert classify(115.0, 100.0, 10.0, 2.0) is MetricClass.NORMAL

    def test_boundary_is_strict(self) -> None:
        assert classify(105.0, 100.0, 10.0, 0.5) is MetricClass.NORMAL
        assert classify(95.0, 100.0, 10.0, 0.5) is MetricClass.NORMAL


class TestNotApplicable:
    @pytest.mark.parametrize("value", [0.0, 100.0, 1e9])
    def test_zero_stddev(self, value: float) -> None:
        assert classify(value, 100.0, 0.0, 1.0) is MetricClass.NOT_APPLICABLE

    @pytest.mark.parametrize(
        "value, mean, stddev",
        [
            (math.nan, 100.0, 10.0),
            (100.0, math.nan, 10.0),
            (100.0, 100.0, math.nan),
            (math.inf, 100.0, 10.0),
            (None, 100.0, 10.0),
        ],
    )
    def test_non_finite_inputs(self, value: object, mean: float, stddev: float) -> None:
        assert classify(value, mean, stddev, 1.0) is MetricClass.NOT_APPLICABLE  # type: ignore[arg-type]


class TestClassifyMetric:
    def test_cost_metrics_are_descending(self) -> None:
        assert METRIC_DIRECTIONS["cpm"] is Direction.DESCENDING
        assert METRIC_DIRECTIONS["cpc"] is Direction.DESCENDING

    def test_efficiency_metrics_are_ascending(self) -> None:
        for metric in ("ctr", "roas", "profit"):
            assert METRIC_DIRECTIONS[metric] is Direction.ASCENDING

    def test_uses_registered_direction(self) -> None:
        stats = MetricStats(mean=100.0, stddev=10.0)
        assert classify_metric("cpm", 120.0, stats, 1.0) is MetricClass.HIGH
        assert classify_metric("ctr", 120.0, stats, 1.0) is MetricClass.VERY_HIGH

    def test_unavailable_stats(self) -> None:
        assert classify_metric("roas", 2.0, MetricStats(), 1.0) is MetricClass.NOT_APPLICABLE
