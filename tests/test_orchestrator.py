"""
tests/test_orchestrator.py

End-to-end pipeline behaviour over raw export records.
"""

from __future__ import annotations

import math

import pytest

from gauss.orchestrator import analyze_batch, normalize_sigma, prepare_batch, run_analysis
from gauss.types import Action, CtrPreference, MetricClass


def _raw(name: str, **overrides: str) -> dict[str, str]:
    record = {
        "Campaign name": name,
        "Results": "5",
        "Amount spent (USD)": "100",
        "Impressions": "10000",
        "Clicks (all)": "50",
        "CTR (link click-through rate)": "1.5",
        "CTR (all)": "3.0",
        "Purchases conversion value": "",
    }
    record.update(overrides)
    return record


@pytest.fixture
def two_campaigns() -> list[dict[str, str]]:
    return [
        _raw("[ON] Winner", **{"Purchases conversion value": "300"}),
        _raw("[ON] Loser", Impressions="5000"),
        _raw("[OFF] Paused", **{"Purchases conversion value": "9999"}),
    ]


class TestRunAnalysis:
    def test_rows_and_actions(self, two_campaigns: list[dict[str, str]]) -> None:
        result = run_analysis(two_campaigns, sigma=1.0)

        assert result.total_records == 3
        assert result.eligible_count == 2
        assert result.analyzed_count == 2
        assert result.results_key == "results"

        winner, loser = result.rows
        assert winner.campaign_name == "[ON] Winner"
        assert winner.cpm == pytest.approx(10.0)
        assert winner.roas == pytest.approx(3.0)
        assert winner.profit == pytest.approx(200.0)
        assert winner.action is Action.SCALE_BUDGET

        assert loser.cpm == pytest.approx(20.0)
        assert loser.revenue is None
        assert loser.roas is None
        assert loser.profit == pytest.approx(-100.0)
        assert loser.action is Action.REVIEW_OR_PAUSE

    def test_population_stats(self, two_campaigns: list[dict[str, str]]) -> None:
        stats = run_analysis(two_campaigns).stats
        assert stats.count == 2
        assert stats.cpm.mean == pytest.approx(15.0)
        assert stats.cpm.stddev == pytest.approx(5.0)
        assert stats.profit.mean == pytest.approx(50.0)
        assert stats.profit.stddev == pytest.approx(150.0)
        assert stats.cpc.stddev == 0.0

    def test_classes(self, two_campaigns: list[dict[str, str]]) -> None:
        winner, loser = run_analysis(two_campaigns).rows
        for row in (winner, loser):
            assert row.cpm_class is MetricClass.NORMAL
            assert row.profit_class is MetricClass.NORMAL
            assert row.cpc_class is MetricClass.NOT_APPLICABLE
            assert row.ctr_class is MetricClass.NOT_APPLICABLE
        assert winner.roas_class is MetricClass.NOT_APPLICABLE
        assert loser.roas_class is MetricClass.NOT_APPLICABLE

    def test_expensive_outlier_is_reviewed(self) -> None:
        records = [
            _raw("[ON] A", **{"Purchases conversion value": "500"}),
            _raw("[ON] B", **{"Purchases conversion value": "500"}),
            _raw("[ON] C", Impressions="2500", **{"Purchases conversion value": "500"}),
        ]
        rows = run_analysis(records, sigma=1.0).rows
        assert [row.cpm for row in rows] == [pytest.approx(10.0), pytest.approx(10.0), pytest.approx(40.0)]
        assert rows[2].cpm_class is MetricClass.HIGH
        assert rows[2].action is Action.REVIEW_OR_PAUSE
        assert rows[0].action is Action.SCALE_BUDGET

    def test_empty_input(self) -> None:
        result = run_analysis([])
        assert result.rows == ()
        assert result.results_key == "results"
        assert result.eligible_count == 0
        assert result.total_records == 0
        assert result.action_counts() == {action: 0 for action in Action}

    def test_non_derivable_records_are_eligible_but_not_rows(self) -> None:
        records = [
            _raw("[ON] Ok"),
            _raw("[ON] No CTR", **{"CTR (link click-through rate)": "", "CTR (all)": ""}),
        ]
        result = run_analysis(records)
        assert result.eligible_count == 2
        assert [row.campaign_name for row in result.rows] == ["[ON] Ok"]

    def test_purchases_column_used_as_results(self) -> None:
        record = _raw("[ON] Buyer")
        record["Purchases"] = record.pop("Results")
        result = run_analysis([record])
        assert result.results_key == "purchases"
        assert result.analyzed_count == 1


class TestCtrPreference:
    def test_preference_changes_ctr_values(self, two_campaigns: list[dict[str, str]]) -> None:
        batch = prepare_batch(two_campaigns)
        link = analyze_batch(batch, ctr_preference=CtrPreference.LINK)
        all_clicks = analyze_batch(batch, ctr_preference=CtrPreference.ALL)

        assert [row.ctr for row in link.rows] == [1.5, 1.5]
        assert [row.ctr for row in all_clicks.rows] == [3.0, 3.0]
        assert all_clicks.ctr_preference is CtrPreference.ALL

    def test_missing_preferred_column_falls_back(self) -> None:
        record = _raw("[ON] Fallback")
        del record["CTR (link click-through rate)"]
        result = run_analysis([record], ctr_preference=CtrPreference.LINK)
        assert result.rows[0].ctr == pytest.approx(3.0)


class TestPrepareBatch:
    def test_batch_is_reusable(self, two_campaigns: list[dict[str, str]]) -> None:
        batch = prepare_batch(two_campaigns)
        first = analyze_batch(batch, sigma=1.0)
        second = analyze_batch(batch, sigma=1.0)
        assert first.rows == second.rows
        assert len(batch.records) == 2

    def test_normalizes_headers(self, two_campaigns: list[dict[str, str]]) -> None:
        batch = prepare_batch(two_campaigns)
        assert "amount_spent_usd" in batch.records[0].fields
        assert batch.total_records == 3


class TestNormalizeSigma:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5.0, 2.0),
            (0.1, 0.5),
            (1.04, 1.0),
            (1.26, 1.3),
            (None, 1.0),
            (math.nan, 1.0),
            (math.inf, 1.0),
            ("1.5", 1.5),
            ("abc", 1.0),
        ],
    )
    def test_clamp_and_round(self, value: object, expected: float) -> None:
        assert normalize_sigma(value) == pytest.approx(expected)  # type: ignore[arg-type]

    def test_result_reports_effective_sigma(self) -> None:
        assert run_analysis([], sigma=9.0).sigma == 2.0
