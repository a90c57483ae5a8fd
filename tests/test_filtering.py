"""
tests/test_filtering.py

Eligibility filter: ``[ON]`` prefix, positive results and results-column
resolution.
"""

from __future__ import annotations

import pytest

from gauss.filtering import ON_MARKER, RESULTS_KEY_CANDIDATES, filter_eligible, resolve_results_key
from gauss.types import EligibleRecord


def _names(records: tuple[EligibleRecord, ...]) -> list[str]:
    return [record.campaign_name for record in records]


class TestResolveResultsKey:
    def test_prefers_candidate_present_in_first_record(self) -> None:
        records = [{"purchases": "1", "conversions": "2"}, {"results": "3"}]
        assert resolve_results_key(records) == "purchases"

    def test_candidate_priority_within_first_record(self) -> None:
        records = [{"conversions": "1", "results": "2"}]
        assert resolve_results_key(records) == "results"

    def test_falls_back_to_any_record(self) -> None:
        records = [{"campaign_name": "[ON] A"}, {"conversions": "4"}]
        assert resolve_results_key(records) == "conversions"

    def test_defaults_to_first_candidate_when_absent(self) -> None:
        assert resolve_results_key([{"campaign_name": "[ON] A"}]) == RESULTS_KEY_CANDIDATES[0]

    def test_empty_batch_defaults_to_first_candidate(self) -> None:
        assert resolve_results_key([]) == "results"

    def test_custom_candidates(self) -> None:
        assert resolve_results_key([{"leads": "2"}], ("leads", "results")) == "leads"


class TestFilterEligible:
    def test_off_campaign_always_excluded(self) -> None:
        eligible, _ = filter_eligible([{"campaign_name": "[OFF] X", "results": "500"}])
        assert eligible == ()

    def test_zero_results_excluded(self) -> None:
        eligible, _ = filter_eligible([{"campaign_name": "[ON] X", "results": "0"}])
        assert eligible == ()

    def test_small_positive_results_included(self) -> None:
        eligible, _ = filter_eligible([{"campaign_name": "[ON] X", "results": "0.01"}])
        assert _names(eligible) == ["[ON] X"]

    @pytest.mark.parametrize("results", ["", "n/a", "-1", None])
    def test_missing_or_non_positive_results_excluded(self, results: object) -> None:
        eligible, _ = filter_eligible([{"campaign_name": "[ON] X", "results": results}])
        assert eligible == ()

    @pytest.mark.parametrize("name", ["[on] lower", " [ON] leading space", "ON] broken", "X [ON]", None])
    def test_prefix_is_exact_and_case_sensitive(self, name: object) -> None:
        eligible, _ = filter_eligible([{"campaign_name": name, "results": "3"}])
        assert eligible == ()

    def test_missing_campaign_name_excluded(self) -> None:
        eligible, _ = filter_eligible([{"results": "3"}])
        assert eligible == ()

    def test_order_is_preserved(self) -> None:
        records = [
            {"campaign_name": "[ON] B", "results": "1"},
            {"campaign_name": "[OFF] skip", "results": "1"},
            {"campaign_name": "[ON] A", "results": "2"},
            {"campaign_name": "[ON] C", "results": "3"},
        ]
        eligible, _ = filter_eligible(records)
        assert _names(eligible) == ["[ON] B", "[ON] A", "[ON] C"]

    def test_attaches_chosen_results_key(self) -> None:
        records = [{"campaign_name": "[ON] A", "purchases": "2"}]
        eligible, results_key = filter_eligible(records)
        assert results_key == "purchases"
        assert eligible[0].results_key == "purchases"
        assert eligible[0].fields is records[0]

    def test_absent_results_column_excludes_everything(self) -> None:
        eligible, results_key = filter_eligible([{"campaign_name": "[ON] A", "spend": "10"}])
        assert results_key == "results"
        assert eligible == ()

    def test_marker_constant(self) -> None:
        assert ON_MARKER == "[ON]"
