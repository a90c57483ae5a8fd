"""
gauss/types.py

Domain types shared by every stage of the campaign analysis pipeline.

All record and statistics containers are frozen dataclasses: each stage
builds new objects that reference the previous stage's output and never
mutates them in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

RawRecord = Mapping[str, Any]
NormalizedRecord = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class CtrPreference(str, Enum):
    """
    Which exported CTR column is preferred when deriving ``ctr``.

    The other variant is used as a fallback when the preferred column is
    missing or unparseable.
    """

    LINK = "ctr_link"
    ALL = "ctr_all"

    @property
    def column(self) -> str:
        return _CTR_COLUMNS[self]

    @property
    def fallback(self) -> "CtrPreference":
        return CtrPreference.ALL if self is CtrPreference.LINK else CtrPreference.LINK

    @classmethod
    def parse(cls, value: "str | CtrPreference | None") -> "CtrPreference | None":
        """
        Resolve a preference from its tag or its canonical column name.

        Returns ``None`` for unknown values so the caller can apply its
        own default.
        """

        if isinstance(value, CtrPreference):
            return value
        if value is None:
            return None
        text = str(value).strip().lower()
        for preference in cls:
            if text in (preference.value, preference.column):
                return preference
        return None


_CTR_COLUMNS: dict[CtrPreference, str] = {
    CtrPreference.LINK: "ctr_link_click_through_rate",
    CtrPreference.ALL: "ctr_all",
}


class Direction(str, Enum):
    """Whether a larger metric value is favorable (ascending) or not."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class MetricClass(str, Enum):
    """Closed set of classification tags produced by the z-score classifier."""

    VERY_HIGH = "very_high"
    VERY_LOW = "very_low"
    NORMAL = "normal"
    HIGH = "high"
    LOW = "low"
    NOT_APPLICABLE = "not_applicable"


class Action(str, Enum):
    """Recommended action for one campaign."""

    SCALE_BUDGET = "scale_budget"
    KEEP_RUNNING = "keep_running"
    REVIEW_OR_PAUSE = "review_or_pause"


# ---------------------------------------------------------------------------
# Record stages
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EligibleRecord:
    """
    A normalized record that passed the ``[ON]`` / results filter.
    """

    fields: NormalizedRecord
    """Canonical key -> raw cell value."""

    results_key: str
    """Canonical column that was used as the "results" field for the batch."""

    @property
    def campaign_name(self) -> str:
        value = self.fields.get("campaign_name")
        return "" if value is None else str(value)


@dataclass(frozen=True)
class DerivedRecord:
    """
    Eligible record plus its computed metrics.

    Not-available values are ``math.nan``.
    """

    source: EligibleRecord
    spend: float
    impressions: float
    clicks_all: float
    ctr: float
    cpc: float
    cpm: float
    revenue: float
    roas: float
    profit: float
    results: float

    @property
    def campaign_name(self) -> str:
        return self.source.campaign_name

    @property
    def is_classifiable(self) -> bool:
        """
        True when cpm, cpc, ctr and results are finite and results > 0.

        Only classifiable records contribute to population statistics.
        """

        return (
            math.isfinite(self.cpm)
            and math.isfinite(self.cpc)
            and math.isfinite(self.ctr)
            and math.isfinite(self.results)
            and self.results > 0
        )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MetricStats:
    """Population mean and standard deviation of one metric."""

    mean: float = math.nan
    stddev: float = math.nan

    @property
    def is_available(self) -> bool:
        return math.isfinite(self.mean) and math.isfinite(self.stddev)


CLASSIFIED_METRICS: tuple[str, ...] = ("cpm", "cpc", "ctr", "roas", "profit")


@dataclass(frozen=True)
class PopulationStats:
    """
    Per-metric statistics for one batch.

    Computed wholesale from the classifiable records of a batch and never
    updated incrementally.
    """

    cpm: MetricStats = field(default_factory=MetricStats)
    cpc: MetricStats = field(default_factory=MetricStats)
    ctr: MetricStats = field(default_factory=MetricStats)
    roas: MetricStats = field(default_factory=MetricStats)
    profit: MetricStats = field(default_factory=MetricStats)
    count: int = 0

    def for_metric(self, metric: str) -> MetricStats:
        if metric not in CLASSIFIED_METRICS:
            raise KeyError(f"Unknown metric {metric!r}. Valid: {list(CLASSIFIED_METRICS)}")
        return getattr(self, metric)

    def as_dict(self) -> dict[str, MetricStats]:
        return {metric: getattr(self, metric) for metric in CLASSIFIED_METRICS}


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClassifiedRow:
    """
    One output row: identifying fields, rounded metrics, tags and action.

    Numeric fields are rounded to two decimals; not-available values are
    ``None``.
    """

    campaign_name: str
    results: float | None
    spend: float | None
    revenue: float | None
    profit: float | None
    profit_class: MetricClass
    roas: float | None
    roas_class: MetricClass
    cpm: float | None
    cpm_class: MetricClass
    cpc: float | None
    cpc_class: MetricClass
    ctr: float | None
    ctr_class: MetricClass
    action: Action


@dataclass(frozen=True)
class EligibleBatch:
    """
    Output of the parameter-independent stages (normalize + filter).

    Can be reused across sigma / CTR-preference changes.
    """

    records: tuple[EligibleRecord, ...]
    results_key: str
    total_records: int = 0


@dataclass(frozen=True)
class AnalysisResult:
    """
    Full pipeline output for one batch and one parameter set.
    """

    rows: tuple[ClassifiedRow, ...]
    stats: PopulationStats
    sigma: float
    ctr_preference: CtrPreference
    results_key: str
    eligible_count: int
    total_records: int = 0

    @property
    def analyzed_count(self) -> int:
        return len(self.rows)

    def action_counts(self) -> dict[Action, int]:
        """Number of rows per action; every action is present."""

        counts = {action: 0 for action in Action}
        for row in self.rows:
            counts[row.action] += 1
        return counts
