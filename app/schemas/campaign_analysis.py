"""
app/schemas/campaign_analysis.py

Response schemas for campaign analysis endpoints.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from app.presentation import action_label, class_label
from gauss.types import Action, AnalysisResult, ClassifiedRow, CtrPreference, MetricClass, MetricStats


def _optional(value: float) -> float | None:
    return value if math.isfinite(value) else None


class MetricStatsResponse(BaseModel):
    """
    Population mean and standard deviation; null when not available.
    """

    mean: float | None = None
    stddev: float | None = None

    @classmethod
    def from_stats(cls, stats: MetricStats) -> "MetricStatsResponse":
        if not stats.is_available:
            return cls()
        return cls(mean=_optional(stats.mean), stddev=_optional(stats.stddev))


class ClassifiedRowResponse(BaseModel):
    """
    API response model for one classified campaign.
    """

    campaign_name: str
    results: float | None = None
    spend: float | None = None
    revenue: float | None = None
    profit: float | None = None
    profit_class: MetricClass
    roas: float | None = None
    roas_class: MetricClass
    cpm: float | None = None
    cpm_class: MetricClass
    cpc: float | None = None
    cpc_class: MetricClass
    ctr: float | None = None
    ctr_class: MetricClass
    action: Action
    labels: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_row(cls, row: ClassifiedRow) -> "ClassifiedRowResponse":
        classes = {
            "profit_class": row.profit_class,
            "roas_class": row.roas_class,
            "cpm_class": row.cpm_class,
            "cpc_class": row.cpc_class,
            "ctr_class": row.ctr_class,
        }
        labels = {name: class_label(value) for name, value in classes.items()}
        labels["action"] = action_label(row.action)
        return cls(
            campaign_name=row.campaign_name,
            results=row.results,
            spend=row.spend,
            revenue=row.revenue,
            profit=row.profit,
            roas=row.roas,
            cpm=row.cpm,
            cpc=row.cpc,
            ctr=row.ctr,
            action=row.action,
            labels=labels,
            **classes,
        )


class CampaignAnalysisResponse(BaseModel):
    """
    API response model for one analysis run.
    """

    analyzed_count: int = Field(..., ge=0)
    eligible_count: int = Field(..., ge=0)
    total_records: int = Field(..., ge=0)
    results_key: str
    sigma: float
    ctr_column: CtrPreference
    stats: dict[str, MetricStatsResponse]
    action_counts: dict[Action, int]
    rows: list[ClassifiedRowResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "CampaignAnalysisResponse":
        return cls(
            analyzed_count=result.analyzed_count,
            eligible_count=result.eligible_count,
            total_records=result.total_records,
            results_key=result.results_key,
            sigma=result.sigma,
            ctr_column=result.ctr_preference,
            stats={
                metric: MetricStatsResponse.from_stats(stats)
                for metric, stats in result.stats.as_dict().items()
            },
            action_counts=result.action_counts(),
            rows=[ClassifiedRowResponse.from_row(row) for row in result.rows],
        )


class HealthResponse(BaseModel):
    """
    Liveness payload.
    """

    status: str = "ok"
    service: str
    version: str
