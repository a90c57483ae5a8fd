"""
app/schemas package marker.
"""

from app.schemas.campaign_analysis import (
    CampaignAnalysisResponse,
    ClassifiedRowResponse,
    HealthResponse,
    MetricStatsResponse,
)

__all__ = [
    "CampaignAnalysisResponse",
    "ClassifiedRowResponse",
    "HealthResponse",
    "MetricStatsResponse",
]
