"""
app/api/routers package marker.
"""

from app.api.routers.campaign_analysis import router as campaign_analysis_router

__all__ = [
    "campaign_analysis_router",
]
