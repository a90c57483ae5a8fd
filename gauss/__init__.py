"""
gauss package marker.

Gaussian (z-score) classification of advertising campaign efficiency.
"""

from gauss.classifier import classify
from gauss.coercion import to_number
from gauss.filtering import filter_eligible
from gauss.normalizer import normalize_key
from gauss.orchestrator import analyze_batch, prepare_batch, run_analysis
from gauss.recommender import recommend
from gauss.statistics import compute_stats
from gauss.types import Action, AnalysisResult, CtrPreference, Direction, MetricClass

__all__ = [
    "Action",
    "AnalysisResult",
    "CtrPreference",
    "Direction",
    "MetricClass",
    "analyze_batch",
    "classify",
    "compute_stats",
    "filter_eligible",
    "normalize_key",
    "prepare_batch",
    "recommend",
    "run_analysis",
    "to_number",
]
