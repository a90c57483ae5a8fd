"""
gauss/recommender.py

Maps per-campaign classifications and raw ROAS / profit to an action.
No statistics, no I/O beyond reading the optional rules file once.
"""

from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path

from gauss.coercion import is_finite
from gauss.types import Action, MetricClass


_BUSINESS_RULES_PATH = Path(__file__).resolve().parents[1] / "config" / "business_rules.json"


@lru_cache(maxsize=1)
def _load_business_rules() -> dict:
    try:
        raw = _BUSINESS_RULES_PATH.read_text(encoding="utf-8")
        data = json.loads(raw)
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError, TypeError):
        return {}


def _as_dict(value: object) -> dict:
    return value if isinstance(value, dict) else {}


def _as_float(value: object, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


_RECOMMENDER_RULES = _as_dict(_load_business_rules().get("recommender"))


class ActionRecommender:
    """
    Rule-based action recommendation. First matching rule wins:

        1. scale_budget     roas >= 1.8 and profit >= 0
                            and cpm, cpc not high and ctr not very_low
        2. review_or_pause  roas < 1 or profit < 0
                            or cpm high or cpc high or ctr very_low
        3. keep_running     otherwise

    For rule 1 a missing ROAS counts as 0 and a missing profit as -1, so
    neither can scale. Rule 2 only looks at values that are present; a
    missing ROAS or profit never forces a review on its own.
    """

    SCALE_MIN_ROAS: float = _as_float(_RECOMMENDER_RULES.get("scale_min_roas"), 1.8)
    SCALE_MIN_PROFIT: float = _as_float(_RECOMMENDER_RULES.get("scale_min_profit"), 0.0)
    REVIEW_MAX_ROAS: float = _as_float(_RECOMMENDER_RULES.get("review_max_roas"), 1.0)

    MISSING_ROAS_FOR_SCALE: float = 0.0
    MISSING_PROFIT_FOR_SCALE: float = -1.0

    def recommend(
        self,
        cpm_class: MetricClass,
        cpc_class: MetricClass,
        ctr_class: MetricClass,
        roas: float,
        profit: float,
    ) -> Action:
        cost_or_ctr_flagged = (
            cpm_class == MetricClass.HIGH
            or cpc_class == MetricClass.HIGH
            or ctr_class == MetricClass.VERY_LOW
        )

        scale_roas = roas if is_finite(roas) else self.MISSING_ROAS_FOR_SCALE
        scale_profit = profit if is_finite(profit) else self.MISSING_PROFIT_FOR_SCALE
        if (
            scale_roas >= self.SCALE_MIN_ROAS
            and scale_profit >= self.SCALE_MIN_PROFIT
            and not cost_or_ctr_flagged
        ):
            return Action.SCALE_BUDGET

        roas_poor = is_finite(roas) and roas < self.REVIEW_MAX_ROAS
        losing_money = is_finite(profit) and profit < 0
        if roas_poor or losing_money or cost_or_ctr_flagged:
            return Action.REVIEW_OR_PAUSE

        return Action.KEEP_RUNNING


_DEFAULT_RECOMMENDER = ActionRecommender()


def recommend(
    cpm_class: MetricClass,
    cpc_class: MetricClass,
    ctr_class: MetricClass,
    roas: float,
    profit: float,
) -> Action:
    """Module-level shortcut using the default thresholds."""

    return _DEFAULT_RECOMMENDER.recommend(cpm_class, cpc_class, ctr_class, roas, profit)
