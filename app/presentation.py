"""
app/presentation.py

Display text for classification and action tags.

Only the rendering and export boundaries use these strings; pipeline
code compares enum tags.
"""

from __future__ import annotations

import math

from gauss.types import Action, MetricClass

NOT_AVAILABLE = "—"

CLASS_LABELS: dict[MetricClass, str] = {
    MetricClass.VERY_HIGH: "📈 Very High",
    MetricClass.VERY_LOW: "📉 Very Low",
    MetricClass.NORMAL: "✅ Normal",
    MetricClass.HIGH: "📈 High",
    MetricClass.LOW: "📉 Low",
    MetricClass.NOT_APPLICABLE: NOT_AVAILABLE,
}

ACTION_LABELS: dict[Action, str] = {
    Action.SCALE_BUDGET: "🔼 Scale budget",
    Action.KEEP_RUNNING: "✅ Keep running",
    Action.REVIEW_OR_PAUSE: "🔽 Review or pause",
}

ACTION_ICONS: dict[Action, str] = {
    Action.SCALE_BUDGET: "🔼",
    Action.KEEP_RUNNING: "✅",
    Action.REVIEW_OR_PAUSE: "🔽",
}


def class_label(value: MetricClass) -> str:
    return CLASS_LABELS[MetricClass(value)]


def action_label(value: Action) -> str:
    return ACTION_LABELS[Action(value)]


def format_number(value: float | None, digits: int = 2) -> str:
    """Fixed-point text, or an em dash when the value is not available."""

    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}"
