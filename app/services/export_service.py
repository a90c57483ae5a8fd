"""
app/services/export_service.py

Flattens classified campaign rows for CSV download.

Column order is fixed:

    campaign_name, results, spend, revenue, profit, profit_class,
    roas, roas_class, cpm, cpm_class, cpc, cpc_class, ctr, ctr_class, action

Class and action columns carry display labels. Not-available numbers
are written as empty cells. An empty result still produces the header.
"""

from __future__ import annotations

import csv
import io
import time
from dataclasses import dataclass, field
from typing import Any

from app.presentation import action_label, class_label
from gauss.types import AnalysisResult, ClassifiedRow

EXPORT_FIELDS: tuple[str, ...] = (
    "campaign_name",
    "results",
    "spend",
    "revenue",
    "profit",
    "profit_class",
    "roas",
    "roas_class",
    "cpm",
    "cpm_class",
    "cpc",
    "cpc_class",
    "ctr",
    "ctr_class",
    "action",
)

_CLASS_FIELDS: frozenset[str] = frozenset(
    {"profit_class", "roas_class", "cpm_class", "cpc_class", "ctr_class"}
)


# ---------------------------------------------------------------------------
# Export result container
# ---------------------------------------------------------------------------


@dataclass
class ExportResult:
    """
    Flat tabular data ready for CSV serialisation.

    Attributes
    ----------
    rows:   Flat dict per row; numbers are floats or ``None``.
    fields: Ordered column names.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    fields: list[str] = field(default_factory=lambda: list(EXPORT_FIELDS))


def export_filename(now_ms: int | None = None) -> str:
    """``gauss_insights_<unix-millis>.csv``"""

    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"gauss_insights_{stamp}.csv"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class ExportService:
    """
    Converts an :class:`AnalysisResult` into export rows and CSV text.

    Read-only; the result is never modified.
    """

    def build(self, result: AnalysisResult) -> ExportResult:
        return ExportResult(rows=[self._flatten_row(row) for row in result.rows])

    def to_csv(self, result: AnalysisResult) -> str:
        export = self.build(result)
        buffer = io.StringIO()
        writer = csv.DictWriter(
            buffer,
            fieldnames=export.fields,
            extrasaction="ignore",
            restval="",
            lineterminator="\r\n",
        )
        writer.writeheader()
        for row in export.rows:
            writer.writerow({key: ("" if value is None else value) for key, value in row.items()})
        return buffer.getvalue()

    @staticmethod
    def _flatten_row(row: ClassifiedRow) -> dict[str, Any]:
        flat: dict[str, Any] = {}
        for name in EXPORT_FIELDS:
            value = getattr(row, name)
            if name in _CLASS_FIELDS:
                flat[name] = class_label(value)
            elif name == "action":
                flat[name] = action_label(value)
            else:
                flat[name] = value
        return flat


def get_export_service() -> ExportService:
    """
    FastAPI dependency provider for the export service.
    """

    return ExportService()
