"""
gauss/normalizer.py

Canonicalizes exporter header text into stable lookup keys.

    "Amount spent (USD)"             -> "amount_spent_usd"
    "CTR (link click-through rate)"  -> "ctr_link_click_through_rate"
    "Cost / Result"                  -> "cost_result"
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from gauss.types import NormalizedRecord, RawRecord

_REMOVED_CHARS: tuple[str, ...] = ("(", ")", "[", "]", "%")
_SPACED_CHARS: tuple[str, ...] = ("-", "/", ":")
_WHITESPACE_RUN = re.compile(r"\s+")
_UNDERSCORE_RUN = re.compile(r"_{2,}")


def normalize_key(header: Any) -> str:
    """
    Return the canonical key for *header*.

    Deterministic and idempotent; ``None`` or empty input yields ``""``.
    Underscore runs are collapsed after whitespace replacement so that a
    canonical key always normalizes to itself. Only the raw header is
    trimmed; a separator at either edge becomes an underscore
    (``"Results -"`` -> ``"results_"``).
    """

    if header is None:
        return ""
    key = str(header).strip().lower()
    if not key:
        return ""
    for char in _REMOVED_CHARS:
        key = key.replace(char, "")
    for char in _SPACED_CHARS:
        key = key.replace(char, " ")
    key = _WHITESPACE_RUN.sub("_", key)
    return _UNDERSCORE_RUN.sub("_", key)


def normalize_record(raw: RawRecord) -> NormalizedRecord:
    """
    Re-key one raw record by canonical header.

    When two headers collapse to the same key the later column wins,
    matching plain dict assignment order.
    """

    return {normalize_key(header): value for header, value in raw.items()}


def normalize_records(raw_records: Iterable[RawRecord]) -> list[NormalizedRecord]:
    return [normalize_record(raw) for raw in raw_records]
