"""
gauss/filtering.py

Selects the campaigns eligible for analysis.

A record is eligible when its campaign name starts with the literal,
case-sensitive ``[ON]`` marker and its results value is a finite number
greater than zero.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from gauss.coercion import to_number
from gauss.types import EligibleRecord, NormalizedRecord

logger = logging.getLogger(__name__)

ON_MARKER: str = "[ON]"

RESULTS_KEY_CANDIDATES: tuple[str, ...] = ("results", "purchases", "conversions")


def resolve_results_key(
    records: Sequence[NormalizedRecord],
    candidates: Sequence[str] = RESULTS_KEY_CANDIDATES,
) -> str:
    """
    Pick the column used as "results" for the whole batch.

    Probe order:
        1. first candidate present in the first record
        2. first candidate present in any record
        3. the first candidate name, even though it is absent

    In case 3 every record coerces to NaN and is filtered out.
    """

    if not candidates:
        raise ValueError("At least one results key candidate is required.")

    if records:
        first = records[0]
        for key in candidates:
            if key in first:
                return key
        for key in candidates:
            if any(key in record for record in records):
                return key
    return candidates[0]


def is_on_campaign(record: NormalizedRecord) -> bool:
    name = record.get("campaign_name")
    return str(name if name is not None else "").startswith(ON_MARKER)


def filter_eligible(
    records: Sequence[NormalizedRecord],
    results_key_candidates: Sequence[str] = RESULTS_KEY_CANDIDATES,
) -> tuple[tuple[EligibleRecord, ...], str]:
    """
    Keep ``[ON]`` campaigns with positive results, preserving input order.

    Returns
    -------
    tuple
        ``(eligible_records, chosen_results_key)``.
    """

    results_key = resolve_results_key(records, results_key_candidates)

    eligible: list[EligibleRecord] = []
    for record in records:
        if not is_on_campaign(record):
            continue
        results = to_number(record.get(results_key))
        if not (math.isfinite(results) and results > 0):
            continue
        eligible.append(EligibleRecord(fields=record, results_key=results_key))

    logger.debug(
        "Filtered %d of %d record(s) as eligible (results_key=%s)",
        len(eligible),
        len(records),
        results_key,
    )
    return tuple(eligible), results_key
