"""
gauss/lookup.py

Resolution of logical fields against the columns a given exporter emitted.

Each logical field is described by a priority-ordered tuple of candidate
canonical keys. No key is ever assumed to exist.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from gauss.coercion import NAN, to_number
from gauss.types import NormalizedRecord


def first_present(record: NormalizedRecord, keys: Sequence[str]) -> Any | None:
    """
    Return the raw value of the first candidate key present in *record*.

    A key holding an empty cell still counts as present.
    """

    for key in keys:
        if key in record:
            return record[key]
    return None


def first_finite(record: NormalizedRecord, keys: Sequence[str]) -> float:
    """
    Return the first candidate value that coerces to a finite number.
    """

    for key in keys:
        if key not in record:
            continue
        number = to_number(record[key])
        if math.isfinite(number):
            return number
    return NAN
