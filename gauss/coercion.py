"""
gauss/coercion.py

Total numeric coercion for exported cell values.

Every input maps to either a finite float or ``math.nan``; nothing here
raises.
"""

from __future__ import annotations

import math
import numbers
import re
from typing import Any

NAN: float = math.nan

_STRIPPED_SYMBOLS = re.compile(r"[$%\s]")
# A comma followed by exactly one or two trailing digits is a decimal separator.
_DECIMAL_COMMA = re.compile(r",(?=\d{1,2}$)")


def is_finite(value: Any) -> bool:
    """True when *value* is a real, finite number."""

    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def to_number(value: Any) -> float:
    """
    Parse *value* into a float, returning ``NAN`` when it is not a number.

    Handles ``$``, ``%``, whitespace, thousands commas and a trailing
    decimal comma (``"12,5"`` -> 12.5, ``"1.234,56"`` -> 1234.56).
    Infinite values are treated as not-a-number.
    """

    if value is None or isinstance(value, bool):
        return NAN
    if isinstance(value, numbers.Real):
        number = float(value)
        return number if math.isfinite(number) else NAN

    text = _STRIPPED_SYMBOLS.sub("", str(value))
    if not text:
        return NAN
    if _DECIMAL_COMMA.search(text):
        text = text.replace(".", "")
        text = _DECIMAL_COMMA.sub(".", text)
    text = text.replace(",", "")

    try:
        number = float(text)
    except ValueError:
        return NAN
    return number if math.isfinite(number) else NAN
