"""
Structured logging helpers for campaign analysis workflows.
"""

from __future__ import annotations

import json
import logging
import math
from enum import Enum
from typing import Any


def _json_safe(value: Any) -> Any:
    """Map enums to their tag and non-finite floats to ``None``."""

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {str(key.value if isinstance(key, Enum) else key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact, strictly valid JSON.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **{key: _json_safe(value) for key, value in fields.items()}}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, allow_nan=False))
