"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from gauss.orchestrator import DEFAULT_SIGMA, normalize_sigma
from gauss.types import CtrPreference

_PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = _PROJECT_ROOT / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Defaults applied when a caller does not pass analysis parameters.
    """

    default_sigma: float = DEFAULT_SIGMA
    default_ctr_preference: CtrPreference = CtrPreference.LINK
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached analysis settings from environment variables.

    Out-of-range sigma values are clamped; an unknown CTR column falls
    back to the link CTR column.
    """

    ctr_preference = CtrPreference.parse(
        _get_str_env("ANALYSIS_DEFAULT_CTR_COLUMN", CtrPreference.LINK.value)
    )
    return AnalysisSettings(
        default_sigma=normalize_sigma(_get_float_env("ANALYSIS_DEFAULT_SIGMA", DEFAULT_SIGMA)),
        default_ctr_preference=ctr_preference or CtrPreference.LINK,
        max_upload_bytes=max(1, _get_int_env("ANALYSIS_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
    )


def get_log_level() -> str:
    """
    Return the configured log level name (default ``INFO``).
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()
