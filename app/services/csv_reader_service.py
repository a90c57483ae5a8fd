"""
app/services/csv_reader_service.py

Parses uploaded campaign exports into raw header -> cell mappings.

The header row is the first line. Cells are kept as text; numeric
coercion happens inside the analysis core.
"""

from __future__ import annotations

import io
import logging
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVParseError(ValueError):
    """
    Raised when an upload cannot be read as delimited text.
    """


class CSVUploadTooLargeError(CSVParseError):
    """
    Raised when an upload exceeds the configured size limit.
    """

    def __init__(self, *, size: int, limit: int) -> None:
        super().__init__(f"Upload is {size} bytes; the limit is {limit} bytes.")
        self.size = size
        self.limit = limit


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


def read_raw_records(data: bytes, *, max_bytes: int | None = None) -> list[dict[str, Any]]:
    """
    Parse CSV *data* into one dict per non-blank row.

    An empty upload (no header line) yields an empty list. A UTF-8 byte
    order mark is ignored. Rows ending in a trailing delimiter stay keyed
    by the header; the first column is never promoted to an index.

    Raises
    ------
    CSVUploadTooLargeError: When ``len(data)`` exceeds *max_bytes*.
    CSVParseError: When the bytes are not decodable or not valid CSV.
    """

    if max_bytes is not None and len(data) > max_bytes:
        raise CSVUploadTooLargeError(size=len(data), limit=max_bytes)

    try:
        frame = pd.read_csv(
            io.BytesIO(data),
            dtype=str,
            index_col=False,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        logger.debug("CSV upload is empty; no records parsed.")
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise CSVParseError(f"Could not parse CSV: {exc}") from exc

    frame = frame.fillna("")
    records = frame.to_dict(orient="records")
    logger.debug("Parsed %d CSV row(s) with %d column(s).", len(records), len(frame.columns))
    return records
