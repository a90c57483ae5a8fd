"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def is_csv_upload(filename: str | None, content_type: str | None) -> bool:
    """
    True when the upload looks like a CSV by extension or MIME type.
    """

    normalized_name = (filename or "").strip().lower()
    normalized_type = (content_type or "").split(";", 1)[0].strip().lower()
    return normalized_name.endswith(".csv") or normalized_type in CSV_CONTENT_TYPES


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Reject uploads that are not campaign CSV exports.
    """

    if not is_csv_upload(file.filename, file.content_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file
