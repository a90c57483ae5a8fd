"""
app/services package marker.
"""

from app.services.campaign_analysis_service import (
    CampaignAnalysisService,
    get_campaign_analysis_service,
)
from app.services.csv_reader_service import (
    CSVParseError,
    CSVUploadTooLargeError,
    read_raw_records,
)
from app.services.export_service import (
    EXPORT_FIELDS,
    ExportResult,
    ExportService,
    export_filename,
    get_export_service,
)

__all__ = [
    "CampaignAnalysisService",
    "get_campaign_analysis_service",
    "CSVParseError",
    "CSVUploadTooLargeError",
    "read_raw_records",
    "EXPORT_FIELDS",
    "ExportResult",
    "ExportService",
    "export_filename",
    "get_export_service",
]
