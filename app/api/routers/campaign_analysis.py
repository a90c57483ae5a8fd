"""
app/api/routers/campaign_analysis.py

Campaign analysis HTTP endpoints.

POST /campaigns/analyze  -> JSON classification table and batch statistics
POST /campaigns/export   -> CSV download of the same table

Query parameters
----------------
sigma      : z-score threshold, 0.5–2.0 (default from settings)
ctr_column : "ctr_link" | "ctr_all"    (default from settings)

All analysis lives in the service and the ``gauss`` core; the router only
handles HTTP plumbing (upload validation, serialisation, error mapping).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from fastapi.responses import StreamingResponse

from app.api.dependencies import get_csv_upload
from app.schemas.campaign_analysis import CampaignAnalysisResponse
from app.services.campaign_analysis_service import (
    CampaignAnalysisService,
    get_campaign_analysis_service,
)
from app.services.csv_reader_service import CSVParseError, CSVUploadTooLargeError
from app.services.export_service import ExportService, export_filename, get_export_service
from gauss.orchestrator import SIGMA_MAX, SIGMA_MIN
from gauss.types import AnalysisResult, CtrPreference

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


def _run_analysis(
    *,
    file: UploadFile,
    sigma: float | None,
    ctr_column: CtrPreference | None,
    service: CampaignAnalysisService,
) -> AnalysisResult:
    try:
        data = file.file.read()
        return service.analyze_csv(data, sigma=sigma, ctr_preference=ctr_column)
    except CSVUploadTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except CSVParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()


@router.post("/analyze", response_model=CampaignAnalysisResponse)
def analyze_campaigns(
    file: UploadFile = Depends(get_csv_upload),
    sigma: float | None = Query(default=None, ge=SIGMA_MIN, le=SIGMA_MAX, description="Z-score threshold"),
    ctr_column: CtrPreference | None = Query(default=None, description="Preferred CTR column"),
    service: CampaignAnalysisService = Depends(get_campaign_analysis_service),
) -> CampaignAnalysisResponse:
    """
    Classify every eligible ``[ON]`` campaign in one CSV export.
    """

    result = _run_analysis(file=file, sigma=sigma, ctr_column=ctr_column, service=service)
    return CampaignAnalysisResponse.from_result(result)


@router.post("/export", summary="Download the classification table as CSV")
def export_campaigns(
    file: UploadFile = Depends(get_csv_upload),
    sigma: float | None = Query(default=None, ge=SIGMA_MIN, le=SIGMA_MAX, description="Z-score threshold"),
    ctr_column: CtrPreference | None = Query(default=None, description="Preferred CTR column"),
    service: CampaignAnalysisService = Depends(get_campaign_analysis_service),
    export_service: ExportService = Depends(get_export_service),
) -> StreamingResponse:
    """
    Classify one CSV export and stream the result table as CSV.
    """

    result = _run_analysis(file=file, sigma=sigma, ctr_column=ctr_column, service=service)
    content = export_service.to_csv(result)
    filename = export_filename()
    logger.info("Exporting %d classified row(s) as %s", result.analyzed_count, filename)

    return StreamingResponse(
        content=iter([content]),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Row-Count": str(result.analyzed_count),
        },
    )
