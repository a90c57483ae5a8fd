"""
app/services/campaign_analysis_service.py

Service layer for campaign analysis requests.

Reads an uploaded CSV export, then hands the raw records to the
``gauss`` pipeline with request parameters or configured defaults.
No analytical logic lives here.
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache

from app.config import AnalysisSettings, get_analysis_settings
from app.logging_utils import log_event
from app.services.csv_reader_service import read_raw_records
from gauss.orchestrator import analyze_batch, prepare_batch
from gauss.types import AnalysisResult, CtrPreference, EligibleBatch

logger = logging.getLogger(__name__)


class CampaignAnalysisService:
    """
    Coordinates CSV reading and the analysis pipeline.

    Holds only immutable settings; every call recomputes the full
    pipeline from the uploaded bytes.
    """

    def __init__(self, *, settings: AnalysisSettings | None = None) -> None:
        self._settings = settings or AnalysisSettings()

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    def load_batch(self, data: bytes) -> EligibleBatch:
        """
        Parse *data* and run the parameter-independent stages.

        Raises
        ------
        CSVParseError: When the upload is not readable CSV.
        CSVUploadTooLargeError: When the upload exceeds the size limit.
        """

        raw_records = read_raw_records(data, max_bytes=self._settings.max_upload_bytes)
        return prepare_batch(raw_records)

    def analyze_batch(
        self,
        batch: EligibleBatch,
        *,
        sigma: float | None = None,
        ctr_preference: CtrPreference | str | None = None,
    ) -> AnalysisResult:
        """
        Run the parameter-dependent stages over an already-loaded batch.
        """

        resolved_sigma = self._settings.default_sigma if sigma is None else sigma
        resolved_ctr = CtrPreference.parse(ctr_preference) or self._settings.default_ctr_preference

        started = time.perf_counter()
        result = analyze_batch(batch, sigma=resolved_sigma, ctr_preference=resolved_ctr)
        log_event(
            logger,
            logging.INFO,
            "campaign_analysis_completed",
            total_records=result.total_records,
            eligible_count=result.eligible_count,
            analyzed_count=result.analyzed_count,
            sigma=result.sigma,
            ctr_column=result.ctr_preference,
            results_key=result.results_key,
            action_counts=result.action_counts(),
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return result

    def analyze_csv(
        self,
        data: bytes,
        *,
        sigma: float | None = None,
        ctr_preference: CtrPreference | str | None = None,
    ) -> AnalysisResult:
        """
        Read *data* and run every pipeline stage.
        """

        batch = self.load_batch(data)
        return self.analyze_batch(batch, sigma=sigma, ctr_preference=ctr_preference)


@lru_cache(maxsize=1)
def get_campaign_analysis_service() -> CampaignAnalysisService:
    """
    Return cached analysis service configured from environment settings.
    """

    return CampaignAnalysisService(settings=get_analysis_settings())
