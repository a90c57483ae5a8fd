from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.schemas.campaign_analysis import HealthResponse

SERVICE_NAME = "Gauss Campaign Insights API"
SERVICE_VERSION = "1.0.0"


def _validate_env() -> None:
    """
    Validate analysis environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator can
    fix all problems in one restart cycle. Unset variables are fine; they
    fall back to built-in defaults.
    """

    from app.config import load_env_files
    from gauss.orchestrator import SIGMA_MAX, SIGMA_MIN
    from gauss.types import CtrPreference

    load_env_files()

    errors: list[str] = []

    # --- Default sigma --------------------------------------------------
    sigma_raw = os.getenv("ANALYSIS_DEFAULT_SIGMA", "").strip()
    if sigma_raw:
        try:
            sigma = float(sigma_raw)
        except ValueError:
            errors.append(f"ANALYSIS_DEFAULT_SIGMA='{sigma_raw}' is not a number.")
        else:
            if not SIGMA_MIN <= sigma <= SIGMA_MAX:
                errors.append(
                    f"ANALYSIS_DEFAULT_SIGMA={sigma_raw} is outside [{SIGMA_MIN}, {SIGMA_MAX}]."
                )

    # --- Default CTR column ---------------------------------------------
    ctr_raw = os.getenv("ANALYSIS_DEFAULT_CTR_COLUMN", "").strip()
    if ctr_raw and CtrPreference.parse(ctr_raw) is None:
        errors.append(
            f"ANALYSIS_DEFAULT_CTR_COLUMN='{ctr_raw}' is not valid. "
            f"Allowed values: {[preference.value for preference in CtrPreference]}."
        )

    # --- Upload limit ---------------------------------------------------
    limit_raw = os.getenv("ANALYSIS_MAX_UPLOAD_BYTES", "").strip()
    if limit_raw and (not limit_raw.isdigit() or int(limit_raw) < 1):
        errors.append(f"ANALYSIS_MAX_UPLOAD_BYTES='{limit_raw}' must be a positive integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed. Invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    from app.config import get_log_level

    log_level = get_log_level()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title=SERVICE_NAME,
        version=SERVICE_VERSION,
    )

    from app.api.routers import campaign_analysis_router

    application.include_router(campaign_analysis_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(service=SERVICE_NAME, version=SERVICE_VERSION)

    logging.getLogger(__name__).info("%s %s initialised", SERVICE_NAME, SERVICE_VERSION)
    return application


app = create_app()
