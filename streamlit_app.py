"""Streamlit dashboard for Gaussian campaign classification."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from app.presentation import ACTION_ICONS, format_number
from app.services.campaign_analysis_service import get_campaign_analysis_service
from app.services.csv_reader_service import CSVParseError
from app.services.export_service import ExportService, export_filename
from gauss.orchestrator import SIGMA_MAX, SIGMA_MIN
from gauss.recommender import ActionRecommender
from gauss.types import Action, AnalysisResult, CtrPreference, EligibleBatch

st.set_page_config(page_title="Gauss Campaign Dashboard", page_icon="📊", layout="wide")

_CTR_OPTIONS: dict[CtrPreference, str] = {
    CtrPreference.LINK: "CTR (link)",
    CtrPreference.ALL: "CTR (all)",
}

_TABLE_COLUMNS: dict[str, str] = {
    "campaign_name": "Campaign",
    "results": "Results",
    "spend": "Spend",
    "revenue": "Revenue",
    "profit": "Profit",
    "profit_class": "Profit class",
    "roas": "ROAS",
    "roas_class": "ROAS class",
    "cpm": "CPM",
    "cpm_class": "CPM class",
    "cpc": "CPC",
    "cpc_class": "CPC class",
    "ctr": "CTR (%)",
    "ctr_class": "CTR class",
    "action": "Action",
}


@st.cache_data(show_spinner=False)
def _load_batch(data: bytes) -> EligibleBatch:
    """Parse and filter once per upload; parameter changes reuse the batch."""
    return get_campaign_analysis_service().load_batch(data)


def _table_frame(result: AnalysisResult) -> pd.DataFrame:
    """Build the display table with human-readable labels."""
    export = ExportService().build(result)
    frame = pd.DataFrame(export.rows, columns=export.fields)
    return frame.rename(columns=_TABLE_COLUMNS)


def _render_summary(result: AnalysisResult) -> None:
    stats = result.stats
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("[ON] campaigns analyzed", result.analyzed_count)
        st.caption(f"{result.eligible_count} eligible · results column: `{result.results_key}`")
    with col2:
        st.markdown("**Mean CPM / CPC / CTR**")
        st.markdown(
            f"{format_number(stats.cpm.mean)} / {format_number(stats.cpc.mean)} / "
            f"{format_number(stats.ctr.mean)}%"
        )
        st.caption(
            f"Std dev: {format_number(stats.cpm.stddev)} / {format_number(stats.cpc.stddev)} / "
            f"{format_number(stats.ctr.stddev)}"
        )
    with col3:
        st.markdown("**Actions (count)**")
        counts = result.action_counts()
        st.markdown(
            "  ".join(f"{ACTION_ICONS[action]} {counts[action]}" for action in Action)
        )


service = get_campaign_analysis_service()
settings = service.settings

st.title("Gauss Campaign Dashboard")
st.caption(
    "Upload a Meta campaigns CSV. Only campaigns starting with **[ON]** and with "
    "**results > 0** will be analyzed."
)

uploaded_file = st.file_uploader("Upload CSV", type=["csv"])

ctl1, ctl2, ctl3 = st.columns(3)
with ctl1:
    sigma = st.slider(
        "Sigma (z-threshold)",
        min_value=SIGMA_MIN,
        max_value=SIGMA_MAX,
        value=settings.default_sigma,
        step=0.1,
    )
    st.caption(f"Current: **{sigma:.1f}σ**")
with ctl2:
    ctr_options = list(_CTR_OPTIONS)
    ctr_preference = st.selectbox(
        "CTR column",
        options=ctr_options,
        index=ctr_options.index(settings.default_ctr_preference),
        format_func=_CTR_OPTIONS.get,
    )
    st.caption("If the selected column is missing, the other one is tried.")

result: AnalysisResult | None = None
if uploaded_file is not None:
    try:
        batch = _load_batch(uploaded_file.getvalue())
    except CSVParseError as exc:
        st.error(f"Could not read CSV: {exc}")
    else:
        result = service.analyze_batch(batch, sigma=sigma, ctr_preference=ctr_preference)

with ctl3:
    st.markdown("**Export**")
    st.download_button(
        label="Export CSV",
        data=ExportService().to_csv(result).encode("utf-8") if result is not None else b"",
        file_name=export_filename(),
        mime="text/csv",
        disabled=result is None,
        use_container_width=True,
    )
    st.caption("Download the table with gaussian classes and suggested action.")

if result is not None:
    _render_summary(result)

if result is not None and result.rows:
    st.dataframe(_table_frame(result), use_container_width=True, hide_index=True)
else:
    st.info(
        "Upload a CSV to see results. Required columns: `Campaign name`, `Amount spent (USD)`, "
        "`Impressions`, `Clicks (all)`, `CTR (link click-through rate)` or `CTR (all)`, and "
        "optionally `CPC (cost per link click) (USD)`, `Purchases conversion value` and "
        "`Purchase ROAS (return on ad spend)`."
    )

st.caption(
    f"Rules: 🔼 Scale when ROAS ≥ {ActionRecommender.SCALE_MIN_ROAS:g}, profit ≥ {ActionRecommender.SCALE_MIN_PROFIT:g}, "
    "CPM and CPC are not 📈 High and CTR is not 📉 Very Low. "
    f"🔽 Review if ROAS < {ActionRecommender.REVIEW_MAX_ROAS:g}, profit < 0, CPM or CPC is 📈 High, or CTR is 📉 Very Low. "
    "Else: ✅ Keep running. Calculations only cover campaigns whose name starts with [ON] and "
    "have results > 0."
)
