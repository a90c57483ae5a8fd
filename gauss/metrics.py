"""
gauss/metrics.py

Per-campaign metric derivation.

Formulas
--------
CPM     = spend / impressions * 1000            (impressions > 0)
CPC     = exported CPC (cost per link click)
          else spend / clicks_all               (clicks_all > 0)
CTR     = preferred exported CTR column
          else the other CTR column
Revenue = first finite purchase conversion value column
ROAS    = exported purchase ROAS column
          else revenue / spend                  (spend > 0)
Profit  = revenue_or_zero - spend_or_zero

Unavailable metrics are ``math.nan``. Whether a record can be classified
is only decided after derivation, because it depends on which fallback
succeeded.
"""

from __future__ import annotations

import math
from typing import Iterable

from gauss.coercion import NAN, to_number
from gauss.lookup import first_finite, first_present
from gauss.types import CtrPreference, DerivedRecord, EligibleRecord

SPEND_KEYS: tuple[str, ...] = ("amount_spent_usd", "amount_spent", "spend", "cost")
IMPRESSIONS_KEYS: tuple[str, ...] = ("impressions",)
CLICKS_ALL_KEYS: tuple[str, ...] = ("clicks_all", "clicks")
CPC_KEYS: tuple[str, ...] = ("cpc_cost_per_link_click_usd", "cpc_cost_per_link_click")
REVENUE_KEYS: tuple[str, ...] = (
    "purchases_conversion_value",
    "purchase_conversion_value",
    "website_purchases_conversion_value",
    "purchases_conversion_value_usd",
    "conversion_value",
    "revenue",
)
ROAS_KEYS: tuple[str, ...] = (
    "purchase_roas_return_on_ad_spend",
    "website_purchase_roas_return_on_ad_spend",
    "roas",
)


class MetricDeriver:
    """
    Computes the derived metric set for eligible records.

    Stateless apart from the CTR column preference.
    """

    def __init__(self, ctr_preference: CtrPreference = CtrPreference.LINK) -> None:
        self._ctr_preference = ctr_preference

    def derive(self, record: EligibleRecord) -> DerivedRecord:
        fields = record.fields

        spend = to_number(first_present(fields, SPEND_KEYS))
        impressions = to_number(first_present(fields, IMPRESSIONS_KEYS))
        clicks_all = to_number(first_present(fields, CLICKS_ALL_KEYS))
        results = to_number(fields.get(record.results_key))

        revenue = first_finite(fields, REVENUE_KEYS)
        exported_roas = first_finite(fields, ROAS_KEYS)
        exported_cpc = first_finite(fields, CPC_KEYS)
        ctr = first_finite(
            fields,
            (self._ctr_preference.column, self._ctr_preference.fallback.column),
        )

        return DerivedRecord(
            source=record,
            spend=spend,
            impressions=impressions,
            clicks_all=clicks_all,
            ctr=ctr,
            cpc=_cpc(exported_cpc, spend, clicks_all),
            cpm=_cpm(spend, impressions),
            revenue=revenue,
            roas=_roas(exported_roas, revenue, spend),
            profit=_profit(revenue, spend),
            results=results,
        )

    def derive_all(self, records: Iterable[EligibleRecord]) -> tuple[DerivedRecord, ...]:
        return tuple(self.derive(record) for record in records)


# ---------------------------------------------------------------------------
# Formula helpers
# ---------------------------------------------------------------------------


def _positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


def _cpm(spend: float, impressions: float) -> float:
    if not (math.isfinite(spend) and _positive(impressions)):
        return NAN
    return (spend / impressions) * 1000


def _cpc(exported_cpc: float, spend: float, clicks_all: float) -> float:
    if math.isfinite(exported_cpc):
        return exported_cpc
    if math.isfinite(spend) and _positive(clicks_all):
        return spend / clicks_all
    return NAN


def _roas(exported_roas: float, revenue: float, spend: float) -> float:
    if math.isfinite(exported_roas):
        return exported_roas
    if math.isfinite(revenue) and _positive(spend):
        return revenue / spend
    return NAN


def _profit(revenue: float, spend: float) -> float:
    revenue_or_zero = revenue if math.isfinite(revenue) else 0.0
    spend_or_zero = spend if math.isfinite(spend) else 0.0
    return revenue_or_zero - spend_or_zero
