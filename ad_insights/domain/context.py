"""Account totals and campaign-context detection."""

from __future__ import annotations

from typing import Sequence

from ad_insights.domain.models import (
    DEFAULT_POLICY,
    DEFAULT_RESULT_TYPE,
    AccountTotals,
    AdRecord,
    CampaignContext,
    ThresholdPolicy,
)


def summarize_account(records: Sequence[AdRecord]) -> AccountTotals:
    total_spent = 0.0
    total_revenue = 0.0
    total_results = 0
    for record in records:
        total_spent += record.amount_spent
        total_revenue += record.revenue
        total_results += record.results

    return AccountTotals(
        row_count=len(records),
        total_spent=total_spent,
        total_revenue=total_revenue,
        total_results=total_results,
        avg_roas=total_revenue / total_spent if total_spent > 0 else 0.0,
        avg_cpa=total_spent / total_results if total_results > 0 else 0.0,
    )


def dominant_result_type(records: Sequence[AdRecord]) -> str:
    """Most frequent result type; the first one seen wins a tie."""
    counts: dict[str, int] = {}
    for record in records:
        counts[record.result_type] = counts.get(record.result_type, 0) + 1

    dominant = DEFAULT_RESULT_TYPE
    best_count = 0
    for result_type, count in counts.items():
        if count > best_count:
            dominant = result_type
            best_count = count
    return dominant


def detect_context(
    records: Sequence[AdRecord],
    totals: AccountTotals,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> CampaignContext:
    dominant = dominant_result_type(records)
    is_ecommerce = totals.avg_roas > policy.ecommerce_roas_floor or dominant == "purchase"
    return CampaignContext(is_ecommerce=is_ecommerce, dominant_result_type=dominant)
