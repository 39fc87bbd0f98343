"""Dynamic thresholds relative to the account's own averages."""

from __future__ import annotations

from ad_insights.domain.models import (
    DEFAULT_POLICY,
    AccountTotals,
    CampaignContext,
    EcommerceMode,
    PerformanceMode,
    ThresholdPolicy,
    Thresholds,
    VolumeMode,
)


def compute_thresholds(
    totals: AccountTotals,
    context: CampaignContext,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> Thresholds:
    avg_roas = totals.avg_roas
    avg_cpa = totals.avg_cpa

    roas_good = avg_roas * policy.roas_good_multiplier
    roas_bad = avg_roas * policy.roas_bad_multiplier
    cpa_good = avg_cpa * policy.cpa_good_multiplier if avg_cpa > 0 else 0.0
    cpa_bad = avg_cpa * policy.cpa_bad_multiplier if avg_cpa > 0 else 0.0

    # Without a usable CPA, fall back to the average spend per row.
    if avg_cpa > 0:
        significance_spend = avg_cpa
    else:
        significance_spend = totals.total_spent / max(totals.row_count, 1)

    mode: PerformanceMode
    if context.is_ecommerce:
        mode = EcommerceMode(roas_good=roas_good, roas_bad=roas_bad, avg_roas=avg_roas)
    else:
        mode = VolumeMode(cpa_good=cpa_good, cpa_bad=cpa_bad, avg_cpa=avg_cpa)

    return Thresholds(
        roas_good=roas_good,
        roas_bad=roas_bad,
        cpa_good=cpa_good,
        cpa_bad=cpa_bad,
        significance_spend=significance_spend,
        mode=mode,
    )
