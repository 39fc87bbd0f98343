from __future__ import annotations

from typing import Any, Callable

import pytest

from ad_insights.domain.models import AdRecord


def _record(
    ad_name: str = "Ad",
    amount_spent: float = 0.0,
    results: int = 0,
    roas: float = 0.0,
    result_type: str = "generic",
    ad_set_name: str = "Set",
    campaign_name: str = "Campaign",
    cost_per_result: float | None = None,
    **extra: Any,
) -> AdRecord:
    if cost_per_result is None:
        cost_per_result = amount_spent / results if results > 0 else 0.0
    return AdRecord(
        campaign_name=campaign_name,
        ad_set_name=ad_set_name,
        ad_name=ad_name,
        amount_spent=amount_spent,
        results=results,
        cost_per_result=cost_per_result,
        roas=roas,
        result_type=result_type,
        **extra,
    )


@pytest.fixture
def make_record() -> Callable[..., AdRecord]:
    return _record


@pytest.fixture
def ecommerce_records() -> list[AdRecord]:
    return [
        _record("Ad 1", amount_spent=1000.0, results=30, roas=3.0, result_type="purchase"),
        _record("Ad 2", amount_spent=1000.0, results=2, roas=0.2, result_type="purchase"),
    ]


@pytest.fixture
def lead_records() -> list[AdRecord]:
    return [
        _record("Lead A", amount_spent=100.0, results=10, result_type="lead", ad_set_name="S1"),
        _record("Lead B", amount_spent=100.0, results=2, result_type="lead", ad_set_name="S1"),
        _record("Lead C", amount_spent=20.0, results=2, result_type="lead", ad_set_name="S2"),
        _record("Lead D", amount_spent=80.0, results=0, result_type="lead", ad_set_name="S2"),
    ]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "AD_INSIGHTS_ROAS_GOOD_MULTIPLIER",
        "AD_INSIGHTS_ROAS_BAD_MULTIPLIER",
        "AD_INSIGHTS_CPA_GOOD_MULTIPLIER",
        "AD_INSIGHTS_CPA_BAD_MULTIPLIER",
        "AD_INSIGHTS_ZOMBIE_SPEND_FRACTION",
    ):
        monkeypatch.delenv(name, raising=False)
