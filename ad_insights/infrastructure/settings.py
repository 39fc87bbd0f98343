"""Environment overrides for the threshold multipliers."""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Dict

from ad_insights.domain.models import DEFAULT_POLICY, ThresholdPolicy

ENV_FIELDS: Dict[str, str] = {
    "AD_INSIGHTS_ROAS_GOOD_MULTIPLIER": "roas_good_multiplier",
    "AD_INSIGHTS_ROAS_BAD_MULTIPLIER": "roas_bad_multiplier",
    "AD_INSIGHTS_CPA_GOOD_MULTIPLIER": "cpa_good_multiplier",
    "AD_INSIGHTS_CPA_BAD_MULTIPLIER": "cpa_bad_multiplier",
    "AD_INSIGHTS_ZOMBIE_SPEND_FRACTION": "zombie_spend_fraction",
}


def _parse_multiplier(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


def load_threshold_policy(base: ThresholdPolicy = DEFAULT_POLICY) -> ThresholdPolicy:
    overrides: Dict[str, float] = {}
    for env_name, field_name in ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is None or raw.strip() == "":
            continue
        overrides[field_name] = _parse_multiplier(env_name, raw.strip())

    return replace(base, **overrides)
