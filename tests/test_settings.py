from __future__ import annotations

import pytest

from ad_insights.domain.models import DEFAULT_POLICY
from ad_insights.infrastructure.settings import load_threshold_policy


def test_defaults_without_overrides(clean_env):
    assert load_threshold_policy() == DEFAULT_POLICY


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("AD_INSIGHTS_ROAS_BAD_MULTIPLIER", "0.7")
    monkeypatch.setenv("AD_INSIGHTS_CPA_BAD_MULTIPLIER", " 1.5 ")

    policy = load_threshold_policy()

    assert policy.roas_bad_multiplier == pytest.approx(0.7)
    assert policy.cpa_bad_multiplier == pytest.approx(1.5)
    assert policy.roas_good_multiplier == DEFAULT_POLICY.roas_good_multiplier


def test_blank_override_is_ignored(clean_env, monkeypatch):
    monkeypatch.setenv("AD_INSIGHTS_ZOMBIE_SPEND_FRACTION", "")

    assert load_threshold_policy().zombie_spend_fraction == DEFAULT_POLICY.zombie_spend_fraction


def test_non_numeric_override_is_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("AD_INSIGHTS_ROAS_GOOD_MULTIPLIER", "high")

    with pytest.raises(ValueError, match="AD_INSIGHTS_ROAS_GOOD_MULTIPLIER"):
        load_threshold_policy()


def test_non_positive_override_is_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("AD_INSIGHTS_CPA_GOOD_MULTIPLIER", "0")

    with pytest.raises(ValueError, match="must be > 0"):
        load_threshold_policy()


def test_inverted_pair_is_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("AD_INSIGHTS_ROAS_GOOD_MULTIPLIER", "0.5")

    with pytest.raises(ValueError, match="ROAS good multiplier"):
        load_threshold_policy()
