from __future__ import annotations

import pytest

from ad_insights.application.reporting.aggregation import aggregate, aggregate_ad_sets, aggregate_creatives


def test_ad_set_rollup_sums_members(make_record):
    records = [
        make_record("Ad 1", amount_spent=50.0, results=2, ad_set_name="SetA"),
        make_record("Ad 2", amount_spent=70.0, results=3, ad_set_name="SetA"),
    ]

    groups = aggregate_ad_sets(records)

    assert len(groups) == 1
    group = groups[0]
    assert group.name == "SetA"
    assert group.spend == pytest.approx(120.0)
    assert group.results == 5
    assert group.cpa == pytest.approx(24.0)


def test_groups_follow_first_seen_order(make_record):
    records = [
        make_record(ad_set_name="B"),
        make_record(ad_set_name="A"),
        make_record(ad_set_name="B"),
        make_record(ad_set_name="C"),
    ]

    assert [group.name for group in aggregate_ad_sets(records)] == ["B", "A", "C"]


def test_missing_keys_fall_into_unknown_group(make_record):
    records = [
        make_record("Named", amount_spent=10.0),
        make_record("", amount_spent=5.0),
        make_record("   ", amount_spent=7.0),
    ]

    groups = aggregate_creatives(records)

    assert [group.name for group in groups] == ["Named", "Unknown Creative"]
    assert groups[1].spend == pytest.approx(12.0)


def test_none_key_uses_entity_label(make_record):
    groups = aggregate([make_record(amount_spent=3.0)], lambda record: None, entity="Ad Set")

    assert groups[0].name == "Unknown Ad Set"


def test_ratios_are_derived_after_summing(make_record):
    records = [
        make_record("X", amount_spent=100.0, results=1, roas=4.0, impressions=1000.0, clicks=10.0),
        make_record("X", amount_spent=300.0, results=3, roas=0.0, impressions=3000.0, clicks=90.0),
    ]

    group = aggregate_creatives(records)[0]

    assert group.revenue == pytest.approx(400.0)
    assert group.roas == pytest.approx(1.0)
    assert group.cpa == pytest.approx(100.0)
    assert group.ctr == pytest.approx(2.5)
    assert group.impressions == pytest.approx(4000.0)
    assert group.clicks == pytest.approx(100.0)


def test_zero_denominators_give_zero_ratios(make_record):
    group = aggregate_creatives([make_record("Z", amount_spent=0.0, results=0, roas=3.0)])[0]

    assert group.roas == 0
    assert group.cpa == 0
    assert group.ctr == 0


def test_totals_do_not_depend_on_row_order(make_record):
    records = [
        make_record("a", amount_spent=12.5, results=1, roas=2.0, ad_set_name="S1", impressions=100.0, clicks=3.0),
        make_record("b", amount_spent=40.0, results=0, roas=0.5, ad_set_name="S2", impressions=50.0, clicks=1.0),
        make_record("c", amount_spent=7.25, results=4, roas=1.0, ad_set_name="S1", impressions=20.0, clicks=2.0),
    ]

    forward = {group.name: group for group in aggregate_ad_sets(records)}
    backward = {group.name: group for group in aggregate_ad_sets(list(reversed(records)))}

    assert forward.keys() == backward.keys()
    for name, group in forward.items():
        other = backward[name]
        assert group.spend == pytest.approx(other.spend)
        assert group.revenue == pytest.approx(other.revenue)
        assert group.results == other.results
        assert group.impressions == pytest.approx(other.impressions)
        assert group.clicks == pytest.approx(other.clicks)


def test_empty_input_has_no_groups():
    assert aggregate_ad_sets([]) == []
