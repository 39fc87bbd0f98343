"""Domain policies that bucket ads, ad-sets and creatives into kill/scale/test lists."""

from __future__ import annotations

import math
from typing import Sequence

from ad_insights.domain.models import (
    DEFAULT_POLICY,
    AdRecord,
    AggregatedGroup,
    EcommerceMode,
    SegmentationResult,
    ThresholdPolicy,
    Thresholds,
)


def _group_cpa(group: AggregatedGroup) -> float:
    # A group without results has no cost per result; rank it as the most expensive.
    if group.results <= 0:
        return math.inf
    return group.cpa


def is_zombie(record: AdRecord, thresholds: Thresholds, policy: ThresholdPolicy = DEFAULT_POLICY) -> bool:
    return record.results == 0 and record.amount_spent > thresholds.significance_spend * policy.zombie_spend_fraction


def _is_significant(record: AdRecord, thresholds: Thresholds) -> bool:
    return record.results > 0 and record.amount_spent >= thresholds.significance_spend


def is_bleeder(record: AdRecord, thresholds: Thresholds) -> bool:
    if not _is_significant(record, thresholds):
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return record.roas < mode.roas_bad
    return record.cost_per_result > mode.cpa_bad


def is_winner(record: AdRecord, thresholds: Thresholds) -> bool:
    if not _is_significant(record, thresholds):
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return record.roas >= mode.roas_good
    return record.cost_per_result <= mode.cpa_good


def is_potential(record: AdRecord, thresholds: Thresholds) -> bool:
    if record.results <= 0 or record.amount_spent >= thresholds.significance_spend:
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return record.roas >= mode.avg_roas
    return record.cost_per_result <= mode.avg_cpa


def is_bad_ad_set(group: AggregatedGroup, thresholds: Thresholds) -> bool:
    if group.spend < thresholds.significance_spend:
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return group.roas < mode.roas_bad
    return _group_cpa(group) > mode.cpa_bad


def is_good_ad_set(group: AggregatedGroup, thresholds: Thresholds) -> bool:
    if group.results <= 0:
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return group.roas > mode.roas_good
    return group.cpa < mode.cpa_good


def is_best_creative(group: AggregatedGroup, thresholds: Thresholds) -> bool:
    if group.spend <= thresholds.significance_spend:
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return group.roas > mode.avg_roas
    return _group_cpa(group) < mode.avg_cpa


def is_worst_creative(group: AggregatedGroup, thresholds: Thresholds) -> bool:
    if group.spend <= thresholds.significance_spend:
        return False
    mode = thresholds.mode
    if isinstance(mode, EcommerceMode):
        return group.roas < mode.roas_bad
    return _group_cpa(group) > mode.cpa_bad


def _by_spend_desc(items: Sequence[AdRecord]) -> tuple[AdRecord, ...]:
    return tuple(sorted(items, key=lambda item: -item.amount_spent))


def _by_performance(items: Sequence[AdRecord], thresholds: Thresholds, best_first: bool) -> tuple[AdRecord, ...]:
    if isinstance(thresholds.mode, EcommerceMode):
        return tuple(sorted(items, key=lambda item: -item.roas if best_first else item.roas))
    return tuple(
        sorted(items, key=lambda item: item.cost_per_result if best_first else -item.cost_per_result)
    )


def _groups_by_performance(items: Sequence[AggregatedGroup], thresholds: Thresholds) -> tuple[AggregatedGroup, ...]:
    if isinstance(thresholds.mode, EcommerceMode):
        return tuple(sorted(items, key=lambda item: -item.roas))
    return tuple(sorted(items, key=_group_cpa))


def _groups_by_spend_desc(items: Sequence[AggregatedGroup]) -> tuple[AggregatedGroup, ...]:
    return tuple(sorted(items, key=lambda item: -item.spend))


def segment(
    records: Sequence[AdRecord],
    ad_sets: Sequence[AggregatedGroup],
    creatives: Sequence[AggregatedGroup],
    thresholds: Thresholds,
    policy: ThresholdPolicy = DEFAULT_POLICY,
) -> SegmentationResult:
    """Classify rows and aggregated groups; every bucket is returned in display order."""
    zombies = [record for record in records if is_zombie(record, thresholds, policy)]
    bleeders = [record for record in records if is_bleeder(record, thresholds)]
    winners = [record for record in records if is_winner(record, thresholds)]
    potentials = [record for record in records if is_potential(record, thresholds)]

    return SegmentationResult(
        zombies=_by_spend_desc(zombies),
        bleeders=_by_performance(bleeders, thresholds, best_first=False),
        winners=_by_performance(winners, thresholds, best_first=True),
        potentials=_by_performance(potentials, thresholds, best_first=True),
        best_creatives=_groups_by_performance(
            [group for group in creatives if is_best_creative(group, thresholds)], thresholds
        ),
        worst_creatives=_groups_by_spend_desc(
            [group for group in creatives if is_worst_creative(group, thresholds)]
        ),
        good_ad_sets=_groups_by_performance(
            [group for group in ad_sets if is_good_ad_set(group, thresholds)], thresholds
        ),
        bad_ad_sets=_groups_by_spend_desc([group for group in ad_sets if is_bad_ad_set(group, thresholds)]),
    )
