"""Application service for the ad classification and report use case."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from ad_insights.application.reporting.aggregation import aggregate_ad_sets, aggregate_creatives
from ad_insights.application.reporting.rendering import ENGLISH_TEXT, compose_report
from ad_insights.domain.context import detect_context, summarize_account
from ad_insights.domain.models import (
    DEFAULT_POLICY,
    AccountTotals,
    AdRecord,
    AggregatedGroup,
    AnalysisOutput,
    AnalysisSummary,
    CampaignContext,
    SegmentationResult,
    ThresholdPolicy,
    Thresholds,
)
from ad_insights.domain.segmentation import segment
from ad_insights.domain.thresholds import compute_thresholds


@dataclass(frozen=True)
class AnalysisTrace:
    """Intermediate values of one run, kept for inspection and tests."""

    records: tuple[AdRecord, ...]
    totals: AccountTotals
    context: CampaignContext
    thresholds: Thresholds
    ad_sets: tuple[AggregatedGroup, ...]
    creatives: tuple[AggregatedGroup, ...]
    segments: SegmentationResult


def run_analysis(records: Sequence[AdRecord], policy: ThresholdPolicy = DEFAULT_POLICY) -> AnalysisTrace:
    """Context, thresholds, aggregation and segmentation, each computed once."""
    clean_records = tuple(record.clamped() for record in records)

    totals = summarize_account(clean_records)
    context = detect_context(clean_records, totals, policy)
    thresholds = compute_thresholds(totals, context, policy)

    ad_sets = tuple(aggregate_ad_sets(clean_records))
    creatives = tuple(aggregate_creatives(clean_records))
    segments = segment(clean_records, ad_sets, creatives, thresholds, policy)

    return AnalysisTrace(
        records=clean_records,
        totals=totals,
        context=context,
        thresholds=thresholds,
        ad_sets=ad_sets,
        creatives=creatives,
        segments=segments,
    )


def analyze_ads(
    records: Sequence[AdRecord],
    policy: ThresholdPolicy = DEFAULT_POLICY,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> AnalysisOutput:
    trace = run_analysis(records, policy)
    narrative = compose_report(trace.totals, trace.context, trace.thresholds, trace.segments, policy, text)
    return AnalysisOutput(
        narrative=narrative,
        summary=AnalysisSummary.from_totals(trace.totals, trace.context),
    )
