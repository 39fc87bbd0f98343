"""Domain layer package."""

from .context import detect_context, summarize_account
from .models import (
    DEFAULT_POLICY,
    AccountTotals,
    AdRecord,
    AggregatedGroup,
    AnalysisOutput,
    AnalysisSummary,
    CampaignContext,
    EcommerceMode,
    SegmentationResult,
    ThresholdPolicy,
    Thresholds,
    VolumeMode,
)
from .segmentation import segment
from .thresholds import compute_thresholds

__all__ = [
    "DEFAULT_POLICY",
    "AccountTotals",
    "AdRecord",
    "AggregatedGroup",
    "AnalysisOutput",
    "AnalysisSummary",
    "CampaignContext",
    "EcommerceMode",
    "SegmentationResult",
    "ThresholdPolicy",
    "Thresholds",
    "VolumeMode",
    "compute_thresholds",
    "detect_context",
    "segment",
    "summarize_account",
]
