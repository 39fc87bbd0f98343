"""Ad performance insights package."""

from .application import analyze_ads, run_analysis, run_reporting_pipeline
from .domain import AdRecord, AnalysisOutput, ThresholdPolicy
from .infrastructure import read_ad_records

__all__ = [
    "AdRecord",
    "AnalysisOutput",
    "ThresholdPolicy",
    "analyze_ads",
    "run_analysis",
    "read_ad_records",
    "run_reporting_pipeline",
]
