"""Application layer package."""

from .analysis_service import AnalysisTrace, analyze_ads, run_analysis
from .narrative_service import NarrativeGenerator, ensure_analysis_output, narrative_payload, objective_label
from .report_service import run_reporting_pipeline

__all__ = [
    "AnalysisTrace",
    "NarrativeGenerator",
    "analyze_ads",
    "ensure_analysis_output",
    "narrative_payload",
    "objective_label",
    "run_analysis",
    "run_reporting_pipeline",
]
