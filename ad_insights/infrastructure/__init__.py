"""Infrastructure layer package."""

from .excel_repository import read_ad_records
from .report_exporter import save_narrative_markdown, save_summary_json
from .settings import load_threshold_policy

__all__ = ["read_ad_records", "save_summary_json", "save_narrative_markdown", "load_threshold_policy"]
