"""Application service for the file-to-report pipeline."""

from __future__ import annotations

from pathlib import Path
from time import perf_counter

from ad_insights.application.analysis_service import analyze_ads
from ad_insights.domain.models import AnalysisOutput
from ad_insights.infrastructure.excel_repository import read_ad_records
from ad_insights.infrastructure.report_exporter import save_narrative_markdown, save_summary_json
from ad_insights.infrastructure.settings import load_threshold_policy

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_INPUT_PATH = PROJECT_ROOT / "data" / "raw" / "input.xlsx"
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "output"


def run_reporting_pipeline(input_path: Path | None = None, output_dir: Path | None = None) -> AnalysisOutput:
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    input_path = input_path or DEFAULT_INPUT_PATH
    output_dir = output_dir or DEFAULT_OUTPUT_DIR
    output_json_path = output_dir / "summary.json"
    output_markdown_path = output_dir / "report.md"

    policy = load_threshold_policy()
    records = read_ad_records(input_path)
    _mark("read_ad_records")
    output = analyze_ads(records, policy)
    _mark("analyze_ads")
    save_summary_json(output_json_path, output.to_dict())
    save_narrative_markdown(output_markdown_path, output.narrative)
    _mark("save_outputs")
    total_elapsed = perf_counter() - pipeline_start

    summary = output.summary
    print(
        "Summary prepared: "
        f"ads={len(records)}, "
        f"spent={summary.total_spent:.2f}, "
        f"results={summary.total_results}, "
        f"dominant_result_type={summary.dominant_result_type}"
    )
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {total_elapsed:.3f}s")
    print(f"Saved JSON: {output_json_path}")
    print(f"Saved Markdown: {output_markdown_path}")
    return output
