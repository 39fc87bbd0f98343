"""Contract shared with the hosted-model narrative generator."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Protocol, Sequence

from ad_insights.domain.models import AdRecord, AnalysisOutput, AnalysisSummary, CampaignContext

PAYLOAD_ROW_LIMIT = 50
SUMMARY_FIELDS: tuple[str, ...] = (
    "total_spent",
    "total_revenue",
    "avg_roas",
    "avg_cpa",
    "total_results",
    "dominant_result_type",
)


class NarrativeGenerator(Protocol):
    def generate(self, records: Sequence[AdRecord], context: CampaignContext) -> AnalysisOutput:
        ...


def objective_label(context: CampaignContext) -> str:
    if context.is_ecommerce:
        return "E-Commerce (Purchases/ROAS)"
    if context.dominant_result_type == "message":
        return "Messaging (WhatsApp/Messenger)"
    return "Lead Generation"


def narrative_payload(
    records: Sequence[AdRecord],
    context: CampaignContext,
    limit: int = PAYLOAD_ROW_LIMIT,
) -> Dict[str, Any]:
    """Condensed, highest-spend-first rows for the generator prompt.

    ROAS is left out for lead/message accounts, where it is expected to be 0.
    """
    ordered = sorted(records, key=lambda record: -record.amount_spent)[: max(limit, 0)]
    rows: List[Dict[str, Any]] = []
    for record in ordered:
        row: Dict[str, Any] = {
            "ad": record.ad_name,
            "spend": f"{record.amount_spent:.2f}",
            "results": record.results,
            "cpa": f"{record.cost_per_result:.2f}",
            "ctr": f"{record.ctr:.2f}",
            "clicks": record.clicks,
        }
        if context.is_ecommerce:
            row["roas"] = f"{record.roas:.2f}"
        rows.append(row)
    return {
        "objective": objective_label(context),
        "is_ecommerce": context.is_ecommerce,
        "rows": rows,
    }


def ensure_analysis_output(value: Any) -> AnalysisOutput:
    """Shape check for generator output; content is not validated."""
    if isinstance(value, AnalysisOutput):
        return value
    if not isinstance(value, Mapping):
        raise TypeError(f"Narrative generator returned {type(value).__name__}, expected a mapping.")

    narrative = value.get("narrative")
    summary = value.get("summary")
    if not isinstance(narrative, str):
        raise TypeError("Narrative generator output is missing a string 'narrative'.")
    if not isinstance(summary, Mapping):
        raise TypeError("Narrative generator output is missing a 'summary' mapping.")
    missing = [field for field in SUMMARY_FIELDS if field not in summary]
    if missing:
        raise TypeError(f"Narrative generator summary is missing fields: {missing}")

    try:
        parsed = AnalysisSummary(
            total_spent=float(summary["total_spent"]),
            total_revenue=float(summary["total_revenue"]),
            avg_roas=float(summary["avg_roas"]),
            avg_cpa=float(summary["avg_cpa"]),
            total_results=int(summary["total_results"]),
            dominant_result_type=str(summary["dominant_result_type"]),
        )
    except (TypeError, ValueError) as exc:
        raise TypeError(f"Narrative generator summary has non-numeric values: {exc}") from exc
    return AnalysisOutput(narrative=narrative, summary=parsed)
