"""Markdown section builders for the ad performance report.

All prose comes from a text table (``ENGLISH_TEXT`` by default). Entries are
``str.format`` templates; a table for another language only has to provide the
same keys.
"""

from __future__ import annotations

from typing import Callable, List, Mapping, Sequence

from ad_insights.application.reporting.metrics import (
    fmt_count,
    fmt_money,
    fmt_money_total,
    fmt_pct,
    fmt_roas,
)
from ad_insights.application.reporting.selectors import GROUP_LIMIT, ROW_LIMIT, kill_list, top_n, wasted_budget
from ad_insights.domain.models import (
    DEFAULT_POLICY,
    AccountTotals,
    AdRecord,
    AggregatedGroup,
    CampaignContext,
    EcommerceMode,
    SegmentationResult,
    ThresholdPolicy,
    Thresholds,
)

SECTION_SEPARATOR = "\n\n---\n\n"

ENGLISH_TEXT: dict[str, str] = {
    "title": "## Ad performance report",
    "no_data": "No ad data was provided, so there is nothing to assess here yet.",
    "label_purchase": "purchases",
    "label_message": "messaging conversations",
    "label_lead": "leads",
    "label_generic": "results",
    # per-row and per-group performance fragments
    "record_roas": "ROAS **{roas}** on **{spend}** spend",
    "record_cpa": "**{cpa}** per result, {results} results on **{spend}** spend",
    "group_roas": "ROAS **{roas}** on **{spend}** spend, {results} results",
    "group_no_results": "no results on **{spend}** spend",
    "group_cpa": "CPA **{cpa}** with {results} results on **{spend}** spend",
    "group_ctr": ", CTR {ctr}",
    # health summary
    "health_heading": "Health summary",
    "health_intro": "Total spend is **{spend}** across {ads} ads, bringing **{results}** {label}.",
    "health_roas": "- **Overall ROAS:** {roas} on {revenue} attributed revenue.",
    "health_roas_low": (
        "- Warning: ROAS {roas} is below {healthy}. Review the creatives and the offer before adding budget."
    ),
    "health_roas_ok": "- ROAS {roas} is at or above {healthy}, so there is room to increase budget.",
    "health_cpa": "- **Average cost per result:** {cpa}.",
    "health_zombies": "- **{count}** ads spent budget without a single result.",
    # kill list
    "kill_heading": "What to kill",
    "kill_none": "No issues found: every ad with meaningful spend is producing results at an acceptable level.",
    "kill_intro": "About **{wasted}** went into underperforming ads. Stop these now:",
    "kill_zombies": "**Spending without results:**",
    "kill_zombie_row": "- {ad}: spent **{spend}** with zero results.",
    "kill_low_roas": "**Low ROAS (below {roas}):**",
    "kill_high_cpa": "**High cost per result (above {cpa}):**",
    "kill_average": " (average is {cpa})",
    # scale list
    "scale_heading": "What to scale",
    "scale_none_roas": "No clear winners yet. Launch new creatives to beat the current ROAS of {roas}.",
    "scale_none_cpa": (
        "No clear winners yet. Launch new creatives to beat the current average cost per result of {cpa}."
    ),
    "scale_intro": "These ads clear the good threshold, so raise their budget:",
    "scale_tip": "**Tip:** duplicate these ads into a fresh campaign-budget campaign to scale them.",
    # test list
    "test_heading": "What to test",
    "test_none": "No under-spent ads are beating the account average yet.",
    "test_intro": (
        "These ads spent less than {spend} but already match or beat "
        "the account average. Give them more budget before judging:"
    ),
    # ad-sets
    "ad_set_heading": "Ad-set insights",
    "ad_set_bad": "Ad-sets to cut back",
    "ad_set_bad_none": "No issues: no ad-set is dragging the account down.",
    "ad_set_good": "Ad-sets to grow",
    "ad_set_good_none": "No clear winners yet among the ad-sets.",
    # creatives
    "creative_heading": "Creative insights",
    "creative_best": "Best creatives",
    "creative_best_none": "No clear winners yet among the creatives.",
    "creative_worst": "Weakest creatives",
    "creative_worst_none": "No issues: no creative with meaningful spend is underperforming.",
}


def ad_marker(name: str) -> str:
    """Wrap a name in backticks so the UI can link it."""
    return f"`{name}`"


def result_label(result_type: str, text: Mapping[str, str] = ENGLISH_TEXT) -> str:
    return text.get(f"label_{result_type}", text["label_generic"])


def _section(heading: str, lines: Sequence[str]) -> str:
    return "\n".join([f"### {heading}", *lines])


def _record_performance(record: AdRecord, thresholds: Thresholds, text: Mapping[str, str]) -> str:
    if isinstance(thresholds.mode, EcommerceMode):
        return text["record_roas"].format(roas=fmt_roas(record.roas), spend=fmt_money(record.amount_spent))
    return text["record_cpa"].format(
        cpa=fmt_money(record.cost_per_result),
        results=fmt_count(record.results),
        spend=fmt_money(record.amount_spent),
    )


def _group_performance(group: AggregatedGroup, thresholds: Thresholds, text: Mapping[str, str]) -> str:
    spend = fmt_money(group.spend)
    results = fmt_count(group.results)
    if isinstance(thresholds.mode, EcommerceMode):
        return text["group_roas"].format(roas=fmt_roas(group.roas), spend=spend, results=results)
    if group.results <= 0:
        return text["group_no_results"].format(spend=spend)
    return text["group_cpa"].format(cpa=fmt_money(group.cpa), results=results, spend=spend)


def health_summary_section(
    totals: AccountTotals,
    context: CampaignContext,
    segments: SegmentationResult,
    policy: ThresholdPolicy = DEFAULT_POLICY,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["health_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    lines: List[str] = [
        text["health_intro"].format(
            spend=fmt_money_total(totals.total_spent),
            ads=fmt_count(totals.row_count),
            results=fmt_count(totals.total_results),
            label=result_label(context.dominant_result_type, text),
        ),
        "",
    ]
    if context.is_ecommerce:
        roas = fmt_roas(totals.avg_roas)
        healthy = fmt_roas(policy.healthy_roas)
        lines.append(text["health_roas"].format(roas=roas, revenue=fmt_money_total(totals.total_revenue)))
        if totals.avg_roas < policy.healthy_roas:
            lines.append(text["health_roas_low"].format(roas=roas, healthy=healthy))
        else:
            lines.append(text["health_roas_ok"].format(roas=roas, healthy=healthy))
    else:
        lines.append(text["health_cpa"].format(cpa=fmt_money(totals.avg_cpa)))
        lines.append(text["health_zombies"].format(count=fmt_count(len(segments.zombies))))
    return _section(heading, lines)


def kill_list_section(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["kill_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    zombies, bleeders = kill_list(segments, ROW_LIMIT)
    if not zombies and not bleeders:
        return _section(heading, [text["kill_none"]])

    lines: List[str] = [text["kill_intro"].format(wasted=fmt_money(wasted_budget(segments))), ""]
    if zombies:
        lines.append(text["kill_zombies"])
        for record in zombies:
            lines.append(
                text["kill_zombie_row"].format(ad=ad_marker(record.ad_name), spend=fmt_money(record.amount_spent))
            )
        lines.append("")
    if bleeders:
        mode = thresholds.mode
        if isinstance(mode, EcommerceMode):
            lines.append(text["kill_low_roas"].format(roas=fmt_roas(mode.roas_bad)))
            suffix = ""
        else:
            lines.append(text["kill_high_cpa"].format(cpa=fmt_money(mode.cpa_bad)))
            suffix = text["kill_average"].format(cpa=fmt_money(mode.avg_cpa))
        for record in bleeders:
            lines.append(f"- {ad_marker(record.ad_name)}: {_record_performance(record, thresholds, text)}{suffix}.")
    return _section(heading, lines).rstrip()


def scale_list_section(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["scale_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    winners = top_n(segments.winners, ROW_LIMIT)
    if not winners:
        if context.is_ecommerce:
            fallback = text["scale_none_roas"].format(roas=fmt_roas(totals.avg_roas))
        else:
            fallback = text["scale_none_cpa"].format(cpa=fmt_money(totals.avg_cpa))
        return _section(heading, [fallback])

    lines: List[str] = [text["scale_intro"], ""]
    for record in winners:
        lines.append(f"- {ad_marker(record.ad_name)}: {_record_performance(record, thresholds, text)}.")
    lines.append("")
    lines.append(text["scale_tip"])
    return _section(heading, lines)


def potentials_section(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["test_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    potentials = top_n(segments.potentials, ROW_LIMIT)
    if not potentials:
        return _section(heading, [text["test_none"]])

    lines: List[str] = [text["test_intro"].format(spend=fmt_money(thresholds.significance_spend)), ""]
    for record in potentials:
        lines.append(f"- {ad_marker(record.ad_name)}: {_record_performance(record, thresholds, text)}.")
    return _section(heading, lines)


def _group_lines(
    title: str,
    groups: Sequence[AggregatedGroup],
    thresholds: Thresholds,
    empty_text: str,
    text: Mapping[str, str],
    extra: Callable[[AggregatedGroup], str] | None = None,
) -> List[str]:
    lines = [f"**{title}:**"]
    if not groups:
        lines.append(f"- {empty_text}")
        return lines
    for group in groups:
        suffix = extra(group) if extra is not None else ""
        lines.append(f"- {ad_marker(group.name)}: {_group_performance(group, thresholds, text)}{suffix}.")
    return lines


def ad_set_section(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["ad_set_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    lines = _group_lines(
        text["ad_set_bad"],
        top_n(segments.bad_ad_sets, GROUP_LIMIT),
        thresholds,
        text["ad_set_bad_none"],
        text,
    )
    lines.append("")
    lines.extend(
        _group_lines(
            text["ad_set_good"],
            top_n(segments.good_ad_sets, GROUP_LIMIT),
            thresholds,
            text["ad_set_good_none"],
            text,
        )
    )
    return _section(heading, lines)


def creative_section(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    heading = text["creative_heading"]
    if totals.row_count == 0:
        return _section(heading, [text["no_data"]])

    def _ctr(group: AggregatedGroup) -> str:
        return text["group_ctr"].format(ctr=fmt_pct(group.ctr))

    lines = _group_lines(
        text["creative_best"],
        top_n(segments.best_creatives, GROUP_LIMIT),
        thresholds,
        text["creative_best_none"],
        text,
        extra=_ctr,
    )
    lines.append("")
    lines.extend(
        _group_lines(
            text["creative_worst"],
            top_n(segments.worst_creatives, GROUP_LIMIT),
            thresholds,
            text["creative_worst_none"],
            text,
            extra=_ctr,
        )
    )
    return _section(heading, lines)


def compose_report(
    totals: AccountTotals,
    context: CampaignContext,
    thresholds: Thresholds,
    segments: SegmentationResult,
    policy: ThresholdPolicy = DEFAULT_POLICY,
    text: Mapping[str, str] = ENGLISH_TEXT,
) -> str:
    sections = [
        health_summary_section(totals, context, segments, policy, text),
        kill_list_section(totals, context, thresholds, segments, text),
        scale_list_section(totals, context, thresholds, segments, text),
        potentials_section(totals, context, thresholds, segments, text),
        ad_set_section(totals, context, thresholds, segments, text),
        creative_section(totals, context, thresholds, segments, text),
    ]
    return f"{text['title']}\n\n" + SECTION_SEPARATOR.join(sections) + "\n"
