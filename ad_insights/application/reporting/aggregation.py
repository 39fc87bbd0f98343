"""Group roll-ups for ad-sets and creatives."""

from __future__ import annotations

from typing import Any, Callable, List, Sequence

import polars as pl

from ad_insights.application.reporting.metrics import safe_ratio_expr, to_float
from ad_insights.domain.models import AdRecord, AggregatedGroup

GROUP_KEY = "group_key"
AGGREGATION_SCHEMA: dict[str, Any] = {
    GROUP_KEY: pl.Utf8,
    "spend": pl.Float64,
    "revenue": pl.Float64,
    "results": pl.Int64,
    "impressions": pl.Float64,
    "clicks": pl.Float64,
}
SUM_COLUMNS: List[str] = ["spend", "revenue", "results", "impressions", "clicks"]


def sum_aggregations() -> list[pl.Expr]:
    return [pl.col(column).sum().alias(column) for column in SUM_COLUMNS]


def ratio_columns() -> list[pl.Expr]:
    return [
        safe_ratio_expr(pl.col("revenue"), pl.col("spend")).alias("roas"),
        safe_ratio_expr(pl.col("spend"), pl.col("results").cast(pl.Float64)).alias("cpa"),
        (safe_ratio_expr(pl.col("clicks"), pl.col("impressions")) * 100).alias("ctr"),
    ]


def _group_key(value: Any, entity: str) -> str:
    text = str(value).strip() if value is not None else ""
    return text if text else f"Unknown {entity}"


def aggregate(
    records: Sequence[AdRecord],
    key_fn: Callable[[AdRecord], Any],
    entity: str = "Group",
) -> list[AggregatedGroup]:
    """Roll records up by key, keeping first-seen key order.

    Totals are summed first; ROAS/CPA/CTR are derived on the finished sums.
    """
    if not records:
        return []

    rows = [
        {
            GROUP_KEY: _group_key(key_fn(record), entity),
            "spend": float(record.amount_spent),
            "revenue": float(record.revenue),
            "results": int(record.results),
            "impressions": float(record.impressions),
            "clicks": float(record.clicks),
        }
        for record in records
    ]
    frame = pl.DataFrame(rows, schema=AGGREGATION_SCHEMA)
    summed = frame.group_by(GROUP_KEY, maintain_order=True).agg(sum_aggregations())
    derived = summed.with_columns(ratio_columns())

    return [
        AggregatedGroup(
            name=str(row[GROUP_KEY]),
            spend=to_float(row.get("spend")),
            revenue=to_float(row.get("revenue")),
            results=int(row.get("results") or 0),
            impressions=to_float(row.get("impressions")),
            clicks=to_float(row.get("clicks")),
            roas=to_float(row.get("roas")),
            cpa=to_float(row.get("cpa")),
            ctr=to_float(row.get("ctr")),
        )
        for row in derived.iter_rows(named=True)
    ]


def aggregate_ad_sets(records: Sequence[AdRecord]) -> list[AggregatedGroup]:
    return aggregate(records, lambda record: record.ad_set_name, entity="Ad Set")


def aggregate_creatives(records: Sequence[AdRecord]) -> list[AggregatedGroup]:
    return aggregate(records, lambda record: record.ad_name, entity="Creative")
