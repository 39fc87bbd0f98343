"""Shared numeric/formatting utilities for reporting."""

from __future__ import annotations

from typing import Any

import polars as pl


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    safe_den = pl.when(den > 0).then(den).otherwise(None)
    return (num / safe_den).fill_null(0.0)


def fmt_money(value: float | None) -> str:
    if value is None:
        return "$0.00"
    return f"${value:,.2f}"


def fmt_money_total(value: float | None) -> str:
    if value is None:
        return "$0"
    return f"${value:,.0f}"


def fmt_count(value: float | None) -> str:
    if value is None:
        return "0"
    return f"{value:,.0f}"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.2f}"


def fmt_pct(value: float | None) -> str:
    """Format a value already expressed in percent (e.g. CTR 1.234 -> 1.23%)."""
    if value is None:
        return "N/A"
    return f"{value:.2f}%"
