"""Numeric coercion and zero-guarded ratio helpers."""

from __future__ import annotations

import math
import re
from numbers import Real
from typing import Any, Mapping

import polars as pl

NUMERIC_FIELDS: tuple[str, ...] = ("impressions", "clicks", "conversions", "spend", "revenue")
RATIO_FIELDS: tuple[str, ...] = ("CTR", "CPC", "CPA", "ROAS")
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-eE]")


def parse_number(value: Any) -> float:
    """Coerce any raw cell value into a finite float, falling back to 0."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, Real) and not isinstance(value, bool):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return 0.0
        if not number or not math.isfinite(number):
            return 0.0
        return number
    cleaned = _NON_NUMERIC_CHARS.sub("", str(value))
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def text_or_default(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return str(value)


def safe_ratio(num: float, den: float) -> float:
    if den <= 0:
        return 0.0
    return num / den


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    safe_den = pl.when(den > 0).then(den).otherwise(None)
    return (num / safe_den).fill_null(0.0)


def derive_ratios(
    impressions: float,
    clicks: float,
    conversions: float,
    spend: float,
    revenue: float,
) -> dict[str, float]:
    return {
        "CTR": safe_ratio(clicks, impressions),
        "CPC": safe_ratio(spend, clicks),
        "CPA": safe_ratio(spend, conversions),
        "ROAS": safe_ratio(revenue, spend),
    }


def ratio_exprs() -> list[pl.Expr]:
    return [
        safe_ratio_expr(pl.col("clicks"), pl.col("impressions")).alias("CTR"),
        safe_ratio_expr(pl.col("spend"), pl.col("clicks")).alias("CPC"),
        safe_ratio_expr(pl.col("spend"), pl.col("conversions")).alias("CPA"),
        safe_ratio_expr(pl.col("revenue"), pl.col("spend")).alias("ROAS"),
    ]


def coerce_counters(row: Mapping[str, Any]) -> dict[str, float]:
    return {field: parse_number(row.get(field)) for field in NUMERIC_FIELDS}
