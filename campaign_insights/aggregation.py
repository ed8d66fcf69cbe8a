"""Aggregation Engine: counter sums per key with ratios re-derived from the sums."""

from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, List, Sequence

import polars as pl

from campaign_insights.domain.models import AggregateSummary, ComputedRecord
from campaign_insights.domain.numeric import NUMERIC_FIELDS, ratio_exprs

OVERALL_KEY = "overall"


def _sum_aggregations() -> List[pl.Expr]:
    return [pl.col(name).sum().alias(name) for name in NUMERIC_FIELDS]


def _counter_frame(records: Sequence[ComputedRecord], keys: List[str]) -> pl.DataFrame:
    data: Dict[str, List[Any]] = {"key": keys}
    for name in NUMERIC_FIELDS:
        data[name] = [getattr(record, name) for record in records]
    schema: Dict[str, Any] = {"key": pl.Utf8, **{name: pl.Float64 for name in NUMERIC_FIELDS}}
    return pl.DataFrame(data, schema=schema)


def summarize_by(
    records: Sequence[ComputedRecord],
    key_fn: Callable[[ComputedRecord], Hashable],
) -> Dict[str, AggregateSummary]:
    """Sum the five counters per key, then derive CTR/CPC/CPA/ROAS from those sums.

    Keys iterate in first-seen order. Ratios are never averaged across rows.
    """
    keys = [str(key_fn(record)) for record in records]
    frame = _counter_frame(records, keys)
    if frame.is_empty():
        return {}

    grouped = (
        frame.group_by("key", maintain_order=True)
        .agg(_sum_aggregations())
        .with_columns(ratio_exprs())
    )
    return {str(row["key"]): AggregateSummary.from_row(row) for row in grouped.to_dicts()}


def summarize_platforms(records: Sequence[ComputedRecord]) -> Dict[str, AggregateSummary]:
    return summarize_by(records, lambda record: record.platform)


def summarize_overall(records: Sequence[ComputedRecord]) -> AggregateSummary:
    frame = _counter_frame(records, [OVERALL_KEY] * len(records))
    totals = frame.select(_sum_aggregations()).with_columns(ratio_exprs())
    return AggregateSummary.from_row(totals.to_dicts()[0])
