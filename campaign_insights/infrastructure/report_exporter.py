"""Infrastructure adapter for report export targets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import polars as pl

from campaign_insights.application.analysis_service import AnalysisResult
from campaign_insights.domain.numeric import NUMERIC_FIELDS, RATIO_FIELDS
from campaign_insights.infrastructure.campaign_repository import save_output_workbook

FLOAT_COLUMNS: frozenset[str] = frozenset((*NUMERIC_FIELDS, *RATIO_FIELDS))


def _cell_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def records_frame(rows: Sequence[Mapping[str, Any]], key_column: str | None = None) -> pl.DataFrame:
    """Build a frame with float metric columns and text for everything else."""
    columns: List[str] = []
    if key_column:
        columns.append(key_column)
    for row in rows:
        for name in row:
            if name not in columns:
                columns.append(name)

    data: Dict[str, List[Any]] = {}
    schema: Dict[str, Any] = {}
    for name in columns:
        if name in FLOAT_COLUMNS:
            data[name] = [row.get(name) for row in rows]
            schema[name] = pl.Float64
        else:
            data[name] = [_cell_text(row.get(name)) for row in rows]
            schema[name] = pl.Utf8
    return pl.DataFrame(data, schema=schema)


def _ab_test_rows(result: AnalysisResult) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for test in result.ab_tests:
        rows.append(
            {
                "platform": test.platform,
                "campaign_name": test.campaign_name,
                "product": test.product,
                "variant_a": test.variant_a.name,
                "conversions_a": test.variant_a.conversions,
                "trials_a": test.variant_a.trials,
                "rate_a": test.variant_a.rate,
                "variant_b": test.variant_b.name,
                "conversions_b": test.variant_b.conversions,
                "trials_b": test.variant_b.trials,
                "rate_b": test.variant_b.rate,
                "z": test.z,
                "p_value": test.p_value,
                "significant": test.significant,
            }
        )
    return rows


def ab_tests_frame(result: AnalysisResult) -> pl.DataFrame:
    schema: Dict[str, Any] = {
        "platform": pl.Utf8,
        "campaign_name": pl.Utf8,
        "product": pl.Utf8,
        "variant_a": pl.Utf8,
        "conversions_a": pl.Float64,
        "trials_a": pl.Float64,
        "rate_a": pl.Float64,
        "variant_b": pl.Utf8,
        "conversions_b": pl.Float64,
        "trials_b": pl.Float64,
        "rate_b": pl.Float64,
        "z": pl.Float64,
        "p_value": pl.Float64,
        "significant": pl.Boolean,
    }
    return pl.DataFrame(_ab_test_rows(result), schema=schema)


def report_sheets(result: AnalysisResult) -> Dict[str, pl.DataFrame]:
    platform_rows = [
        {"platform": name, **summary.to_dict()} for name, summary in result.platform_summary.items()
    ]
    return {
        "campaigns": records_frame([record.to_dict() for record in result.computed_campaigns]),
        "platforms": records_frame(platform_rows, key_column="platform"),
        "overall": records_frame([result.overall_summary.to_dict()]),
        "ab_tests": ab_tests_frame(result),
    }


def save_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False, default=str), encoding="utf-8")


def save_summary_excel(path: Path, result: AnalysisResult) -> tuple[bool, str]:
    return save_output_workbook(path, report_sheets(result))
