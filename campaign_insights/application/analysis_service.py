"""Application service for the campaign metrics and A/B inference use case."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, List

from campaign_insights.ab_testing import AbTestEngine
from campaign_insights.aggregation import summarize_overall, summarize_platforms
from campaign_insights.domain.models import AbTestResult, AggregateSummary, ComputedRecord

logger = logging.getLogger(__name__)


class InvalidBatchError(ValueError):
    """The batch is not an ordered sequence of records."""


@dataclass(frozen=True)
class AnalysisResult:
    computed_campaigns: List[ComputedRecord]
    platform_summary: Dict[str, AggregateSummary]
    overall_summary: AggregateSummary
    ab_tests: List[AbTestResult]

    def to_dict(self) -> dict[str, Any]:
        return {
            "computed_campaigns": [record.to_dict() for record in self.computed_campaigns],
            "platform_summary": {name: summary.to_dict() for name, summary in self.platform_summary.items()},
            "overall_summary": self.overall_summary.to_dict(),
            "ab_tests": [test.to_dict() for test in self.ab_tests],
        }


def _validate_batch(batch: Any) -> Sequence[Mapping[str, Any]]:
    if isinstance(batch, (str, bytes, bytearray, Mapping)) or not isinstance(batch, Sequence):
        raise InvalidBatchError("campaigns must be an array (parsed CSV rows)")
    for index, row in enumerate(batch):
        if not isinstance(row, Mapping):
            raise InvalidBatchError(f"campaigns[{index}] must be a record, got {type(row).__name__}")
    return batch


def compute_records(rows: Sequence[Mapping[str, Any]]) -> List[ComputedRecord]:
    return [ComputedRecord.from_row(row) for row in rows]


def run_campaign_analysis(batch: Any) -> AnalysisResult:
    """Compute per-row metrics, platform and overall summaries, and A/B tests for one batch."""
    rows = _validate_batch(batch)
    computed = compute_records(rows)
    platform_summary = summarize_platforms(computed)
    overall_summary = summarize_overall(computed)
    ab_tests = AbTestEngine().run(computed)

    logger.info(
        "Analyzed %d rows: %d platforms, %d A/B tests",
        len(computed),
        len(platform_summary),
        len(ab_tests),
    )
    return AnalysisResult(
        computed_campaigns=computed,
        platform_summary=platform_summary,
        overall_summary=overall_summary,
        ab_tests=ab_tests,
    )
