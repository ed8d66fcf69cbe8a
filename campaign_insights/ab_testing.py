"""A/B Test Engine: variant discovery within campaign groups and significance checks."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from campaign_insights.domain.models import AbTestResult, ComputedRecord, VariantSummary
from campaign_insights.domain.significance import two_proportion_z_test

GroupKey = Tuple[str, str, str]


class AbTestEngine:
    """Pairs the first two variants of each (platform, campaign, product) group."""

    def _group_key(self, record: ComputedRecord) -> GroupKey:
        return (record.platform, record.campaign_name, record.product)

    def group_records(self, records: Sequence[ComputedRecord]) -> Dict[GroupKey, List[ComputedRecord]]:
        grouped: Dict[GroupKey, List[ComputedRecord]] = {}
        for record in records:
            grouped.setdefault(self._group_key(record), []).append(record)
        return grouped

    @staticmethod
    def variant_buckets(group: Sequence[ComputedRecord]) -> Dict[str, Dict[str, float]]:
        """Accumulate conversions and trials per variant label in first-seen order."""
        buckets: Dict[str, Dict[str, float]] = {}
        for record in group:
            bucket = buckets.setdefault(record.variant, {"conversions": 0.0, "trials": 0.0})
            bucket["conversions"] += record.conversions
            bucket["trials"] += record.trials
        return buckets

    @staticmethod
    def _variant_summary(name: str, bucket: Dict[str, float], rate: float) -> VariantSummary:
        return VariantSummary(
            name=name,
            conversions=bucket["conversions"],
            trials=bucket["trials"],
            rate=rate,
        )

    def compare_group(self, key: GroupKey, group: Sequence[ComputedRecord]) -> AbTestResult | None:
        buckets = self.variant_buckets(group)
        if len(buckets) < 2:
            return None

        # Third and later variants are not compared.
        name_a, name_b = list(buckets)[:2]
        bucket_a, bucket_b = buckets[name_a], buckets[name_b]
        test = two_proportion_z_test(
            bucket_a["conversions"],
            bucket_a["trials"],
            bucket_b["conversions"],
            bucket_b["trials"],
        )
        platform, campaign_name, product = key
        return AbTestResult(
            platform=platform,
            campaign_name=campaign_name,
            product=product,
            variant_a=self._variant_summary(name_a, bucket_a, test.rate_a),
            variant_b=self._variant_summary(name_b, bucket_b, test.rate_b),
            z=test.z,
            p_value=test.p_value,
            significant=test.significant,
        )

    def run(self, records: Sequence[ComputedRecord]) -> List[AbTestResult]:
        results: List[AbTestResult] = []
        for key, group in self.group_records(records).items():
            result = self.compare_group(key, group)
            if result is not None:
                results.append(result)
        return results
