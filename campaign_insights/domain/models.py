"""Domain models for campaign metrics and A/B comparisons."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from campaign_insights.domain.numeric import (
    coerce_counters,
    derive_ratios,
    text_or_default,
)

DEFAULT_PLATFORM = "unknown"
DEFAULT_CAMPAIGN = "unknown"
DEFAULT_VARIANT = "default"


@dataclass(frozen=True)
class ComputedRecord:
    """One input row with coerced counters and derived ratios."""

    platform: str
    campaign_name: str
    product: str
    variant: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float
    cpc: float
    cpa: float
    roas: float
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ComputedRecord":
        counters = coerce_counters(row)
        ratios = derive_ratios(**counters)
        return cls(
            platform=text_or_default(row.get("platform"), DEFAULT_PLATFORM),
            campaign_name=text_or_default(row.get("campaign_name"), DEFAULT_CAMPAIGN),
            product=text_or_default(row.get("product"), ""),
            variant=text_or_default(row.get("variant"), DEFAULT_VARIANT),
            ctr=ratios["CTR"],
            cpc=ratios["CPC"],
            cpa=ratios["CPA"],
            roas=ratios["ROAS"],
            raw=dict(row),
            **counters,
        )

    @property
    def trials(self) -> float:
        """Denominator contributed to a variant's conversion rate."""
        return self.clicks if self.clicks > 0 else self.impressions

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.raw,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "conversions": self.conversions,
            "spend": self.spend,
            "revenue": self.revenue,
            "CTR": self.ctr,
            "CPC": self.cpc,
            "CPA": self.cpa,
            "ROAS": self.roas,
        }


@dataclass(frozen=True)
class AggregateSummary:
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    ctr: float
    cpc: float
    cpa: float
    roas: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AggregateSummary":
        return cls(
            impressions=float(row["impressions"]),
            clicks=float(row["clicks"]),
            conversions=float(row["conversions"]),
            spend=float(row["spend"]),
            revenue=float(row["revenue"]),
            ctr=float(row["CTR"]),
            cpc=float(row["CPC"]),
            cpa=float(row["CPA"]),
            roas=float(row["ROAS"]),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "impressions": self.impressions,
            "clicks": self.clicks,
            "conversions": self.conversions,
            "spend": self.spend,
            "revenue": self.revenue,
            "CTR": self.ctr,
            "CPC": self.cpc,
            "CPA": self.cpa,
            "ROAS": self.roas,
        }


@dataclass(frozen=True)
class SignificanceResult:
    z: float
    p_value: float
    significant: bool
    rate_a: float
    rate_b: float


@dataclass(frozen=True)
class VariantSummary:
    name: str
    conversions: float
    trials: float
    rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "conversions": self.conversions,
            "trials": self.trials,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class AbTestResult:
    """Comparison of the first two variants discovered in a campaign group."""

    platform: str
    campaign_name: str
    product: str
    variant_a: VariantSummary
    variant_b: VariantSummary
    z: float
    p_value: float
    significant: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "campaign_name": self.campaign_name,
            "platform": self.platform,
            "product": self.product,
            "A": self.variant_a.to_dict(),
            "B": self.variant_b.to_dict(),
            "z": self.z,
            "p_value": self.p_value,
            "significant": self.significant,
        }
