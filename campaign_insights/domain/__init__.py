"""Domain layer package."""

from .models import AbTestResult, AggregateSummary, ComputedRecord, SignificanceResult, VariantSummary
from .numeric import derive_ratios, parse_number
from .significance import SIGNIFICANCE_LEVEL, two_proportion_z_test

__all__ = [
    "ComputedRecord",
    "AggregateSummary",
    "VariantSummary",
    "SignificanceResult",
    "AbTestResult",
    "parse_number",
    "derive_ratios",
    "two_proportion_z_test",
    "SIGNIFICANCE_LEVEL",
]
