"""Two-proportion z-test for conversion-rate comparisons."""

from __future__ import annotations

from math import erf, sqrt

from campaign_insights.domain.models import SignificanceResult

SIGNIFICANCE_LEVEL = 0.05


def normal_cdf(x: float) -> float:
    # Standard normal CDF via the error function.
    return 0.5 * (1.0 + erf(x / sqrt(2.0)))


def two_proportion_z_test(
    successes_a: float,
    trials_a: float,
    successes_b: float,
    trials_b: float,
) -> SignificanceResult:
    """Compare two conversion rates using a pooled standard error.

    Degenerate inputs (no trials on either side, or zero pooled variance)
    return z=0 and p=1 instead of raising.
    """
    rate_a = successes_a / trials_a if trials_a > 0 else 0.0
    rate_b = successes_b / trials_b if trials_b > 0 else 0.0
    if trials_a <= 0 or trials_b <= 0:
        return SignificanceResult(z=0.0, p_value=1.0, significant=False, rate_a=rate_a, rate_b=rate_b)

    pooled = (successes_a + successes_b) / (trials_a + trials_b)
    variance = pooled * (1 - pooled) * (1 / trials_a + 1 / trials_b)
    se = sqrt(variance) if variance > 0 else 0.0
    if se == 0:
        return SignificanceResult(z=0.0, p_value=1.0, significant=False, rate_a=rate_a, rate_b=rate_b)

    z = (rate_a - rate_b) / se
    p_value = 2 * (1 - normal_cdf(abs(z)))
    return SignificanceResult(
        z=z,
        p_value=p_value,
        significant=p_value < SIGNIFICANCE_LEVEL,
        rate_a=rate_a,
        rate_b=rate_b,
    )
