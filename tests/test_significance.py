"""Tests for the two-proportion z-test."""

import math

import pytest

from campaign_insights.domain.significance import SIGNIFICANCE_LEVEL, normal_cdf, two_proportion_z_test


def test_normal_cdf_reference_points():
    assert normal_cdf(0) == pytest.approx(0.5)
    assert normal_cdf(1.96) == pytest.approx(0.975, abs=1e-4)
    assert normal_cdf(-1.96) == pytest.approx(0.025, abs=1e-4)


def test_fifty_of_thousand_vs_thirty_of_thousand():
    result = two_proportion_z_test(50, 1000, 30, 1000)

    assert result.rate_a == pytest.approx(0.05)
    assert result.rate_b == pytest.approx(0.03)
    se = math.sqrt(0.04 * 0.96 * (1 / 1000 + 1 / 1000))
    assert result.z == pytest.approx(0.02 / se)
    assert result.z == pytest.approx(2.2822, abs=1e-4)
    assert result.p_value == pytest.approx(math.erfc(abs(result.z) / math.sqrt(2)), abs=1e-9)
    assert result.p_value == pytest.approx(0.0225, abs=5e-4)
    assert result.significant is True


def test_small_difference_is_not_significant():
    result = two_proportion_z_test(50, 1000, 45, 1000)
    assert result.p_value > SIGNIFICANCE_LEVEL
    assert result.significant is False


def test_swapping_sides_flips_z_but_not_p():
    forward = two_proportion_z_test(20, 400, 35, 420)
    backward = two_proportion_z_test(35, 420, 20, 400)
    assert forward.z == pytest.approx(-backward.z)
    assert forward.p_value == pytest.approx(backward.p_value)


@pytest.mark.parametrize("args", [(5, 0, 3, 100), (5, 100, 3, 0), (0, 0, 0, 0), (7, -10, 3, 100)])
def test_zero_trials_is_degenerate(args):
    result = two_proportion_z_test(*args)
    assert result.z == 0
    assert result.p_value == 1
    assert result.significant is False


def test_zero_trials_keeps_rate_of_populated_side():
    result = two_proportion_z_test(5, 0, 3, 100)
    assert result.rate_a == 0
    assert result.rate_b == pytest.approx(0.03)


@pytest.mark.parametrize("args", [(0, 100, 0, 200), (100, 100, 50, 50)])
def test_zero_variance_is_degenerate(args):
    result = two_proportion_z_test(*args)
    assert result.z == 0
    assert result.p_value == 1
    assert result.significant is False


def test_conversions_above_trials_does_not_raise():
    result = two_proportion_z_test(300, 100, 300, 100)
    assert result.p_value == 1
    assert result.significant is False
