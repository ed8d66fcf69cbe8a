"""Tests for numeric coercion and row-level ratio derivation."""

import math

import pytest

from campaign_insights.domain.numeric import derive_ratios, parse_number, safe_ratio, text_or_default


# ── Numeric Coercion ─────────────────────────────────────────────────


def test_parse_number_strips_currency_and_thousands():
    assert parse_number("1,234.5 USD") == 1234.5


def test_parse_number_blank_and_none_are_zero():
    assert parse_number("") == 0
    assert parse_number(None) == 0


def test_parse_number_keeps_negative_sign():
    assert parse_number(-5) == -5
    assert parse_number("-5") == -5


def test_parse_number_passes_numbers_through():
    assert parse_number(42) == 42.0
    assert parse_number(0.25) == 0.25
    assert parse_number(0) == 0


def test_parse_number_accepts_exponent_notation():
    assert parse_number("1e3") == 1000.0
    assert parse_number("2.5E2") == 250.0


@pytest.mark.parametrize("raw", ["abc", "1.2.3", "--5", ".", "N/A", "1,234 EUR"])
def test_parse_number_garbage_is_zero(raw):
    assert parse_number(raw) == 0


def test_parse_number_non_finite_is_zero():
    assert parse_number(float("nan")) == 0
    assert parse_number(float("inf")) == 0
    assert parse_number("1e999") == 0


def test_parse_number_booleans_are_not_numbers():
    assert parse_number(True) == 0
    assert parse_number(False) == 0


def test_parse_number_percent_and_dollar():
    assert parse_number("$2,500") == 2500.0
    assert parse_number("12%") == 12.0


# ── Row Metrics ──────────────────────────────────────────────────────


def test_derive_ratios_basic():
    ratios = derive_ratios(impressions=100, clicks=10, conversions=2, spend=50, revenue=200)
    assert ratios == {"CTR": 0.1, "CPC": 5.0, "CPA": 25.0, "ROAS": 4.0}


def test_derive_ratios_zero_denominators_are_zero():
    ratios = derive_ratios(impressions=0, clicks=0, conversions=0, spend=0, revenue=500)
    assert ratios == {"CTR": 0.0, "CPC": 0.0, "CPA": 0.0, "ROAS": 0.0}
    assert all(math.isfinite(value) for value in ratios.values())


def test_derive_ratios_negative_numerator_is_not_clamped():
    ratios = derive_ratios(impressions=100, clicks=-10, conversions=1, spend=10, revenue=5)
    assert ratios["CTR"] == pytest.approx(-0.1)
    assert ratios["CPC"] == 0.0


def test_safe_ratio_requires_positive_denominator():
    assert safe_ratio(5, 0) == 0.0
    assert safe_ratio(5, -1) == 0.0
    assert safe_ratio(5, 2) == 2.5


def test_text_or_default():
    assert text_or_default(None, "unknown") == "unknown"
    assert text_or_default("", "unknown") == "unknown"
    assert text_or_default("Meta", "unknown") == "Meta"
    assert text_or_default(2, "default") == "2"


def test_parse_number_huge_int_is_zero_instead_of_raising():
    assert parse_number(10**400) == 0
    assert parse_number(-(10**400)) == 0


def test_falsy_labels_other_than_blank_are_kept_as_text():
    assert text_or_default(0, "default") == "0"
    assert text_or_default(False, "unknown") == "False"
