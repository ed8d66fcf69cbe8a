"""Text rendering helpers for the text-generation brief."""

from __future__ import annotations

from typing import List

from campaign_insights.application.analysis_service import AnalysisResult
from campaign_insights.application.reporting.metrics import (
    fmt_count,
    fmt_flag,
    fmt_money,
    fmt_p_value,
    fmt_pct,
    fmt_roas,
    fmt_z,
    row_json,
)
from campaign_insights.config import SAMPLE_ROW_LIMIT
from campaign_insights.domain.models import AbTestResult, AggregateSummary

BRIEF_INTRO = (
    'You are an expert growth marketer and data scientist. A user has requested analysis with the following focus: "{focus}".\n'
    'User question / request: "{question}"\n\n'
    "You will analyze ad campaign performance across channels (Meta, Google, TikTok and others), "
    "compare campaigns for the same product across channels, and evaluate A/B tests as relevant to the "
    "user's selected focus. Use the computed metrics and A/B test results provided. Produce:\n"
    "- A concise executive summary (3-6 bullets)\n"
    "- Prioritized recommendations (ranked by expected impact and ease of implementation)\n"
    "- Specific action items (tests to run next, budget shifts, creative changes, audience recommendations)\n"
    "- KPI targets and guardrails\n"
    "- Suggested experiment sample sizes or next steps when statistical power is insufficient\n"
    "- A short explanation of expected business impact with conservative estimates\n"
    "If you need clarifying info from the user (time windows, desired KPI weighting, minimum ROAS, "
    "acceptable CPA), ask focused follow-up questions. Keep recommendations concise and actionable. "
    "Provide any assumptions you make.\n\n"
    "Summary of platform-level aggregates:\n\n"
)

BRIEF_EXPECTATIONS = (
    "\nAnalysis expectations and constraints:\n"
    "- Prioritize actions that increase sustainable growth and decrease CPA while maintaining or improving ROAS.\n"
    "- Where decisions require statistical confidence, recommend sample sizes and targets for significance.\n"
    "- Suggest concrete next experiments (creative, audience, bid strategy, funnel) with expected effect and timeline (1-4 weeks).\n"
    "- Provide suggested KPI guardrails (target CTR, CPC, CPA, ROAS) per platform or product when relevant.\n"
    "- If budget reallocation is recommended, specify amounts/percentages and rationale.\n"
    "\nNow provide the analysis."
)


def summary_block(summary: AggregateSummary) -> str:
    return (
        f"  Impressions: {fmt_count(summary.impressions)}\n"
        f"  Clicks: {fmt_count(summary.clicks)}\n"
        f"  Conversions: {fmt_count(summary.conversions)}\n"
        f"  Spend: {fmt_count(summary.spend)}\n"
        f"  Revenue: {fmt_count(summary.revenue)}\n"
        f"  CTR: {fmt_pct(summary.ctr)}\n"
        f"  CPC: {fmt_money(summary.cpc)}\n"
        f"  CPA: {fmt_money(summary.cpa)}\n"
        f"  ROAS: {fmt_roas(summary.roas)}\n\n"
    )


def ab_test_block(test: AbTestResult) -> str:
    a, b = test.variant_a, test.variant_b
    return (
        f"Campaign: {test.campaign_name} (platform: {test.platform}, product: {test.product or 'N/A'})\n"
        f"  Variant A: conv={fmt_count(a.conversions)}/{fmt_count(a.trials)} rate={fmt_pct(a.rate)}\n"
        f"  Variant B: conv={fmt_count(b.conversions)}/{fmt_count(b.trials)} rate={fmt_pct(b.rate)}\n"
        f"  z={fmt_z(test.z)} p={fmt_p_value(test.p_value)} significant={fmt_flag(test.significant)}\n\n"
    )


def build_brief(result: AnalysisResult, analysis_focus: str, analysis_question: str = "") -> str:
    """Render the analysis result into the prompt sent to the text-generation service."""
    parts: List[str] = [BRIEF_INTRO.format(focus=analysis_focus, question=analysis_question or "None provided")]

    for platform, summary in result.platform_summary.items():
        parts.append(f"Platform: {platform}\n")
        parts.append(summary_block(summary))

    parts.append("Overall totals:\n")
    parts.append(summary_block(result.overall_summary))

    if result.ab_tests:
        parts.append("A/B tests detected (summary):\n")
        parts.extend(ab_test_block(test) for test in result.ab_tests)
    else:
        parts.append("No A/B tests with variant data were detected.\n\n")

    parts.append(f"Here are example campaign rows (first {SAMPLE_ROW_LIMIT} rows):\n")
    for record in result.computed_campaigns[:SAMPLE_ROW_LIMIT]:
        parts.append(row_json(record.to_dict()) + "\n")

    parts.append(BRIEF_EXPECTATIONS)
    return "".join(parts)
