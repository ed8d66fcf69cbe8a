"""Application service for the analysis-plus-brief use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from campaign_insights.application.analysis_service import AnalysisResult, run_campaign_analysis
from campaign_insights.application.reporting.rendering import build_brief
from campaign_insights.config import DEFAULT_ANALYSIS_FOCUS, DEFAULT_ANALYSIS_QUESTION, Settings
from campaign_insights.infrastructure.llm_client import SKIPPED_NOTICE, ChatCompletionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    analysis: AnalysisResult
    prompt: str
    llm_response: str

    def to_dict(self) -> dict[str, Any]:
        payload = self.analysis.to_dict()
        payload["prompt"] = self.prompt
        payload["llm_response"] = self.llm_response
        return payload


def run_analysis_report(
    batch: Any,
    settings: Settings,
    analysis_focus: str | None = None,
    analysis_question: str | None = None,
    model: str | None = None,
    call_llm: bool = True,
    client: ChatCompletionClient | None = None,
) -> AnalysisReport:
    """Analyze a batch, build the brief, and ask the text-generation service for recommendations."""
    analysis = run_campaign_analysis(batch)
    prompt = build_brief(
        analysis,
        analysis_focus=analysis_focus or DEFAULT_ANALYSIS_FOCUS,
        analysis_question=analysis_question or DEFAULT_ANALYSIS_QUESTION,
    )

    if not call_llm:
        logger.info("LLM call disabled; returning the prompt only.")
        return AnalysisReport(analysis=analysis, prompt=prompt, llm_response=SKIPPED_NOTICE + prompt)

    chat_client = client or ChatCompletionClient(settings.with_model(model))
    llm_response = chat_client.complete(prompt)
    return AnalysisReport(analysis=analysis, prompt=prompt, llm_response=llm_response)
