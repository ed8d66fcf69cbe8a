"""Infrastructure adapter for the OpenAI Chat Completions API."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List

import requests

from campaign_insights.config import Settings

logger = logging.getLogger(__name__)

MISSING_KEY_NOTICE = "OPENAI_API_KEY not set on server. The prompt below is ready to be sent to an LLM:\n\n"
SKIPPED_NOTICE = "LLM call skipped. The prompt below is ready to be sent to an LLM:\n\n"


class LlmRequestError(RuntimeError):
    """The text-generation service could not produce a response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _chat_payload(settings: Settings, prompt: str) -> Dict[str, Any]:
    return {
        "model": settings.model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
    }


def _join_choices(body: Dict[str, Any]) -> str:
    contents: List[str] = []
    for choice in body.get("choices") or []:
        message = choice.get("message") if isinstance(choice, dict) else None
        if isinstance(message, dict) and message.get("content"):
            contents.append(str(message["content"]))
    return "\n\n".join(contents)


class ChatCompletionClient:
    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.settings.api_base}/chat/completions"

    def complete(self, prompt: str) -> str:
        """Send the prompt and return the joined assistant messages.

        Without an API key the request is skipped and the prompt is returned
        behind a notice, so the brief can still be sent manually.
        """
        if not self.settings.llm_enabled:
            logger.warning("OPENAI_API_KEY is not set; returning the prompt instead of calling the LLM.")
            return MISSING_KEY_NOTICE + prompt

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.openai_api_key}",
        }
        start = perf_counter()
        try:
            resp = self._session.post(
                self.endpoint,
                headers=headers,
                json=_chat_payload(self.settings, prompt),
                timeout=self.settings.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Chat completion request failed: %s", exc)
            raise LlmRequestError(f"OpenAI request failed: {exc}") from exc

        if not resp.ok:
            logger.error("Chat completion returned HTTP %s", resp.status_code)
            raise LlmRequestError(f"OpenAI error: {resp.text}", status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError as exc:
            raise LlmRequestError("OpenAI response was not JSON", status_code=resp.status_code) from exc

        logger.info("Chat completion model=%s took %.3fs", self.settings.model, perf_counter() - start)
        return _join_choices(body)
