"""Environment-driven settings for the analysis service and text-generation client."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_ANALYSIS_FOCUS = "unspecified"
DEFAULT_ANALYSIS_QUESTION = ""
SAMPLE_ROW_LIMIT = 6


def _parse_float(env: Mapping[str, str], name: str, default: float, low: float, high: float | None = None) -> float:
    raw = env.get(name, "")
    if raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value < low or (high is not None and value > high):
        upper = "inf" if high is None else f"{high:g}"
        raise ValueError(f"{name} must be in [{low:g}, {upper}], got {value:g}")
    return value


def _parse_positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "")
    if raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    openai_api_key: str
    model: str
    temperature: float
    max_tokens: int
    timeout: float
    api_base: str
    log_level: str

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        source = os.environ if env is None else env
        timeout = _parse_float(source, "ADOPT_LLM_TIMEOUT", 60.0, low=0.0)
        if timeout <= 0:
            raise ValueError(f"ADOPT_LLM_TIMEOUT must be positive, got {timeout:g}")
        return cls(
            openai_api_key=(source.get("OPENAI_API_KEY") or "").strip(),
            model=(source.get("ADOPT_MODEL") or DEFAULT_MODEL).strip(),
            temperature=_parse_float(source, "ADOPT_TEMPERATURE", 0.2, low=0.0, high=2.0),
            max_tokens=_parse_positive_int(source, "ADOPT_MAX_TOKENS", 1000),
            timeout=timeout,
            api_base=(source.get("OPENAI_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
            log_level=(source.get("ADOPT_LOG_LEVEL") or "INFO").strip().upper(),
        )

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)

    def with_model(self, model: str | None) -> "Settings":
        if not model:
            return self
        return replace(self, model=model)
