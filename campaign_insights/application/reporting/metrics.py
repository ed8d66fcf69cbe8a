"""Shared formatting utilities for the analysis brief."""

from __future__ import annotations

import json
import math
from typing import Any, Mapping


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def fmt_count(value: float | None) -> str:
    if value is None:
        return "0"
    number = to_float(value)
    if math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number)


def fmt_pct(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{to_float(value) * 100:.{digits}f}%"


def fmt_money(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{to_float(value):.2f}"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{to_float(value):.2f}"


def fmt_z(value: float) -> str:
    return f"{value:.3f}"


def fmt_p_value(value: float) -> str:
    return f"{value:.4f}"


def fmt_flag(value: bool) -> str:
    return "true" if value else "false"


def row_json(row: Mapping[str, Any]) -> str:
    return json.dumps(dict(row), ensure_ascii=False, default=str)
