"""Infrastructure adapter for file-based campaign tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from campaign_insights.ingestion import read_campaign_rows, write_output_excel

logger = logging.getLogger(__name__)


def load_campaign_batch(path: Path, sheet_name: str | None = None) -> List[Dict[str, Any]]:
    rows = read_campaign_rows(path, sheet_name=sheet_name)
    logger.info("Loaded %d campaign rows from %s", len(rows), path)
    return rows


def save_output_workbook(path: Path, sheets: Dict[str, Any]) -> tuple[bool, str]:
    try:
        write_output_excel(path, sheets)
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
