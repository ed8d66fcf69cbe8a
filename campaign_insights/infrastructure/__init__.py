"""Infrastructure layer package."""

from .campaign_repository import load_campaign_batch, save_output_workbook
from .llm_client import ChatCompletionClient, LlmRequestError
from .report_exporter import save_summary_excel, save_summary_json

__all__ = [
    "load_campaign_batch",
    "save_output_workbook",
    "ChatCompletionClient",
    "LlmRequestError",
    "save_summary_json",
    "save_summary_excel",
]
