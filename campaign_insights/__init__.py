"""Campaign insights package."""

from .ab_testing import AbTestEngine
from .aggregation import summarize_by, summarize_overall, summarize_platforms
from .application import AnalysisReport, AnalysisResult, InvalidBatchError, run_analysis_report, run_campaign_analysis
from .ingestion import read_campaign_rows, write_output_excel

__all__ = [
    "AbTestEngine",
    "summarize_by",
    "summarize_platforms",
    "summarize_overall",
    "read_campaign_rows",
    "write_output_excel",
    "AnalysisResult",
    "AnalysisReport",
    "InvalidBatchError",
    "run_campaign_analysis",
    "run_analysis_report",
]
