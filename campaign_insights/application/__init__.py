"""Application layer package."""

from .analysis_service import AnalysisResult, InvalidBatchError, run_campaign_analysis
from .brief_service import AnalysisReport, run_analysis_report

__all__ = [
    "AnalysisResult",
    "AnalysisReport",
    "InvalidBatchError",
    "run_campaign_analysis",
    "run_analysis_report",
]
