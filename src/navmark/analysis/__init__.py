"""URL analysis pipeline."""

from navmark.analysis.models import AnalysisResult
from navmark.analysis.service import WebsiteAnalyzer

__all__ = ["AnalysisResult", "WebsiteAnalyzer"]
