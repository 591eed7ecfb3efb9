"""
Application Services
"""

from .analysis_service import AnalysisService

__all__ = [
    "AnalysisService",
]
