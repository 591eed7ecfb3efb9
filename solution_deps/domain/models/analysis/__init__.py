"""
Analysis Result Models
"""

from .results import (
    CircularChain,
    LayerAssignment,
    ConnectedComponent,
    Metrics,
    AnalysisResult,
)

__all__ = [
    "CircularChain",
    "LayerAssignment",
    "ConnectedComponent",
    "Metrics",
    "AnalysisResult",
]
