"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

# Core graph models
from .enums import ComponentType
from .graph import (
    Component,
    DependencyFact,
    DependencyEdge,
    MissingReference,
    DependencyGraph,
)

# Analysis results
from .analysis import (
    CircularChain,
    LayerAssignment,
    ConnectedComponent,
    Metrics,
    AnalysisResult,
)

__all__ = [
    # Enums
    "ComponentType",
    # Graph data
    "Component", "DependencyFact", "DependencyEdge", "MissingReference", "DependencyGraph",
    # Analysis results
    "CircularChain", "LayerAssignment", "ConnectedComponent", "Metrics", "AnalysisResult",
]
