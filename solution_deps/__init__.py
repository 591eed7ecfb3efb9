"""
Solution Dependency Graph Engine

Builds the dependency graph of a platform solution (entities, forms, views,
plugins, web resources, workflows, apps) from a flat component list and raw
cross-references, then reports circular references, missing references,
BFS layering for radial placement and summary metrics.

Usage:
    from solution_deps import AnalysisService
    result = AnalysisService().analyze(components, [{"fromId": "a", "toId": "b"}])
    print(result.summary)
"""

from .domain.models import (
    AnalysisResult,
    CircularChain,
    Component,
    ComponentType,
    ConnectedComponent,
    DependencyEdge,
    DependencyFact,
    DependencyGraph,
    LayerAssignment,
    Metrics,
    MissingReference,
)
from .domain.services import (
    build_catalog,
    build_graph,
    compute_layers,
    compute_metrics,
    extract_references,
    find_cycles,
    radial_layout,
)
from .application.services import AnalysisService
from .config import Settings

__all__ = [
    "AnalysisResult", "CircularChain", "Component", "ComponentType", "ConnectedComponent",
    "DependencyEdge", "DependencyFact", "DependencyGraph", "LayerAssignment", "Metrics",
    "MissingReference",
    "build_catalog", "build_graph", "compute_layers", "compute_metrics",
    "extract_references", "find_cycles", "radial_layout",
    "AnalysisService", "Settings",
]

__version__ = "1.0.0"
