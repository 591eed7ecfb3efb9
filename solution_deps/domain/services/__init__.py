"""
Domain Services

Pure analysis stages of the dependency-graph engine:
    Catalog -> Reference Extractor -> Graph Builder ->
    {Cycle Detector, Layering Engine, Metrics Aggregator} -> Findings
"""

from .catalog import CatalogResult, build_catalog
from .reference_extractor import (
    ExtractionResult,
    ReferenceIndex,
    extract_references,
    inferred_id,
    register_extractor,
)
from .graph_builder import GraphBuildResult, build_graph
from .cycle_detector import find_cycles, mark_circular
from .layering import RadialPosition, compute_layers, find_roots, radial_layout
from .metrics_aggregator import (
    DEFAULT_COMPLEXITY_BANDS,
    DEFAULT_PRECISION,
    DEFAULT_TOP_N,
    complexity_band,
    complexity_score,
    compute_metrics,
    most_connected,
)
from .finding_detector import (
    Finding,
    FindingCategory,
    FindingDetector,
    FindingSeverity,
    FindingSummary,
    import_blockers,
    import_readiness,
)

__all__ = [
    "CatalogResult", "build_catalog",
    "ExtractionResult", "ReferenceIndex", "extract_references", "inferred_id", "register_extractor",
    "GraphBuildResult", "build_graph",
    "find_cycles", "mark_circular",
    "RadialPosition", "compute_layers", "find_roots", "radial_layout",
    "DEFAULT_COMPLEXITY_BANDS", "DEFAULT_PRECISION", "DEFAULT_TOP_N",
    "complexity_band", "complexity_score", "compute_metrics", "most_connected",
    "Finding", "FindingCategory", "FindingDetector", "FindingSeverity", "FindingSummary",
    "import_blockers", "import_readiness",
]
