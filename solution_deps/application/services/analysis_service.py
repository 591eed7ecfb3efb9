"""
Analysis Service

Runs the dependency analysis pipeline for one solution scan:

    1. Component Catalog     -> normalised components
    2. Reference Extractor   -> dependency facts from type-specific payloads
    3. Graph Builder         -> graph + missing references
    4. Cycle Detector        -> circular chains
    5. Layering Engine       -> BFS depth per component
    6. Metrics Aggregator    -> type counts, most connected, complexity

Each call is independent; nothing is cached between runs. Fatal input
errors (TypeError / ValueError) propagate before any graph is built.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from solution_deps.config import Settings
from solution_deps.domain.models import AnalysisResult
from solution_deps.domain.services import (
    FindingDetector,
    build_catalog,
    build_graph,
    compute_layers,
    compute_metrics,
    extract_references,
    find_cycles,
)


class AnalysisService:
    """Application service orchestrating the analysis pipeline."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or Settings()
        self._logger = logging.getLogger(__name__)

    @property
    def settings(self) -> Settings:
        return self._settings

    def analyze(
        self,
        raw_components: Sequence[Mapping[str, Any]],
        raw_facts: Optional[Sequence[Any]] = None,
        payloads: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> AnalysisResult:
        """
        Analyze one solution scan.

        Args:
            raw_components: component records (see ``build_catalog``).
            raw_facts: ``{"fromId", "toId"}`` records or DependencyFact objects.
            payloads: optional type-specific payloads keyed by component id.

        Returns:
            An immutable AnalysisResult.
        """
        if raw_facts is None:
            raw_facts = []
        if not isinstance(raw_facts, (list, tuple)):
            raise TypeError(f"dependency facts must be a list, got {type(raw_facts).__name__}")

        warnings: List[str] = []

        catalog = build_catalog(raw_components)
        warnings.extend(catalog.warnings)
        self._logger.info("Analyzing %d components", len(catalog))

        extraction = extract_references(catalog.components, payloads)
        warnings.extend(extraction.warnings)

        built = build_graph(catalog.components, list(extraction.facts) + list(raw_facts))
        warnings.extend(built.warnings)
        graph = built.graph

        chains = find_cycles(graph)
        layers = compute_layers(graph)
        metrics = compute_metrics(
            graph,
            chains,
            top_n=self._settings.top_n,
            precision=self._settings.precision,
            bands=self._settings.complexity_bands,
        )

        result = AnalysisResult(
            graph=graph,
            chains=tuple(chains),
            layers=layers,
            metrics=metrics,
            missing_references=tuple(built.missing_references),
            warnings=tuple(warnings),
            analyzed_at=datetime.now().isoformat(),
        )
        self._logger.info(
            "Analysis complete: %d components, %d dependencies, %d chains, %d missing",
            len(graph), len(graph.edges), len(chains), len(built.missing_references),
        )
        return result

    def analyze_scan(self, scan: Mapping[str, Any]) -> AnalysisResult:
        """Analyze a loaded scan document (``components`` / ``dependencies`` / ``payloads``)."""
        return self.analyze(
            scan.get("components", []),
            scan.get("dependencies", []),
            scan.get("payloads"),
        )

    def findings(self, result: AnalysisResult):
        """Findings and their summary for *result*."""
        detector = FindingDetector()
        found = detector.detect(result)
        return found, detector.summarize(result, found)
