"""
JSON Result Exporter

Serialises an AnalysisResult to a JSON document and parses it back.

Schema (version 1):
    {
      "schemaVersion": 1,
      "analyzedAt": "...",
      "summary": {...},
      "components": [{id, name, logicalName, type, isManaged, notFound,
                      hasCircularReference, layer}],
      "edges": [{fromId, toId}],
      "circularChains": [{"id": 1, "chain": [n0, ..., n0]}],
      "missingReferences": [{fromId, toId}],
      "layers": {roots, layerOf, orphaned},
      "metrics": {...},
      "warnings": [...]
    }

Chain order, edge order and component order are preserved, so
``from_dict(to_dict(result))`` reconstructs the same component set, edge
set and cycle membership.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from solution_deps.domain.models import (
    AnalysisResult,
    CircularChain,
    Component,
    DependencyEdge,
    DependencyGraph,
    LayerAssignment,
    Metrics,
    MissingReference,
)

SCHEMA_VERSION = 1

logger = logging.getLogger(__name__)


class JsonResultExporter:
    """Lossless JSON export of analysis results."""

    def to_dict(self, result: AnalysisResult) -> Dict[str, Any]:
        circular = result.circular_ids
        components = []
        for comp in result.graph.components.values():
            entry = comp.to_dict()
            entry["hasCircularReference"] = comp.id in circular
            entry["layer"] = result.layers.layer_of.get(comp.id)
            entry["dependencies"] = result.graph.successors(comp.id)
            entry["dependentBy"] = result.graph.predecessors(comp.id)
            components.append(entry)

        return {
            "schemaVersion": SCHEMA_VERSION,
            "analyzedAt": result.analyzed_at,
            "summary": result.summary,
            "components": components,
            "edges": [e.to_dict() for e in result.graph.edges],
            "circularChains": [
                {"id": i, "chain": chain.to_list()}
                for i, chain in enumerate(result.chains, start=1)
            ],
            "missingReferences": [m.to_dict() for m in result.missing_references],
            "layers": result.layers.to_dict(),
            "metrics": result.metrics.to_dict(),
            "warnings": list(result.warnings),
        }

    def from_dict(self, data: Mapping[str, Any]) -> AnalysisResult:
        """
        Rebuild an AnalysisResult from an exported document.

        Raises:
            ValueError: on an unsupported schema version or inconsistent data.
        """
        version = data.get("schemaVersion")
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported export schema version: {version!r}")

        graph = DependencyGraph(
            [Component.from_dict(c) for c in data.get("components", [])],
            [DependencyEdge.from_dict(e) for e in data.get("edges", [])],
        )
        return AnalysisResult(
            graph=graph,
            chains=tuple(CircularChain(tuple(c["chain"])) for c in data.get("circularChains", [])),
            layers=LayerAssignment.from_dict(data.get("layers", {})),
            metrics=Metrics.from_dict(data.get("metrics", {})),
            missing_references=tuple(
                MissingReference.from_dict(m) for m in data.get("missingReferences", [])
            ),
            warnings=tuple(data.get("warnings", [])),
            analyzed_at=data.get("analyzedAt", ""),
        )

    def dumps(self, result: AnalysisResult) -> str:
        return json.dumps(self.to_dict(result), indent=2)

    def loads(self, text: str) -> AnalysisResult:
        return self.from_dict(json.loads(text))

    def export(self, result: AnalysisResult, output_path: Union[str, Path]) -> Path:
        """Write *result* to *output_path*, creating parent directories as needed."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(result), f, indent=2)
        logger.info("Exported analysis to %s", path)
        return path

    def load(self, input_path: Union[str, Path]) -> AnalysisResult:
        with open(input_path, "r", encoding="utf-8") as f:
            return self.from_dict(json.load(f))
