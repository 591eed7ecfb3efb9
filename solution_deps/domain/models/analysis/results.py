"""
Analysis Result Domain Models

These are the canonical result aggregates of one analysis run. Every
aggregate is immutable; a new run produces a new AnalysisResult rather than
updating an existing one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, Tuple

from ..graph import DependencyGraph, MissingReference


# ---------------------------------------------------------------------------
# Circular references
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CircularChain:
    """
    Closed dependency path ``(n0, n1, ..., nk, n0)``.

    Each consecutive pair is an edge of the graph. A self-loop is stored as
    ``(n0, n0)``.
    """
    nodes: Tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.nodes) < 2 or self.nodes[0] != self.nodes[-1]:
            raise ValueError(f"Circular chain must start and end on the same id: {self.nodes!r}")

    @property
    def members(self) -> FrozenSet[str]:
        return frozenset(self.nodes[:-1])

    @property
    def length(self) -> int:
        """Number of distinct hops in the loop."""
        return len(self.nodes) - 1

    @property
    def is_self_loop(self) -> bool:
        return len(self.nodes) == 2

    def edges(self) -> List[Tuple[str, str]]:
        return list(zip(self.nodes, self.nodes[1:]))

    def to_list(self) -> List[str]:
        return list(self.nodes)

    def __str__(self) -> str:
        return " -> ".join(self.nodes)


# ---------------------------------------------------------------------------
# Layering
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LayerAssignment:
    """BFS depth per reachable component plus the unreachable (orphaned) set."""
    layer_of: Mapping[str, int]
    orphaned: FrozenSet[str]
    roots: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.layer_of, MappingProxyType):
            object.__setattr__(self, "layer_of", MappingProxyType(dict(self.layer_of)))

    @property
    def max_depth(self) -> int:
        return max(self.layer_of.values(), default=-1)

    def by_depth(self) -> List[List[str]]:
        """Component ids grouped by depth, index = depth."""
        rings: List[List[str]] = [[] for _ in range(self.max_depth + 1)]
        for cid, depth in self.layer_of.items():
            rings[depth].append(cid)
        return rings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roots": list(self.roots),
            "layerOf": dict(self.layer_of),
            "orphaned": sorted(self.orphaned),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LayerAssignment:
        return cls(
            layer_of={k: int(v) for k, v in data.get("layerOf", {}).items()},
            orphaned=frozenset(data.get("orphaned", [])),
            roots=tuple(data.get("roots", [])),
        )


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConnectedComponent:
    """Entry of the most-connected ranking."""
    id: str
    name: str
    type: str
    out_degree: int
    in_degree: int

    @property
    def total_degree(self) -> int:
        return self.out_degree + self.in_degree

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "outDegree": self.out_degree,
            "inDegree": self.in_degree,
            "totalDegree": self.total_degree,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConnectedComponent:
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            type=data.get("type", "Other"),
            out_degree=int(data.get("outDegree", 0)),
            in_degree=int(data.get("inDegree", 0)),
        )


@dataclass(frozen=True)
class Metrics:
    """Summary metrics of one analysis run."""
    type_counts: Mapping[str, int]
    most_connected: Tuple[ConnectedComponent, ...]
    average_out_degree: float
    chain_count: int
    complexity_score: float
    complexity_band: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.type_counts, MappingProxyType):
            object.__setattr__(self, "type_counts", MappingProxyType(dict(self.type_counts)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typeCounts": dict(self.type_counts),
            "mostConnected": [c.to_dict() for c in self.most_connected],
            "averageOutDegree": self.average_out_degree,
            "chainCount": self.chain_count,
            "complexityScore": self.complexity_score,
            "complexityBand": self.complexity_band,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Metrics:
        return cls(
            type_counts={k: int(v) for k, v in data.get("typeCounts", {}).items()},
            most_connected=tuple(
                ConnectedComponent.from_dict(c) for c in data.get("mostConnected", [])
            ),
            average_out_degree=float(data.get("averageOutDegree", 0.0)),
            chain_count=int(data.get("chainCount", 0)),
            complexity_score=float(data.get("complexityScore", 0.0)),
            complexity_band=data.get("complexityBand", ""),
        )


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalysisResult:
    """
    Immutable snapshot of one analysis run.

    Bundles the graph, the circular chains, the layer assignment, summary
    metrics, missing references and the non-fatal warnings raised while
    building the catalog and the graph.
    """
    graph: DependencyGraph
    chains: Tuple[CircularChain, ...]
    layers: LayerAssignment
    metrics: Metrics
    missing_references: Tuple[MissingReference, ...]
    warnings: Tuple[str, ...] = ()
    analyzed_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def circular_ids(self) -> FrozenSet[str]:
        """Every component that takes part in at least one chain."""
        ids: set = set()
        for chain in self.chains:
            ids.update(chain.members)
        return frozenset(ids)

    def has_circular_reference(self, component_id: str) -> bool:
        return component_id in self.circular_ids

    def chains_for(self, component_id: str) -> List[CircularChain]:
        return [c for c in self.chains if component_id in c.members]

    @property
    def summary(self) -> Dict[str, Any]:
        """High-level counts for reports."""
        return {
            "components": len(self.graph),
            "dependencies": len(self.graph.edges),
            "circularChains": len(self.chains),
            "circularComponents": len(self.circular_ids),
            "missingReferences": len(self.missing_references),
            "orphaned": len(self.layers.orphaned),
            "complexityScore": self.metrics.complexity_score,
        }
