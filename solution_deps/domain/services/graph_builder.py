"""
Graph Builder

Assembles catalog components and dependency facts into a DependencyGraph.

Rules per fact (from_id -> to_id):
    - unknown from_id : fact dropped, warning logged (it cannot anchor an edge)
    - unknown to_id   : virtual placeholder component synthesised
                        (not_found=True, type=Other, logical_name=to_id),
                        edge kept, MissingReference emitted
    - repeated pair   : collapsed into a single edge
    - from_id == to_id: kept as a self-edge

The builder is pure with respect to its inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Set, Tuple, Union

from solution_deps.domain.models import (
    Component,
    DependencyEdge,
    DependencyFact,
    DependencyGraph,
    MissingReference,
)

logger = logging.getLogger(__name__)

FactLike = Union[DependencyFact, Mapping[str, Any]]


@dataclass
class GraphBuildResult:
    graph: DependencyGraph
    missing_references: List[MissingReference] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __iter__(self):
        # Allows ``graph, missing = build_graph(...)``
        yield self.graph
        yield self.missing_references


def _normalize_fact(fact: FactLike, position: int) -> DependencyFact:
    if isinstance(fact, DependencyFact):
        from_id, to_id = fact.from_id, fact.to_id
    elif isinstance(fact, Mapping):
        from_id = fact.get("fromId", fact.get("from_id"))
        to_id = fact.get("toId", fact.get("to_id"))
    else:
        raise TypeError(
            f"dependency fact #{position} must be a mapping, got {type(fact).__name__}"
        )
    if not isinstance(from_id, str) or not isinstance(to_id, str):
        raise TypeError(
            f"dependency fact #{position} must have string fromId/toId, got {from_id!r} -> {to_id!r}"
        )
    return DependencyFact(from_id, to_id)


def build_graph(
    components: Sequence[Component],
    facts: Sequence[FactLike],
) -> GraphBuildResult:
    """
    Build the dependency graph.

    Every fact is validated before any edge is added, so a malformed fact
    never leaves a partially built graph behind.

    Raises:
        TypeError: if *components* or *facts* is not a list, or a fact is
            malformed.
    """
    if not isinstance(components, (list, tuple)):
        raise TypeError(f"components must be a list, got {type(components).__name__}")
    if not isinstance(facts, (list, tuple)):
        raise TypeError(f"dependency facts must be a list, got {type(facts).__name__}")

    normalized = [_normalize_fact(f, i) for i, f in enumerate(facts)]

    known: Dict[str, Component] = {c.id: c for c in components}
    virtual: Dict[str, Component] = {}
    edges: List[DependencyEdge] = []
    seen: Set[Tuple[str, str]] = set()
    missing: List[MissingReference] = []
    warnings: List[str] = []

    for fact in normalized:
        if fact.from_id not in known:
            message = f"Dropped dependency {fact.from_id!r} -> {fact.to_id!r}: unknown source component"
            logger.warning(message)
            warnings.append(message)
            continue

        pair = (fact.from_id, fact.to_id)
        if pair in seen:
            continue
        seen.add(pair)

        if fact.to_id not in known:
            if fact.to_id not in virtual:
                virtual[fact.to_id] = Component.virtual(fact.to_id)
                logger.debug("Missing component %r synthesised as virtual node", fact.to_id)
            missing.append(MissingReference(fact.from_id, fact.to_id))

        edges.append(DependencyEdge(fact.from_id, fact.to_id))

    graph = DependencyGraph(list(known.values()) + list(virtual.values()), edges)
    logger.info(
        "Graph built: %d components (%d virtual), %d edges, %d missing references",
        len(graph), len(virtual), len(graph.edges), len(missing),
    )
    return GraphBuildResult(graph=graph, missing_references=missing, warnings=warnings)
