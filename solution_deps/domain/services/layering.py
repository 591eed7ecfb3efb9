"""
Layering Engine

Assigns every component a BFS depth relative to the root set, for radial
placement of the dependency graph.

    roots    : non-virtual components with no outgoing dependency
    depth    : minimum number of reverse hops (dependent -> dependency,
               walked backwards) from any root
    orphaned : components never reached, e.g. loops with no path to an
               acyclic root, and virtual placeholders

An empty root set is a valid outcome: every component is then orphaned.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Tuple

from solution_deps.domain.models import DependencyGraph, LayerAssignment

logger = logging.getLogger(__name__)


def find_roots(graph: DependencyGraph) -> List[str]:
    return [
        cid for cid, comp in graph.components.items()
        if not comp.not_found and graph.out_degree(cid) == 0
    ]


def compute_layers(graph: DependencyGraph) -> LayerAssignment:
    """Multi-source BFS over the reverse adjacency map, all roots seeded at depth 0."""
    roots = find_roots(graph)
    layer_of: Dict[str, int] = {}
    queue: Deque[str] = deque()

    for root in roots:
        layer_of[root] = 0
        queue.append(root)

    while queue:
        current = queue.popleft()
        depth = layer_of[current] + 1
        for dependent in graph.predecessors(current):
            if dependent not in layer_of:
                layer_of[dependent] = depth
                queue.append(dependent)

    orphaned = frozenset(cid for cid in graph if cid not in layer_of)
    if not roots and len(graph):
        logger.info("No root components; all %d components are orphaned", len(graph))
    logger.info(
        "Layering: %d roots, max depth %d, %d orphaned",
        len(roots), max(layer_of.values(), default=-1), len(orphaned),
    )
    return LayerAssignment(layer_of=layer_of, orphaned=orphaned, roots=tuple(roots))


# ---------------------------------------------------------------------------
# Radial placement
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RadialPosition:
    x: float
    y: float
    depth: int
    orphaned: bool = False


def radial_layout(
    graph: DependencyGraph,
    layers: LayerAssignment,
    center: Tuple[float, float] = (500.0, 400.0),
    ring_spacing: float = 120.0,
) -> Dict[str, RadialPosition]:
    """
    Place components on concentric rings, one ring per depth.

    Depth 0 and orphaned components are pinned to the centre. Components
    on a ring are evenly spaced in graph order.
    """
    cx, cy = center
    positions: Dict[str, RadialPosition] = {}

    for depth, ring in enumerate(layers.by_depth()):
        ring = sorted(ring, key=graph.order_of)
        radius = ring_spacing * depth
        step = 2 * math.pi / max(len(ring), 1)
        for i, cid in enumerate(ring):
            if depth == 0:
                positions[cid] = RadialPosition(cx, cy, 0)
            else:
                angle = i * step
                positions[cid] = RadialPosition(
                    round(cx + radius * math.cos(angle), 3),
                    round(cy + radius * math.sin(angle), 3),
                    depth,
                )

    for cid in graph:
        if cid in layers.orphaned:
            positions[cid] = RadialPosition(cx, cy, 0, orphaned=True)
    return positions
