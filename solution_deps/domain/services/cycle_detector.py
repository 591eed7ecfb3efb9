"""
Cycle Detector

Finds circular reference chains in a DependencyGraph.

Pass 1 is an iterative depth-first search from every unvisited component
(catalog order) with a global "done" set and an active path. An edge to a
component on the active path closes a chain: the path slice from that
component to the current one, plus the return hop. Done components are
pruned, so each component is expanded once and the pass is O(V + E).
Self-loops produce ``(a, a)`` chains.

Back edges alone do not reach every component of a strongly connected
component: a node whose only way into a loop passes through an already
finished node never closes a chain itself. Pass 2 therefore takes the
strongly connected components from networkx and, for every member still
uncovered (in catalog order), closes the shortest loop through it with a
BFS restricted to that component. Pass 2 costs O(V + E) for the SCC split
plus O(U * (V + E)) for U members left uncovered by pass 1, which is zero
for graphs whose loops are all closed by back edges. Membership flagging
is exhaustive; the chain list is not an enumeration of all simple cycles.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

import networkx as nx

from solution_deps.domain.models import CircularChain, DependencyGraph

logger = logging.getLogger(__name__)


def _back_edge_chains(graph: DependencyGraph) -> List[CircularChain]:
    done: Set[str] = set()
    chains: List[CircularChain] = []

    for start in graph:
        if start in done:
            continue

        path: List[str] = [start]
        position: Dict[str, int] = {start: 0}
        stack: List[Tuple[str, Iterator[str]]] = [(start, iter(graph.successors(start)))]

        while stack:
            node, children = stack[-1]
            descended = False
            for child in children:
                if child in position:
                    chains.append(CircularChain(tuple(path[position[child]:]) + (child,)))
                    continue
                if child in done:
                    continue
                position[child] = len(path)
                path.append(child)
                stack.append((child, iter(graph.successors(child))))
                descended = True
                break

            if not descended:
                stack.pop()
                path.pop()
                del position[node]
                done.add(node)

    return chains


def _shortest_loop(G: nx.DiGraph, scc: Set[str], node: str) -> CircularChain:
    """BFS from the successors of *node* inside its component back to *node*."""
    parent: Dict[str, Optional[str]] = {}
    queue: Deque[str] = deque()
    for successor in G.successors(node):
        if successor in scc and successor not in parent:
            parent[successor] = None
            queue.append(successor)

    while queue:
        current = queue.popleft()
        if current == node:
            break
        for child in G.successors(current):
            if child in scc and child not in parent:
                parent[child] = current
                queue.append(child)

    route: List[str] = []
    step: Optional[str] = node
    while step is not None:
        route.append(step)
        step = parent[step]
    route.reverse()
    return CircularChain((node,) + tuple(route))


def _closing_chains(graph: DependencyGraph, covered: Set[str]) -> List[CircularChain]:
    G = graph.nx_graph
    component_of: Dict[str, Set[str]] = {}
    for scc in nx.strongly_connected_components(G):
        if len(scc) > 1:
            for member in scc:
                component_of[member] = scc

    chains: List[CircularChain] = []
    for cid in graph:
        if cid not in component_of or cid in covered:
            continue
        chain = _shortest_loop(G, component_of[cid], cid)
        chains.append(chain)
        covered.update(chain.members)
    return chains


def find_cycles(graph: DependencyGraph) -> List[CircularChain]:
    """
    Return the circular chains of *graph*.

    Every component that lies on some cycle is a member of at least one
    returned chain.
    """
    chains = _back_edge_chains(graph)
    covered: Set[str] = set()
    for chain in chains:
        covered.update(chain.members)

    extra = _closing_chains(graph, covered)
    if extra:
        logger.debug("Closed %d additional chains for uncovered cycle members", len(extra))
    chains.extend(extra)

    logger.info("Cycle detection: %d chains over %d components", len(chains), len(covered))
    return chains


def mark_circular(chains: Iterable[CircularChain]) -> FrozenSet[str]:
    """Ids flagged as having a circular reference."""
    flagged: Set[str] = set()
    for chain in chains:
        flagged.update(chain.members)
    return frozenset(flagged)
