"""
Graph Data Domain Models

Core domain entities for the solution dependency graph:

    Component          vertex (a platform object, or a virtual placeholder
                       for a referenced object that was not scanned)
    DependencyFact     raw "from depends on to" observation
    DependencyEdge     deduplicated directed edge
    MissingReference   edge whose target is a virtual component
    DependencyGraph    immutable graph with forward and reverse adjacency
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

import networkx as nx

from .enums import ComponentType


@dataclass(frozen=True)
class Component:
    """Domain entity representing a graph component (vertex)."""
    id: str
    name: str
    logical_name: str
    type: ComponentType = ComponentType.OTHER
    is_managed: bool = False
    not_found: bool = False
    in_solution: bool = True

    @classmethod
    def virtual(cls, component_id: str) -> Component:
        """Placeholder for a referenced component that is absent from the catalog."""
        return cls(
            id=component_id,
            name="Unknown Component",
            logical_name=component_id,
            type=ComponentType.OTHER,
            is_managed=False,
            not_found=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "logicalName": self.logical_name,
            "type": self.type.value,
            "isManaged": self.is_managed,
            "notFound": self.not_found,
            "inSolution": self.in_solution,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Component:
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            logical_name=data.get("logicalName", data["id"]),
            type=ComponentType.from_string(data.get("type")),
            is_managed=bool(data.get("isManaged", False)),
            not_found=bool(data.get("notFound", False)),
            in_solution=bool(data.get("inSolution", True)),
        )


@dataclass(frozen=True)
class DependencyFact:
    """A raw directed reference, prior to graph assembly."""
    from_id: str
    to_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"fromId": self.from_id, "toId": self.to_id}


@dataclass(frozen=True)
class DependencyEdge:
    """Directed edge: ``from_id`` depends on ``to_id``."""
    from_id: str
    to_id: str

    @property
    def is_self_loop(self) -> bool:
        return self.from_id == self.to_id

    def to_dict(self) -> Dict[str, str]:
        return {"fromId": self.from_id, "toId": self.to_id}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DependencyEdge:
        return cls(from_id=data["fromId"], to_id=data["toId"])


@dataclass(frozen=True)
class MissingReference:
    """An edge whose target is not part of the scanned component set."""
    from_id: str
    to_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"fromId": self.from_id, "toId": self.to_id}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MissingReference:
        return cls(from_id=data["fromId"], to_id=data["toId"])


class DependencyGraph:
    """
    Immutable directed dependency graph.

    Components are kept in catalog order, followed by virtual components in
    the order their first referencing edge was observed. The forward map
    (id -> targets) and the reverse map (id -> sources) are the successor
    and predecessor maps of a frozen ``networkx.DiGraph``, so they are
    mutual inverses.

    Raises:
        ValueError: if an edge references an unknown component, or if a
            virtual component is used as an edge source.
    """

    def __init__(
        self,
        components: Sequence[Component],
        edges: Sequence[DependencyEdge],
    ) -> None:
        index: Dict[str, Component] = {}
        for comp in components:
            if comp.id in index:
                raise ValueError(f"Duplicate component id in graph: {comp.id!r}")
            index[comp.id] = comp

        G = nx.DiGraph()
        for comp in index.values():
            G.add_node(comp.id, type=comp.type.value, not_found=comp.not_found)

        unique_edges: List[DependencyEdge] = []
        for edge in edges:
            source = index.get(edge.from_id)
            if source is None or edge.to_id not in index:
                raise ValueError(
                    f"Edge {edge.from_id!r} -> {edge.to_id!r} references an unknown component"
                )
            if source.not_found:
                raise ValueError(f"Virtual component {edge.from_id!r} cannot be an edge source")
            if G.has_edge(edge.from_id, edge.to_id):
                continue
            G.add_edge(edge.from_id, edge.to_id)
            unique_edges.append(edge)

        self._components: Mapping[str, Component] = MappingProxyType(index)
        self._order: Mapping[str, int] = MappingProxyType(
            {cid: i for i, cid in enumerate(index)}
        )
        self._edges: Tuple[DependencyEdge, ...] = tuple(unique_edges)
        self._graph = nx.freeze(G)
        self._forward: Mapping[str, FrozenSet[str]] = MappingProxyType(
            {cid: frozenset(G.succ[cid]) for cid in index}
        )
        self._reverse: Mapping[str, FrozenSet[str]] = MappingProxyType(
            {cid: frozenset(G.pred[cid]) for cid in index}
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def components(self) -> Mapping[str, Component]:
        return self._components

    @property
    def edges(self) -> Tuple[DependencyEdge, ...]:
        return self._edges

    @property
    def forward(self) -> Mapping[str, FrozenSet[str]]:
        """id -> ids it depends on."""
        return self._forward

    @property
    def reverse(self) -> Mapping[str, FrozenSet[str]]:
        """id -> ids that depend on it."""
        return self._reverse

    @property
    def nx_graph(self) -> nx.DiGraph:
        """The underlying frozen networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, component_id: str) -> Optional[Component]:
        return self._components.get(component_id)

    def successors(self, component_id: str) -> List[str]:
        """Targets of *component_id* in edge observation order."""
        return list(self._graph.successors(component_id))

    def predecessors(self, component_id: str) -> List[str]:
        """Sources depending on *component_id* in edge observation order."""
        return list(self._graph.predecessors(component_id))

    def out_degree(self, component_id: str) -> int:
        return self._graph.out_degree(component_id)

    def in_degree(self, component_id: str) -> int:
        return self._graph.in_degree(component_id)

    def is_virtual(self, component_id: str) -> bool:
        return self._components[component_id].not_found

    def order_of(self, component_id: str) -> int:
        """Position of the component in catalog order."""
        return self._order[component_id]

    def edge_set(self) -> Set[Tuple[str, str]]:
        return {(e.from_id, e.to_id) for e in self._edges}

    def real_components(self) -> List[Component]:
        return [c for c in self._components.values() if not c.not_found]

    def virtual_components(self) -> List[Component]:
        return [c for c in self._components.values() if c.not_found]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self._components.values()],
            "edges": [e.to_dict() for e in self._edges],
        }

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(components={len(self._components)}, "
            f"edges={len(self._edges)}, virtual={len(self.virtual_components())})"
        )
