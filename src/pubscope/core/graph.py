"""
Dependency graph views.

Declared dependencies and resolved dependencies are two different
representations of the same idea: the direct children of a node, each
tagged with the configuration it came through. ``DependencyView`` is that
abstraction; the collector and the relocation closure only talk to it.

``ResolvedGraph`` is the resolved representation, backed by rustworkx. It
manages the bimap between coordinates and rustworkx integer indices and
keeps children in insertion order so that walks are deterministic.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Hashable, Iterator, List, NamedTuple, Optional, Set

import rustworkx as rx

from .types import Coordinate


class TaggedChild(NamedTuple):
    """A direct child of a node and the configuration it was reached through."""
    configuration: str
    node: Any


class DependencyView(ABC):
    """Read-only view of a dependency graph."""

    @abstractmethod
    def roots(self) -> List[Hashable]:
        """Entry nodes of the view."""

    @abstractmethod
    def children(self, node: Hashable) -> List[TaggedChild]:
        """Direct children of ``node`` in declaration order."""

    @abstractmethod
    def coordinate_of(self, node: Hashable) -> Optional[Coordinate]:
        """The coordinate a node stands for, or None if it has none."""


class _ResolvedEdge(NamedTuple):
    order: int
    configuration: str


class ResolvedGraph(DependencyView):
    """
    A resolved dependency tree (a DAG: nodes may be reached by several paths).

    Nodes are coordinates with their resolved versions; edges point from a
    module to a module it depends on and carry the configuration the child
    was resolved through (e.g. "compile" or "runtime").
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[Coordinate, int] = {}
        self._roots: List[Coordinate] = []
        self._edge_counter = 0

    def add_node(self, coordinate: Coordinate) -> int:
        """Add a node if absent and return its index."""
        idx = self._id_to_idx.get(coordinate)
        if idx is None:
            idx = self._graph.add_node(coordinate)
            self._id_to_idx[coordinate] = idx
        return idx

    def add_root(self, coordinate: Coordinate) -> None:
        """Register a first-level dependency of the resolved configuration."""
        self.add_node(coordinate)
        if coordinate not in self._roots:
            self._roots.append(coordinate)

    def add_edge(self, parent: Coordinate, child: Coordinate, configuration: str) -> None:
        """Add a directed edge; a repeated edge keeps its first position."""
        u_idx = self.add_node(parent)
        v_idx = self.add_node(child)
        if self._graph.has_edge(u_idx, v_idx):
            return
        self._graph.add_edge(u_idx, v_idx, _ResolvedEdge(self._edge_counter, configuration))
        self._edge_counter += 1

    def has_node(self, coordinate: Coordinate) -> bool:
        return coordinate in self._id_to_idx

    def roots(self) -> List[Coordinate]:
        return list(self._roots)

    def children(self, node: Coordinate) -> List[TaggedChild]:
        idx = self._id_to_idx.get(node)
        if idx is None:
            return []
        out_edges = sorted(self._graph.out_edges(idx), key=lambda e: e[2].order)
        return [TaggedChild(data.configuration, self._graph[target]) for _, target, data in out_edges]

    def coordinate_of(self, node: Coordinate) -> Optional[Coordinate]:
        return node

    def get_descendants(self, coordinate: Coordinate) -> Set[Coordinate]:
        """All coordinates strictly reachable from ``coordinate``."""
        idx = self._id_to_idx.get(coordinate)
        if idx is None:
            return set()
        return {self._graph[i] for i in rx.descendants(self._graph, idx)}

    def is_acyclic(self) -> bool:
        return rx.is_directed_acyclic_graph(self._graph)

    def merge(self, other: "ResolvedGraph") -> None:
        """Copy nodes, roots and edges of ``other`` into this graph."""
        for root in other.roots():
            self.add_root(root)
        for node in other.iter_nodes():
            self.add_node(node)
            for configuration, child in other.children(node):
                self.add_edge(node, child, configuration)

    def iter_nodes(self) -> Iterator[Coordinate]:
        return iter(self._graph.nodes())

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roots": [str(root) for root in self._roots],
            "children": {
                str(node): [
                    {"coordinate": str(child), "configuration": configuration}
                    for configuration, child in self.children(node)
                ]
                for node in self.iter_nodes()
                if self.children(node)
            },
        }
