"""
Relocation Closure.

Decides which modules of the resolved relocate tree are bundled into the
artifact. The tree is a DAG: a module can be reached through several
paths, so every node is decided once and remembered.

A node is relocated when:
    - it is declared under the relocate scope (a seed), or
    - it sits beneath a relocated node and transitive relocation is on, or
    - any of its children is relocated.

Projects of the build are boundaries for the second rule: what a relocated
project depends on was already collected from its declarations, so it is
not bundled just for sitting beneath the project.

The last rule is evaluated depth first, post-order, so a library whose own
dependency must be bundled is bundled as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Set, Tuple

from .graph import DependencyView
from .types import Coordinate, DependencyEdge, Scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClosureResult:
    """
    Attributes:
        relocated: Base coordinates that must be bundled, seeds included.
        edges: One relocate edge per relocated node of the resolved tree,
            with its resolved version, in discovery order.
    """

    relocated: FrozenSet[Coordinate]
    edges: Tuple[DependencyEdge, ...]


class RelocationClosure:
    """
    Computes the transitive relocation closure over a dependency view.

    Example:
        ```python
        closure = RelocationClosure(collected.resolved, seeds)
        outcome = closure.compute()
        ```
    """

    def __init__(
        self,
        view: DependencyView,
        seeds: Iterable[Coordinate],
        transitive: bool = True,
        boundaries: Iterable[Coordinate] = (),
        aliases: Optional[Mapping[Coordinate, Coordinate]] = None,
    ):
        """
        Args:
            view: The resolved tree to walk.
            seeds: Coordinates declared under the relocate scope.
            transitive: Relocate everything beneath a relocated node.
            boundaries: Project coordinates that stop downward relocation.
            aliases: Original project coordinate to published coordinate;
                aliased nodes are reported under the published one.
        """
        self.view = view
        self.seeds: FrozenSet[Coordinate] = frozenset(seed.base for seed in seeds)
        self.transitive = transitive
        self.boundaries: FrozenSet[Coordinate] = frozenset(b.base for b in boundaries)
        self.aliases: Dict[Coordinate, Coordinate] = {
            original.base: published for original, published in (aliases or {}).items()
        }

    def compute(self) -> ClosureResult:
        discovered = self._discovery_order()
        inherited = self._inherited() if self.transitive else set()

        relocated: Set[Coordinate] = set(self.seeds)
        verdicts: Dict[Hashable, bool] = {}
        in_progress: Set[Hashable] = set()

        for root in self.view.roots():
            if root in verdicts:
                continue
            stack: List[Tuple[Hashable, bool]] = [(root, False)]
            while stack:
                node, expanded = stack.pop()
                if expanded:
                    in_progress.discard(node)
                    verdict = (
                        self._is_seed(node)
                        or node in inherited
                        # every child has been decided by now
                        or any([verdicts.get(child, False) for _, child in self.view.children(node)])
                    )
                    verdicts[node] = verdict
                    if verdict:
                        coordinate = self._published(node)
                        if coordinate is not None:
                            relocated.add(coordinate.base)
                    continue

                if node in verdicts or node in in_progress:
                    continue
                in_progress.add(node)
                stack.append((node, True))
                for _, child in reversed(self.view.children(node)):
                    if child not in verdicts:
                        stack.append((child, False))

        edges = []
        for node in discovered:
            coordinate = self._published(node)
            if verdicts.get(node) and coordinate is not None:
                edges.append(DependencyEdge(scope=Scope.RELOCATE, coordinate=coordinate))

        logger.debug(
            f"Relocation closure: {len(relocated)} relocated modules "
            f"({len(relocated) - len(self.seeds)} beyond explicit declarations)"
        )
        return ClosureResult(relocated=frozenset(relocated), edges=tuple(edges))

    def _is_seed(self, node: Hashable) -> bool:
        coordinate = self.view.coordinate_of(node)
        return coordinate is not None and coordinate.base in self.seeds

    def _is_boundary(self, node: Hashable) -> bool:
        coordinate = self.view.coordinate_of(node)
        return coordinate is not None and coordinate.base in self.boundaries

    def _published(self, node: Hashable) -> Optional[Coordinate]:
        coordinate = self.view.coordinate_of(node)
        if coordinate is None:
            return None
        return self.aliases.get(coordinate.base, coordinate)

    def _discovery_order(self) -> List[Hashable]:
        """Every node reachable from the roots, pre-order, once."""
        order: List[Hashable] = []
        seen: Set[Hashable] = set()
        stack = list(reversed(self.view.roots()))
        while stack:
            node = stack.pop()
            if node in seen:
                continue
            seen.add(node)
            order.append(node)
            stack.extend(child for _, child in reversed(self.view.children(node)))
        return order

    def _inherited(self) -> Set[Hashable]:
        """Nodes strictly beneath a seeded node, not crossing project boundaries."""
        inherited: Set[Hashable] = set()
        visited_plain: Set[Hashable] = set()
        stack: List[Tuple[Hashable, bool]] = [(root, False) for root in reversed(self.view.roots())]
        while stack:
            node, under_relocated = stack.pop()
            if under_relocated:
                if node in inherited:
                    continue
                inherited.add(node)
            else:
                if node in visited_plain:
                    continue
                visited_plain.add(node)
            propagate = (under_relocated or self._is_seed(node)) and not self._is_boundary(node)
            for _, child in self.view.children(node):
                stack.append((child, propagate))
        return inherited
