"""
Version reconciliation and scope ownership.

Turns the raw edge multiset into one entry per base coordinate:

    1. Version selection: the maximum version seen for a base coordinate,
       computed over every scope at once.
    2. Scope ownership: scopes are visited in priority order and the first
       scope that declares a base coordinate owns it. Later occurrences are
       dropped; overlap between scopes is expected input, not an error.

``RedundancyFilter`` then subtracts higher-priority scopes from lower ones.
On reconciler output it changes nothing.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from .types import SCOPE_PRIORITY, Coordinate, DependencyEdge, ScopeMap, group_edges_by_scope
from .versions import max_version

logger = logging.getLogger(__name__)


class VersionReconciler:
    """Pure reconciliation of an edge list into disjoint per-scope sets."""

    @staticmethod
    def select_versions(edges: Iterable[DependencyEdge]) -> Dict[Coordinate, str]:
        """Highest version per base coordinate, across all scopes."""
        versions: Dict[Coordinate, List[str]] = {}
        for edge in edges:
            versions.setdefault(edge.coordinate.base, []).append(edge.coordinate.version)
        return {base: max_version(candidates) for base, candidates in versions.items()}

    def reconcile(self, edges: Iterable[DependencyEdge]) -> ScopeMap:
        edges = list(edges)
        selected = self.select_versions(edges)
        grouped = group_edges_by_scope(edges)

        claimed: Set[Coordinate] = set()
        scopes: ScopeMap = {}
        for scope in SCOPE_PRIORITY:
            owned: List[Coordinate] = []
            for coordinate in grouped[scope]:
                base = coordinate.base
                if base in claimed:
                    continue
                claimed.add(base)
                owned.append(base.with_version(selected[base]))
            scopes[scope] = tuple(owned)

        counts = ", ".join(f"{scope.value}={len(scopes[scope])}" for scope in SCOPE_PRIORITY)
        logger.debug(f"Reconciled {len(edges)} edges into {counts}")
        return scopes


class RedundancyFilter:
    """
    Removes cross-scope overlaps: relocate wins over compile, compile over
    runtime, runtime over provided.
    """

    def apply(self, scopes: ScopeMap) -> ScopeMap:
        filtered: ScopeMap = {}
        taken: Set[Coordinate] = set()
        for scope in SCOPE_PRIORITY:
            kept = []
            for coordinate in scopes.get(scope, ()):
                if coordinate.base in taken:
                    logger.debug(f"Dropping {coordinate} from {scope.value}: owned by a higher scope")
                    continue
                kept.append(coordinate)
            # Only other scopes are subtracted; duplicates inside a scope stay
            taken.update(coordinate.base for coordinate in kept)
            filtered[scope] = tuple(kept)
        return filtered


def reconcile(edges: Iterable[DependencyEdge]) -> ScopeMap:
    """Reconcile edges and run the redundancy filter over the result."""
    return RedundancyFilter().apply(VersionReconciler().reconcile(edges))

