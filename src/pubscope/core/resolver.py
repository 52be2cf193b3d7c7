"""
Dependency Resolver.

Runs the resolution pipeline for one project of a multi-project build:

    1. Index   - every participating project gets its published coordinate.
    2. Collect - declared and resolved dependencies become raw edges.
    3. Close   - the relocation closure marks bundled modules.
    4. Reconcile - one scope and the highest version per base coordinate.
    5. Filter  - redundant cross-scope entries are removed.

Every stage after collection is a pure function of its input. A failure in
any stage aborts the run; a partially built result is never returned.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from .closure import RelocationClosure
from .collector import GraphCollector
from .errors import ConfigurationError
from .manifest import BuildManifest, ResolverSettings
from .module_index import ModuleIndex
from .project import ProjectNode
from .reconciler import RedundancyFilter, VersionReconciler
from .result import ResolutionResult
from .types import Coordinate, DependencyEdge, Scope

logger = logging.getLogger(__name__)


class DependencyResolver:
    """
    Resolves publication scopes for projects of one build.

    Example:
        ```python
        resolver = DependencyResolver(root_project)
        result = resolver.resolve(":core")
        for coordinate in result.coordinates(Scope.COMPILE):
            print(coordinate)
        ```
    """

    def __init__(self, root_project: ProjectNode, settings: Optional[ResolverSettings] = None):
        """
        Initialize the resolver.

        Args:
            root_project: Root of the fully configured project tree.
            settings: Resolver settings; defaults when omitted.
        """
        self.root_project = root_project
        self.settings = settings or ResolverSettings()

    def resolve(self, subject_path: Optional[str] = None) -> ResolutionResult:
        """
        Resolve the publication scopes of one project.

        Args:
            subject_path: Project to resolve; the configured subject if omitted.

        Returns:
            ResolutionResult for the project.

        Raises:
            ConfigurationError: If a declaration is incomplete.
            UnresolvedProjectReference: If a project reference is not indexed.
        """
        path = subject_path or self.settings.subject
        subject = self.root_project.find(path)
        if subject is None:
            raise ConfigurationError(f"No project with path '{path}' in the build")
        logger.info(f"Resolving publication scopes for {subject.path}")

        index = ModuleIndex.build(self.root_project)
        collected = GraphCollector(self.root_project, index, self.settings).collect(subject)

        seeds = [edge.coordinate for edge in collected.edges if edge.scope is Scope.RELOCATE]
        seeds.extend(collected.aliases.keys())
        boundaries = list(index.coordinates()) + list(collected.aliases.keys())
        if collected.resolved.node_count and not collected.resolved.is_acyclic():
            logger.warning(f"Resolved relocate tree of {subject.path} contains a cycle")
        closure = RelocationClosure(
            collected.resolved,
            seeds,
            transitive=self.settings.relocate_transitive,
            boundaries=boundaries,
            aliases=collected.aliases,
        ).compute()

        edges = [_published_edge(edge, collected.aliases) for edge in collected.edges + closure.edges]
        scopes = VersionReconciler().reconcile(edges)
        scopes = RedundancyFilter().apply(scopes)

        resolved_modules = tuple(
            _published_coordinate(node, collected.aliases) for node in collected.resolved.iter_nodes()
        )
        result = ResolutionResult.from_scope_map(
            scopes, closure.relocated, collected.aliases, resolved_modules
        )
        logger.info(
            f"Resolved {len(result)} dependencies for {subject.path}; "
            f"{len(result.relocated)} relocated"
        )
        return result


def _published_coordinate(coordinate: Coordinate, aliases: Mapping[Coordinate, Coordinate]) -> Coordinate:
    for original, published in aliases.items():
        if original.base == coordinate.base:
            return published
    return coordinate


def _published_edge(edge: DependencyEdge, aliases: Mapping[Coordinate, Coordinate]) -> DependencyEdge:
    # A relocated project can show up in a resolved tree under its original name
    coordinate = _published_coordinate(edge.coordinate, aliases)
    if coordinate is edge.coordinate:
        return edge
    return DependencyEdge(scope=edge.scope, coordinate=coordinate)


def resolve_dependencies(
    root_project: ProjectNode,
    subject_path: Optional[str] = None,
    settings: Optional[ResolverSettings] = None,
) -> ResolutionResult:
    """
    Convenience function to resolve one project.

    Args:
        root_project: Root of the project tree.
        subject_path: Project to resolve.
        settings: Resolver settings.

    Returns:
        ResolutionResult for the project.
    """
    return DependencyResolver(root_project, settings).resolve(subject_path)


def resolve_manifest(manifest: BuildManifest, subject_path: Optional[str] = None) -> ResolutionResult:
    """Resolve the subject project of a loaded manifest."""
    return DependencyResolver(manifest.root_project, manifest.settings).resolve(subject_path)
