"""
Graph Collector.

Walks the declared dependencies of a project configuration by
configuration and emits raw ``(scope, coordinate)`` edges. The output is
an immutable snapshot; nothing here decides versions or ownership.

Declared dependencies fall into three cases:
    1. References to other projects of the build: resolved through the
       module index. Under the relocate scope the referenced project's own
       dependencies are collected too, as though declared locally.
    2. Local files: dropped, they cannot be represented in metadata.
    3. External coordinates and version constraints: emitted as declared.

Separately, the first level below the relocate configuration's resolved
roots is surfaced as ordinary edges so that the libraries a bundled module
needs are declared, unless the closure later finds them relocated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

from ..config import RELOCATE_CONFIGURATION_NAME
from .errors import ConfigurationError
from .graph import DependencyView, ResolvedGraph
from .manifest import ResolverSettings
from .module_index import ModuleIndex
from .project import (
    DeclaredGraph,
    DependencyConstraint,
    ExternalDependency,
    FileDependency,
    ProjectDependency,
    ProjectNode,
)
from .scopes import classify
from .types import Coordinate, DependencyEdge, Scope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectedGraph:
    """
    Output of the collection phase.

    Attributes:
        edges: Raw edges in declaration order; the same base coordinate may
            appear many times across scopes.
        aliases: Original coordinate of each relocated project mapped to the
            coordinate it is published under.
        resolved: Resolved relocate tree merged over every traversed project.
    """

    edges: Tuple[DependencyEdge, ...]
    aliases: Mapping[Coordinate, Coordinate]
    resolved: ResolvedGraph


class GraphCollector:
    """
    Collects dependency edges for one subject project.

    Holds no state between calls; every ``collect`` builds its output from
    scratch.
    """

    def __init__(self, root_project: ProjectNode, index: ModuleIndex, settings: Optional[ResolverSettings] = None):
        self.root_project = root_project
        self.index = index
        self.settings = settings or ResolverSettings()

    def collect(self, subject: ProjectNode) -> CollectedGraph:
        """
        Collect every edge the subject project contributes.

        Raises:
            ConfigurationError: If an external declaration is incomplete.
            UnresolvedProjectReference: If a referenced project is not indexed.
        """
        view = DeclaredGraph(self.root_project, subject)
        edges: List[DependencyEdge] = []
        aliases: Dict[Coordinate, Coordinate] = {}
        resolved = ResolvedGraph()

        self._collect_project(view, subject, subject.path, edges, aliases, resolved, visited=set())
        resolved_edges = collect_resolved_edges(resolved)
        edges.extend(resolved_edges)

        logger.debug(
            f"Collected {len(edges)} edges for {subject.path} "
            f"({len(resolved_edges)} from the resolved relocate tree)"
        )
        return CollectedGraph(
            edges=tuple(edges),
            aliases=MappingProxyType(aliases),
            resolved=resolved,
        )

    def _collect_project(
        self,
        view: DeclaredGraph,
        node,
        project_path: str,
        edges: List[DependencyEdge],
        aliases: Dict[Coordinate, Coordinate],
        resolved: ResolvedGraph,
        visited: Set[str],
    ) -> None:
        visited.add(project_path)
        project = view.project(project_path)

        for configuration, dependency in view.children(node):
            scope = classify(configuration)
            if scope is None:
                continue

            if isinstance(dependency, ProjectDependency):
                coordinate = self.index.coordinate_for(dependency.path, requested_by=project_path)
                edges.append(DependencyEdge(scope=scope, coordinate=coordinate))

                if scope is Scope.RELOCATE:
                    referenced = view.project(dependency.path, requested_by=project_path)
                    original = Coordinate(group=referenced.group, name=referenced.name, version=referenced.version)
                    aliases[original] = coordinate
                    if self.settings.traverse_relocated_projects and dependency.path not in visited:
                        logger.debug(f"Traversing relocated project {dependency.path} from {project_path}")
                        self._collect_project(
                            view, dependency, dependency.path, edges, aliases, resolved, visited
                        )

            elif isinstance(dependency, FileDependency):
                logger.debug(f"Skipping local files in {project_path}:{configuration}: {list(dependency.files)}")

            else:
                coordinate = external_coordinate(dependency, configuration, project_path)
                edges.append(DependencyEdge(scope=scope, coordinate=coordinate))

        relocate = project.configuration(RELOCATE_CONFIGURATION_NAME)
        if relocate is not None and relocate.resolved is not None:
            resolved.merge(relocate.resolved)


def external_coordinate(dependency, configuration: str, project_path: str) -> Coordinate:
    """
    Validate an external declaration and turn it into a coordinate.

    Group and name are always required. Plain dependencies also need a
    version; constraints may leave it unspecified.

    Raises:
        ConfigurationError: If a required part is missing.
    """
    if not isinstance(dependency, (ExternalDependency, DependencyConstraint)):
        raise ConfigurationError(
            f"Unsupported dependency {dependency!r} in configuration '{configuration}'",
            project_path=project_path,
        )
    missing = [part for part in ("group", "name") if not getattr(dependency, part)]
    if isinstance(dependency, ExternalDependency) and not dependency.version:
        missing.append("version")
    if missing:
        raise ConfigurationError(
            f"Dependency '{dependency}' in configuration '{configuration}' is missing {', '.join(missing)}",
            project_path=project_path,
        )
    return Coordinate(group=dependency.group, name=dependency.name, version=dependency.version or "")


def collect_resolved_edges(view: DependencyView) -> List[DependencyEdge]:
    """
    Edges for the resolved children of each root, each root visited once.

    Children are tagged with the scope of the configuration they were
    resolved through; children of unknown configurations are skipped.
    """
    edges: List[DependencyEdge] = []
    seen: Set = set()
    for root in view.roots():
        if root in seen:
            continue
        seen.add(root)
        for configuration, child in view.children(root):
            scope = classify(configuration)
            coordinate = view.coordinate_of(child)
            if scope is None or coordinate is None:
                continue
            edges.append(DependencyEdge(scope=scope, coordinate=coordinate))
    return edges
