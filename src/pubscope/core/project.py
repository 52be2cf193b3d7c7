"""
Build graph input model.

Describes a multi-project build the way it looks once configuration has
finished: a tree of projects, each exposing named configurations with the
dependencies declared in them and, where available, the dependency tree
they resolved to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from .errors import UnresolvedProjectReference
from .graph import DependencyView, ResolvedGraph, TaggedChild
from .types import Coordinate


@dataclass(frozen=True)
class ExternalDependency:
    """
    A dependency on an external module.

    Fields are optional because build scripts can declare incomplete
    notations; the collector rejects those that cannot be published.
    """

    group: Optional[str]
    name: Optional[str]
    version: Optional[str] = None

    def __str__(self) -> str:
        return ":".join(part or "?" for part in (self.group, self.name, self.version))


@dataclass(frozen=True)
class DependencyConstraint:
    """A version constraint on an external module; the version may be absent."""

    group: Optional[str]
    name: Optional[str]
    version: Optional[str] = None


@dataclass(frozen=True)
class ProjectDependency:
    """A reference to another project of the same build, by path."""

    path: str


@dataclass(frozen=True)
class FileDependency:
    """Local files that cannot be expressed as a coordinate."""

    files: tuple = ()


DeclaredDependency = Union[ExternalDependency, DependencyConstraint, ProjectDependency, FileDependency]


@dataclass
class ConfigurationNode:
    """
    One dependency bucket of a project.

    Attributes:
        name: Configuration name, e.g. "implementation" or "relocate".
        dependencies: Declared dependencies in declaration order.
        constraints: Declared version constraints in declaration order.
        resolved: The resolved dependency tree, when the build supplied one.
    """

    name: str
    dependencies: List[DeclaredDependency] = field(default_factory=list)
    constraints: List[DependencyConstraint] = field(default_factory=list)
    resolved: Optional[ResolvedGraph] = None

    def declared(self) -> Iterator[DeclaredDependency]:
        """Dependencies first, then constraints."""
        yield from self.dependencies
        yield from self.constraints


@dataclass(eq=False)
class ProjectNode:
    """
    A project of a multi-project build.

    Attributes:
        path: Build path, ":" for the root and ":a:b" for nested projects.
        name: Project name.
        group: Published group.
        version: Published version.
        artifact_name: Explicit published name, if configured.
        participates: Whether the project publishes an artifact at all.
        configurations: Configurations keyed by name, in declaration order.
        subprojects: Direct child projects.
    """

    path: str
    name: str
    group: str = ""
    version: str = ""
    artifact_name: Optional[str] = None
    participates: bool = True
    configurations: Dict[str, ConfigurationNode] = field(default_factory=dict)
    subprojects: List["ProjectNode"] = field(default_factory=list)

    def configuration(self, name: str) -> Optional[ConfigurationNode]:
        return self.configurations.get(name)

    def iter_projects(self) -> Iterator["ProjectNode"]:
        """This project followed by every subproject, depth first."""
        yield self
        for subproject in self.subprojects:
            yield from subproject.iter_projects()

    def find(self, path: str) -> Optional["ProjectNode"]:
        """Look up a project of this tree by path."""
        for project in self.iter_projects():
            if project.path == path:
                return project
        return None


class DeclaredGraph(DependencyView):
    """
    The declared representation of the build graph.

    Nodes are projects and declared dependencies. A project's children are
    the dependencies declared in its configurations; the children of a
    ``ProjectDependency`` are those of the project it references.
    """

    def __init__(self, root_project: ProjectNode, subject: ProjectNode):
        self.root_project = root_project
        self.subject = subject
        self._projects = {project.path: project for project in root_project.iter_projects()}

    def roots(self) -> List[ProjectNode]:
        return [self.subject]

    def project(self, path: str, requested_by: Optional[str] = None) -> ProjectNode:
        project = self._projects.get(path)
        if project is None:
            raise UnresolvedProjectReference(path, requested_by, self._projects.keys())
        return project

    def children(self, node, requested_by: Optional[str] = None) -> List[TaggedChild]:
        # Project references are followed lazily, only when walked into
        if isinstance(node, ProjectDependency):
            node = self.project(node.path, requested_by)
        if not isinstance(node, ProjectNode):
            return []
        return [
            TaggedChild(configuration.name, dependency)
            for configuration in node.configurations.values()
            for dependency in configuration.declared()
        ]

    def coordinate_of(self, node) -> Optional[Coordinate]:
        """
        Coordinates of external declarations as written.

        Projects and local files have no coordinate of their own here; the
        module index supplies the former and the latter are never published.
        """
        if isinstance(node, (ExternalDependency, DependencyConstraint)):
            return Coordinate(group=node.group or "", name=node.name or "", version=node.version or "")
        return None
