"""
Core type definitions for pubscope.

Coordinates identify external modules, scopes say how a module ends up in
the published artifact, and edges pair the two before reconciliation.
"""

from enum import StrEnum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError


class Scope(StrEnum):
    """
    Publication scopes, declared in priority order (highest first).

    RELOCATE marks a module that is merged into the artifact instead of
    being declared as an external dependency.
    """
    RELOCATE = "relocate"
    COMPILE = "compile"
    RUNTIME = "runtime"
    PROVIDED = "provided"

    @property
    def priority(self) -> int:
        """Lower number wins ownership of a base coordinate."""
        return SCOPE_PRIORITY.index(self)


SCOPE_PRIORITY: Tuple[Scope, ...] = (
    Scope.RELOCATE,
    Scope.COMPILE,
    Scope.RUNTIME,
    Scope.PROVIDED,
)


class Coordinate(BaseModel):
    """
    An external module coordinate: group, name and version.

    An empty version means "unspecified". Two coordinates sharing group and
    name share a base coordinate regardless of version.
    """
    group: str
    name: str
    version: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, notation: str) -> "Coordinate":
        """
        Parse ``group:name`` or ``group:name:version`` notation.

        Raises:
            ConfigurationError: If the notation has the wrong number of parts.
        """
        parts = notation.strip().split(":")
        if len(parts) == 2:
            return cls(group=parts[0], name=parts[1])
        if len(parts) == 3:
            return cls(group=parts[0], name=parts[1], version=parts[2])
        raise ConfigurationError(f"Invalid coordinate notation '{notation}'")

    @property
    def base(self) -> "Coordinate":
        """This coordinate with the version erased."""
        if not self.version:
            return self
        return self.with_version("")

    @property
    def key(self) -> str:
        """``group:name`` identity used for ownership comparisons."""
        return f"{self.group}:{self.name}"

    def with_version(self, version: str) -> "Coordinate":
        if version == self.version:
            return self
        return Coordinate(group=self.group, name=self.name, version=version)

    def __str__(self) -> str:
        if self.version:
            return f"{self.group}:{self.name}:{self.version}"
        return self.key


class DependencyEdge(BaseModel):
    """A raw ``(scope, coordinate)`` pair emitted before reconciliation."""
    scope: Scope
    coordinate: Coordinate

    model_config = ConfigDict(frozen=True)


ScopeMap = Dict[Scope, Tuple[Coordinate, ...]]


def group_edges_by_scope(edges: List[DependencyEdge]) -> Dict[Scope, List[Coordinate]]:
    """Bucket edges per scope, keeping declaration order inside each bucket."""
    grouped: Dict[Scope, List[Coordinate]] = {scope: [] for scope in SCOPE_PRIORITY}
    for edge in edges:
        grouped[edge.scope].append(edge.coordinate)
    return grouped
