"""
Resolution result.

The immutable output of a resolution run: which coordinates are published
under which scope, and which base coordinates are bundled into the
artifact. Metadata emission reads the scope sets; packaging asks
``should_relocate`` for every candidate dependency.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from .types import SCOPE_PRIORITY, Coordinate, Scope, ScopeMap


@dataclass(frozen=True)
class ResolutionResult:
    """
    Attributes:
        scopes: Coordinates per scope, disjoint by base coordinate, each
            carrying the highest version observed for it.
        relocated: Base coordinates bundled into the artifact.
        aliases: Original coordinate of each relocated project mapped to
            the coordinate it is published under.
        resolved_modules: Every module of the merged resolved relocate tree,
            relocated projects under their published coordinate.
    """

    scopes: Mapping[Scope, Tuple[Coordinate, ...]]
    relocated: FrozenSet[Coordinate] = frozenset()
    aliases: Mapping[Coordinate, Coordinate] = field(default_factory=dict)
    resolved_modules: Tuple[Coordinate, ...] = ()

    def __post_init__(self):
        complete = {scope: tuple(self.scopes.get(scope, ())) for scope in SCOPE_PRIORITY}
        object.__setattr__(self, "scopes", MappingProxyType(complete))
        object.__setattr__(self, "relocated", frozenset(c.base for c in self.relocated))
        object.__setattr__(self, "aliases", MappingProxyType(dict(self.aliases)))
        object.__setattr__(self, "resolved_modules", tuple(self.resolved_modules))

    @classmethod
    def from_scope_map(
        cls,
        scopes: ScopeMap,
        relocated: FrozenSet[Coordinate],
        aliases: Optional[Mapping[Coordinate, Coordinate]] = None,
        resolved_modules: Tuple[Coordinate, ...] = (),
    ) -> "ResolutionResult":
        return cls(
            scopes=scopes,
            relocated=relocated,
            aliases=aliases or {},
            resolved_modules=resolved_modules,
        )

    def coordinates(self, scope: Scope) -> Tuple[Coordinate, ...]:
        """Coordinates owned by ``scope`` in declaration order."""
        return self.scopes[scope]

    def scope_of(self, coordinate: Coordinate) -> Optional[Scope]:
        """The scope that owns the coordinate's base, if any."""
        entry = self.find(coordinate)
        return entry[0] if entry else None

    def find(self, coordinate: Coordinate) -> Optional[Tuple[Scope, Coordinate]]:
        """Owning scope and resolved coordinate for a base coordinate."""
        base = self._canonical(coordinate).base
        for scope in SCOPE_PRIORITY:
            for member in self.scopes[scope]:
                if member.base == base:
                    return scope, member
        return None

    def should_relocate(self, coordinate: Coordinate) -> bool:
        """Whether the coordinate is bundled into the artifact."""
        # Either name of a relocated project counts
        return (
            coordinate.base in self.relocated
            or self._canonical(coordinate).base in self.relocated
        )

    def _canonical(self, coordinate: Coordinate) -> Coordinate:
        # Relocated projects may be asked for under their original coordinate
        for original, published in self.aliases.items():
            if original.base == coordinate.base:
                return published
        return coordinate

    def all_coordinates(self) -> Tuple[Coordinate, ...]:
        return tuple(c for scope in SCOPE_PRIORITY for c in self.scopes[scope])

    def __len__(self) -> int:
        return sum(len(members) for members in self.scopes.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scopes": {scope.value: [str(c) for c in self.scopes[scope]] for scope in SCOPE_PRIORITY},
            "relocated": sorted(str(c) for c in self.relocated),
            "aliases": {str(original): str(published) for original, published in self.aliases.items()},
        }
