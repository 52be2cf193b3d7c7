"""
Module index.

Maps every participating project of a multi-project build to the
coordinate it publishes under. Built once per resolution run, read-only
afterwards.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .errors import UnresolvedProjectReference
from .project import ProjectNode
from .types import Coordinate

logger = logging.getLogger(__name__)


def artifact_name(project: ProjectNode, root_project: ProjectNode) -> str:
    """
    The published name of a project.

    Uses the explicit artifact name when configured, otherwise
    ``<root project name>-<project name>``.
    """
    return project.artifact_name or f"{root_project.name}-{project.name}"


class ModuleIndex:
    """
    Immutable mapping of project path to published coordinate.

    Example:
        ```python
        index = ModuleIndex.build(root_project)
        coordinate = index.coordinate_for(":core")
        ```
    """

    def __init__(self, entries: Mapping[str, Coordinate]):
        self._entries: Mapping[str, Coordinate] = MappingProxyType(dict(entries))

    @classmethod
    def build(cls, root_project: ProjectNode) -> "ModuleIndex":
        """
        Visit the root project and every subproject recursively.

        Projects that do not participate in publishing are skipped; a later
        reference to one of them fails with ``UnresolvedProjectReference``.
        """
        entries: Dict[str, Coordinate] = {}
        cls._visit(root_project, root_project, entries)
        logger.debug(f"Indexed {len(entries)} publishing projects")
        return cls(entries)

    @classmethod
    def _visit(cls, project: ProjectNode, root_project: ProjectNode, entries: Dict[str, Coordinate]) -> None:
        if project.participates:
            entries[project.path] = Coordinate(
                group=project.group,
                name=artifact_name(project, root_project),
                version=project.version,
            )
        for subproject in project.subprojects:
            cls._visit(subproject, root_project, entries)

    def coordinate_for(self, project_path: str, requested_by: Optional[str] = None) -> Coordinate:
        """
        Published coordinate of a project.

        Raises:
            UnresolvedProjectReference: If the project is not in the index.
        """
        try:
            return self._entries[project_path]
        except KeyError:
            raise UnresolvedProjectReference(project_path, requested_by, self._entries.keys()) from None

    def __contains__(self, project_path: object) -> bool:
        return project_path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def coordinates(self) -> Tuple[Coordinate, ...]:
        """Published coordinates of every indexed project."""
        return tuple(self._entries.values())
