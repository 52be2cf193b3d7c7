"""
Package metadata view of a resolution result.

Relocated modules are merged into the artifact, so they never appear in
metadata; every other scope becomes ``<dependency>`` entries with the
matching Maven scope.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import List

from pydantic import BaseModel

from ..config import MAVEN_SCOPES
from .result import ResolutionResult
from .types import SCOPE_PRIORITY, Scope


class PomDependency(BaseModel):
    """One ``<dependency>`` entry of a POM."""
    group_id: str
    artifact_id: str
    version: str
    scope: str


def maven_scope(scope: Scope) -> str:
    """
    Maven scope for a publication scope.

    Raises:
        ValueError: For the relocate scope, which has no Maven counterpart.
    """
    if scope is Scope.RELOCATE:
        raise ValueError(f"Cannot add a Maven scope for {scope.value}")
    return MAVEN_SCOPES[scope.value]


def dependency_entries(result: ResolutionResult) -> List[PomDependency]:
    """Entries for every non-relocated scope, in scope priority order."""
    entries = []
    for scope in SCOPE_PRIORITY:
        if scope is Scope.RELOCATE:
            continue
        for coordinate in result.coordinates(scope):
            entries.append(
                PomDependency(
                    group_id=coordinate.group,
                    artifact_id=coordinate.name,
                    version=coordinate.version,
                    scope=maven_scope(scope),
                )
            )
    return entries


def render_dependencies_xml(entries: List[PomDependency]) -> str:
    """Render a ``<dependencies>`` block; an unspecified version is omitted."""
    root = ET.Element("dependencies")
    for entry in entries:
        node = ET.SubElement(root, "dependency")
        ET.SubElement(node, "groupId").text = entry.group_id
        ET.SubElement(node, "artifactId").text = entry.artifact_id
        if entry.version:
            ET.SubElement(node, "version").text = entry.version
        ET.SubElement(node, "scope").text = entry.scope
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")
