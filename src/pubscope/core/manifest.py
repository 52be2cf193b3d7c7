"""
Manifest definition and parsing for pubscope.toml.

A manifest describes a multi-project build after configuration has
finished: the project tree, the dependencies declared in each
configuration, the dependency tree the relocate configuration resolved to,
and resolver settings under ``[tool.pubscope]``.

The same structure is accepted as YAML (``.yaml`` / ``.yml``), which is
convenient when the build tool exports it.

Example:
    ```toml
    [tool.pubscope]
    subject = ":"

    [project]
    name = "app"
    group = "com.example"
    version = "1.0.0"

    [project.configurations.relocate]
    dependencies = ["lib:base:1.0.0", { project = ":util" }]

    [project.configurations.relocate.resolved]
    roots = ["lib:base:1.0.0"]
    children = { "lib:base:1.0.0" = ["lib:helper:2.0.0"] }

    [[project.subprojects]]
    name = "util"
    ```
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError

from ..config import (
    DEFAULT_RELOCATE_TRANSITIVE,
    DEFAULT_TRAVERSE_RELOCATED_PROJECTS,
    ROOT_PROJECT_PATH,
    YAML_SUFFIXES,
)
from .errors import ConfigurationError
from .graph import ResolvedGraph
from .project import (
    ConfigurationNode,
    DeclaredDependency,
    DependencyConstraint,
    ExternalDependency,
    FileDependency,
    ProjectDependency,
    ProjectNode,
)
from .types import Coordinate

# Configuration a resolved child is tagged with when the manifest omits it
DEFAULT_RESOLVED_CONFIGURATION = "compile"


def _table(value: Any, where: str) -> Dict[str, Any]:
    """A TOML table or YAML mapping; an absent value reads as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{where}' must be a table, got {type(value).__name__}")
    return value


def _array(value: Any, where: str) -> List[Any]:
    """A TOML array or YAML sequence; an absent value reads as empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"'{where}' must be an array, got {type(value).__name__}")
    return value


def _text(value: Any) -> Optional[str]:
    # YAML reads `version: 1.5` as a float
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Relocation:
    """A package relocation rule applied to bundled classes."""

    pattern: str
    destination: str


@dataclass
class ShadowSettings:
    """
    Configuration from [tool.pubscope.shadow].

    Attributes:
        enabled: Whether bundled classes are relocated at all.
        relocations: Package relocation rules in declaration order.
    """

    enabled: bool = True
    relocations: List[Relocation] = field(default_factory=list)

    def relocate(self, pattern: str, destination: Optional[str] = None) -> None:
        """Add a rule; a single argument is used as both pattern and destination."""
        self.relocations.append(Relocation(pattern, destination or pattern))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShadowSettings":
        """Parse from TOML dictionary."""
        settings = cls(enabled=bool(data.get("enabled", True)))
        for rule in _array(data.get("relocations"), "tool.pubscope.shadow.relocations"):
            if isinstance(rule, str):
                settings.relocate(rule)
            elif isinstance(rule, dict) and "pattern" in rule:
                settings.relocate(str(rule["pattern"]), _text(rule.get("destination")))
            else:
                raise ConfigurationError(f"Invalid relocation rule: {rule!r}")
        return settings


@dataclass
class ResolverSettings:
    """
    Configuration from [tool.pubscope].

    Attributes:
        subject: Path of the project whose publication is resolved.
        traverse_relocated_projects: Merge the dependencies of relocated
            sibling projects as though declared by the subject.
        relocate_transitive: Bundle everything reachable from a relocated
            module in the resolved tree, not only what is marked explicitly.
        shadow: Archive relocation settings.
    """

    subject: str = ROOT_PROJECT_PATH
    traverse_relocated_projects: bool = DEFAULT_TRAVERSE_RELOCATED_PROJECTS
    relocate_transitive: bool = DEFAULT_RELOCATE_TRANSITIVE
    shadow: ShadowSettings = field(default_factory=ShadowSettings)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResolverSettings":
        """Parse from TOML dictionary."""
        return cls(
            subject=str(data.get("subject", ROOT_PROJECT_PATH)),
            traverse_relocated_projects=bool(
                data.get("traverse_relocated_projects", DEFAULT_TRAVERSE_RELOCATED_PROJECTS)
            ),
            relocate_transitive=bool(data.get("relocate_transitive", DEFAULT_RELOCATE_TRANSITIVE)),
            shadow=ShadowSettings.from_dict(_table(data.get("shadow"), "tool.pubscope.shadow")),
        )


def _split_notation(notation: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    parts = [part.strip() or None for part in notation.split(":")]
    if len(parts) == 2:
        return parts[0], parts[1], None
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    raise ConfigurationError(f"Invalid dependency notation '{notation}'")


def parse_dependency(value: Any) -> DeclaredDependency:
    """
    Parse one entry of a ``dependencies`` list.

    Accepted forms:
        ``"group:name:version"``
        ``{ project = ":path" }``
        ``{ files = ["libs/a.jar"] }``
        ``{ group = "...", name = "...", version = "..." }``
    """
    if isinstance(value, str):
        return ExternalDependency(*_split_notation(value))

    if isinstance(value, dict):
        if "project" in value:
            return ProjectDependency(path=str(value["project"]))
        if "files" in value:
            files = value["files"]
            if isinstance(files, str):
                files = [files]
            return FileDependency(files=tuple(str(f) for f in _array(files, "files")))
        if "name" in value:
            return ExternalDependency(
                group=_text(value.get("group")),
                name=_text(value.get("name")),
                version=_text(value.get("version")),
            )

    raise ConfigurationError(f"Unsupported dependency notation: {value!r}")


def parse_constraint(value: Any) -> DependencyConstraint:
    """Parse one entry of a ``constraints`` list."""
    if isinstance(value, str):
        return DependencyConstraint(*_split_notation(value))
    if isinstance(value, dict) and "name" in value:
        return DependencyConstraint(
            group=_text(value.get("group")),
            name=_text(value.get("name")),
            version=_text(value.get("version")),
        )
    raise ConfigurationError(f"Unsupported constraint notation: {value!r}")


def parse_resolved(data: Dict[str, Any]) -> ResolvedGraph:
    """
    Parse a resolved dependency tree.

    ``roots`` lists the first-level resolved modules; ``children`` maps a
    module to its resolved children, each either a coordinate string or a
    ``{ coordinate, configuration }`` table.
    """
    graph = ResolvedGraph()
    for root in _array(data.get("roots"), "resolved.roots"):
        graph.add_root(Coordinate.parse(str(root)))

    for parent, children in _table(data.get("children"), "resolved.children").items():
        parent_coordinate = Coordinate.parse(str(parent))
        for child in _array(children, f"resolved.children.{parent}"):
            if isinstance(child, str):
                coordinate, configuration = child, DEFAULT_RESOLVED_CONFIGURATION
            elif isinstance(child, dict) and "coordinate" in child:
                coordinate = str(child["coordinate"])
                configuration = str(child.get("configuration", DEFAULT_RESOLVED_CONFIGURATION))
            else:
                raise ConfigurationError(f"Invalid resolved child of {parent}: {child!r}")
            graph.add_edge(parent_coordinate, Coordinate.parse(coordinate), configuration)
    return graph


def _child_path(parent_path: str, name: str) -> str:
    if parent_path == ROOT_PROJECT_PATH:
        return f":{name}"
    return f"{parent_path}:{name}"


def _parse_configuration(name: str, data: Any) -> ConfigurationNode:
    data = _table(data, f"configurations.{name}")
    resolved = data.get("resolved")
    return ConfigurationNode(
        name=name,
        dependencies=[
            parse_dependency(d) for d in _array(data.get("dependencies"), f"configurations.{name}.dependencies")
        ],
        constraints=[
            parse_constraint(c) for c in _array(data.get("constraints"), f"configurations.{name}.constraints")
        ],
        resolved=parse_resolved(_table(resolved, f"configurations.{name}.resolved")) if resolved is not None else None,
    )


def parse_project(data: Dict[str, Any], parent: Optional[ProjectNode] = None) -> ProjectNode:
    """
    Parse a project table and its subprojects recursively.

    Subprojects inherit group and version from their parent when they do
    not set their own, and default their path from the parent's path.
    """
    if "name" not in data:
        raise ConfigurationError("Every project needs a 'name'")

    name = str(data["name"])
    if parent is None:
        path = str(data.get("path", ROOT_PROJECT_PATH))
    else:
        path = str(data.get("path", _child_path(parent.path, name)))

    try:
        configurations = {
            str(config_name): _parse_configuration(str(config_name), config_data)
            for config_name, config_data in _table(data.get("configurations"), "configurations").items()
        }
        subprojects = _array(data.get("subprojects"), "subprojects")
    except ConfigurationError as e:
        raise ConfigurationError(e.message, project_path=path) from None

    project = ProjectNode(
        path=path,
        name=name,
        group=_text(data.get("group")) or (parent.group if parent else ""),
        version=_text(data.get("version")) or (parent.version if parent else ""),
        artifact_name=_text(data.get("artifact_name")),
        participates=bool(data.get("participates", True)),
        configurations=configurations,
    )
    for child in subprojects:
        if not isinstance(child, dict):
            raise ConfigurationError(
                f"'subprojects' entries must be tables, got {type(child).__name__}", project_path=path
            )
        project.subprojects.append(parse_project(child, project))
    return project


@dataclass
class BuildManifest:
    """
    Represents the parsed content of a pubscope manifest.

    Attributes:
        root_project: The root of the project tree.
        settings: Resolver settings from [tool.pubscope].
        path: Where the manifest was loaded from, if it came from disk.
    """

    root_project: ProjectNode
    settings: ResolverSettings = field(default_factory=ResolverSettings)
    path: Optional[Path] = None

    @classmethod
    def load(cls, path: Path) -> "BuildManifest":
        """
        Load and parse a manifest file (TOML, or YAML by extension).

        Raises:
            ConfigurationError: If the file is missing or malformed.
        """
        if not path.exists():
            raise ConfigurationError(f"Manifest not found: {path}")

        try:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(path.read_text()) or {}
            else:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Failed to parse {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Manifest {path} must contain a table at the top level")
        return cls.from_dict(data, path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[Path] = None) -> "BuildManifest":
        """
        Build a manifest from already parsed TOML or YAML data.

        Raises:
            ConfigurationError: If the structure or a value is invalid.
        """
        if "project" not in data:
            raise ConfigurationError("Manifest has no [project] table")

        tool_section = _table(_table(data.get("tool"), "tool").get("pubscope"), "tool.pubscope")
        try:
            return cls(
                root_project=parse_project(_table(data["project"], "project")),
                settings=ResolverSettings.from_dict(tool_section),
                path=path,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value in manifest: {e}") from e

    def subject_project(self, subject: Optional[str] = None) -> ProjectNode:
        """
        The project to resolve: ``subject`` if given, else the configured one.

        Raises:
            ConfigurationError: If no project has that path.
        """
        path = subject or self.settings.subject
        project = self.root_project.find(path)
        if project is None:
            raise ConfigurationError(f"No project with path '{path}' in manifest")
        return project
