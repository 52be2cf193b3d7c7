"""
pubscope Core Module.

This package contains the building blocks of a resolution run:

Model:
    - Coordinate, Scope, DependencyEdge: Data structures
    - ProjectNode and declared dependency types: The build graph input
    - ResolvedGraph: Resolved dependency tree (rustworkx backed)

Pipeline:
    - ModuleIndex: Project path to published coordinate
    - classify: Configuration name to scope
    - GraphCollector: Raw (scope, coordinate) edges
    - RelocationClosure: Bundled modules of the resolved tree
    - VersionReconciler, RedundancyFilter: Disjoint per-scope sets
    - DependencyResolver: The whole pipeline

Consumers:
    - dependency_entries, render_dependencies_xml: Package metadata
    - plan_bundle: Archive inclusion and relocation rules
"""

from .bundle import BundlePlan, plan_bundle
from .closure import ClosureResult, RelocationClosure
from .collector import CollectedGraph, GraphCollector
from .errors import (
    ConfigurationError,
    GraphIntegrityError,
    ResolutionError,
    UnresolvedProjectReference,
)
from .graph import DependencyView, ResolvedGraph, TaggedChild
from .manifest import BuildManifest, Relocation, ResolverSettings, ShadowSettings
from .metadata import PomDependency, dependency_entries, render_dependencies_xml
from .module_index import ModuleIndex
from .project import (
    ConfigurationNode,
    DeclaredGraph,
    DependencyConstraint,
    ExternalDependency,
    FileDependency,
    ProjectDependency,
    ProjectNode,
)
from .reconciler import RedundancyFilter, VersionReconciler, reconcile
from .resolver import DependencyResolver, resolve_dependencies, resolve_manifest
from .result import ResolutionResult
from .scopes import classify
from .types import SCOPE_PRIORITY, Coordinate, DependencyEdge, Scope
from .versions import compare_versions, max_version

__all__ = [
    # Types
    "Coordinate",
    "DependencyEdge",
    "Scope",
    "SCOPE_PRIORITY",
    "compare_versions",
    "max_version",
    # Errors
    "ResolutionError",
    "ConfigurationError",
    "GraphIntegrityError",
    "UnresolvedProjectReference",
    # Build graph
    "ProjectNode",
    "ConfigurationNode",
    "ExternalDependency",
    "DependencyConstraint",
    "ProjectDependency",
    "FileDependency",
    "DependencyView",
    "DeclaredGraph",
    "ResolvedGraph",
    "TaggedChild",
    "BuildManifest",
    "ResolverSettings",
    "ShadowSettings",
    "Relocation",
    # Pipeline
    "ModuleIndex",
    "classify",
    "GraphCollector",
    "CollectedGraph",
    "RelocationClosure",
    "ClosureResult",
    "VersionReconciler",
    "RedundancyFilter",
    "reconcile",
    "DependencyResolver",
    "ResolutionResult",
    "resolve_dependencies",
    "resolve_manifest",
    # Consumers
    "PomDependency",
    "dependency_entries",
    "render_dependencies_xml",
    "BundlePlan",
    "plan_bundle",
]
