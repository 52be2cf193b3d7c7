"""
pubscope - Publication scope resolution for multi-project builds.

Decides, for a build that publishes one artifact, which external modules
the artifact declares (and with which scope and version) and which ones
are merged into the artifact itself.

Key Components:
- core: Data types, the build graph model and the resolution pipeline
- cli: The `pubscope` command line

Usage:
    from pubscope.core import BuildManifest, resolve_manifest

    manifest = BuildManifest.load(Path("pubscope.toml"))
    result = resolve_manifest(manifest)
"""

__version__ = "0.1.0"

from .core.result import ResolutionResult
from .core.types import Coordinate, DependencyEdge, Scope

__all__ = [
    "__version__",
    "Coordinate",
    "DependencyEdge",
    "Scope",
    "ResolutionResult",
]
