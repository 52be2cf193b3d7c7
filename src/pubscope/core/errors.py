"""
Resolution errors.

Every failure of a resolution run is fatal: the run aborts with one of
these exceptions and no partial result is ever returned.
"""

from __future__ import annotations

from typing import Iterable, Optional


class ResolutionError(Exception):
    """Base class for all errors raised while resolving publication scopes."""


class ConfigurationError(ResolutionError):
    """
    Raised when a declared dependency or the manifest itself is malformed.

    Attributes:
        project_path: Project the offending declaration belongs to, if known.
        message: Human-readable error message.
    """

    def __init__(self, message: str, project_path: Optional[str] = None):
        self.project_path = project_path
        self.message = message
        prefix = f"Project '{project_path}': " if project_path else ""
        super().__init__(f"{prefix}{message}")


class GraphIntegrityError(ResolutionError):
    """Raised when the build graph references something that does not exist."""


class UnresolvedProjectReference(GraphIntegrityError):
    """
    Raised when a project reference has no entry in the module index.

    This usually means the referenced subproject does not participate in
    publishing, so it never received a published coordinate.

    Attributes:
        project_path: The referenced project that could not be found.
        requested_by: The project that holds the reference.
        known_paths: Paths present in the index at the time of the lookup.
    """

    def __init__(
        self,
        project_path: str,
        requested_by: Optional[str] = None,
        known_paths: Iterable[str] = (),
    ):
        self.project_path = project_path
        self.requested_by = requested_by
        self.known_paths = sorted(known_paths)
        where = f" in {requested_by}" if requested_by else ""
        known = ", ".join(self.known_paths) or "<none>"
        super().__init__(f"Cannot find project {project_path}{where}; indexed projects: {known}")
