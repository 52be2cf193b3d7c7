"""
CLI Utilities - Shared options and loading helpers.

Every command reads the same manifest and resolves the same subject
project, so the options and the load-and-resolve step live here.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from ..config import DEFAULT_MANIFEST_NAME
from ..core.errors import ResolutionError
from ..core.manifest import BuildManifest
from ..core.resolver import resolve_manifest
from ..core.result import ResolutionResult

console = Console()


def manifest_options(func):
    """Attach the ``--manifest`` and ``--project`` options shared by all commands."""
    func = click.option(
        "--project",
        "project_path",
        default=None,
        help="Project path to resolve (defaults to [tool.pubscope] subject)",
    )(func)
    func = click.option(
        "-m",
        "--manifest",
        "manifest_file",
        type=click.Path(dir_okay=False),
        default=DEFAULT_MANIFEST_NAME,
        help="Path to the build manifest",
    )(func)
    return func


def fail(message: str) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def load_and_resolve(manifest_file: str, project_path: Optional[str]) -> Tuple[BuildManifest, ResolutionResult]:
    """
    Load the manifest and resolve its subject project.

    Exits with status 1 on any resolution error.
    """
    try:
        manifest = BuildManifest.load(Path(manifest_file))
        result = resolve_manifest(manifest, project_path)
    except ResolutionError as e:
        fail(str(e))
    return manifest, result
