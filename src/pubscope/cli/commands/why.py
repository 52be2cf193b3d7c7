"""
Why Command - Explain the verdict for one module.

Usage:
    pubscope why com.example:lib
"""

from __future__ import annotations

import sys

import click

from ...core.errors import ConfigurationError
from ...core.types import Coordinate
from ..utils import console, fail, load_and_resolve, manifest_options


@click.command()
@click.argument("coordinate")
@manifest_options
def why(coordinate: str, manifest_file: str, project_path: str | None):
    """
    Explain how a module ends up in the published artifact.

    Shows the owning scope, the selected version and whether the module is
    bundled. The version of COORDINATE, if given, is ignored.

    \b
    Examples:
        pubscope why com.google.guava:guava
        pubscope why org.slf4j:slf4j-api --project :core
    """
    try:
        requested = Coordinate.parse(coordinate)
    except ConfigurationError as e:
        fail(str(e))

    _, result = load_and_resolve(manifest_file, project_path)

    entry = result.find(requested)
    relocated = result.should_relocate(requested)
    if entry is None and not relocated:
        console.print(f"[yellow]{requested.key} is not part of the publication[/yellow]")
        sys.exit(1)

    console.print(f"\n[bold]Module: {requested.key}[/bold]\n")
    if entry is not None:
        scope, member = entry
        console.print(f"  Scope: [cyan]{scope.value}[/cyan]")
        console.print(f"  Version: {member.version or '[dim]unspecified[/dim]'}")
    else:
        console.print("  Scope: [dim]none[/dim]")

    for original, published in result.aliases.items():
        if original.base == requested.base:
            console.print(f"  Published as: [green]{published}[/green]")

    if relocated:
        console.print("  Bundled: [magenta]yes[/magenta], merged into the artifact")
    else:
        console.print("  Bundled: no, declared in package metadata")
