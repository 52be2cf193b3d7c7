"""
Resolve Command - Show publication scopes of a project.

Usage:
    pubscope resolve                     # Table per scope
    pubscope resolve --project :core     # Another project of the build
    pubscope resolve --json              # Machine readable
"""

from __future__ import annotations

import json

import click
from rich.table import Table

from ...core.types import SCOPE_PRIORITY, Scope
from ..utils import console, load_and_resolve, manifest_options

SCOPE_STYLES = {
    Scope.RELOCATE: "magenta",
    Scope.COMPILE: "green",
    Scope.RUNTIME: "cyan",
    Scope.PROVIDED: "yellow",
}


@click.command()
@manifest_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def resolve(manifest_file: str, project_path: str | None, as_json: bool):
    """
    Resolve publication scopes.

    Lists every external module the published artifact declares, with the
    scope and version it is declared under, and the modules bundled into
    the artifact instead.
    """
    manifest, result = load_and_resolve(manifest_file, project_path)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    subject = project_path or manifest.settings.subject
    if not len(result):
        console.print(f"[yellow]No dependencies to publish for {subject}[/yellow]")
        return

    table = Table(title=f"Publication scopes of {subject}")
    table.add_column("Scope", style="bold")
    table.add_column("Group")
    table.add_column("Name", style="cyan")
    table.add_column("Version")

    for scope in SCOPE_PRIORITY:
        style = SCOPE_STYLES[scope]
        for coordinate in result.coordinates(scope):
            table.add_row(
                f"[{style}]{scope.value}[/{style}]",
                coordinate.group,
                coordinate.name,
                coordinate.version or "[dim]unspecified[/dim]",
            )

    console.print(table)
    console.print(
        f"\n[bold]{len(result)}[/bold] dependencies, "
        f"[bold]{len(result.relocated)}[/bold] relocated"
    )
