"""
Pom Command - Print the POM dependencies block.

Usage:
    pubscope pom
    pubscope pom --json
"""

from __future__ import annotations

import json

import click

from ...core.metadata import dependency_entries, render_dependencies_xml
from ..utils import load_and_resolve, manifest_options


@click.command()
@manifest_options
@click.option("--json", "as_json", is_flag=True, help="Output entries as JSON")
def pom(manifest_file: str, project_path: str | None, as_json: bool):
    """
    Print the <dependencies> block of the published POM.

    Relocated modules are bundled and never appear here.
    """
    _, result = load_and_resolve(manifest_file, project_path)
    entries = dependency_entries(result)

    if as_json:
        click.echo(json.dumps([entry.model_dump() for entry in entries], indent=2))
        return

    click.echo(render_dependencies_xml(entries))
