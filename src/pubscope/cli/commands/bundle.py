"""
Bundle Command - Show what the shaded archive contains.

Candidates are the modules of the merged resolved relocate tree, including
the trees of relocated projects, plus every module the resolution declares.
Each one is either merged into the archive or left to package metadata.

Usage:
    pubscope bundle
    pubscope bundle --json
"""

from __future__ import annotations

import json
from typing import List

import click
from rich.tree import Tree

from ...core.bundle import plan_bundle
from ...core.result import ResolutionResult
from ...core.types import Coordinate
from ..utils import console, load_and_resolve, manifest_options


def bundle_candidates(result: ResolutionResult) -> List[Coordinate]:
    """Resolved relocate tree modules first, then every declared module."""
    return list(result.resolved_modules) + list(result.all_coordinates())


@click.command()
@manifest_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def bundle(manifest_file: str, project_path: str | None, as_json: bool):
    """
    Plan the contents of the shaded archive.
    """
    manifest, result = load_and_resolve(manifest_file, project_path)
    plan = plan_bundle(
        result,
        bundle_candidates(result),
        manifest.settings.shadow,
    )

    if as_json:
        click.echo(json.dumps({
            "included": [str(c) for c in plan.included],
            "excluded": [str(c) for c in plan.excluded],
            "relocations": [
                {"pattern": r.pattern, "destination": r.destination} for r in plan.relocations
            ],
        }, indent=2))
        return

    tree = Tree(f"📦 [bold]{project_path or manifest.settings.subject}[/bold]")

    included = tree.add(f"Bundled ({len(plan.included)})")
    for coordinate in plan.included:
        included.add(f"[magenta]{coordinate}[/magenta]")
    if not plan.included:
        included.add("[dim]nothing bundled[/dim]")

    excluded = tree.add(f"Declared ({len(plan.excluded)})")
    for coordinate in plan.excluded:
        excluded.add(f"[dim]{coordinate}[/dim]")

    if plan.relocations:
        rules = tree.add("🔄 Relocations")
        for rule in plan.relocations:
            rules.add(f"{rule.pattern} → {rule.destination}")

    console.print(tree)
