"""
Bundle plan for the packaging stage.

Splits candidate dependencies into those merged into the archive and those
left out, and carries the package relocation rules to apply to what is
merged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .manifest import Relocation, ShadowSettings
from .result import ResolutionResult
from .types import Coordinate


@dataclass
class BundlePlan:
    """
    Attributes:
        included: Candidates merged into the archive, in candidate order.
        excluded: Candidates declared externally instead.
        relocations: Rules applied to merged classes; empty when shading is off.
    """

    included: List[Coordinate] = field(default_factory=list)
    excluded: List[Coordinate] = field(default_factory=list)
    relocations: List[Relocation] = field(default_factory=list)

    def is_included(self, coordinate: Coordinate) -> bool:
        return any(c.base == coordinate.base for c in self.included)


def plan_bundle(
    result: ResolutionResult,
    candidates: Iterable[Coordinate],
    shadow: Optional[ShadowSettings] = None,
) -> BundlePlan:
    """
    Decide archive inclusion for each candidate dependency.

    Args:
        result: Resolution result of the published project.
        candidates: Dependencies the packaging stage could merge, usually
            every module of the resolved relocate tree.
        shadow: Relocation settings.

    Returns:
        BundlePlan with every candidate in exactly one of the two lists.
    """
    shadow = shadow or ShadowSettings()
    plan = BundlePlan(relocations=list(shadow.relocations) if shadow.enabled else [])
    seen = set()
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)
        if result.should_relocate(candidate):
            plan.included.append(candidate)
        else:
            plan.excluded.append(candidate)
    return plan
