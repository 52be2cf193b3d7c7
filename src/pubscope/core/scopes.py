"""Configuration name to publication scope classification."""

from typing import Optional

from ..config import SCOPE_TABLE
from .types import Scope


def classify(configuration_name: str) -> Optional[Scope]:
    """
    Map a dependency bucket to the scope a published manifest needs.

    Returns None for buckets that do not contribute to publication
    (test configurations, annotation processors and so on).
    """
    scope_name = SCOPE_TABLE.get(configuration_name)
    if scope_name is None:
        return None
    return Scope(scope_name)
