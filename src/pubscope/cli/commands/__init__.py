"""
CLI Commands Package.

Each command is implemented in its own module.
"""

from . import bundle
from . import pom
from . import resolve
from . import why

__all__ = [
    "bundle",
    "pom",
    "resolve",
    "why",
]
