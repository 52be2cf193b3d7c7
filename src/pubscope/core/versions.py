"""
Version ordering.

Versions are compared segment by segment: numeric segments numerically,
textual segments (qualifiers) by a fixed rank and then lexically. The
ordering follows the conventions of Maven repositories:

    1 == 1.0 == 1.0.0
    1.0-alpha < 1.0-beta < 1.0-milestone < 1.0-rc < 1.0-snapshot < 1.0 < 1.0-sp
    1.9 < 1.10
    1.0-rc < 1.0.1          (a number always outranks a qualifier)

The empty string is the "unspecified" sentinel and sorts below every real
version.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union

# Known qualifiers in ascending order; the empty string is a plain release
QUALIFIER_ORDER: Tuple[str, ...] = ("alpha", "beta", "milestone", "rc", "snapshot", "", "sp")

QUALIFIER_ALIASES = {
    "a": "alpha",
    "b": "beta",
    "m": "milestone",
    "cr": "rc",
    "ga": "",
    "final": "",
    "release": "",
}

SEPARATORS = {".", "-", "_", "+"}

Item = Union[int, str]


def _tokenize(version: str) -> List[Item]:
    """Split a version into numeric and textual items."""
    items: List[Item] = []
    current = ""

    def flush() -> None:
        nonlocal current
        if current:
            items.append(int(current) if current.isdigit() else current)
        current = ""

    for char in version.lower():
        if char in SEPARATORS:
            flush()
            continue
        # A switch between digits and letters starts a new item
        if current and current[-1].isdigit() != char.isdigit():
            flush()
        current += char
    flush()
    return items


def _is_null(item: Item) -> bool:
    if isinstance(item, int):
        return item == 0
    return QUALIFIER_ALIASES.get(item, item) == ""


def parse_version(version: str) -> Tuple[Item, ...]:
    """
    Normalize a version into comparable items.

    Trailing zeros and release qualifiers carry no information and are
    dropped, so ``1.0.0`` and ``1`` normalize to the same items.
    """
    items = [
        QUALIFIER_ALIASES.get(item, item) if isinstance(item, str) else item
        for item in _tokenize(version)
    ]
    while items and _is_null(items[-1]):
        items.pop()
    return tuple(items)


def _qualifier_key(qualifier: str) -> Tuple[int, str]:
    qualifier = QUALIFIER_ALIASES.get(qualifier, qualifier)
    if qualifier in QUALIFIER_ORDER:
        return QUALIFIER_ORDER.index(qualifier), ""
    # Unknown qualifiers rank above every known one, then lexically
    return len(QUALIFIER_ORDER), qualifier


def _compare_items(left: Optional[Item], right: Optional[Item]) -> int:
    if left is None and right is None:
        return 0
    if left is None:
        return -_compare_items(right, None)

    if isinstance(left, int):
        if right is None:
            return 0 if left == 0 else 1
        if isinstance(right, int):
            return (left > right) - (left < right)
        return 1

    # left is a qualifier
    if isinstance(right, int):
        return -1
    left_key = _qualifier_key(left)
    right_key = _qualifier_key(right if right is not None else "")
    return (left_key > right_key) - (left_key < right_key)


def compare_versions(left: str, right: str) -> int:
    """
    Compare two version strings.

    Returns:
        A negative number, zero or a positive number when ``left`` is lower
        than, equal to or greater than ``right``.
    """
    if left == right:
        return 0
    if not left:
        return -1
    if not right:
        return 1

    left_items = parse_version(left)
    right_items = parse_version(right)
    for index in range(max(len(left_items), len(right_items))):
        a = left_items[index] if index < len(left_items) else None
        b = right_items[index] if index < len(right_items) else None
        result = _compare_items(a, b)
        if result:
            return result
    return 0


def max_version(versions: Iterable[str]) -> str:
    """
    Pick the highest version.

    Equal versions keep the first one seen, so the result is deterministic
    for a given declaration order.
    """
    best: Optional[str] = None
    for version in versions:
        if best is None or compare_versions(version, best) > 0:
            best = version
    if best is None:
        raise ValueError("max_version() arg is an empty iterable")
    return best
