"""Exclusion Filter - drop groups by their first or last digit.

Invariants:
    - A group is dropped if its first char is in `front` or its last char is in `back`
    - Empty exclusion sets are a no-op: output equals input (same elements, same order)
    - Input list is never mutated
"""

from collections.abc import Iterable


def parse_exclusion_set(value: str | Iterable[str] | None) -> frozenset[str]:
    """'1, 2,,3' -> {'1', '2', '3'}. Iterables are trimmed the same way."""
    if not value:
        return frozenset()
    entries = value.split(",") if isinstance(value, str) else value
    return frozenset(e.strip() for e in entries if e and e.strip())


def filter_exclusions(
    results: list[str],
    front: frozenset[str] | set[str] = frozenset(),
    back: frozenset[str] | set[str] = frozenset(),
) -> list[str]:
    if not front and not back:
        return list(results)
    return [
        item for item in results
        if item
        and not (front and item[0] in front)
        and not (back and item[-1] in back)
    ]
