"""Generation Algorithms - the four combinatorial primitives over a digit pool.

Invariants:
    - Every function dedupes its pool first (order-preserving)
    - Output strings have length k; k <= 0 or an empty pool yields []
    - Never raise: guardrails upstream bound n and k before any call
    - Order-stable: identical inputs give identical output lists
    - Combination outputs follow pool scan order (ascending for a canonical pool);
      permutation outputs are order-sensitive and never re-sorted here

Counts:
    combinations_no_repeat    C(n, k)
    combinations_with_repeat  C(n + k - 1, k)
    permutations_no_repeat    n! / (n - k)!
    permutations_with_repeat  n ** k
"""

from formula_engine.core.domain_types import CalcMode
from formula_engine.core.normalize_digits import unique_pool


def combinations_no_repeat(pool: list[str], k: int) -> list[str]:
    items = unique_pool(pool)
    results: list[str] = []
    if k <= 0:
        return results

    def combine(start: int, current: list[str]) -> None:
        if len(current) == k:
            results.append("".join(current))
            return
        for i in range(start, len(items)):
            combine(i + 1, [*current, items[i]])

    combine(0, [])
    return results


def combinations_with_repeat(pool: list[str], k: int) -> list[str]:
    """Same scan as combinations_no_repeat, recursing on the same index."""
    items = unique_pool(pool)
    results: list[str] = []
    if k <= 0:
        return results

    def combine(start: int, current: list[str]) -> None:
        if len(current) == k:
            results.append("".join(current))
            return
        for i in range(start, len(items)):
            combine(i, [*current, items[i]])

    combine(0, [])
    return results


def permutations_no_repeat(pool: list[str], k: int) -> list[str]:
    items = unique_pool(pool)
    results: list[str] = []
    if k <= 0:
        return results

    def permute(current: list[str], remaining: list[str]) -> None:
        if len(current) == k:
            results.append("".join(current))
            return
        for i, item in enumerate(remaining):
            permute([*current, item], remaining[:i] + remaining[i + 1:])

    permute([], items)
    return results


def permutations_with_repeat(pool: list[str], k: int) -> list[str]:
    items = unique_pool(pool)
    results: list[str] = []
    if k <= 0 or not items:
        return results

    def permute(current: list[str]) -> None:
        if len(current) == k:
            results.append("".join(current))
            return
        for item in items:
            permute([*current, item])

    permute([])
    return results


def generate_groups(
    pool: list[str], k: int, mode: CalcMode, allow_repeats: bool,
) -> list[str]:
    """Dispatch to the primitive for (mode, allow_repeats)."""
    if mode == CalcMode.COMBINATION:
        if allow_repeats:
            return combinations_with_repeat(pool, k)
        return combinations_no_repeat(pool, k)
    if allow_repeats:
        return permutations_with_repeat(pool, k)
    return permutations_no_repeat(pool, k)
