"""Guardrail Estimator - closed-form upper bounds on output cardinality.

Invariants:
    - All functions are PURE and never enumerate groups
    - Any value above guardrails.max_groups_estimate (or non-finite) is returned as
      the over-budget sentinel max_groups_estimate + 1
    - k > n or k < 0 for the no-repeat modes returns exactly 0 (true count is zero)
    - No false negatives: a true count above the ceiling always estimates above it

Design Decisions:
    - Exact integer arithmetic: each partial product C(n-k+i, i) is integral, so
      floor division is exact and no rounding drift accumulates
    - Products stop early once past the ceiling; partial products never shrink
      (k <= n keeps every factor >= 1), so the sentinel is already decided
"""

import math

from formula_engine.core.domain_types import CalcMode
from formula_engine.schemas.guardrails import Guardrails


def over_budget(guardrails: Guardrails) -> int:
    """The sentinel meaning 'estimate exceeds the ceiling'."""
    return guardrails.max_groups_estimate + 1


def clamp_estimate(value: int | float, guardrails: Guardrails) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        return over_budget(guardrails)
    return int(min(value, over_budget(guardrails)))


def estimate_combination(n: int, k: int, guardrails: Guardrails) -> int:
    """C(n, k) = prod_{i=1..k} (n - (k - i)) / i."""
    if k > n or k < 0:
        return 0
    result = 1
    for i in range(1, k + 1):
        result = result * (n - (k - i)) // i
        if result > guardrails.max_groups_estimate:
            return over_budget(guardrails)
    return clamp_estimate(result, guardrails)


def estimate_permutation(n: int, k: int, guardrails: Guardrails) -> int:
    """Falling factorial prod_{i=0..k-1} (n - i)."""
    if k > n or k < 0:
        return 0
    result = 1
    for i in range(k):
        result *= n - i
        if result > guardrails.max_groups_estimate:
            return over_budget(guardrails)
    return clamp_estimate(result, guardrails)


def estimate_with_repeats(n: int, k: int, guardrails: Guardrails) -> int:
    """n ** k. Also the bound used for combinations with repeats."""
    if k < 0 or n < 0:
        return 0
    if n <= 1:
        return clamp_estimate(n ** k, guardrails)
    result = 1
    for _ in range(k):
        result *= n
        if result > guardrails.max_groups_estimate:
            return over_budget(guardrails)
    return clamp_estimate(result, guardrails)


def estimate_for_mode(
    n: int, k: int, mode: CalcMode, allow_repeats: bool, guardrails: Guardrails,
) -> int:
    """Pick the estimate family the generator for (mode, allow_repeats) belongs to."""
    if allow_repeats:
        return estimate_with_repeats(n, k, guardrails)
    if mode == CalcMode.PERMUTATION:
        return estimate_permutation(n, k, guardrails)
    return estimate_combination(n, k, guardrails)
