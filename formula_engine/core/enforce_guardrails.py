"""Guardrail Enforcement - ordered admission checks run before any generator.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Return a blocked dict on violation, None on success
    - validate_guardrails chains pool size -> group size -> estimate; first failure wins
    - A failing check means the generator is never called

Design Decisions:
    - Return dicts (not exceptions): a rejection is an expected outcome with a
      user-facing reason, not a fault
"""

from collections.abc import Callable

from formula_engine.core.domain_types import GuardErrorCode, RuntimeStatus
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails


def _blocked(code: GuardErrorCode, reason: str, **fields: object) -> dict:
    return {
        "status": RuntimeStatus.BLOCKED.value,
        "error_code": code.value,
        "reason": reason,
        **fields,
    }


def check_pool_size(n: int, guardrails: Guardrails) -> dict | None:
    """Rule 1: pool may not exceed max_n."""
    if n > guardrails.max_n:
        return _blocked(GuardErrorCode.INPUT_TOO_LARGE, "Input too large")
    return None


def check_group_size(k: int | None, guardrails: Guardrails) -> dict | None:
    """Rule 2: group size may not exceed max_k. Modules without a size skip it."""
    if k is not None and k > guardrails.max_k:
        return _blocked(GuardErrorCode.GROUP_SIZE_TOO_LARGE, "Group size too large")
    return None


def check_estimate(
    estimate: EstimateInfo | None, guardrails: Guardrails,
) -> dict | None:
    """Rule 3: estimated cardinality may not exceed max_groups_estimate."""
    if estimate is None:
        return None
    if estimate.estimated_groups > guardrails.max_groups_estimate:
        return _blocked(
            GuardErrorCode.ESTIMATE_TOO_LARGE,
            estimate.reason or "Computation too large",
            estimate=estimate.estimated_groups,
        )
    return None


def validate_guardrails(
    n: int,
    k: int | None,
    estimate: Callable[[], EstimateInfo] | None,
    guardrails: Guardrails,
) -> dict | None:
    """Chain all admission checks. Returns first blocked dict or None.

    The estimate is a thunk: it only runs once pool and group size have passed.
    """
    return (
        check_pool_size(n, guardrails)
        or check_group_size(k, guardrails)
        or check_estimate(estimate() if estimate else None, guardrails)
    )
