"""Guarded Execution - run one compute module behind its guardrails.

Invariants:
    - Order per call: validate params -> pool size -> group size -> estimate -> compute
    - compute is never invoked when any earlier step fails
    - InvalidParameterError and StepBlockedError become blocked RuntimeResults here
      and never propagate further
    - ConfigurationError (unknown module, shape mismatch) propagates untouched
"""

import logging
from typing import TYPE_CHECKING, Any

from formula_engine.core.enforce_guardrails import validate_guardrails
from formula_engine.core.errors import InvalidParameterError, StepBlockedError
from formula_engine.schemas.compute import RuntimeResult
from formula_engine.schemas.guardrails import Guardrails
from formula_engine.services.compute_module import ComputeContext, ComputeModule

if TYPE_CHECKING:
    from formula_engine.services.module_registry import ModuleRegistry

logger = logging.getLogger(__name__)


def run_with_guardrails(
    module: ComputeModule,
    digits: list[str],
    raw_params: dict[str, Any] | None,
    registry: "ModuleRegistry | None" = None,
    guardrails: Guardrails | None = None,
) -> RuntimeResult:
    """Run `module` on `digits` if its guardrails admit the request.

    `guardrails` overrides the module's own ceilings (a catalog version may
    carry tighter or looser ones).
    """
    effective = guardrails or module.guardrails
    try:
        params = module.parse_params(raw_params)
        ctx = ComputeContext(
            digits=list(digits), params=params,
            guardrails=effective, registry=registry,
        )
        estimate_fn = (lambda: module.estimate(ctx)) if module.estimate else None
        blocked = validate_guardrails(
            len(ctx.digits), params.group_size, estimate_fn, effective,
        )
        if blocked:
            logger.info(
                f"Computation blocked: {blocked['reason']}",
                extra={
                    "module_key": module.key,
                    "reason": blocked["reason"],
                    "estimate": blocked.get("estimate"),
                    "error_code": blocked["error_code"],
                },
            )
            return RuntimeResult.from_blocked_dict(blocked)
        data = module.compute(ctx)
    except InvalidParameterError as exc:
        logger.warning(
            exc.message,
            extra={"module_key": module.key, "error_code": exc.code},
        )
        return RuntimeResult.blocked(exc.message, error_code=exc.code)
    except StepBlockedError as exc:
        logger.info(
            exc.message,
            extra={
                "module_key": module.key,
                "step_id": exc.step_id,
                "reason": exc.reason,
                "estimate": exc.estimate,
                "error_code": exc.error_code or exc.code,
            },
        )
        return RuntimeResult.blocked(
            exc.message, estimate=exc.estimate,
            error_code=exc.error_code or exc.code,
        )

    logger.debug(
        f"Computed {len(data)} group(s)",
        extra={"module_key": module.key, "result_count": len(data)},
    )
    return RuntimeResult.ok(data)
