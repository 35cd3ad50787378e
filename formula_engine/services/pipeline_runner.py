"""Pipeline Runner - sequential execution of module steps, output piped to input.

Invariants:
    - Every step is resolved and shape-checked before the first one runs
    - An unknown module key aborts the whole pipeline (UnknownModuleError), never skipped
    - The first step must accept an alphabet; each later step must accept the previous
      step's output kind (PipelineShapeError otherwise)
    - Steps run strictly in order, one at a time; step N's output is step N+1's input
    - Each step is gated by its OWN guardrails against ITS input
    - A blocked step stops the pipeline with StepBlockedError
    - Zero steps -> []
"""

import logging
from typing import TYPE_CHECKING

from formula_engine.core.domain_types import InputKind
from formula_engine.core.errors import ErrorContext, PipelineShapeError, StepBlockedError
from formula_engine.schemas.compute import PipelineStep
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails
from formula_engine.services.compute_module import ComputeContext, ComputeModule
from formula_engine.services.run_guarded import run_with_guardrails

if TYPE_CHECKING:
    from formula_engine.services.module_registry import ModuleRegistry

logger = logging.getLogger(__name__)


def step_label(step: PipelineStep, index: int) -> str:
    """Steps without an id are labelled by 1-based position."""
    return step.step_id or f"step-{index}"


def resolve_steps(
    steps: list[PipelineStep], registry: "ModuleRegistry",
) -> list[ComputeModule]:
    return [
        registry.require(
            step.module_key,
            ErrorContext(step_id=step_label(step, index)),
        )
        for index, step in enumerate(steps, start=1)
    ]


def validate_pipeline_shape(
    steps: list[PipelineStep], registry: "ModuleRegistry",
) -> list[ComputeModule]:
    """Resolve all steps and check adjacent input/output kinds. Returns the modules."""
    modules = resolve_steps(steps, registry)
    incoming = InputKind.ALPHABET
    for index, (step, module) in enumerate(zip(steps, modules), start=1):
        if module.input_kind != incoming:
            raise PipelineShapeError(
                step_label(step, index), module.key,
                module.input_kind.value, incoming.value,
            )
        incoming = module.output_kind
    return modules


def run_pipeline(
    steps: list[PipelineStep], digits: list[str], registry: "ModuleRegistry",
) -> list[str]:
    if not steps:
        return []
    modules = validate_pipeline_shape(steps, registry)

    current: list[str] = list(digits)
    for index, (step, module) in enumerate(zip(steps, modules), start=1):
        label = step_label(step, index)
        result = run_with_guardrails(module, current, step.params, registry)
        if not result.is_ok:
            raise StepBlockedError(
                label, module.key, result.reason or "Blocked",
                estimate=result.estimate, error_code=result.error_code,
            )
        logger.debug(
            f"Step {label} produced {len(result.data)} group(s)",
            extra={
                "step_id": label,
                "module_key": module.key,
                "result_count": len(result.data),
            },
        )
        current = result.data
    return current


def estimate_pipeline(
    steps: list[PipelineStep],
    digits: list[str],
    registry: "ModuleRegistry",
    guardrails: Guardrails,
) -> EstimateInfo:
    """Upper bound = the first step's estimate; later filters only shrink the set.

    Generators after the first are rejected by validate_pipeline_shape, so the
    first step is the only one that can grow the data.
    """
    if not steps:
        return EstimateInfo(estimated_groups=0)
    first_step = steps[0]
    module = registry.require(
        first_step.module_key, ErrorContext(step_id=step_label(first_step, 1)),
    )
    if module.estimate is None:
        return EstimateInfo(estimated_groups=0, reason="First step has no estimate")
    ctx = ComputeContext(
        digits=list(digits),
        params=module.parse_params(first_step.params),
        guardrails=guardrails,
        registry=registry,
    )
    return module.estimate(ctx)
