"""Pipeline Modules - a module whose params are a list of other modules' steps.

The pipeline-runner module resolves its steps against the registry carried in its
ComputeContext, so it only runs when invoked through a registry. Its steps are
shape-checked inside the estimate, so every entry point (compute_pipeline, a
direct call by key, a catalog version) raises configuration errors before any
guardrail can turn them into a blocked result.
"""

from formula_engine.core.domain_types import ModuleKey
from formula_engine.core.errors import ConfigurationError
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails
from formula_engine.schemas.module_params import PipelineParams
from formula_engine.services.compute_module import ComputeContext, ComputeModule
from formula_engine.services.pipeline_runner import (
    estimate_pipeline,
    run_pipeline,
    validate_pipeline_shape,
)


def _require_registry(ctx: ComputeContext):
    if ctx.registry is None:
        raise ConfigurationError(
            "pipeline-runner invoked without a module registry",
            "PIPELINE_WITHOUT_REGISTRY",
        )
    return ctx.registry


def _estimate_pipeline(ctx: ComputeContext) -> EstimateInfo:
    params: PipelineParams = ctx.params
    registry = _require_registry(ctx)
    # Unknown keys and shape mismatches must raise before the estimate can block
    validate_pipeline_shape(params.steps, registry)
    return estimate_pipeline(params.steps, ctx.digits, registry, ctx.guardrails)


def _compute_pipeline(ctx: ComputeContext) -> list[str]:
    params: PipelineParams = ctx.params
    return run_pipeline(params.steps, ctx.digits, _require_registry(ctx))


PIPELINE_RUNNER = ComputeModule(
    key=ModuleKey("pipeline-runner"),
    name="Formula Pipeline",
    friendly_name="สูตรผสม (Pipeline)",
    description="Execute multiple modules in sequence",
    formula_text="Step 1 | Step 2 | ... | Step N",
    params_model=PipelineParams,
    guardrails=Guardrails(max_n=100, max_k=10, max_groups_estimate=100_000),
    estimate=_estimate_pipeline,
    compute=_compute_pipeline,
    tags=("pipeline",),
)

PIPELINE_MODULES: tuple[ComputeModule, ...] = (PIPELINE_RUNNER,)
