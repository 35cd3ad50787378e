"""Filter Modules - result set in, smaller result set out.

Filters consume already generated groups (InputKind.RESULT_SET), so they can only
follow a generator in a pipeline. max_n bounds the number of incoming groups.
"""

from formula_engine.core.domain_types import InputKind, ModuleKey
from formula_engine.core.filter_exclusions import filter_exclusions, parse_exclusion_set
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails
from formula_engine.schemas.module_params import FilterExcludeParams
from formula_engine.services.compute_module import ComputeContext, ComputeModule


def _estimate_exclude(ctx: ComputeContext) -> EstimateInfo:
    # Filtering never grows the set
    return EstimateInfo(estimated_groups=len(ctx.digits))


def _compute_exclude(ctx: ComputeContext) -> list[str]:
    params: FilterExcludeParams = ctx.params
    return filter_exclusions(
        ctx.digits,
        parse_exclusion_set(params.exclude_front),
        parse_exclusion_set(params.exclude_back),
    )


FILTER_EXCLUDE = ComputeModule(
    key=ModuleKey("filter-exclude"),
    name="Exclusion Filter",
    description="Drop groups whose first or last digit is excluded",
    formula_text="x[0] not in front and x[-1] not in back",
    params_model=FilterExcludeParams,
    guardrails=Guardrails(max_n=100_000, max_k=0, max_groups_estimate=100_000),
    estimate=_estimate_exclude,
    compute=_compute_exclude,
    input_kind=InputKind.RESULT_SET,
    output_kind=InputKind.RESULT_SET,
    tags=("filter",),
)

FILTER_MODULES: tuple[ComputeModule, ...] = (FILTER_EXCLUDE,)
