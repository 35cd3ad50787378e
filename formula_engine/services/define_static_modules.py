"""Static Modules - preset group lookup. The input alphabet is ignored."""

from formula_engine.core.domain_types import ModuleKey
from formula_engine.data.static_rules import STATIC_RULES
from formula_engine.schemas.guardrails import EstimateInfo
from formula_engine.schemas.module_params import StaticGroupParams
from formula_engine.services.compute_module import ComputeContext, ComputeModule
from formula_engine.services.define_generator_modules import DEFAULT_GUARDRAILS


def _estimate_static(ctx: ComputeContext) -> EstimateInfo:
    params: StaticGroupParams = ctx.params
    return EstimateInfo(estimated_groups=len(STATIC_RULES[params.group_key]["data"]))


def _compute_static(ctx: ComputeContext) -> list[str]:
    params: StaticGroupParams = ctx.params
    return list(STATIC_RULES[params.group_key]["data"])


STATIC_GROUP = ComputeModule(
    key=ModuleKey("static-group"),
    name="Static Group",
    friendly_name="ชุดเลขสำเร็จรูป (Static)",
    description="Static preset groups",
    formula_text="Preset list lookup",
    params_model=StaticGroupParams,
    guardrails=DEFAULT_GUARDRAILS,
    estimate=_estimate_static,
    compute=_compute_static,
    tags=("static",),
)

STATIC_MODULES: tuple[ComputeModule, ...] = (STATIC_GROUP,)
