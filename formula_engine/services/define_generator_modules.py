"""Generator Modules - alphabet in, digit groups out.

Modules:
    digits-group           C/P grouping with optional repeats, sorted for display
    z-master-universal-v1  universal generator with front/back exclusions, generation order
    permutation-2d         ordered pairs 00-99 with leading-zero/double filters
"""

from formula_engine.config import get_settings
from formula_engine.core.domain_types import ModuleKey
from formula_engine.core.estimate_groups import (
    estimate_for_mode,
    estimate_permutation,
    estimate_with_repeats,
)
from formula_engine.core.filter_exclusions import filter_exclusions, parse_exclusion_set
from formula_engine.core.generate_groups import generate_groups
from formula_engine.core.normalize_digits import unique_pool
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails
from formula_engine.schemas.module_params import (
    DigitGroupingParams,
    Permutation2DParams,
    UniversalGeneratorParams,
)
from formula_engine.services.compute_module import ComputeContext, ComputeModule


# FORMULA_MAX_N, FORMULA_MAX_K, FORMULA_MAX_GROUPS_ESTIMATE
DEFAULT_GUARDRAILS = get_settings().default_guardrails()
PAIR_GUARDRAILS = Guardrails(max_n=10, max_k=2, max_groups_estimate=100)


# ─── digits-group ────────────────────────────────────────────────

def _estimate_digit_grouping(ctx: ComputeContext) -> EstimateInfo:
    params: DigitGroupingParams = ctx.params
    return EstimateInfo(estimated_groups=estimate_for_mode(
        len(unique_pool(ctx.digits)), params.size, params.mode,
        params.allow_double, ctx.guardrails,
    ))


def _compute_digit_grouping(ctx: ComputeContext) -> list[str]:
    params: DigitGroupingParams = ctx.params
    results = generate_groups(
        ctx.digits, params.size, params.mode, params.allow_double,
    )
    if get_settings().sort_results:
        results.sort()
    return results


DIGIT_GROUPING = ComputeModule(
    key=ModuleKey("digits-group"),
    name="Digit Grouping",
    friendly_name="จับคู่/วินเลข (Digit Grouping)",
    description="Combination/Permutation grouping with optional repeats",
    formula_text="C(n, k) / P(n, k) over unique digits",
    params_model=DigitGroupingParams,
    guardrails=DEFAULT_GUARDRAILS,
    estimate=_estimate_digit_grouping,
    compute=_compute_digit_grouping,
    tags=("generator",),
)


# ─── z-master-universal-v1 ───────────────────────────────────────

def _estimate_universal(ctx: ComputeContext) -> EstimateInfo:
    params: UniversalGeneratorParams = ctx.params
    n = len(unique_pool(ctx.digits))
    return EstimateInfo(estimated_groups=estimate_for_mode(
        n, params.length, params.mode, params.allow_doubles, ctx.guardrails,
    ))


def _compute_universal(ctx: ComputeContext) -> list[str]:
    params: UniversalGeneratorParams = ctx.params
    results = generate_groups(
        ctx.digits, params.length, params.mode, params.allow_doubles,
    )
    return filter_exclusions(
        results,
        parse_exclusion_set(params.exclude_front),
        parse_exclusion_set(params.exclude_back),
    )


UNIVERSAL_GENERATOR = ComputeModule(
    key=ModuleKey("z-master-universal-v1"),
    name="Z-Master: Universal Generator",
    description=(
        "Universal generator for combinations/permutations "
        "with optional exclusions."
    ),
    formula_text="Z-Master Universal Generator",
    params_model=UniversalGeneratorParams,
    guardrails=DEFAULT_GUARDRAILS,
    estimate=_estimate_universal,
    compute=_compute_universal,
    tags=("generator", "universal", "z-master", "base"),
)


# ─── permutation-2d ──────────────────────────────────────────────

def _estimate_pairs(ctx: ComputeContext) -> EstimateInfo:
    params: Permutation2DParams = ctx.params
    n = len(unique_pool(ctx.digits))
    if params.include_doubles:
        return EstimateInfo(estimated_groups=estimate_with_repeats(n, 2, ctx.guardrails))
    return EstimateInfo(estimated_groups=estimate_permutation(n, 2, ctx.guardrails))


def _compute_pairs(ctx: ComputeContext) -> list[str]:
    params: Permutation2DParams = ctx.params
    pool = sorted(unique_pool(ctx.digits), key=int)
    results: list[str] = []
    for first in pool:
        if params.filter_leading_zero and first == "0":
            continue
        for second in pool:
            if not params.include_doubles and first == second:
                continue
            results.append(f"{first}{second}")
    return results


PERMUTATION_2D = ComputeModule(
    key=ModuleKey("permutation-2d"),
    name="2-Digit Permutation",
    friendly_name="จับคู่ 2 ตัว (00-99)",
    description="Generate 2-digit pairs (00-99) from input digits",
    formula_text="Permutation P(n, 2) with optional filters",
    params_model=Permutation2DParams,
    guardrails=PAIR_GUARDRAILS,
    estimate=_estimate_pairs,
    compute=_compute_pairs,
    tags=("generator", "pairs"),
)


GENERATOR_MODULES: tuple[ComputeModule, ...] = (
    DIGIT_GROUPING,
    UNIVERSAL_GENERATOR,
    PERMUTATION_2D,
)

