"""Formula Runtime - the engine's call boundary.

Invariants:
    - Raw text is normalized (core/normalize_digits.parse_digits) before anything else
    - Guardrails are evaluated before generation, within the same call
    - Guardrail and parameter problems come back as RuntimeResult(status='blocked')
    - ConfigurationError (unknown module, pipeline shape mismatch) is logged and re-raised
    - Stateless per call: the default registry is immutable and safe to share

Design Decisions:
    - Two entry points mirroring the two request shapes: compute_formula (one module)
      and compute_pipeline (ordered steps)
"""

import logging
from functools import lru_cache
from typing import Any

from formula_engine.core.errors import ConfigurationError
from formula_engine.core.normalize_digits import parse_digits
from formula_engine.schemas.compute import (
    ComputeRequest,
    PipelineRequest,
    PipelineStep,
    RuntimeResult,
)
from formula_engine.schemas.guardrails import Guardrails
from formula_engine.services.module_registry import ModuleRegistry, build_default_registry
from formula_engine.services.pipeline_runner import validate_pipeline_shape
from formula_engine.services.run_guarded import run_with_guardrails

logger = logging.getLogger(__name__)

PIPELINE_MODULE_KEY = "pipeline-runner"


@lru_cache
def get_default_registry() -> ModuleRegistry:
    return build_default_registry()


def compute_formula(
    request: ComputeRequest,
    registry: ModuleRegistry | None = None,
    guardrails: Guardrails | None = None,
) -> RuntimeResult:
    """Run one module on the normalized digits of request.raw_text."""
    registry = registry or get_default_registry()
    digits = parse_digits(request.raw_text)
    try:
        module = registry.require(request.module_key)
        return run_with_guardrails(
            module, digits, request.params, registry, guardrails,
        )
    except ConfigurationError as exc:
        logger.error(
            f"ConfigurationError: {exc.message}",
            extra={
                "module_key": exc.context.module_key or request.module_key,
                "step_id": exc.context.step_id,
                "error_code": exc.code,
            },
        )
        raise


def compute_pipeline(
    request: PipelineRequest, registry: ModuleRegistry | None = None,
) -> RuntimeResult:
    """Run request.steps in order on the normalized digits of request.raw_text."""
    registry = registry or get_default_registry()
    digits = parse_digits(request.raw_text)
    try:
        validate_pipeline_shape(request.steps, registry)
        module = registry.require(PIPELINE_MODULE_KEY)
    except ConfigurationError as exc:
        logger.error(
            f"ConfigurationError: {exc.message}",
            extra={
                "module_key": exc.context.module_key,
                "step_id": exc.context.step_id,
                "error_code": exc.code,
            },
        )
        raise
    return run_with_guardrails(
        module, digits, {"steps": request.steps}, registry,
    )


def compute(
    raw_text: str,
    module_key: str,
    params: dict[str, Any] | None = None,
    registry: ModuleRegistry | None = None,
) -> RuntimeResult:
    """Keyword shortcut for compute_formula."""
    return compute_formula(
        ComputeRequest(raw_text=raw_text, module_key=module_key, params=params or {}),
        registry,
    )


def compute_steps(
    raw_text: str,
    steps: list[PipelineStep | dict[str, Any]],
    registry: ModuleRegistry | None = None,
) -> RuntimeResult:
    """Keyword shortcut for compute_pipeline; steps may be dicts (camelCase or snake_case)."""
    return compute_pipeline(
        PipelineRequest.model_validate({"raw_text": raw_text, "steps": steps}),
        registry,
    )
