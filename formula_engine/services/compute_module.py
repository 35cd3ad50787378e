"""Compute Module - the keyed, immutable unit of composability.

Invariants:
    - Identity is the key; a module never changes after registration
    - estimate and compute receive a ComputeContext whose params are already validated
      against params_model
    - input_kind/output_kind declare the shape of the string arrays consumed/produced;
      the pipeline runner checks adjacent steps against them
    - compute never runs unless the runtime's guardrail checks passed for that context
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from formula_engine.core.domain_types import InputKind, ModuleKey
from formula_engine.core.errors import InvalidParameterError
from formula_engine.schemas.guardrails import EstimateInfo, Guardrails
from formula_engine.schemas.module_params import ModuleParams

if TYPE_CHECKING:
    from formula_engine.services.module_registry import ModuleRegistry


@dataclass(frozen=True)
class ComputeContext:
    """What a module sees: its input array, its validated params, the guardrails in
    force for this run, and the registry it was resolved from (only the pipeline
    module uses the latter)."""
    digits: list[str]
    params: ModuleParams
    guardrails: Guardrails
    registry: "ModuleRegistry | None" = None


EstimateFn = Callable[[ComputeContext], EstimateInfo]
ComputeFn = Callable[[ComputeContext], list[str]]


@dataclass(frozen=True)
class ComputeModule:
    key: ModuleKey
    name: str
    description: str
    formula_text: str
    params_model: type[ModuleParams]
    guardrails: Guardrails
    compute: ComputeFn
    estimate: EstimateFn | None = None
    input_kind: InputKind = InputKind.ALPHABET
    output_kind: InputKind = InputKind.RESULT_SET
    friendly_name: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def params_spec(self) -> dict[str, Any]:
        """JSON schema of the accepted params (camelCase property names)."""
        return self.params_model.model_json_schema(by_alias=True)

    def parse_params(self, raw: dict[str, Any] | BaseModel | None) -> ModuleParams:
        """Validate raw params, raising InvalidParameterError with per-field details."""
        if isinstance(raw, self.params_model):
            return raw
        if isinstance(raw, BaseModel):
            raw = raw.model_dump(by_alias=True)
        try:
            return self.params_model.model_validate(raw or {})
        except ValidationError as exc:
            details = [
                f"{'.'.join(str(loc) for loc in e['loc']) or 'params'}: {e['msg']}"
                for e in exc.errors()
            ]
            raise InvalidParameterError(self.key, details) from exc
