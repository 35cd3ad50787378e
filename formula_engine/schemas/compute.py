"""Compute Schemas - request and result shapes at the engine's call boundary.

Invariants:
    - RuntimeResult.status is 'ok' or 'blocked'; blocked results always carry data=[]
      and a human-readable reason
    - PipelineStep.params stays a raw dict: each module validates its own params
    - camelCase accepted on input, emitted by to_payload()
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from formula_engine.core.domain_types import RuntimeStatus


class CamelModel(BaseModel):
    """Shared base: camelCase aliases on input and output, snake_case in Python."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class PipelineStep(CamelModel):
    step_id: str = ""
    module_key: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class ComputeRequest(CamelModel):
    raw_text: str = ""
    module_key: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class PipelineRequest(CamelModel):
    raw_text: str = ""
    steps: list[PipelineStep] = Field(default_factory=list)


class RuntimeResult(CamelModel):
    status: RuntimeStatus
    data: list[str] = Field(default_factory=list)
    reason: str | None = None
    estimate: int | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, data: list[str]) -> "RuntimeResult":
        return cls(status=RuntimeStatus.OK, data=data)

    @classmethod
    def blocked(
        cls, reason: str, estimate: int | None = None, error_code: str | None = None,
    ) -> "RuntimeResult":
        return cls(
            status=RuntimeStatus.BLOCKED, data=[], reason=reason,
            estimate=estimate, error_code=error_code,
        )

    @classmethod
    def from_blocked_dict(cls, blocked: dict) -> "RuntimeResult":
        """Build from the dict returned by core/enforce_guardrails.py."""
        return cls.blocked(
            blocked["reason"],
            estimate=blocked.get("estimate"),
            error_code=blocked.get("error_code"),
        )

    @property
    def is_ok(self) -> bool:
        return self.status == RuntimeStatus.OK

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
