"""Guardrail Schemas - per-module ceilings and estimate records.

Invariants:
    - Guardrails are immutable once built (frozen)
    - Ceilings are non-negative
    - Both snake_case and camelCase field names accepted (maxN, maxK, maxGroupsEstimate)
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Guardrails(BaseModel):
    """Per-module ceiling enforced before generation."""
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel,
    )

    max_n: int = Field(ge=0)
    max_k: int = Field(ge=0)
    max_groups_estimate: int = Field(ge=0)


class EstimateInfo(BaseModel):
    """Upper-bound prediction of output cardinality, used only for gating."""
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    estimated_groups: int
    reason: str | None = None
