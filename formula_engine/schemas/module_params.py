"""Module Parameter Schemas - one pydantic model per built-in compute module.

Invariants:
    - Optional params carry the documented default; required params have none
    - A missing required param or a wrong shape/value fails validation, and the
      runtime turns that into a blocked INVALID_PARAMETER result (same policy
      for every module, no per-module fallbacks)
    - group_size is the k checked against guardrails.max_k (None: module has no k)
    - camelCase keys accepted (allowDouble, excludeFront, groupKey, ...)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from formula_engine.core.domain_types import CalcMode
from formula_engine.data.static_rules import STATIC_RULES
from formula_engine.schemas.compute import PipelineStep


class ModuleParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    @property
    def group_size(self) -> int | None:
        return None


class DigitGroupingParams(ModuleParams):
    """digits-group: C(n, k) / P(n, k) over unique digits."""
    size: int = Field(ge=1, description="Group size (k)")
    mode: CalcMode = Field(description="Combination (C) or Permutation (P)")
    allow_double: bool = Field(False, description="Allow repeated digits")

    @property
    def group_size(self) -> int | None:
        return self.size


class _ExclusionParams(ModuleParams):
    exclude_front: str | list[str] = Field("", description="Front digits to drop, comma-separated")
    exclude_back: str | list[str] = Field("", description="Back digits to drop, comma-separated")


class UniversalGeneratorParams(_ExclusionParams):
    """z-master-universal-v1: sortUnique selects C, allowDoubles enables repeats."""
    length: int = Field(2, ge=1, description="Group length")
    allow_doubles: bool = True
    sort_unique: bool = False

    @property
    def group_size(self) -> int | None:
        return self.length

    @property
    def mode(self) -> CalcMode:
        return CalcMode.COMBINATION if self.sort_unique else CalcMode.PERMUTATION


class Permutation2DParams(ModuleParams):
    """permutation-2d: ordered pairs 00-99 from the input digits."""
    filter_leading_zero: bool = Field(False, description="Exclude 01, 02... (0x)")
    include_doubles: bool = Field(True, description="Include 00, 11, 22...")

    @property
    def group_size(self) -> int | None:
        return 2


class StaticGroupParams(ModuleParams):
    group_key: str = Field(description="Static group key")

    @field_validator("group_key")
    @classmethod
    def known_group(cls, v: str) -> str:
        if v not in STATIC_RULES:
            raise ValueError(
                f"unknown group '{v}', expected one of {sorted(STATIC_RULES)}",
            )
        return v


class FilterExcludeParams(_ExclusionParams):
    """filter-exclude: drop generated groups by first/last digit."""


class PipelineParams(ModuleParams):
    steps: list[PipelineStep] = Field(default_factory=list)
