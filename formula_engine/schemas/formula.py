"""Formula Schemas - catalog entries, versions and derived capabilities.

Invariants:
    - FormulaCapabilities is derived, never stored (see core/resolve_capabilities.py)
    - A FormulaEntry owns an ordered list of versions; only 'active' ones are eligible
      for latest-version resolution
    - status accepts unknown strings: the resolver maps them to the permissive default
    - camelCase input accepted everywhere (populate_by_name + to_camel aliases)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from formula_engine.core.domain_types import CapabilitySeverity, VersionStatus
from formula_engine.schemas.compute import CamelModel
from formula_engine.schemas.guardrails import Guardrails


class FormulaCapabilities(BaseModel):
    """What the consumer UI may do with a version's results."""
    model_config = ConfigDict(
        frozen=True, populate_by_name=True, alias_generator=to_camel,
    )

    can_compute: bool
    can_copy: bool
    requires_consent: bool
    is_blocked: bool
    severity: CapabilitySeverity
    message: str | None = None

    def to_payload(self) -> dict:
        """camelCase dict for outer layers; message omitted when absent."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class FormulaVersion(CamelModel):
    """One semver-tagged version of a formula entry."""
    formula_id: str
    version: str = Field(pattern=r"^v?\d+\.\d+\.\d+$")
    status: VersionStatus | str
    is_locked: bool = False
    compute_key: str
    param_values: dict[str, Any] = Field(default_factory=dict)
    guardrails: Guardrails | None = None
    change_note: str | None = None
    created_at: str | None = None


class FormulaEntry(CamelModel):
    id: str
    display_name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    versions: list[FormulaVersion] = Field(default_factory=list)


class FormulaDefinition(CamelModel):
    """A catalog version joined with the compute module it runs."""
    formula_id: str
    version: str
    name: str
    description: str
    formula_text: str
    tags: list[str]
    params_spec: dict[str, Any]
    guardrails: Guardrails
    status: VersionStatus | str
    is_locked: bool
    compute_key: str
    capabilities: FormulaCapabilities
