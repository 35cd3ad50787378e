"""Formula Service - run a catalog formula version and attach its capabilities.

Invariants:
    - Without an explicit version, only the latest ACTIVE version is eligible
    - Capabilities are resolved fresh from (status, is_locked) on every call
    - A version whose capabilities forbid computing is never run
    - The version's guardrails (when present) override the module's
    - An unknown compute key is a ConfigurationError, same as in pipelines
"""

import logging
from typing import Any

from formula_engine.core.domain_types import GuardErrorCode, VersionStatus
from formula_engine.core.formula_catalog import find_version, latest_active_version
from formula_engine.core.normalize_digits import parse_digits
from formula_engine.core.resolve_capabilities import resolve_capabilities
from formula_engine.schemas.compute import RuntimeResult
from formula_engine.schemas.formula import (
    FormulaCapabilities,
    FormulaDefinition,
    FormulaEntry,
    FormulaVersion,
)
from formula_engine.services.formula_runtime import get_default_registry
from formula_engine.services.module_registry import ModuleRegistry
from formula_engine.services.run_guarded import run_with_guardrails

logger = logging.getLogger(__name__)


BASE_FORMULAS: tuple[FormulaEntry, ...] = (
    FormulaEntry(
        id="z-master-universal-v1",
        display_name="Z-Master: Universal Generator",
        description=(
            "Universal generator for combinations/permutations "
            "with optional exclusions."
        ),
        tags=["generator", "universal", "z-master", "base"],
        versions=[
            FormulaVersion(
                formula_id="z-master-universal-v1",
                version="1.0.0",
                status=VersionStatus.ACTIVE,
                is_locked=True,
                compute_key="z-master-universal-v1",
                change_note="Base executable formula for Z-Master universal generator.",
                created_at="2025-12-28T00:00:00+07:00",
            ),
        ],
    ),
)


def resolve_formula_definition(
    entry: FormulaEntry,
    version: FormulaVersion,
    registry: ModuleRegistry | None = None,
) -> FormulaDefinition | None:
    """Join a catalog version with its compute module. None if the key is unknown."""
    registry = registry or get_default_registry()
    module = registry.get(version.compute_key)
    if module is None:
        return None
    return FormulaDefinition(
        formula_id=entry.id,
        version=version.version,
        name=entry.display_name,
        description=entry.description,
        formula_text=module.formula_text,
        tags=entry.tags,
        params_spec=module.params_spec,
        guardrails=version.guardrails or module.guardrails,
        status=version.status,
        is_locked=version.is_locked,
        compute_key=version.compute_key,
        capabilities=resolve_capabilities(version.status, version.is_locked),
    )


def run_formula_version(
    entry: FormulaEntry,
    raw_text: str,
    params: dict[str, Any] | None = None,
    registry: ModuleRegistry | None = None,
    version: str | None = None,
) -> tuple[RuntimeResult, FormulaCapabilities | None]:
    """Resolve the version, gate on its capabilities, run it.

    Saved param_values are the base; call-time params override them key by key.
    Capabilities are None only when no version could be resolved.
    """
    registry = registry or get_default_registry()
    target = (
        find_version(entry, version) if version else latest_active_version(entry)
    )
    if target is None and version:
        return RuntimeResult.blocked(
            f"Version {version} not found",
            error_code=GuardErrorCode.VERSION_NOT_FOUND.value,
        ), None
    if target is None:
        return RuntimeResult.blocked(
            "No active version",
            error_code=GuardErrorCode.NO_ACTIVE_VERSION.value,
        ), None

    capabilities = resolve_capabilities(target.status, target.is_locked)
    if not capabilities.can_compute:
        logger.info(
            "Formula version not computable",
            extra={"formula_id": entry.id, "version": target.version},
        )
        return RuntimeResult.blocked(
            capabilities.message or "Formula version archived",
            error_code=GuardErrorCode.VERSION_ARCHIVED.value,
        ), capabilities

    module = registry.require(target.compute_key)
    merged = {**target.param_values, **(params or {})}
    result = run_with_guardrails(
        module, parse_digits(raw_text), merged, registry, target.guardrails,
    )
    return result, capabilities
