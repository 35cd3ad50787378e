"""Formula Service - catalog version resolution, capability gating, execution.

Tests cover:
    - The base catalog entry runs through z-master-universal-v1
    - Latest ACTIVE version wins; drafts and deprecated versions are skipped
    - Archived versions are never computed (VERSION_ARCHIVED)
    - No eligible version -> blocked NO_ACTIVE_VERSION with no capabilities
    - Unknown explicit version -> blocked VERSION_NOT_FOUND
    - Saved param_values merged under call-time params
    - Version guardrails override the module's
    - resolve_formula_definition joins catalog and module metadata
"""

import pytest

from formula_engine.core.domain_types import CapabilitySeverity, VersionStatus
from formula_engine.core.errors import UnknownModuleError
from formula_engine.schemas.formula import FormulaEntry, FormulaVersion
from formula_engine.schemas.guardrails import Guardrails
from formula_engine.services.formula_service import (
    BASE_FORMULAS,
    resolve_formula_definition,
    run_formula_version,
)


def _version(version, status, **fields):
    values = {
        "formula_id": "f1",
        "version": version,
        "status": status,
        "compute_key": "digits-group",
        "param_values": {"size": 2, "mode": "C"},
    }
    values.update(fields)
    return FormulaVersion(**values)


def _entry(*versions):
    return FormulaEntry(id="f1", display_name="Formula One", versions=list(versions))


# ─── base catalog ────────────────────────────────────────────────

def test_base_formula_runs_universal_generator():
    entry = BASE_FORMULAS[0]
    result, caps = run_formula_version(entry, "12", {"length": 2})
    assert result.data == ["11", "12", "21", "22"]
    assert caps.can_copy is True
    assert caps.message == "Locked"


# ─── version resolution ──────────────────────────────────────────

def test_latest_active_version_is_used():
    entry = _entry(
        _version("1.2.0", VersionStatus.ACTIVE, param_values={"size": 1, "mode": "C"}),
        _version("1.10.0", VersionStatus.ACTIVE),
        _version("2.0.0", VersionStatus.DRAFT, param_values={"size": 3, "mode": "C"}),
    )
    result, caps = run_formula_version(entry, "123")
    assert result.data == ["12", "13", "23"]
    assert caps.severity == CapabilitySeverity.INFO


def test_explicit_deprecated_version_runs_and_requires_consent():
    entry = _entry(_version("1.0.0", VersionStatus.DEPRECATED))
    result, caps = run_formula_version(entry, "12", version="1.0.0")
    assert result.data == ["12"]
    assert caps.requires_consent is True
    assert caps.can_copy is False


def test_archived_version_is_never_computed():
    entry = _entry(_version("1.0.0", VersionStatus.ARCHIVED))
    result, caps = run_formula_version(entry, "12", version="1.0.0")
    assert result.status == "blocked"
    assert result.error_code == "VERSION_ARCHIVED"
    assert caps.is_blocked is True


def test_no_active_version_is_blocked():
    entry = _entry(_version("1.0.0", VersionStatus.DRAFT))
    result, caps = run_formula_version(entry, "12")
    assert result.error_code == "NO_ACTIVE_VERSION"
    assert caps is None


def test_unknown_explicit_version_is_blocked():
    entry = _entry(_version("1.0.0", VersionStatus.ACTIVE))
    result, caps = run_formula_version(entry, "12", version="9.9.9")
    assert result.reason == "Version 9.9.9 not found"
    assert result.error_code == "VERSION_NOT_FOUND"
    assert caps is None


# ─── params and guardrails ───────────────────────────────────────

def test_call_params_override_saved_values():
    entry = _entry(_version("1.0.0", VersionStatus.ACTIVE))
    result, _ = run_formula_version(entry, "12", {"mode": "P"})
    assert result.data == ["12", "21"]


def test_version_guardrails_override_module():
    tight = Guardrails(max_n=10, max_k=6, max_groups_estimate=2)
    entry = _entry(_version("1.0.0", VersionStatus.ACTIVE, guardrails=tight))
    result, _ = run_formula_version(entry, "123")
    assert result.status == "blocked"
    assert result.error_code == "ESTIMATE_TOO_LARGE"
    assert result.estimate == 3


def test_unknown_compute_key_raises():
    entry = _entry(_version("1.0.0", VersionStatus.ACTIVE, compute_key="gone"))
    with pytest.raises(UnknownModuleError):
        run_formula_version(entry, "12")


# ─── definitions ─────────────────────────────────────────────────

def test_resolve_definition_joins_module_metadata():
    entry = _entry(_version("1.0.0", VersionStatus.DRAFT))
    definition = resolve_formula_definition(entry, entry.versions[0])
    assert definition.formula_text == "C(n, k) / P(n, k) over unique digits"
    assert definition.guardrails.max_k == 6
    assert definition.capabilities.message == "Testing / Preview only"
    assert "size" in definition.params_spec["properties"]


def test_resolve_definition_unknown_key_is_none():
    entry = _entry(_version("1.0.0", VersionStatus.ACTIVE, compute_key="gone"))
    assert resolve_formula_definition(entry, entry.versions[0]) is None


def test_pipeline_version_with_unknown_step_raises():
    steps = [
        {"moduleKey": "digits-group", "params": {"size": 6, "mode": "P", "allowDouble": True}},
        {"moduleKey": "no-such-module"},
    ]
    entry = _entry(_version(
        "1.0.0", VersionStatus.ACTIVE,
        compute_key="pipeline-runner", param_values={"steps": steps},
    ))
    with pytest.raises(UnknownModuleError):
        run_formula_version(entry, "0123456789")
