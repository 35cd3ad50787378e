"""Compute Schemas - RuntimeResult constructors and payload shape."""

import pytest
from pydantic import ValidationError

from formula_engine.core.domain_types import RuntimeStatus
from formula_engine.schemas.compute import (
    CamelModel,
    ComputeRequest,
    PipelineStep,
    RuntimeResult,
)
from formula_engine.schemas.formula import FormulaEntry, FormulaVersion
from formula_engine.schemas.guardrails import Guardrails


def test_ok_result_payload():
    result = RuntimeResult.ok(["12", "13"])
    assert result.is_ok
    assert result.to_payload() == {"status": "ok", "data": ["12", "13"]}


def test_blocked_result_has_empty_data_and_reason():
    result = RuntimeResult.blocked("Input too large", error_code="INPUT_TOO_LARGE")
    assert result.status == RuntimeStatus.BLOCKED
    assert result.data == []
    assert result.to_payload() == {
        "status": "blocked",
        "data": [],
        "reason": "Input too large",
        "errorCode": "INPUT_TOO_LARGE",
    }


def test_blocked_from_guard_dict_keeps_estimate():
    result = RuntimeResult.from_blocked_dict({
        "status": "blocked", "error_code": "ESTIMATE_TOO_LARGE",
        "reason": "Computation too large", "estimate": 501,
    })
    assert result.estimate == 501
    assert result.error_code == "ESTIMATE_TOO_LARGE"


def test_compute_request_requires_module_key():
    with pytest.raises(ValidationError):
        ComputeRequest(raw_text="12", module_key="")
    request = ComputeRequest.model_validate({"rawText": "12", "moduleKey": "digits-group"})
    assert request.params == {}


def test_pipeline_step_defaults():
    step = PipelineStep(module_key="filter-exclude")
    assert step.step_id == ""
    assert step.params == {}


def test_guardrails_accept_camel_case_and_are_frozen():
    g = Guardrails.model_validate({"maxN": 10, "maxK": 3, "maxGroupsEstimate": 500})
    assert g.max_groups_estimate == 500
    with pytest.raises(ValidationError):
        g.max_n = 11
    with pytest.raises(ValidationError):
        Guardrails(max_n=-1, max_k=1, max_groups_estimate=1)


def test_catalog_models_share_the_camel_case_base():
    assert issubclass(FormulaVersion, CamelModel)
    assert issubclass(FormulaEntry, CamelModel)
    version = FormulaVersion.model_validate({
        "formulaId": "f1", "version": "1.0.0", "status": "active",
        "computeKey": "digits-group", "paramValues": {"size": 2},
    })
    assert version.compute_key == "digits-group"
    assert version.model_dump(by_alias=True)["paramValues"] == {"size": 2}
