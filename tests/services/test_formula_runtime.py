"""Formula Runtime - the engine boundary end to end.

Tests cover:
    - '112233' worked examples for C and P
    - blocked results: pool too large, group size too large, estimate too large
    - generator never runs when blocked
    - invalid params -> blocked INVALID_PARAMETER, never raised
    - unknown module key raises ConfigurationError (and is logged)
    - pipeline requests: chaining, empty pipeline, shape error, blocked step
    - pipeline-runner called by key raises configuration errors even when the
      first step alone would be over budget
"""

import logging

import pytest

from formula_engine.core.errors import ConfigurationError, PipelineShapeError, UnknownModuleError
from formula_engine.schemas.compute import ComputeRequest, PipelineRequest, PipelineStep
from formula_engine.schemas.guardrails import Guardrails
from formula_engine.services.compute_module import ComputeModule
from formula_engine.services.define_generator_modules import DIGIT_GROUPING
from formula_engine.services.formula_runtime import (
    compute,
    compute_formula,
    compute_pipeline,
    compute_steps,
    get_default_registry,
)
from formula_engine.services.module_registry import ModuleRegistry


# ─── single module ───────────────────────────────────────────────

def test_combination_example():
    result = compute("112233", "digits-group", {"size": 2, "mode": "C"})
    assert result.status == "ok"
    assert set(result.data) == {"12", "13", "23"}


def test_permutation_example():
    result = compute("112233", "digits-group", {"size": 2, "mode": "P"})
    assert set(result.data) == {"12", "13", "21", "23", "31", "32"}


def test_empty_input_is_ok_and_empty():
    result = compute("no digits here", "digits-group", {"size": 2, "mode": "C"})
    assert result.status == "ok"
    assert result.data == []


def test_group_size_too_large_is_blocked():
    result = compute("1234567", "digits-group", {"size": 7, "mode": "C"})
    assert result.status == "blocked"
    assert result.data == []
    assert result.reason == "Group size too large"


def test_pool_too_large_is_blocked_before_group_size():
    registry = get_default_registry()
    request = ComputeRequest(
        raw_text="0123456789", module_key="digits-group",
        params={"size": 9, "mode": "C"},
    )
    g = Guardrails(max_n=5, max_k=3, max_groups_estimate=10)
    result = compute_formula(request, registry, guardrails=g)
    assert result.reason == "Input too large"
    assert result.error_code == "INPUT_TOO_LARGE"


def test_estimate_rejection_example():
    request = ComputeRequest(
        raw_text="0123456789", module_key="digits-group",
        params={"size": 3, "mode": "P", "allowDouble": True},
    )
    g = Guardrails(max_n=10, max_k=6, max_groups_estimate=500)
    result = compute_formula(request, guardrails=g)
    assert result.status == "blocked"
    assert result.data == []
    assert result.reason
    assert result.estimate > 500


def test_generator_not_called_when_blocked():
    calls = []

    def compute_fn(ctx):
        calls.append(ctx)
        return []

    module = ComputeModule(
        key="spy", name="Spy", description="", formula_text="",
        params_model=DIGIT_GROUPING.params_model,
        guardrails=Guardrails(max_n=10, max_k=2, max_groups_estimate=10),
        estimate=DIGIT_GROUPING.estimate,
        compute=compute_fn,
    )
    registry = ModuleRegistry([module])
    result = compute("0123456789", "spy", {"size": 2, "mode": "P"}, registry)
    assert result.status == "blocked"
    assert result.error_code == "ESTIMATE_TOO_LARGE"
    assert calls == []


def test_invalid_params_blocked_not_raised():
    result = compute("123", "digits-group", {"size": "two", "mode": "C"})
    assert result.status == "blocked"
    assert result.error_code == "INVALID_PARAMETER"
    assert "size" in result.reason


def test_unknown_module_raises_and_logs(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(ConfigurationError):
            compute("123", "not-registered")
    assert any("not-registered" in r.getMessage() for r in caplog.records)


def test_same_request_twice_is_identical():
    first = compute("31415", "digits-group", {"size": 3, "mode": "P"})
    second = compute("31415", "digits-group", {"size": 3, "mode": "P"})
    assert first == second


# ─── pipelines ───────────────────────────────────────────────────

def test_pipeline_chaining_example():
    result = compute_steps("12", [
        {"stepId": "gen", "moduleKey": "digits-group", "params": {"size": 2, "mode": "C"}},
        {"stepId": "flt", "moduleKey": "filter-exclude", "params": {"excludeFront": "1"}},
    ])
    assert result.status == "ok"
    assert result.data == []


def test_pipeline_without_filter_matches_single_module():
    result = compute_pipeline(PipelineRequest(raw_text="321", steps=[
        PipelineStep(module_key="digits-group", params={"size": 2, "mode": "C"}),
    ]))
    assert result.data == ["12", "13", "23"]


def test_empty_pipeline_is_ok_and_empty():
    result = compute_pipeline(PipelineRequest(raw_text="123", steps=[]))
    assert result.status == "ok"
    assert result.data == []


def test_pipeline_unknown_step_raises():
    with pytest.raises(UnknownModuleError):
        compute_steps("12", [{"moduleKey": "missing-module"}])


def test_pipeline_shape_error_raises():
    with pytest.raises(PipelineShapeError):
        compute_steps("12", [{"moduleKey": "filter-exclude", "params": {}}])


def test_pipeline_blocked_step_becomes_blocked_result():
    result = compute_steps("1234567", [
        {"stepId": "big", "moduleKey": "digits-group", "params": {"size": 7, "mode": "C"}},
    ])
    assert result.status == "blocked"
    assert result.data == []
    assert "big" in result.reason
    assert result.error_code == "GROUP_SIZE_TOO_LARGE"


def test_pipeline_module_direct_call_with_steps_param():
    result = compute("12", "pipeline-runner", {"steps": [
        {"moduleKey": "digits-group", "params": {"size": 2, "mode": "P"}},
    ]})
    assert result.data == ["12", "21"]


# ─── pipeline-runner called by key ───────────────────────────────

_OVER_BUDGET_STEP = {
    "moduleKey": "digits-group",
    "params": {"size": 6, "mode": "P", "allowDouble": True},
}


def test_pipeline_module_unknown_step_raises_before_estimate_blocks():
    with pytest.raises(UnknownModuleError) as info:
        compute("0123456789", "pipeline-runner", {"steps": [
            _OVER_BUDGET_STEP, {"stepId": "second", "moduleKey": "no-such-module"},
        ]})
    assert info.value.context.step_id == "second"


def test_pipeline_module_shape_error_raises_before_estimate_blocks():
    with pytest.raises(PipelineShapeError):
        compute("0123456789", "pipeline-runner", {"steps": [
            _OVER_BUDGET_STEP, _OVER_BUDGET_STEP,
        ]})


def test_nested_pipeline_with_bad_inner_step_raises():
    inner = {"moduleKey": "pipeline-runner", "params": {"steps": [
        _OVER_BUDGET_STEP, {"moduleKey": "no-such-module"},
    ]}}
    with pytest.raises(UnknownModuleError):
        compute("0123456789", "pipeline-runner", {"steps": [inner]})


def test_pipeline_module_over_budget_with_valid_steps_is_blocked():
    result = compute("0123456789", "pipeline-runner", {"steps": [
        _OVER_BUDGET_STEP,
        {"moduleKey": "filter-exclude", "params": {"excludeFront": "0"}},
    ]})
    assert result.status == "blocked"
    assert result.error_code == "ESTIMATE_TOO_LARGE"
