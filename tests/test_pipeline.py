from __future__ import annotations

import pytest

from miden_playground.engine import ProvingError, Trace
from miden_playground.pipeline import Pipeline, execute_program, generate_proof
from miden_playground.results import Failure, Stage, Success

ADD = "begin push.3 push.5 add end"


def test_execute_basic_addition(engine) -> None:
    outcome = Pipeline(engine).execute(ADD)
    assert isinstance(outcome, Success)
    assert outcome.stack_outputs[0] == "8"
    assert len(outcome.stack_outputs) == 16
    assert outcome.cycles == 64
    assert outcome.program_hash
    assert outcome.proof_bytes is None
    assert outcome.timing.compilation_ms is not None
    assert outcome.timing.run_ms is not None
    assert outcome.timing.total_ms is not None


def test_configure_uses_debug_mode_and_stdlib(engine) -> None:
    Pipeline(engine).execute(ADD)
    assert engine.calls[0] == ("configure", (True, True))


def test_inputs_are_added(engine) -> None:
    outcome = Pipeline(engine).execute("begin add end", '{"operand_stack": ["7","5"]}')
    assert isinstance(outcome, Success)
    assert outcome.stack_outputs[0] == "12"


def test_inputs_reach_engine_reversed(engine) -> None:
    outcome = Pipeline(engine).execute("begin end", '{"operand_stack": ["10","20"]}')
    assert ("execute", [20, 10]) in engine.calls
    assert isinstance(outcome, Success)
    # 20 was pushed first, so 10 sits on top of it.
    assert list(outcome.stack_outputs[:2]) == ["10", "20"]


def test_addition_ignores_declared_order(engine) -> None:
    pipeline = Pipeline(engine)
    forward = pipeline.execute("begin add end", '{"operand_stack": ["10","20"]}')
    backward = pipeline.execute("begin add end", '{"operand_stack": ["20","10"]}')
    assert forward.stack_outputs[0] == backward.stack_outputs[0] == "30"


def test_stack_outputs_bounded_to_sixteen(engine) -> None:
    source = "begin " + " ".join(f"push.{i}" for i in range(1, 21)) + " end"
    outcome = Pipeline(engine).execute(source)
    assert isinstance(outcome, Success)
    assert len(outcome.stack_outputs) == 16
    assert outcome.stack_outputs[0] == "20"
    assert outcome.stack_outputs[-1] == "5"


def test_execution_fault_is_classified(engine) -> None:
    outcome = Pipeline(engine).execute("begin push.1 push.0 u32mod end")
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.EXECUTE
    assert outcome.message == "Execution error: division by zero"
    assert outcome.timing.compilation_ms is not None
    assert outcome.timing.run_ms is None
    assert outcome.timing.total_ms is not None


def test_syntax_error_stops_at_compile(engine) -> None:
    outcome = Pipeline(engine).execute("begin push.x end")
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.COMPILE
    assert outcome.message.startswith("Assembly error: ")
    assert outcome.timing.compilation_ms is not None
    assert outcome.timing.run_ms is None
    assert not any(call[0] == "execute" for call in engine.calls)


def test_malformed_inputs_never_compile(engine) -> None:
    outcome = Pipeline(engine).execute(ADD, "{oops")
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.INPUTS
    assert outcome.message.startswith("Invalid JSON: ")
    assert outcome.timing.compilation_ms is None
    assert outcome.timing.total_ms is not None
    assert not any(call[0] == "compile" for call in engine.calls)


@pytest.mark.parametrize("raw", ["[" * 100000, '{"operand_stack": [NaN]}'])
def test_pathological_inputs_are_decode_failures(engine, raw: str) -> None:
    for outcome in (Pipeline(engine).execute(ADD, raw), Pipeline(engine).prove(ADD, raw)):
        assert isinstance(outcome, Failure)
        assert outcome.stage is Stage.INPUTS
        assert outcome.message.startswith("Invalid JSON: ")


def test_invalid_number_reports_value(engine) -> None:
    outcome = Pipeline(engine).prove(ADD, '{"operand_stack": ["ten"]}')
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.INPUTS
    assert "'ten'" in outcome.message


def test_configuration_failure(broken_engine) -> None:
    outcome = Pipeline(broken_engine).execute(ADD)
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.CONFIGURE
    assert outcome.message == "Failed to configure assembler: standard library unavailable"
    assert outcome.timing.compilation_ms is None
    assert outcome.timing.total_ms is not None


def test_unexpected_engine_exception_is_contained(engine) -> None:
    engine.execute_error = RuntimeError("engine crashed")
    pipeline = Pipeline(engine)
    outcome = pipeline.execute(ADD)
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.EXECUTE
    assert outcome.message == "Execution error: engine crashed"

    engine.execute_error = None
    assert isinstance(pipeline.execute(ADD), Success)


def test_cycle_count_must_fit_u32(engine, monkeypatch) -> None:
    monkeypatch.setattr(engine, "execute", lambda artifact, inputs: Trace((1,), 1 << 32))
    outcome = Pipeline(engine).execute(ADD)
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.EXECUTE


def test_prove_returns_proof_and_outputs(engine) -> None:
    outcome = Pipeline(engine).prove("begin add end", '{"operand_stack": ["7","5"]}')
    assert isinstance(outcome, Success)
    assert outcome.stack_outputs[0] == "12"
    assert outcome.proof_bytes.startswith(b"proof:")
    assert outcome.cycles is None
    assert ("prove", [5, 7]) in engine.calls
    assert outcome.timing.run_ms is not None


def test_proving_failure_is_classified(engine) -> None:
    engine.prove_error = ProvingError("constraint evaluation failed")
    outcome = Pipeline(engine).prove(ADD)
    assert isinstance(outcome, Failure)
    assert outcome.stage is Stage.PROVE
    assert outcome.message == "Proving error: constraint evaluation failed"
    assert outcome.timing.compilation_ms is not None
    assert outcome.timing.run_ms is None


@pytest.mark.parametrize(
    "source",
    [ADD, "begin push.2 push.3 mul dup add end", "begin push.9 push.4 swap drop end"],
)
def test_execute_and_prove_agree(engine, source: str) -> None:
    pipeline = Pipeline(engine)
    executed = pipeline.execute(source)
    proved = pipeline.prove(source)
    assert isinstance(executed, Success) and isinstance(proved, Success)
    assert executed.program_hash == proved.program_hash
    assert executed.stack_outputs == proved.stack_outputs


def test_entry_points_encode_results(engine) -> None:
    executed = execute_program(ADD, engine=engine)
    proved = generate_proof(ADD, engine=engine)
    assert executed.success and executed.stack_outputs[0] == "8"
    assert proved.success and proved.stack_outputs[0] == "8"
    assert proved.program_hash == executed.program_hash


def test_entry_points_fall_back_to_configured_engine(default_engine) -> None:
    result = execute_program(ADD)
    assert result.success
    assert default_engine.calls
