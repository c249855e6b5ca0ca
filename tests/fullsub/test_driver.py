import pytest

from fullsub.config import Settings
from fullsub.core.ast import Record, Succ, TmFalse, TmTrue, Zero
from fullsub.core.errors import (
    BranchMismatchError,
    ConditionTypeError,
    NestingDepthError,
    StuckTermError,
    SurfaceError,
    UnboundVariableError,
)
from fullsub.core.types import TyBool, TyRecord
from fullsub.driver import run_program


def only(source: str, settings: Settings | None = None):
    program = run_program(source, settings=settings or Settings())
    assert len(program.results) == 1
    return program.results[0]


# --- Scenarios ------------------------------------------------------------------


def test_identity_applied_to_true() -> None:
    result = only("(lambda x:Bool. x) true;")
    assert result.value == TmTrue()
    assert result.rendered == "true : Bool"


def test_if_false_takes_else_branch() -> None:
    result = only("if false then 0 else succ 0;")
    assert result.value == Succ(Zero())
    assert result.rendered == "1 : Nat"


def test_iszero_of_pred_succ() -> None:
    result = only("iszero (pred (succ 0));")
    assert result.value == TmTrue()


def test_record_projection() -> None:
    result = only("{a=true,b=0}.a;")
    assert result.value == TmTrue()
    assert result.ty == TyBool()


def test_width_subtyping_at_application() -> None:
    result = only("(lambda r:{x:Bool}. r) {x=true,y=false};")
    assert result.ty == TyRecord({"x": TyBool()})
    assert result.value == Record({"x": TmTrue(), "y": TmFalse()})
    assert result.rendered == "{x=true, y=false} : {x:Bool}"


def test_branch_mismatch_is_reported() -> None:
    result = only("if true then 0 else false;")
    assert not result.ok
    assert isinstance(result.error, BranchMismatchError)


# --- Statement processing -------------------------------------------------------


def test_errors_do_not_stop_later_statements() -> None:
    program = run_program("if true then 0 else false; succ 0;", settings=Settings())
    assert not program.ok
    assert isinstance(program.errors[0], BranchMismatchError)
    assert program.results[1].rendered == "1 : Nat"


def test_typed_binder_is_visible_to_later_statements() -> None:
    program = run_program("x : Bool; x;", settings=Settings())
    assert [r.rendered for r in program.results] == ["x : Bool", "x : Bool"]
    assert program.ctx.index_of("x") == 0


def test_name_binder_has_no_type() -> None:
    program = run_program("y/; y;", settings=Settings())
    assert program.results[0].rendered == "y /"
    assert isinstance(program.results[1].error, UnboundVariableError)


def test_name_binder_evaluates_without_type_checking() -> None:
    program = run_program("y/; y;", settings=Settings(typecheck=False))
    assert program.ok
    assert program.results[1].rendered == "y"


def test_free_names_persist_across_statements() -> None:
    program = run_program("f; f;", settings=Settings(typecheck=False))
    assert [r.rendered for r in program.results] == ["f", "f"]
    assert [e.name for e in program.ctx] == ["f"]


def test_error_location_points_at_condition() -> None:
    program = run_program("true;\nif 0 then true else false;", settings=Settings())
    error = program.errors[0]
    assert isinstance(error, ConditionTypeError)
    assert error.location() == (2, 4)
    assert "'0'" in str(error)


def test_stuck_condition_without_type_checking() -> None:
    program = run_program("if 0 then 1 else 2;", settings=Settings(typecheck=False))
    assert isinstance(program.errors[0], StuckTermError)


def test_show_types_off() -> None:
    result = only("succ 0;", Settings(show_types=False))
    assert result.rendered == "1"


def test_check_only_keeps_term() -> None:
    program = run_program("(lambda x:Bool. x) true;", settings=Settings(), evaluate_terms=False)
    assert program.results[0].value is None
    assert program.results[0].rendered == "(lambda x:Bool. x) true : Bool"


def test_syntax_error_aborts_program() -> None:
    with pytest.raises(SurfaceError, match="Unexpected end of input"):
        run_program("true", settings=Settings())


def test_record_with_stuck_field_still_reduces_the_rest() -> None:
    program = run_program("x : Bool; {a = x, b = pred 1};", settings=Settings())
    assert program.results[1].rendered == "{a=x, b=0} : {a:Bool, b:Nat}"


def test_projection_next_to_stuck_field() -> None:
    program = run_program("x : Bool; {a = x, b = true}.b;", settings=Settings())
    assert program.results[1].rendered == "true : Bool"


# --- Deep terms -----------------------------------------------------------------


def test_large_literals() -> None:
    assert only("600;").rendered == "600 : Nat"
    assert only("pred 5000;").rendered == "4999 : Nat"
    assert only("(lambda n:Nat. succ n) 4000;").rendered == "4001 : Nat"


def test_excessive_nesting_is_a_statement_error() -> None:
    depth = 3000
    source = "succ (" * depth + "0" + ")" * depth + "; true;"
    program = run_program(source, settings=Settings())
    error = program.errors[0]
    assert isinstance(error, NestingDepthError)
    assert "nested too deeply" in error.message
    assert program.results[1].rendered == "true : Bool"
