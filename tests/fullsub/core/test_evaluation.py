import pytest

from fullsub.common.span import Span
from fullsub.core.ast import (
    Abst,
    App,
    If,
    IsZero,
    Pred,
    Proj,
    Record,
    Succ,
    Term,
    TmFalse,
    TmTrue,
    Var,
    Zero,
    numeral,
    numeral_value,
)
from fullsub.core.errors import MissingFieldError, StuckTermError
from fullsub.core.eval import NoRuleApplies, evaluate, is_numeric_value, is_value, step
from fullsub.core.types import TyBool, TyNat, TyRecord

ID_BOOL = Abst("x", TyBool(), Var(0))


# ------------- Values -------------


def test_values() -> None:
    assert is_value(TmTrue())
    assert is_value(TmFalse())
    assert is_value(numeral(3))
    assert is_value(ID_BOOL)
    assert is_value(Record((("a", TmTrue()), ("b", Zero()))))
    assert is_value(Record())


def test_non_values() -> None:
    assert not is_value(Var(0))
    assert not is_value(App(ID_BOOL, TmTrue()))
    assert not is_value(Succ(TmTrue()))
    assert not is_value(Record((("a", Pred(Zero())),)))


def test_numeric_values() -> None:
    assert is_numeric_value(Zero())
    assert is_numeric_value(Succ(Succ(Zero())))
    assert not is_numeric_value(Succ(Var(0)))
    assert not is_numeric_value(TmTrue())


# ------------- Scenarios -------------


def test_identity_application() -> None:
    assert evaluate(App(ID_BOOL, TmTrue())) == TmTrue()


def test_if_false_selects_else_branch() -> None:
    assert evaluate(If(TmFalse(), Zero(), Succ(Zero()))) == Succ(Zero())


def test_iszero_of_pred_succ() -> None:
    assert evaluate(IsZero(Pred(Succ(Zero())))) == TmTrue()


def test_record_projection() -> None:
    rec = Record((("a", TmTrue()), ("b", Zero())))
    assert evaluate(Proj(rec, "a")) == TmTrue()
    assert evaluate(Proj(rec, "b")) == Zero()


def test_width_subtyped_argument_is_substituted_whole() -> None:
    fn = Abst("r", TyRecord((("x", TyBool()),)), Var(0))
    arg = Record((("x", TmTrue()), ("y", TmFalse())))
    assert evaluate(App(fn, arg)) == arg


# ------------- Single steps -------------


def test_step_beta_requires_value_argument() -> None:
    term = App(ID_BOOL, If(TmTrue(), TmFalse(), TmTrue()))
    assert step(term) == App(ID_BOOL, TmFalse())
    assert step(step(term)) == TmFalse()


def test_step_reduces_function_position_first() -> None:
    curried = Abst("x", TyBool(), Abst("y", TyBool(), Var(1)))
    term = App(App(curried, TmTrue()), TmFalse())
    assert step(term) == App(Abst("y", TyBool(), TmTrue()), TmFalse())


def test_step_on_value_raises_no_rule_applies() -> None:
    for value in (TmTrue(), Zero(), numeral(2), ID_BOOL, Record()):
        with pytest.raises(NoRuleApplies):
            step(value)


def test_pred_rules() -> None:
    assert step(Pred(Zero())) == Zero()
    assert step(Pred(numeral(3))) == numeral(2)
    assert step(Pred(Pred(numeral(2)))) == Pred(numeral(1))


def test_succ_reduces_argument() -> None:
    assert step(Succ(Pred(numeral(1)))) == Succ(Zero())


def test_iszero_rules() -> None:
    assert step(IsZero(Zero())) == TmTrue()
    assert step(IsZero(numeral(4))) == TmFalse()
    assert step(IsZero(Pred(numeral(1)))) == IsZero(Zero())


def test_record_steps_one_field_at_a_time() -> None:
    rec = Record((("a", Pred(numeral(1))), ("b", IsZero(Zero()))))
    assert step(rec) == Record((("a", Zero()), ("b", IsZero(Zero()))))
    assert evaluate(rec) == Record((("a", Zero()), ("b", TmTrue())))


def test_projection_evaluates_record_first() -> None:
    rec = Record((("a", IsZero(Zero())), ("b", Pred(Zero()))))
    assert evaluate(Proj(rec, "a")) == TmTrue()


def test_projection_of_nested_record() -> None:
    inner = Record((("c", numeral(2)),))
    term = Proj(Proj(Record((("i", inner),)), "i"), "c")
    assert evaluate(term) == numeral(2)


# ------------- Normal forms and errors -------------


def test_untaken_branch_is_never_evaluated() -> None:
    stuck = If(Zero(), TmTrue(), TmFalse())
    assert evaluate(If(TmTrue(), Zero(), stuck)) == Zero()


def test_if_on_non_boolean_value_is_stuck() -> None:
    cond = Zero(span=Span(3, 4))
    with pytest.raises(StuckTermError, match="not a boolean") as exc_info:
        evaluate(If(cond, TmTrue(), TmFalse()))
    assert exc_info.value.span == Span(3, 4)


def test_if_on_irreducible_condition_is_stuck() -> None:
    with pytest.raises(StuckTermError, match="does not reduce"):
        evaluate(If(Var(0), TmTrue(), TmFalse()))


def test_missing_field_at_runtime() -> None:
    with pytest.raises(MissingFieldError, match="'z'"):
        evaluate(Proj(Record((("a", TmTrue()),)), "z"))


def test_projection_from_non_record_is_stuck() -> None:
    with pytest.raises(StuckTermError, match="non-record"):
        evaluate(Proj(TmTrue(), "a"))


def test_stuck_untyped_terms_are_returned_unchanged() -> None:
    assert evaluate(Succ(TmTrue())) == Succ(TmTrue())
    assert evaluate(App(Var(0), TmTrue())) == App(Var(0), TmTrue())
    assert evaluate(App(TmTrue(), Zero())) == App(TmTrue(), Zero())
    assert evaluate(Pred(TmFalse())) == Pred(TmFalse())


def test_values_are_fixed_points() -> None:
    for value in (TmTrue(), numeral(3), ID_BOOL, Record((("a", Zero()),))):
        assert evaluate(value) == value


def test_evaluation_is_deterministic() -> None:
    term: Term = App(
        Abst("n", TyNat(), If(IsZero(Var(0)), Zero(), Pred(Var(0)))),
        Succ(Succ(Zero())),
    )
    results = {evaluate(term) for _ in range(5)}
    assert results == {Succ(Zero())}


def test_lambda_body_is_not_reduced() -> None:
    term = Abst("x", TyBool(), App(ID_BOOL, Var(0)))
    assert evaluate(term) == term


def test_church_style_untyped_reduction() -> None:
    # (lambda f. lambda x. f (f x)) succ-like abstraction applied to 0.
    succ_fn = Abst("n", TyNat(), Succ(Var(0)))
    twice = Abst("f", TyNat(), Abst("x", TyNat(), App(Var(1), App(Var(1), Var(0)))))
    assert evaluate(App(App(twice, succ_fn), Zero())) == numeral(2)


# ------------- Records with stuck fields -------------


def test_record_steps_past_stuck_field() -> None:
    rec = Record({"a": Var(0), "b": Pred(numeral(1))})
    assert step(rec) == Record({"a": Var(0), "b": Zero()})
    assert evaluate(rec) == Record({"a": Var(0), "b": Zero()})


def test_record_with_only_stuck_fields_is_a_normal_form() -> None:
    rec = Record({"a": Var(0), "b": Succ(TmTrue())})
    with pytest.raises(NoRuleApplies):
        step(rec)
    assert evaluate(rec) == rec


def test_projection_ignores_stuck_sibling() -> None:
    assert evaluate(Proj(Record({"a": Var(0), "b": TmTrue()}), "b")) == TmTrue()
    assert evaluate(Proj(Record({"a": Var(0), "b": IsZero(Zero())}), "b")) == TmTrue()


def test_projection_of_stuck_field_stays_put() -> None:
    term = Proj(Record({"a": Var(0), "b": TmTrue()}), "a")
    assert evaluate(term) == term


def test_missing_field_waits_for_record_value() -> None:
    term = Proj(Record({"a": Var(0)}), "z")
    assert evaluate(term) == term
    with pytest.raises(MissingFieldError):
        evaluate(Proj(Record({"a": Pred(numeral(1))}), "z"))


# ------------- Large numerals -------------


def test_large_numerals_are_values() -> None:
    big = numeral(5000)
    assert numeral_value(evaluate(big)) == 5000
    with pytest.raises(NoRuleApplies):
        step(big)


def test_large_numeral_arithmetic() -> None:
    assert numeral_value(evaluate(Pred(numeral(5000)))) == 4999
    assert evaluate(IsZero(numeral(5000))) == TmFalse()
    succ_fn = Abst("n", TyNat(), Succ(Var(0)))
    assert numeral_value(evaluate(App(succ_fn, numeral(5000)))) == 5001
