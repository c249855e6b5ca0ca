"""Type inference with subsumption for the simply typed calculus with records."""

from __future__ import annotations

from .ast import (
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
)
from .context import Context, NameBind, VarBind
from .errors import (
    ArgumentTypeError,
    BranchMismatchError,
    ConditionTypeError,
    MissingFieldError,
    NotAFunctionError,
    NotARecordError,
    ParameterMismatchError,
    TypingError,
    UnboundVariableError,
)
from .pretty import pretty, pretty_type
from .subtype import sub_type
from .types import TyArr, TyBool, TyNat, TyRecord, Type


def _expect_nat(operand: Term, term: Term, ctx: Context) -> None:
    # Nested succ/pred are peeled in a loop; numerals can be arbitrarily deep.
    while isinstance(operand, (Succ, Pred)):
        term, operand = operand, operand.arg
    ty = type_of(operand, ctx)
    if ty != TyNat():
        raise ArgumentTypeError(
            f"{type(term).__name__} expects a Nat argument:\n"
            f"  term = {pretty(term, ctx)}\n"
            f"  argument type = {pretty_type(ty)}",
            operand.span,
        )


def _type_of_var(term: Var, ctx: Context) -> Type:
    binding = ctx.binding_of(term.k)
    match binding:
        case VarBind(ty):
            return ty
        case NameBind():
            raise UnboundVariableError(
                f"No type information for variable {ctx.name_of(term.k)}", term.span
            )
    raise UnboundVariableError(
        f"Unbound variable {term.k} (context size {len(ctx)}, expected {term.n})",
        term.span,
    )


def type_of(term: Term, ctx: Context | None = None) -> Type:
    """Compute the type of ``term`` under the optional context ``ctx``.

    Follows the syntax-directed typing rules, using ``sub_type`` at
    application sites. Raises a ``TypingError`` subclass, carrying the span of
    the offending sub-term, instead of returning a partial answer.
    """

    ctx = ctx or Context()
    match term:
        case TmTrue() | TmFalse():
            return TyBool()
        case Zero():
            return TyNat()
        case Succ(arg) | Pred(arg):
            _expect_nat(arg, term, ctx)
            return TyNat()
        case IsZero(arg):
            _expect_nat(arg, term, ctx)
            return TyBool()
        case Var():
            return _type_of_var(term, ctx)
        case If(cond, then, else_):
            cond_ty = type_of(cond, ctx)
            if cond_ty != TyBool():
                raise ConditionTypeError(
                    "If condition must be Bool:\n"
                    f"  condition = {pretty(cond, ctx)}\n"
                    f"  found = {pretty_type(cond_ty)}",
                    cond.span,
                )
            then_ty = type_of(then, ctx)
            else_ty = type_of(else_, ctx)
            # TODO: compute the join of the branch types instead of requiring equality.
            if then_ty != else_ty:
                raise BranchMismatchError(
                    "If branches have different types:\n"
                    f"  then = {pretty_type(then_ty)}\n"
                    f"  else = {pretty_type(else_ty)}",
                    term.span,
                )
            return then_ty
        case App(f, arg):
            f_ty = type_of(f, ctx)
            arg_ty = type_of(arg, ctx)
            if not isinstance(f_ty, TyArr):
                raise NotAFunctionError(
                    "Application of non-function:\n"
                    f"  function = {pretty(f, ctx)}\n"
                    f"  inferred f_ty = {pretty_type(f_ty)}",
                    f.span,
                )
            if not sub_type(arg_ty, f_ty.dom):
                raise ParameterMismatchError(
                    "Application argument type mismatch:\n"
                    f"  argument = {pretty(arg, ctx)}\n"
                    f"  expected arg_ty = {pretty_type(f_ty.dom)}\n"
                    f"  inferred arg_ty = {pretty_type(arg_ty)}",
                    arg.span,
                )
            return f_ty.rng
        case Abst(name, ty, body):
            body_ty = type_of(body, ctx.push_var(name, ty))
            return TyArr(ty, body_ty)
        case Record(fields):
            return TyRecord(tuple((label, type_of(f, ctx)) for label, f in fields))
        case Proj(record, label):
            record_ty = type_of(record, ctx)
            if not isinstance(record_ty, TyRecord):
                raise NotARecordError(
                    "Projection from non-record:\n"
                    f"  term = {pretty(record, ctx)}\n"
                    f"  found = {pretty_type(record_ty)}",
                    record.span,
                )
            field_ty = record_ty.get(label)
            if field_ty is None:
                raise MissingFieldError(
                    f"Field {label!r} not found in {pretty_type(record_ty)}", term.span
                )
            return field_ty

    raise TypingError(f"Unexpected term in type_of: {term!r}", term.span)


__all__ = ["type_of"]
