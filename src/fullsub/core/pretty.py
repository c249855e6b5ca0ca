"""Pretty-printing utilities for terms and types."""

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
    numeral_value,
)
from .context import Context
from .types import TyArr, TyBool, TyNat, TyRecord, TyTop, Type

ATOM_PREC = 3
PATH_PREC = 2
APP_PREC = 1
LAM_PREC = 0


def _maybe_paren(text: str, child_prec: int, parent_prec: int) -> str:
    if child_prec < parent_prec:
        return f"({text})"
    return text


def pretty_type(ty: Type) -> str:
    """Render ``ty`` in surface syntax; arrows associate to the right."""

    def fmt(t: Type) -> tuple[str, int]:
        match t:
            case TyBool():
                return "Bool", ATOM_PREC
            case TyNat():
                return "Nat", ATOM_PREC
            case TyTop():
                return "Top", ATOM_PREC
            case TyRecord(fields):
                inner = ", ".join(f"{label}:{fmt(f)[0]}" for label, f in fields)
                return f"{{{inner}}}", ATOM_PREC
            case TyArr(dom, rng):
                dom_text, dom_prec = fmt(dom)
                rng_text, _ = fmt(rng)
                return f"{_maybe_paren(dom_text, dom_prec, ATOM_PREC)} -> {rng_text}", LAM_PREC
        raise TypeError(f"Cannot pretty-print unknown type: {t!r}")

    return fmt(ty)[0]


def pretty(term: Term, ctx: Context | None = None) -> str:
    """Return surface syntax for ``term`` with names drawn from ``ctx``.

    Binder names that would shadow a name already in scope are primed until
    they are fresh.
    """

    def unary(keyword: str, arg: Term, ctx: Context) -> tuple[str, int]:
        arg_text, arg_prec = fmt(arg, ctx)
        return f"{keyword} {_maybe_paren(arg_text, arg_prec, PATH_PREC)}", APP_PREC

    def fmt(t: Term, ctx: Context) -> tuple[str, int]:
        match t:
            case Var(k):
                return ctx.name_of(k), ATOM_PREC
            case TmTrue():
                return "true", ATOM_PREC
            case TmFalse():
                return "false", ATOM_PREC
            case Zero():
                return "0", ATOM_PREC
            case Succ(arg):
                n = numeral_value(t)
                if n is not None:
                    return str(n), ATOM_PREC
                return unary("succ", arg, ctx)
            case Pred(arg):
                return unary("pred", arg, ctx)
            case IsZero(arg):
                return unary("iszero", arg, ctx)
            case If(cond, then, else_):
                return (
                    f"if {fmt(cond, ctx)[0]} then {fmt(then, ctx)[0]} "
                    f"else {fmt(else_, ctx)[0]}",
                    LAM_PREC,
                )
            case Abst(name, ty, body):
                body_ctx, binder = ctx.pick_fresh_name(name)
                body_text, _ = fmt(body, body_ctx)
                return f"lambda {binder}:{pretty_type(ty)}. {body_text}", LAM_PREC
            case App(f, a):
                func_text, func_prec = fmt(f, ctx)
                arg_text, arg_prec = fmt(a, ctx)
                func_disp = _maybe_paren(func_text, func_prec, APP_PREC)
                arg_disp = _maybe_paren(arg_text, arg_prec, PATH_PREC)
                return f"{func_disp} {arg_disp}", APP_PREC
            case Record(fields):
                inner = ", ".join(f"{label}={fmt(f, ctx)[0]}" for label, f in fields)
                return f"{{{inner}}}", ATOM_PREC
            case Proj(record, label):
                rec_text, rec_prec = fmt(record, ctx)
                return f"{_maybe_paren(rec_text, rec_prec, PATH_PREC)}.{label}", PATH_PREC

        raise TypeError(f"Cannot pretty-print unknown term: {t!r}")

    return fmt(term, ctx or Context())[0]


__all__ = ["pretty", "pretty_type"]
