"""Utilities for working with De Bruijn indices such as shifting and substitution."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from .ast import Abst, App, If, IsZero, Pred, Proj, Record, Succ, Term, Var, numeral_value


def map_vars(term: Term, on_var: Callable[[int, Var], Term], cutoff: int = 0) -> Term:
    """Rebuild ``term`` calling ``on_var(c, var)`` at every variable.

    ``c`` is the number of abstractions between ``term`` and the variable,
    offset by ``cutoff``. Every other node is copied with its span intact.
    """

    def walk(c: int, t: Term) -> Term:
        match t:
            case Var():
                return on_var(c, t)
            case Abst(_, _, body):
                return replace(t, body=walk(c + 1, body))
            case App(f, a):
                return replace(t, func=walk(c, f), arg=walk(c, a))
            case If(cond, then, else_):
                return replace(t, cond=walk(c, cond), then=walk(c, then), else_=walk(c, else_))
            case Succ() if numeral_value(t) is not None:
                # Closed numeral: no variables below.
                return t
            case Succ(a) | Pred(a) | IsZero(a):
                return replace(t, arg=walk(c, a))
            case Record(fields):
                return replace(t, fields=tuple((label, walk(c, f)) for label, f in fields))
            case Proj(record, _):
                return replace(t, record=walk(c, record))
            case _:
                return t

    return walk(cutoff, term)


def shift(term: Term, by: int, cutoff: int = 0) -> Term:
    """Shift free variables (indices ``>= cutoff``) in ``term`` by ``by``.

    Bound variables keep their index; the diagnostic context length of every
    variable moves by ``by`` either way. Shifting never fails: a negative
    ``by`` is only meaningful when no free index below ``-by`` occurs, as in
    ``subst_top``, and is applied as plain arithmetic otherwise.
    """

    def on_var(c: int, v: Var) -> Term:
        k = v.k + by if v.k >= c else v.k
        return replace(v, k=k, n=v.n + by)

    return map_vars(term, on_var, cutoff)


def subst(term: Term, j: int, sub: Term) -> Term:
    """Substitute ``sub`` for free occurrences of ``Var(j)`` in ``term``.

    Under ``c`` abstractions the target index is ``j + c`` and ``sub`` is
    shifted by ``c`` so its own free variables are not captured.
    """

    def on_var(c: int, v: Var) -> Term:
        if v.k == j + c:
            return shift(sub, c)
        return v

    return map_vars(term, on_var)


def subst_top(sub: Term, body: Term) -> Term:
    """Beta-reduction substitution: replace ``Var(0)`` in ``body`` and drop the binder."""
    return shift(subst(body, 0, shift(sub, 1)), -1)


__all__ = ["map_vars", "shift", "subst", "subst_top"]
