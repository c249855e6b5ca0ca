"""Abstract syntax tree nodes for the lambda calculus with records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from fullsub.common.span import Span

from .types import Type, sorted_fields


@dataclass(frozen=True)
class Term:
    """Base class for all terms.

    ``span`` records where the term came from in the source. It is excluded
    from equality and is never consulted by substitution or evaluation.
    """

    span: Span | None = field(default=None, compare=False, repr=False, kw_only=True)

    def __str__(self) -> str:
        # Deferred import avoids cycles when pretty-printing dataclass reprs.
        from .pretty import pretty

        return pretty(self)


@dataclass(frozen=True)
class TmTrue(Term):
    pass


@dataclass(frozen=True)
class TmFalse(Term):
    pass


@dataclass(frozen=True)
class Zero(Term):
    pass


@dataclass(frozen=True)
class Succ(Term):
    arg: Term


@dataclass(frozen=True)
class Pred(Term):
    arg: Term


@dataclass(frozen=True)
class IsZero(Term):
    arg: Term


@dataclass(frozen=True)
class If(Term):
    cond: Term
    then: Term
    else_: Term


@dataclass(frozen=True)
class Var(Term):
    """De Bruijn variable pointing to the binder ``k`` abstractions outward.

    ``n`` is the length of the context the variable was resolved in. It only
    feeds diagnostics and does not take part in equality.
    """

    k: int
    n: int = field(default=0, compare=False)


@dataclass(frozen=True)
class App(Term):
    """Function application."""

    func: Term
    arg: Term


@dataclass(frozen=True)
class Abst(Term):
    """Lambda abstraction with a typed parameter.

    ``name`` is the display name of the parameter, kept for printing only.
    """

    name: str
    ty: Type
    body: Term


@dataclass(frozen=True)
class Record(Term):
    """Record literal; fields are kept sorted by label."""

    fields: tuple[tuple[str, Term], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", sorted_fields(self.fields, "record"))

    def get(self, label: str) -> Term | None:
        for name, term in self.fields:
            if name == label:
                return term
        return None

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.fields)

    def __iter__(self) -> Iterator[tuple[str, Term]]:
        return iter(self.fields)


@dataclass(frozen=True)
class Proj(Term):
    record: Term
    label: str


def numeral(n: int, span: Span | None = None) -> Term:
    """Return ``succ (succ ... 0)`` with ``n`` successors."""
    if n < 0:
        raise ValueError("Numerals must be non-negative")
    term: Term = Zero(span=span)
    for _ in range(n):
        term = Succ(term, span=span)
    return term


def numeral_value(term: Term) -> int | None:
    """Return the integer denoted by a numeric value, or ``None``."""
    count = 0
    while isinstance(term, Succ):
        count += 1
        term = term.arg
    return count if isinstance(term, Zero) else None


__all__ = [
    "Term",
    "TmTrue",
    "TmFalse",
    "Zero",
    "Succ",
    "Pred",
    "IsZero",
    "If",
    "Var",
    "App",
    "Abst",
    "Record",
    "Proj",
    "numeral",
    "numeral_value",
]
