"""Call-by-value small-step evaluation."""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

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
    Zero,
)
from .debruijn import subst_top
from .errors import MissingFieldError, StuckTermError


class NoRuleApplies(Exception):
    """Raised by ``step`` when ``term`` is a normal form."""


def is_numeric_value(term: Term) -> bool:
    while isinstance(term, Succ):
        term = term.arg
    return isinstance(term, Zero)


def is_value(term: Term) -> bool:
    match term:
        case TmTrue() | TmFalse() | Abst():
            return True
        case Record(fields):
            return all(is_value(f) for _, f in fields)
        case _:
            return is_numeric_value(term)


def step(term: Term) -> Term:
    """Perform exactly one reduction step.

    Raises ``NoRuleApplies`` when ``term`` is a value or a stuck term of the
    untyped fragment, and ``StuckTermError``/``MissingFieldError`` for the
    conditions that evaluation cannot get past.
    """

    match term:
        case App(Abst(_, _, body), arg) if is_value(arg):
            return subst_top(arg, body)
        case App(f, arg) if is_value(f):
            return replace(term, arg=step(arg))
        case App(f, _):
            return replace(term, func=step(f))

        case If(TmTrue(), then, _):
            return then
        case If(TmFalse(), _, else_):
            return else_
        case If(cond, _, _):
            if is_value(cond):
                raise StuckTermError("If condition is not a boolean", cond.span)
            try:
                return replace(term, cond=step(cond))
            except NoRuleApplies:
                raise StuckTermError(
                    "If condition does not reduce to a boolean", cond.span
                ) from None

        case Pred(Zero()):
            return term.arg
        case Pred(Succ(n)) if is_numeric_value(n):
            return n
        case Pred(arg):
            return replace(term, arg=step(arg))

        case Succ(arg):
            if is_numeric_value(arg):
                raise NoRuleApplies(term)
            return replace(term, arg=step(arg))

        case IsZero(Zero()):
            return TmTrue(span=term.span)
        case IsZero(Succ(n)) if is_numeric_value(n):
            return TmFalse(span=term.span)
        case IsZero(arg):
            return replace(term, arg=step(arg))

        case Record(fields):
            # Fields are independent: a stuck field does not block the others.
            for i, (label, f) in enumerate(fields):
                if is_value(f):
                    continue
                try:
                    reduced = step(f)
                except NoRuleApplies:
                    continue
                stepped = (*fields[:i], (label, reduced), *fields[i + 1 :])
                return replace(term, fields=stepped)
            raise NoRuleApplies(term)

        case Proj(Record() as record, label):
            found = record.get(label)
            if found is not None and is_value(found):
                return found
            if found is None and is_value(record):
                raise MissingFieldError(
                    f"Field {label!r} not found; record has {list(record.labels)}",
                    term.span,
                )
            return replace(term, record=step(record))
        case Proj(record, _):
            if is_value(record):
                raise StuckTermError("Projection from a non-record value", record.span)
            return replace(term, record=step(record))

    raise NoRuleApplies(term)


def evaluate(term: Term) -> Term:
    """Reduce ``term`` until no rule applies and return the normal form."""

    while True:
        try:
            reduced = step(term)
        except NoRuleApplies:
            return term
        logger.trace("step: {} ~> {}", term, reduced)
        term = reduced


__all__ = ["NoRuleApplies", "evaluate", "is_numeric_value", "is_value", "step"]
