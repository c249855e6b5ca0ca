"""Surface AST produced by the parser, before name resolution."""

from __future__ import annotations

from dataclasses import dataclass

from fullsub.common.span import Span
from fullsub.core.types import Type


@dataclass(frozen=True)
class SurfaceTerm:
    span: Span


@dataclass(frozen=True)
class STrue(SurfaceTerm):
    pass


@dataclass(frozen=True)
class SFalse(SurfaceTerm):
    pass


@dataclass(frozen=True)
class SNum(SurfaceTerm):
    value: int


@dataclass(frozen=True)
class SSucc(SurfaceTerm):
    arg: SurfaceTerm


@dataclass(frozen=True)
class SPred(SurfaceTerm):
    arg: SurfaceTerm


@dataclass(frozen=True)
class SIsZero(SurfaceTerm):
    arg: SurfaceTerm


@dataclass(frozen=True)
class SIf(SurfaceTerm):
    cond: SurfaceTerm
    then: SurfaceTerm
    else_: SurfaceTerm


@dataclass(frozen=True)
class SVar(SurfaceTerm):
    name: str


@dataclass(frozen=True)
class SApp(SurfaceTerm):
    fn: SurfaceTerm
    arg: SurfaceTerm


@dataclass(frozen=True)
class SLam(SurfaceTerm):
    name: str
    ty: Type
    body: SurfaceTerm


@dataclass(frozen=True)
class SField:
    label: str
    term: SurfaceTerm
    span: Span


@dataclass(frozen=True)
class SRecord(SurfaceTerm):
    fields: tuple[SField, ...]


@dataclass(frozen=True)
class SProj(SurfaceTerm):
    record: SurfaceTerm
    label: str


@dataclass(frozen=True)
class Statement:
    span: Span


@dataclass(frozen=True)
class SEval(Statement):
    """A term to check and evaluate."""

    term: SurfaceTerm


@dataclass(frozen=True)
class SBind(Statement):
    """``x : T;`` (typed) or ``x /;`` (name only) binder declaration."""

    name: str
    ty: Type | None = None


__all__ = [
    "SurfaceTerm",
    "STrue",
    "SFalse",
    "SNum",
    "SSucc",
    "SPred",
    "SIsZero",
    "SIf",
    "SVar",
    "SApp",
    "SLam",
    "SField",
    "SRecord",
    "SProj",
    "Statement",
    "SEval",
    "SBind",
]
