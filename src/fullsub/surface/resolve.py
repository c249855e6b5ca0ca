"""Name resolution: surface terms to de Bruijn terms."""

from __future__ import annotations

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
    numeral,
)
from fullsub.core.context import Context, NameBind, VarBind
from fullsub.core.errors import SurfaceError
from fullsub.surface.sast import (
    SApp,
    SBind,
    SFalse,
    SIf,
    SIsZero,
    SLam,
    SNum,
    SPred,
    SProj,
    SRecord,
    SSucc,
    STrue,
    SurfaceTerm,
    SVar,
)


def resolve_term(term: SurfaceTerm, ctx: Context) -> tuple[Term, Context]:
    """Resolve names in ``term`` against ``ctx``.

    Returns the de Bruijn term together with ``ctx`` extended by any free
    names met along the way. Free names are appended as outermost
    ``NameBind`` entries so earlier indices stay valid.
    """

    match term:
        case SVar(span, name):
            idx = ctx.index_of(name)
            if idx is None:
                ctx = ctx.add_free(name)
                idx = len(ctx) - 1
            return Var(idx, len(ctx), span=span), ctx
        case STrue(span):
            return TmTrue(span=span), ctx
        case SFalse(span):
            return TmFalse(span=span), ctx
        case SNum(span, value):
            return numeral(value, span), ctx
        case SSucc(span, arg):
            arg_t, ctx = resolve_term(arg, ctx)
            return Succ(arg_t, span=span), ctx
        case SPred(span, arg):
            arg_t, ctx = resolve_term(arg, ctx)
            return Pred(arg_t, span=span), ctx
        case SIsZero(span, arg):
            arg_t, ctx = resolve_term(arg, ctx)
            return IsZero(arg_t, span=span), ctx
        case SIf(span, cond, then, else_):
            cond_t, ctx = resolve_term(cond, ctx)
            then_t, ctx = resolve_term(then, ctx)
            else_t, ctx = resolve_term(else_, ctx)
            return If(cond_t, then_t, else_t, span=span), ctx
        case SApp(span, fn, arg):
            fn_t, ctx = resolve_term(fn, ctx)
            arg_t, ctx = resolve_term(arg, ctx)
            return App(fn_t, arg_t, span=span), ctx
        case SLam(span, name, ty, body):
            body_t, body_ctx = resolve_term(body, ctx.push(name, VarBind(ty)))
            return Abst(name, ty, body_t, span=span), body_ctx.pop()
        case SRecord(span, fields):
            seen: set[str] = set()
            resolved: list[tuple[str, Term]] = []
            for f in fields:
                if f.label in seen:
                    raise SurfaceError(f"Duplicate record label {f.label!r}", f.span)
                seen.add(f.label)
                field_t, ctx = resolve_term(f.term, ctx)
                resolved.append((f.label, field_t))
            return Record(tuple(resolved), span=span), ctx
        case SProj(span, record, label):
            record_t, ctx = resolve_term(record, ctx)
            return Proj(record_t, label, span=span), ctx

    raise SurfaceError("Unsupported surface term", term.span)


def resolve_binder(stmt: SBind, ctx: Context) -> Context:
    """Extend ``ctx`` with a top-level ``x : T;`` or ``x /;`` declaration."""

    if stmt.ty is None:
        return ctx.push(stmt.name, NameBind())
    return ctx.push(stmt.name, VarBind(stmt.ty))


__all__ = ["resolve_term", "resolve_binder"]
