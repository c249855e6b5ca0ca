"""Statement-by-statement processing of whole programs."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from fullsub.common.span import Span
from fullsub.config import Settings, load_settings
from fullsub.core.ast import Term
from fullsub.core.context import Context
from fullsub.core.errors import FullsubError, NestingDepthError
from fullsub.core.eval import evaluate
from fullsub.core.pretty import pretty, pretty_type
from fullsub.core.types import Type
from fullsub.core.typing import type_of
from fullsub.surface.parse import parse_program
from fullsub.surface.resolve import resolve_binder, resolve_term
from fullsub.surface.sast import SBind, SEval, Statement


@dataclass
class StatementResult:
    """Outcome of a single statement.

    Exactly one of ``rendered`` (success) or ``error`` (failure) is meaningful.
    """

    span: Span
    term: Term | None = None
    ty: Type | None = None
    value: Term | None = None
    rendered: str = ""
    error: FullsubError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ProgramResult:
    results: list[StatementResult] = field(default_factory=list)
    ctx: Context = field(default_factory=Context)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def errors(self) -> list[FullsubError]:
        return [r.error for r in self.results if r.error is not None]


def _run_eval(
    stmt: SEval, term: Term, ctx: Context, settings: Settings, *, evaluate_terms: bool
) -> StatementResult:
    result = StatementResult(stmt.span, term=term)
    if settings.typecheck:
        result.ty = type_of(term, ctx)
    if evaluate_terms:
        result.value = evaluate(term)
        rendered = pretty(result.value, ctx)
    else:
        rendered = pretty(term, ctx)
    if settings.show_types and result.ty is not None:
        rendered = f"{rendered} : {pretty_type(result.ty)}"
    result.rendered = rendered
    return result


def _run_bind(stmt: SBind, ctx: Context) -> tuple[StatementResult, Context]:
    ctx = resolve_binder(stmt, ctx)
    rendered = stmt.name + (" /" if stmt.ty is None else f" : {pretty_type(stmt.ty)}")
    return StatementResult(stmt.span, rendered=rendered), ctx


def run_statements(
    statements: tuple[Statement, ...],
    source: str,
    ctx: Context | None = None,
    settings: Settings | None = None,
    *,
    evaluate_terms: bool = True,
) -> ProgramResult:
    """Process ``statements`` in order, continuing past per-statement errors."""

    settings = settings or load_settings()
    program = ProgramResult(ctx=ctx or Context())
    for stmt in statements:
        try:
            match stmt:
                case SBind():
                    result, program.ctx = _run_bind(stmt, program.ctx)
                case SEval():
                    # Free names stay registered even if the statement fails later.
                    term, program.ctx = resolve_term(stmt.term, program.ctx)
                    result = _run_eval(
                        stmt, term, program.ctx, settings, evaluate_terms=evaluate_terms
                    )
                case _:
                    raise FullsubError(f"Unsupported statement {stmt!r}", stmt.span)
        except RecursionError:
            error = NestingDepthError("Term is nested too deeply to process", stmt.span)
            error.with_source(source)
            logger.info("statement failed: {}", error)
            result = StatementResult(stmt.span, error=error)
        except FullsubError as exc:
            exc.with_source(source)
            logger.info("statement failed: {}", exc)
            result = StatementResult(stmt.span, error=exc)
        else:
            logger.debug("statement: {}", result.rendered)
        program.results.append(result)
    return program


def run_program(
    source: str,
    ctx: Context | None = None,
    settings: Settings | None = None,
    *,
    evaluate_terms: bool = True,
) -> ProgramResult:
    """Parse ``source`` and run every statement in it.

    A syntax error aborts the whole program and propagates as a
    ``SurfaceError``; errors inside a statement are recorded on that
    statement's result.
    """

    statements = parse_program(source)
    logger.debug("parsed {} statements", len(statements))
    return run_statements(
        statements, source, ctx, settings, evaluate_terms=evaluate_terms
    )


__all__ = ["ProgramResult", "StatementResult", "run_program", "run_statements"]
