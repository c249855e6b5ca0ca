"""Parser for the surface language."""

from __future__ import annotations

from typing import Any, cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]
from loguru import logger

from fullsub.common.span import Span
from fullsub.core.errors import SurfaceError
from fullsub.core.types import TyArr, TyBool, TyNat, TyRecord, TyTop, Type
from fullsub.surface.sast import (
    SApp,
    SBind,
    SEval,
    SField,
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
    Statement,
    SurfaceTerm,
    SVar,
)

_SOURCE: str = ""

reserved = {
    "if": "IF",
    "then": "THEN",
    "else": "ELSE",
    "true": "TRUE",
    "false": "FALSE",
    "succ": "SUCC",
    "pred": "PRED",
    "iszero": "ISZERO",
    "lambda": "LAMBDA",
    "Bool": "BOOL",
    "Nat": "NAT",
    "Top": "TOP",
}

tokens = (
    "IDENT",
    "INT",
    "ARROW",
    "COLON",
    "DOT",
    "EQ",
    "COMMA",
    "SEMI",
    "SLASH",
    "LPAREN",
    "RPAREN",
    "LBRACE",
    "RBRACE",
    *tuple(reserved.values()),
)

t_ARROW = r"->"
t_COLON = r":"
t_DOT = r"\."
t_EQ = r"="
t_COMMA = r","
t_SEMI = r";"
t_SLASH = r"/"
t_LPAREN = r"\("
t_RPAREN = r"\)"
t_LBRACE = r"\{"
t_RBRACE = r"\}"

t_ignore = " \t\r"


def t_COMMENT(t: lex.LexToken) -> None:
    r"/\*(.|\n)*?\*/"
    t.lexer.lineno += t.value.count("\n")


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


def t_INT(t: lex.LexToken) -> lex.LexToken:
    r"\d+"
    t.end = t.lexpos + len(t.value)
    t.value = int(t.value)
    return t


def t_IDENT(t: lex.LexToken) -> lex.LexToken:
    r"[A-Za-z_][A-Za-z0-9_']*"
    t.type = reserved.get(t.value, "IDENT")
    t.end = t.lexpos + len(t.value)
    return t


def t_error(t: lex.LexToken) -> None:
    span = Span(t.lexpos, t.lexpos + 1)
    raise SurfaceError(f"Unexpected character {t.value[0]!r}", span, _SOURCE)


def _tok_span(tok: lex.LexToken) -> Span:
    end = getattr(tok, "end", tok.lexpos + len(str(tok.value)))
    return Span(tok.lexpos, end)


def _item_span(p: yacc.YaccProduction, index: int) -> Span:
    value = p[index]
    if isinstance(value, (SurfaceTerm, SField)):
        return value.span
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], Span):
        return value[1]
    tok = cast(lex.LexToken, p.slice[index])
    return _tok_span(tok)


def _span(p: yacc.YaccProduction, start: int, end: int) -> Span:
    return _item_span(p, start).join(_item_span(p, end))


# --- Programs -------------------------------------------------------------------


def p_program(p: yacc.YaccProduction) -> None:
    "program : statements"
    p[0] = tuple(p[1])


def p_statements_more(p: yacc.YaccProduction) -> None:
    "statements : statements statement SEMI"
    p[0] = p[1] + [p[2]]


def p_statements_empty(p: yacc.YaccProduction) -> None:
    "statements : empty"
    p[0] = []


def p_statement_eval(p: yacc.YaccProduction) -> None:
    "statement : term"
    p[0] = SEval(span=p[1].span, term=p[1])


def p_statement_var_bind(p: yacc.YaccProduction) -> None:
    "statement : IDENT COLON type"
    ty, _ = p[3]
    p[0] = SBind(span=_span(p, 1, 3), name=p[1], ty=ty)


def p_statement_name_bind(p: yacc.YaccProduction) -> None:
    "statement : IDENT SLASH"
    p[0] = SBind(span=_span(p, 1, 2), name=p[1])


# --- Terms ----------------------------------------------------------------------


def p_term_app(p: yacc.YaccProduction) -> None:
    "term : app"
    p[0] = p[1]


def p_term_if(p: yacc.YaccProduction) -> None:
    "term : IF term THEN term ELSE term"
    p[0] = SIf(span=_span(p, 1, 6), cond=p[2], then=p[4], else_=p[6])


def p_term_lambda(p: yacc.YaccProduction) -> None:
    "term : LAMBDA IDENT COLON type DOT term"
    ty, _ = p[4]
    p[0] = SLam(span=_span(p, 1, 6), name=p[2], ty=ty, body=p[6])


def p_app_chain(p: yacc.YaccProduction) -> None:
    "app : app path"
    p[0] = SApp(span=_span(p, 1, 2), fn=p[1], arg=p[2])


def p_app_succ(p: yacc.YaccProduction) -> None:
    "app : SUCC path"
    p[0] = SSucc(span=_span(p, 1, 2), arg=p[2])


def p_app_pred(p: yacc.YaccProduction) -> None:
    "app : PRED path"
    p[0] = SPred(span=_span(p, 1, 2), arg=p[2])


def p_app_iszero(p: yacc.YaccProduction) -> None:
    "app : ISZERO path"
    p[0] = SIsZero(span=_span(p, 1, 2), arg=p[2])


def p_app_path(p: yacc.YaccProduction) -> None:
    "app : path"
    p[0] = p[1]


def p_path_proj(p: yacc.YaccProduction) -> None:
    "path : path DOT IDENT"
    p[0] = SProj(span=_span(p, 1, 3), record=p[1], label=p[3])


def p_path_atom(p: yacc.YaccProduction) -> None:
    "path : atom"
    p[0] = p[1]


def p_atom_paren(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term RPAREN"
    p[0] = p[2]


def p_atom_true(p: yacc.YaccProduction) -> None:
    "atom : TRUE"
    p[0] = STrue(span=_span(p, 1, 1))


def p_atom_false(p: yacc.YaccProduction) -> None:
    "atom : FALSE"
    p[0] = SFalse(span=_span(p, 1, 1))


def p_atom_int(p: yacc.YaccProduction) -> None:
    "atom : INT"
    p[0] = SNum(span=_span(p, 1, 1), value=p[1])


def p_atom_ident(p: yacc.YaccProduction) -> None:
    "atom : IDENT"
    p[0] = SVar(span=_span(p, 1, 1), name=p[1])


def p_atom_record(p: yacc.YaccProduction) -> None:
    "atom : LBRACE fields RBRACE"
    p[0] = SRecord(span=_span(p, 1, 3), fields=tuple(p[2]))


def p_atom_record_empty(p: yacc.YaccProduction) -> None:
    "atom : LBRACE RBRACE"
    p[0] = SRecord(span=_span(p, 1, 2), fields=())


def p_fields_single(p: yacc.YaccProduction) -> None:
    "fields : field"
    p[0] = [p[1]]


def p_fields_more(p: yacc.YaccProduction) -> None:
    "fields : fields COMMA field"
    p[0] = p[1] + [p[3]]


def p_field(p: yacc.YaccProduction) -> None:
    "field : IDENT EQ term"
    p[0] = SField(label=p[1], term=p[3], span=_span(p, 1, 3))


# --- Types ----------------------------------------------------------------------
# Type productions yield ``(Type, Span)`` pairs; core types carry no spans.


def p_type_arrow(p: yacc.YaccProduction) -> None:
    "type : atype ARROW type"
    p[0] = (TyArr(p[1][0], p[3][0]), _span(p, 1, 3))


def p_type_atype(p: yacc.YaccProduction) -> None:
    "type : atype"
    p[0] = p[1]


def p_atype_paren(p: yacc.YaccProduction) -> None:
    "atype : LPAREN type RPAREN"
    p[0] = (p[2][0], _span(p, 1, 3))


def p_atype_bool(p: yacc.YaccProduction) -> None:
    "atype : BOOL"
    p[0] = (TyBool(), _span(p, 1, 1))


def p_atype_nat(p: yacc.YaccProduction) -> None:
    "atype : NAT"
    p[0] = (TyNat(), _span(p, 1, 1))


def p_atype_top(p: yacc.YaccProduction) -> None:
    "atype : TOP"
    p[0] = (TyTop(), _span(p, 1, 1))


def p_atype_record(p: yacc.YaccProduction) -> None:
    "atype : LBRACE field_types RBRACE"
    span = _span(p, 1, 3)
    labels = [label for label, _ in p[2]]
    if len(set(labels)) != len(labels):
        raise SurfaceError(f"Duplicate labels in record type: {labels}", span, _SOURCE)
    p[0] = (TyRecord(tuple(p[2])), span)


def p_atype_record_empty(p: yacc.YaccProduction) -> None:
    "atype : LBRACE RBRACE"
    p[0] = (TyRecord(), _span(p, 1, 2))


def p_field_types_single(p: yacc.YaccProduction) -> None:
    "field_types : field_type"
    p[0] = [p[1]]


def p_field_types_more(p: yacc.YaccProduction) -> None:
    "field_types : field_types COMMA field_type"
    p[0] = p[1] + [p[3]]


def p_field_type(p: yacc.YaccProduction) -> None:
    "field_type : IDENT COLON type"
    p[0] = (p[1], p[3][0])


def p_empty(p: yacc.YaccProduction) -> None:
    "empty :"
    p[0] = ()


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span(len(_SOURCE), len(_SOURCE))
        raise SurfaceError("Unexpected end of input", span, _SOURCE)
    span = _tok_span(cast(lex.LexToken, p))
    raise SurfaceError(f"Unexpected token {p.value!r}", span, _SOURCE)


class _GrammarLog:
    """ply build log routed to loguru.

    Grammar conflicts are reported as warnings. Unused tokens and unreachable
    rules are expected when building from a sub-start symbol, so everything
    else goes to debug.
    """

    def _format(self, msg: str, args: tuple[object, ...]) -> str:
        return msg % args if args else msg

    def warning(self, msg: str, *args: object) -> None:
        text = self._format(msg, args)
        if "conflict" in text:
            logger.warning("grammar: {}", text)
        else:
            logger.debug("grammar: {}", text)

    def error(self, msg: str, *args: object) -> None:
        logger.error("grammar: {}", self._format(msg, args))

    def debug(self, msg: str, *args: object) -> None:
        logger.debug("grammar: {}", self._format(msg, args))

    info = debug
    critical = error


_PARSERS: dict[str, Any] = {}


def _parse(source: str, start: str) -> Any:
    global _SOURCE
    _SOURCE = source
    lexer = lex.lex()
    if start not in _PARSERS:
        _PARSERS[start] = yacc.yacc(
            start=start, debug=False, write_tables=False, errorlog=_GrammarLog()
        )
    return _PARSERS[start].parse(source, lexer=lexer)


def parse_program(source: str) -> tuple[Statement, ...]:
    """Parse a sequence of ``;``-terminated statements."""
    return cast(tuple[Statement, ...], _parse(source, "program"))


def parse_term(source: str) -> SurfaceTerm:
    term = _parse(source, "term")
    if term is None:
        span = Span(len(source), len(source))
        raise SurfaceError("Unexpected end of input", span, source)
    return cast(SurfaceTerm, term)


def parse_type(source: str) -> Type:
    result = _parse(source, "type")
    if result is None:
        span = Span(len(source), len(source))
        raise SurfaceError("Unexpected end of input", span, source)
    return cast(Type, result[0])


__all__ = ["parse_program", "parse_term", "parse_type"]
