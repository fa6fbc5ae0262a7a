"""Parser for the surface language.

Grammar::

    term : \\x : T. term        (also λx : T. term)
         | (x : A) -> term
         | app -> term
         | app
    app  : app atom | atom
    atom : IDENT | Type | ( term )

Every kernel term produced carries the span of the text it was parsed from.
"""

from __future__ import annotations

from typing import cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]

from lampi.common.span import Span
from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.telescope import arrow_binder
from lampi.surface.errors import SurfaceError

_SOURCE: str = ""

reserved = {
    "Type": "TYPE",
}

tokens = (
    "IDENT",
    "LAMBDA",
    "ARROW",
    "COLON",
    "DOT",
    "LPAREN",
    "RPAREN",
    *tuple(reserved.values()),
)

t_LAMBDA = r"\\|λ"
t_ARROW = r"->|→"
t_COLON = r":"
t_DOT = r"\."
t_LPAREN = r"\("
t_RPAREN = r"\)"

t_ignore = " \t\r"
t_ignore_COMMENT = r"--[^\n]*"


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


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
    if isinstance(value, Term) and value.span is not None:
        return value.span
    tok = cast(lex.LexToken, p.slice[index])
    return _tok_span(tok)


def _span(p: yacc.YaccProduction, start: int, end: int) -> Span:
    return _item_span(p, start).cover(_item_span(p, end))


def p_term_lam(p: yacc.YaccProduction) -> None:
    "term : LAMBDA IDENT COLON term DOT term"
    p[0] = Lam(p[2], p[4], p[6], span=_span(p, 1, 6))


def p_term_pi(p: yacc.YaccProduction) -> None:
    "term : pi"
    p[0] = p[1]


def p_pi_dependent(p: yacc.YaccProduction) -> None:
    "pi : LPAREN IDENT COLON term RPAREN ARROW term"
    p[0] = Pi(p[2], p[4], p[7], span=_span(p, 1, 7))


def p_pi_arrow(p: yacc.YaccProduction) -> None:
    "pi : app ARROW term"
    p[0] = Pi(arrow_binder(p[3]), p[1], p[3], span=_span(p, 1, 3))


def p_pi_app(p: yacc.YaccProduction) -> None:
    "pi : app"
    p[0] = p[1]


def p_app_chain(p: yacc.YaccProduction) -> None:
    "app : app atom"
    p[0] = App(p[1], p[2], span=_span(p, 1, 2))


def p_app_atom(p: yacc.YaccProduction) -> None:
    "app : atom"
    p[0] = p[1]


def p_atom_ident(p: yacc.YaccProduction) -> None:
    "atom : IDENT"
    p[0] = Var(p[1], span=_span(p, 1, 1))


def p_atom_univ(p: yacc.YaccProduction) -> None:
    "atom : TYPE"
    p[0] = Univ(span=_span(p, 1, 1))


def p_atom_paren(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term RPAREN"
    p[0] = p[2]


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span.point(len(_SOURCE))
        raise SurfaceError("Unexpected end of input", span, _SOURCE)
    span = _tok_span(cast(lex.LexToken, p))
    raise SurfaceError("Unexpected token", span, _SOURCE)


_PARSER = None


def parse_term(source: str) -> Term:
    """Parse ``source`` into a kernel term annotated with spans."""

    global _SOURCE, _PARSER
    _SOURCE = source
    lexer = lex.lex()
    if _PARSER is None:
        _PARSER = yacc.yacc(start="term", debug=False, write_tables=False)
    term = cast(Term | None, _PARSER.parse(source, lexer=lexer))
    if term is None:
        span = Span.point(len(source))
        raise SurfaceError("Unexpected end of input", span, source)
    return term


__all__ = ["parse_term"]
