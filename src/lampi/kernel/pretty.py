"""Pretty-printing utilities for terms."""

from __future__ import annotations

from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.subst import occurs_free

ATOM_PREC = 3
APP_PREC = 2
PI_PREC = 1
LAM_PREC = 0


def _maybe_paren(
    text: str, child_prec: int, parent_prec: int, *, allow_equal: bool
) -> str:
    if child_prec < parent_prec or (child_prec == parent_prec and not allow_equal):
        return f"({text})"
    return text


def _fmt(t: Term) -> tuple[str, int]:
    match t:
        case Var(name):
            return name, ATOM_PREC

        case Univ():
            return "Type", ATOM_PREC

        case App(f, a):
            func_text, func_prec = _fmt(f)
            arg_text, arg_prec = _fmt(a)
            func_disp = _maybe_paren(func_text, func_prec, APP_PREC, allow_equal=True)
            arg_disp = _maybe_paren(arg_text, arg_prec, APP_PREC, allow_equal=False)
            return f"{func_disp} {arg_disp}", APP_PREC

        case Lam(name, arg_ty, body):
            arg_text, arg_prec = _fmt(arg_ty)
            body_text, _ = _fmt(body)
            arg_disp = _maybe_paren(arg_text, arg_prec, PI_PREC, allow_equal=True)
            return f"\\{name} : {arg_disp}. {body_text}", LAM_PREC

        case Pi(name, arg_ty, return_ty):
            arg_text, arg_prec = _fmt(arg_ty)
            body_text, body_prec = _fmt(return_ty)
            body_disp = _maybe_paren(body_text, body_prec, PI_PREC, allow_equal=True)
            if not occurs_free(name, return_ty):
                arg_disp = _maybe_paren(
                    arg_text, arg_prec, PI_PREC, allow_equal=False
                )
                return f"{arg_disp} -> {body_disp}", PI_PREC
            return f"({name} : {arg_text}) -> {body_disp}", PI_PREC

    raise TypeError(f"Unexpected term in pretty: {t!r}")


def pretty(term: Term) -> str:
    """Return ``term`` rendered in the surface syntax."""

    return _fmt(term)[0]


def _label(t: Term) -> str:
    match t:
        case Var(name):
            return f"Var ({name})"
        case Univ():
            return "Univ"
        case Pi(name, _, _):
            return f"Pi ({name})"
        case Lam(name, _, _):
            return f"Lam ({name})"
        case App():
            return "App"
    raise TypeError(f"Unexpected term in ascii_tree: {t!r}")


def _children(t: Term) -> tuple[Term, ...]:
    match t:
        case Pi(_, arg_ty, return_ty):
            return arg_ty, return_ty
        case Lam(_, arg_ty, body):
            return arg_ty, body
        case App(f, a):
            return f, a
        case _:
            return ()


def ascii_tree(term: Term) -> str:
    """Render the node structure of ``term`` as an indented tree, for debugging."""

    lines: list[str] = []

    def walk(t: Term, indent: str, is_last: bool) -> None:
        lines.append(f"{indent}{'└── ' if is_last else '├── '}{_label(t)}")
        child_indent = indent + ("    " if is_last else "│   ")
        children = _children(t)
        for i, child in enumerate(children):
            walk(child, child_indent, i == len(children) - 1)

    walk(term, "", True)
    return "\n".join(lines)


__all__ = ["pretty", "ascii_tree"]
