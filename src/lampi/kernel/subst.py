"""Free variables, fresh names and capture-avoiding substitution."""

from __future__ import annotations

from collections.abc import Callable, Collection
from dataclasses import replace

from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var

_DIGITS = "0123456789"


def free_vars(term: Term) -> frozenset[str]:
    """Return the names occurring free in ``term``."""

    found: set[str] = set()
    stack: list[tuple[Term, frozenset[str]]] = [(term, frozenset())]
    while stack:
        t, bound = stack.pop()
        match t:
            case Var(name):
                if name not in bound:
                    found.add(name)
            case Univ():
                pass
            case Pi(name, arg_ty, body) | Lam(name, arg_ty, body):
                stack.append((arg_ty, bound))
                stack.append((body, bound | {name}))
            case App(f, a):
                stack.append((f, bound))
                stack.append((a, bound))
            case _:
                raise TypeError(f"Unexpected term in free_vars: {t!r}")
    return frozenset(found)


def occurs_free(name: str, term: Term) -> bool:
    """Return ``True`` if ``Var(name)`` appears free in ``term``."""

    stack = [term]
    while stack:
        match stack.pop():
            case Var(x):
                if x == name:
                    return True
            case Univ():
                pass
            case Pi(x, arg_ty, body) | Lam(x, arg_ty, body):
                stack.append(arg_ty)
                if x != name:
                    stack.append(body)
            case App(f, a):
                stack.append(f)
                stack.append(a)
            case t:
                raise TypeError(f"Unexpected term in occurs_free: {t!r}")
    return False


def map_app_tree(
    term: Term,
    leaf: Callable[[Term], Term],
    prepare: Callable[[Term], Term] | None = None,
) -> Term:
    """Rebuild the tree of applications rooted at ``term`` bottom-up.

    Every subterm that is not an ``App`` is replaced by ``leaf(subterm)``.
    ``prepare`` is applied to the root and to each argument before it is
    inspected; function positions below a prepared node are taken as they are.
    Applications nested in either position are walked with an explicit stack,
    so spines and argument chains such as ``s (s (... z))`` do not grow the
    Python call depth. Nodes whose children are unchanged are reused.
    """

    results: list[Term] = []
    # (term, prepare it first, children already rebuilt)
    stack: list[tuple[Term, bool, bool]] = [(term, prepare is not None, False)]
    while stack:
        t, prep, built = stack.pop()
        if built:
            app = t
            assert isinstance(app, App)
            a1 = results.pop()
            f1 = results.pop()
            if f1 is app.func and a1 is app.arg:
                results.append(app)
            else:
                results.append(replace(app, func=f1, arg=a1))
            continue
        if prep and prepare is not None:
            t = prepare(t)
        if isinstance(t, App):
            stack.append((t, False, True))
            stack.append((t.arg, prepare is not None, False))
            stack.append((t.func, False, False))
        else:
            results.append(leaf(t))
    return results[0]


def fresh_name(base: str, avoid: Collection[str]) -> str:
    """Return ``base`` or the first ``base<n>`` not present in ``avoid``.

    Trailing digits are stripped from ``base`` before numbering, so renaming
    ``x0`` yields ``x1`` rather than ``x00``.
    """

    if base not in avoid:
        return base
    stem = base.rstrip(_DIGITS) or "x"
    suffix = 0
    while f"{stem}{suffix}" in avoid:
        suffix += 1
    return f"{stem}{suffix}"


def _subst_binder(
    binder: str, body: Term, name: str, sub: Term, sub_fvs: frozenset[str]
) -> tuple[str, Term]:
    if binder == name:
        # ``name`` is shadowed; nothing free to replace below this binder.
        return binder, body
    if binder in sub_fvs and occurs_free(name, body):
        fresh = fresh_name(binder, sub_fvs | free_vars(body) | {name})
        body = _subst(body, binder, Var(fresh), frozenset((fresh,)))
        binder = fresh
    return binder, _subst(body, name, sub, sub_fvs)


def _subst(term: Term, name: str, sub: Term, sub_fvs: frozenset[str]) -> Term:
    match term:
        case Var(x):
            if x != name:
                return term
            if isinstance(sub, Var) and sub.span is None:
                return replace(sub, span=term.span)
            return sub
        case Univ():
            return term
        case App():
            return map_app_tree(term, lambda t: _subst(t, name, sub, sub_fvs))
        case Pi(x, arg_ty, return_ty):
            arg_ty1 = _subst(arg_ty, name, sub, sub_fvs)
            x1, return_ty1 = _subst_binder(x, return_ty, name, sub, sub_fvs)
            if arg_ty1 is arg_ty and return_ty1 is return_ty:
                return term
            return replace(term, name=x1, arg_ty=arg_ty1, return_ty=return_ty1)
        case Lam(x, arg_ty, body):
            arg_ty1 = _subst(arg_ty, name, sub, sub_fvs)
            x1, body1 = _subst_binder(x, body, name, sub, sub_fvs)
            if arg_ty1 is arg_ty and body1 is body:
                return term
            return replace(term, name=x1, arg_ty=arg_ty1, body=body1)

    raise TypeError(f"Unexpected term in substitute: {term!r}")


def substitute(target: Term, name: str, replacement: Term) -> Term:
    """Replace every free ``Var(name)`` in ``target`` with ``replacement``.

    Binders in ``target`` that would capture a free variable of ``replacement``
    are renamed to fresh names first. Untouched subtrees are shared with
    ``target``; rebuilt nodes keep the span of the node they replace.
    """

    return _subst(target, name, replacement, free_vars(replacement))


def rename(term: Term, old: str, new: str) -> Term:
    """Rename free occurrences of ``old`` in ``term`` to ``new``."""

    return substitute(term, old, Var(new))


__all__ = [
    "free_vars",
    "occurs_free",
    "fresh_name",
    "map_app_tree",
    "substitute",
    "rename",
]
