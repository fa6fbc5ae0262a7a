"""Builders for nested applications, lambdas and Pi types."""

from __future__ import annotations

from lampi.kernel.ast import App, Lam, Pi, Term
from lampi.kernel.subst import free_vars, fresh_name

ARROW_BINDER = "_"


def mk_app(fn: Term, *args: Term) -> Term:
    """Apply ``args`` to ``fn`` left-associatively.

    Returns:
        The left-associated application ``(((fn arg0) arg1) ...)``.
    """
    result = fn
    for arg in args:
        result = App(result, arg)
    return result


def mk_lams(*binders: tuple[str, Term], body: Term) -> Term:
    """Wrap ``body`` in lambdas; ``binders`` are ordered outermost -> innermost."""
    result = body
    for name, ty in reversed(binders):
        result = Lam(name, ty, result)
    return result


def mk_pis(*binders: tuple[str, Term], return_ty: Term) -> Term:
    """Wrap ``return_ty`` in Pi types; ``binders`` are ordered outermost -> innermost."""
    result = return_ty
    for name, ty in reversed(binders):
        result = Pi(name, ty, result)
    return result


def arrow_binder(codomain: Term) -> str:
    """Binder name for a non-dependent arrow into ``codomain``.

    Usually ``_``; renamed when ``codomain`` mentions a free ``_`` so that the
    arrow does not capture it.
    """
    return fresh_name(ARROW_BINDER, free_vars(codomain))


def arrow(*tys: Term) -> Term:
    """Non-dependent function type ``tys[0] -> tys[1] -> ... -> tys[-1]``."""
    if not tys:
        raise ValueError("arrow needs at least one type")
    result = tys[-1]
    for ty in reversed(tys[:-1]):
        result = Pi(arrow_binder(result), ty, result)
    return result


__all__ = ["ARROW_BINDER", "mk_app", "mk_lams", "mk_pis", "arrow_binder", "arrow"]
