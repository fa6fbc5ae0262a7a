"""Beta reduction: weak head normal form, full normalization and single steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.errors import NonTermination
from lampi.kernel.subst import map_app_tree, substitute

logger = logging.getLogger(__name__)


@dataclass
class Fuel:
    """Beta-contraction budget shared by one top-level reduction or check.

    Args:
        limit: Maximum number of contractions, or ``None`` for no bound.
    """

    limit: int | None = None
    used: int = 0

    def spend(self, redex: Term) -> None:
        self.used += 1
        if self.limit is not None and self.used > self.limit:
            logger.debug("step budget of %d exhausted at %s", self.limit, redex)
            raise NonTermination(redex, self.limit)


def whnf(term: Term, fuel: Fuel | None = None) -> Term:
    """Compute the weak head normal form of ``term`` without normalizing subterms.

    The application spine is unwound onto an explicit stack, so the Python call
    depth does not grow with the number of head reductions.
    """

    fuel = Fuel() if fuel is None else fuel
    spine: list[App] = []
    head = term
    while True:
        while isinstance(head, App):
            spine.append(head)
            head = head.func
        if isinstance(head, Lam) and spine:
            redex = spine.pop()
            fuel.spend(redex)
            head = substitute(head.body, head.name, redex.arg)
            continue
        break

    # Stuck: the head is a variable, a type former, or a lambda with no
    # pending argument. Rebuild the remaining applications around it.
    result = head
    while spine:
        node = spine.pop()
        result = node if node.func is result else replace(node, func=result)
    return result


def _normalize(term: Term, fuel: Fuel) -> Term:
    # Stuck applications are rebuilt by the work-list in ``map_app_tree``; each
    # argument is put in whnf before it is taken apart.
    return map_app_tree(
        term, lambda t: _normalize_head(t, fuel), lambda t: whnf(t, fuel)
    )


def _normalize_head(term: Term, fuel: Fuel) -> Term:
    match term:
        case Var() | Univ():
            return term
        case Lam(_, arg_ty, body):
            arg_ty1 = _normalize(arg_ty, fuel)
            body1 = _normalize(body, fuel)
            if arg_ty1 is arg_ty and body1 is body:
                return term
            return replace(term, arg_ty=arg_ty1, body=body1)
        case Pi(_, arg_ty, return_ty):
            arg_ty1 = _normalize(arg_ty, fuel)
            return_ty1 = _normalize(return_ty, fuel)
            if arg_ty1 is arg_ty and return_ty1 is return_ty:
                return term
            return replace(term, arg_ty=arg_ty1, return_ty=return_ty1)

    raise TypeError(f"Unexpected term in normalize: {term!r}")


def normalize(term: Term, fuel: Fuel | None = None) -> Term:
    """Normalize ``term`` so that no redex remains anywhere, even under binders."""

    return _normalize(term, Fuel() if fuel is None else fuel)


def beta_step(term: Term) -> Term:
    """One leftmost-outermost beta-reduction step anywhere in the term.

    Returns ``term`` itself when it contains no redex.
    """

    match term:
        case App(Lam(x, _, body), arg):
            return substitute(body, x, arg)
        case App(f, a):
            f1 = beta_step(f)
            if f1 is not f:
                return replace(term, func=f1)
            a1 = beta_step(a)
            if a1 is not a:
                return replace(term, arg=a1)
            return term
        case Lam(_, arg_ty, body):
            arg_ty1 = beta_step(arg_ty)
            if arg_ty1 is not arg_ty:
                return replace(term, arg_ty=arg_ty1)
            body1 = beta_step(body)
            if body1 is not body:
                return replace(term, body=body1)
            return term
        case Pi(_, arg_ty, return_ty):
            arg_ty1 = beta_step(arg_ty)
            if arg_ty1 is not arg_ty:
                return replace(term, arg_ty=arg_ty1)
            return_ty1 = beta_step(return_ty)
            if return_ty1 is not return_ty:
                return replace(term, return_ty=return_ty1)
            return term
        case Var() | Univ():
            return term

    raise TypeError(f"Unexpected term in beta_step: {term!r}")


__all__ = ["Fuel", "whnf", "normalize", "beta_step"]
