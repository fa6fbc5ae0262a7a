"""Bidirectional type inference and checking."""

from __future__ import annotations

import logging

from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.config import Config
from lampi.kernel.context import Ctx
from lampi.kernel.equality import definitionally_equal
from lampi.kernel.errors import NotAFunctionType, TypeMismatch, UnboundVariable
from lampi.kernel.reduce import Fuel, normalize, whnf
from lampi.kernel.subst import free_vars, fresh_name, rename, substitute

logger = logging.getLogger(__name__)


def _open_binder(ctx: Ctx, name: str, scope: Term) -> tuple[str, Term]:
    """Choose a binder name that does not shadow anything already in ``ctx``.

    Types stored in ``ctx`` refer to earlier binders by name; pushing a second
    binding of the same name would silently re-bind those references.
    """
    if not ctx.binds(name):
        return name, scope
    fresh = fresh_name(name, set(ctx.names()) | free_vars(scope))
    return fresh, rename(scope, name, fresh)


def infer(ctx: Ctx, term: Term, fuel: Fuel | None = None) -> Term:
    """Infer the type of ``term`` under ``ctx``."""

    fuel = Fuel() if fuel is None else fuel
    match term:
        case Var(name):
            ty = ctx.lookup(name)
            if ty is None:
                logger.debug("unbound variable %s in %s", name, ctx)
                raise UnboundVariable(term, name)
            return ty
        case Univ():
            return Univ()
        case Pi(name, arg_ty, return_ty):
            check(ctx, arg_ty, Univ(), fuel)
            name, return_ty = _open_binder(ctx, name, return_ty)
            check(ctx.extend(name, arg_ty), return_ty, Univ(), fuel)
            return Univ()
        case Lam(name, arg_ty, body):
            check(ctx, arg_ty, Univ(), fuel)
            name, body = _open_binder(ctx, name, body)
            body_ty = infer(ctx.extend(name, arg_ty), body, fuel)
            return Pi(name, arg_ty, body_ty)
        case App(func, arg):
            func_ty = whnf(infer(ctx, func, fuel), fuel)
            if not isinstance(func_ty, Pi):
                logger.debug("application of non-function %s : %s", func, func_ty)
                raise NotAFunctionType(func, func_ty)
            check(ctx, arg, func_ty.arg_ty, fuel)
            # The codomain is specialised to the argument actually supplied.
            return substitute(func_ty.return_ty, func_ty.name, arg)

    raise TypeError(f"Unexpected term in infer:\n  term = {term!r}")


def check(ctx: Ctx, term: Term, expected: Term, fuel: Fuel | None = None) -> None:
    """Check that ``term`` has type ``expected`` under ``ctx``, raising on mismatch."""

    fuel = Fuel() if fuel is None else fuel
    inferred = infer(ctx, term, fuel)
    if not definitionally_equal(inferred, expected, fuel):
        logger.debug("mismatch for %s: expected %s, got %s", term, expected, inferred)
        raise TypeMismatch(term, expected, inferred)


def typecheck(
    term: Term, ctx: Ctx | None = None, config: Config | None = None
) -> Term:
    """Infer the type of a closed ``term`` (or one open over ``ctx``)."""

    config = config or Config()
    logger.debug("typecheck %s (max_steps=%s)", term, config.max_steps)
    return infer(ctx or Ctx(), term, config.fuel())


def evaluate(term: Term, config: Config | None = None) -> Term:
    """Return the normal form of ``term``."""

    config = config or Config()
    logger.debug("evaluate %s (max_steps=%s)", term, config.max_steps)
    return normalize(term, config.fuel())


__all__ = ["infer", "check", "typecheck", "evaluate"]
