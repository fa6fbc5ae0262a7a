"""Alpha-equivalence and definitional equality of terms."""

from __future__ import annotations

from lampi.kernel.ast import App, Lam, Pi, Term, Univ, Var
from lampi.kernel.reduce import Fuel, normalize

# Pending comparison: both terms, the binder levels in scope on each side and
# the current binder depth.
_Pair = tuple[Term, Term, dict[str, int], dict[str, int], int]


def _alpha_equal(a: Term, b: Term) -> bool:
    stack: list[_Pair] = [(a, b, {}, {}, 0)]
    while stack:
        a, b, left, right, depth = stack.pop()
        match a, b:
            case Var(x), Var(y):
                lx = left.get(x)
                ly = right.get(y)
                if lx is None and ly is None:
                    if x != y:
                        return False
                elif lx != ly:
                    return False
            case Univ(), Univ():
                pass
            case App(f1, a1), App(f2, a2):
                stack.append((a1, a2, left, right, depth))
                stack.append((f1, f2, left, right, depth))
            case (Pi(x1, ty1, body1), Pi(x2, ty2, body2)) | (
                Lam(x1, ty1, body1),
                Lam(x2, ty2, body2),
            ):
                stack.append(
                    (body1, body2, {**left, x1: depth}, {**right, x2: depth}, depth + 1)
                )
                stack.append((ty1, ty2, left, right, depth))
            case _:
                return False
    return True


def alpha_equal(a: Term, b: Term) -> bool:
    """Return ``True`` when ``a`` and ``b`` differ only in bound-variable names."""

    if a is b:
        return True
    return _alpha_equal(a, b)


def definitionally_equal(a: Term, b: Term, fuel: Fuel | None = None) -> bool:
    """Return ``True`` when ``a`` and ``b`` normalize to alpha-equivalent terms."""

    if alpha_equal(a, b):
        return True
    fuel = Fuel() if fuel is None else fuel
    return alpha_equal(normalize(a, fuel), normalize(b, fuel))


__all__ = ["alpha_equal", "definitionally_equal"]
