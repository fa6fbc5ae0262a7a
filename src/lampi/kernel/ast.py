"""Abstract syntax tree nodes for the dependently-typed lambda calculus."""

from __future__ import annotations

from dataclasses import dataclass, field

from lampi.common.span import Span


@dataclass(frozen=True)
class Term:
    """Base class for all terms.

    Terms are immutable values. Every node may carry the source ``span`` it was
    parsed from; spans never take part in equality or pattern matching.
    """

    span: Span | None = field(
        default=None, kw_only=True, compare=False, repr=False
    )

    def __str__(self) -> str:
        # Deferred import avoids cycles when pretty-printing dataclass reprs.
        from lampi.kernel.pretty import pretty

        return pretty(self)


@dataclass(frozen=True)
class Var(Term):
    """Reference to a bound (or free) identifier."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable names must be non-empty")


@dataclass(frozen=True)
class Univ(Term):
    """The single universe ``Type``. ``Type : Type``."""


@dataclass(frozen=True)
class Pi(Term):
    """Dependent function type ``(name : arg_ty) -> return_ty``.

    Args:
        name: Binder name, in scope in ``return_ty`` only.
        arg_ty: Domain type.
        return_ty: Codomain type that may mention ``name``.
    """

    name: str
    arg_ty: Term
    return_ty: Term


@dataclass(frozen=True)
class Lam(Term):
    """Lambda abstraction ``\\name : arg_ty. body`` with a mandatory annotation.

    Args:
        name: Binder name, in scope in ``body`` only.
        arg_ty: Type of the bound argument.
        body: Term evaluated with the bound argument in scope.
    """

    name: str
    arg_ty: Term
    body: Term


@dataclass(frozen=True)
class App(Term):
    """Function application.

    Args:
        func: Term expected to reduce to a function.
        arg: Argument term supplied to ``func``.
    """

    func: Term
    arg: Term


__all__ = ["Term", "Var", "Univ", "Pi", "Lam", "App"]
