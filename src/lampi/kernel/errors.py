"""Type checking error kinds.

Every error carries the subterm that triggered it so that a front end can map it
back to a source position through ``term.span``.
"""

from __future__ import annotations

from dataclasses import dataclass

from lampi.kernel.ast import Term


@dataclass
class TypeCheckError(TypeError):
    term: Term

    def __str__(self) -> str:
        return f"Type error:\n  term = {self.term}"


@dataclass
class UnboundVariable(TypeCheckError):
    name: str

    def __str__(self) -> str:
        return f"Unbound variable {self.name}"


@dataclass
class NotAFunctionType(TypeCheckError):
    """The function position of an application does not have a Pi type."""

    inferred: Term

    def __str__(self) -> str:
        return (
            "Application of non-function:\n"
            f"  function = {self.term}\n"
            f"  inferred = {self.inferred}"
        )


@dataclass
class TypeMismatch(TypeCheckError):
    expected: Term
    inferred: Term

    def __str__(self) -> str:
        return (
            f"{type(self.term).__name__} type mismatch:\n"
            f"  term = {self.term}\n"
            f"  expected = {self.expected}\n"
            f"  inferred = {self.inferred}"
        )


@dataclass
class NonTermination(TypeCheckError):
    """Reduction exceeded the configured step budget."""

    limit: int

    def __str__(self) -> str:
        return (
            f"Reduction did not terminate within {self.limit} steps:\n"
            f"  redex = {self.term}"
        )


__all__ = [
    "TypeCheckError",
    "UnboundVariable",
    "NotAFunctionType",
    "TypeMismatch",
    "NonTermination",
]
