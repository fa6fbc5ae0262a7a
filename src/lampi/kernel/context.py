"""Typing context mapping bound names to their types."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import overload

from lampi.kernel.ast import Term


@dataclass(frozen=True)
class CtxEntry:
    """Single context entry: a bound name and its type."""

    name: str
    ty: Term


@dataclass(frozen=True)
class Ctx(Sequence[CtxEntry]):
    """
    Immutable typing context.

    Representation:
        Entries are stored newest first: index 0 is the most recently
        introduced binder. Extending never rewrites existing entries; the new
        context shares the old tuple's entries.

    Lookup:
        ``lookup(name)`` returns the type of the most recent binding of
        ``name``, so a later binder shadows an earlier one of the same name.
    """

    entries: tuple[CtxEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    @overload
    def __getitem__(self, i: int, /) -> CtxEntry: ...
    @overload
    def __getitem__(self, s: slice, /) -> Sequence[CtxEntry]: ...
    def __getitem__(self, idx: int | slice) -> CtxEntry | Sequence[CtxEntry]:
        return self.entries[idx]

    def extend(self, name: str, ty: Term) -> Ctx:
        """Return a new context with ``name : ty`` as the innermost binding."""
        return Ctx((CtxEntry(name, ty),) + self.entries)

    def lookup(self, name: str) -> Term | None:
        """Return the type bound to ``name``, or ``None`` when unbound."""
        for entry in self.entries:
            if entry.name == name:
                return entry.ty
        return None

    def binds(self, name: str) -> bool:
        return any(entry.name == name for entry in self.entries)

    def names(self) -> tuple[str, ...]:
        """Names ordered newest first."""
        return tuple(entry.name for entry in self.entries)

    @staticmethod
    def of(*bindings: tuple[str, Term]) -> Ctx:
        """Build a context from ``(name, type)`` pairs ordered outermost first.

        Example:
            Ctx.of(("A", Univ()), ("x", Var("A"))) binds ``A`` then ``x``.
        """
        ctx = Ctx()
        for name, ty in bindings:
            ctx = ctx.extend(name, ty)
        return ctx

    def __str__(self) -> str:
        if len(self.entries) < 2:
            return f"Ctx({', '.join(f'{e.name} : {e.ty}' for e in self.entries)})"
        body = "".join([f"  {e.name} : {e.ty}\n" for e in reversed(self.entries)])
        return f"Ctx(\n{body})"


def extend(ctx: Ctx, name: str, ty: Term) -> Ctx:
    return ctx.extend(name, ty)


def lookup(ctx: Ctx, name: str) -> Term | None:
    return ctx.lookup(name)


__all__ = ["CtxEntry", "Ctx", "extend", "lookup"]
