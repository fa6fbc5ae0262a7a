"""Surface error type and located rendering of kernel errors."""

from __future__ import annotations

from dataclasses import dataclass

from lampi.common.span import Span
from lampi.kernel.errors import TypeCheckError


@dataclass
class SurfaceError(Exception):
    message: str
    span: Span
    source: str | None = None

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.message} @ {self.span}"
        snippet = self.span.extract(self.source)
        return f"{self.message} @ {self.span}: {snippet!r}"


def format_error(error: TypeCheckError, source: str) -> str:
    """Render a kernel error with the source text of the offending subterm."""

    span = error.term.span
    if span is None:
        return str(error)
    snippet = span.extract(source)
    return f"{error}\n  @ {span}: {snippet!r}"


__all__ = ["SurfaceError", "format_error"]
