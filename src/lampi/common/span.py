"""Source positions attached to terms by the parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` into the parsed source."""

    start: int
    end: int

    @staticmethod
    def point(pos: int) -> Span:
        """Empty span at ``pos``, e.g. for errors at the end of the input."""
        return Span(pos, pos)

    def cover(self, other: Span) -> Span:
        """Smallest span containing both ``self`` and ``other``."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def extract(self, source: str) -> str:
        return source[self.start : self.end]

    def __str__(self) -> str:
        return f"{self.start}:{self.end}"
