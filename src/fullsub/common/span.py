"""Source span type shared across layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def extract(self, source: str) -> str:
        return source[self.start : self.end]

    def line_col(self, source: str) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of ``start`` in ``source``."""
        line = source.count("\n", 0, self.start) + 1
        col = self.start - (source.rfind("\n", 0, self.start) + 1) + 1
        return line, col

    def join(self, other: Span) -> Span:
        return Span(min(self.start, other.start), max(self.end, other.end))
