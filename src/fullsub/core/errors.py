"""Error types raised by the type checker, the evaluator and the front end."""

from __future__ import annotations

from dataclasses import dataclass

from fullsub.common.span import Span


@dataclass
class FullsubError(Exception):
    message: str
    span: Span | None = None
    source: str | None = None

    def with_source(self, source: str) -> FullsubError:
        """Attach ``source`` so the rendered message carries a snippet."""
        self.source = source
        return self

    def location(self) -> tuple[int, int] | None:
        if self.span is None or self.source is None:
            return None
        return self.span.line_col(self.source)

    def __str__(self) -> str:
        if self.span is None:
            return self.message
        if self.source is None:
            return f"{self.message} @ {self.span.start}:{self.span.end}"
        snippet = self.span.extract(self.source)
        return f"{self.message} @ {self.span.start}:{self.span.end}: {snippet!r}"


class TypingError(FullsubError):
    """A term has no type under the current context."""


class UnboundVariableError(TypingError):
    """A variable index points past the context or at a ``NameBind``."""


class ConditionTypeError(TypingError):
    pass


class BranchMismatchError(TypingError):
    pass


class NotAFunctionError(TypingError):
    pass


class ParameterMismatchError(TypingError):
    pass


class NotARecordError(TypingError):
    pass


class ArgumentTypeError(TypingError):
    """A numeric operator was applied to a non-``Nat`` operand."""


class EvalError(FullsubError):
    """Evaluation reached a state with no sensible continuation."""


class MissingFieldError(TypingError, EvalError):
    """A projected label is absent.

    Raised both by the type checker (label missing from a record type) and by
    the evaluator (label missing from a record value).
    """


class StuckTermError(EvalError):
    pass


class NestingDepthError(FullsubError):
    """A term is nested too deeply for the recursive checker or evaluator."""


class SurfaceError(FullsubError):
    """Lexing, parsing or name resolution failed."""


__all__ = [
    "FullsubError",
    "TypingError",
    "UnboundVariableError",
    "ConditionTypeError",
    "BranchMismatchError",
    "NotAFunctionError",
    "ParameterMismatchError",
    "NotARecordError",
    "ArgumentTypeError",
    "MissingFieldError",
    "EvalError",
    "StuckTermError",
    "NestingDepthError",
    "SurfaceError",
]
