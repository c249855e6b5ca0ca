"""Binding context for de Bruijn-indexed terms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, overload

from .types import Type


@dataclass(frozen=True)
class NameBind:
    """A name with no type attached (free variables, ``x/;`` declarations)."""


@dataclass(frozen=True)
class VarBind:
    """A variable whose type is known."""

    ty: Type


Binding = NameBind | VarBind


@dataclass(frozen=True)
class ContextEntry:
    name: str
    binding: Binding = NameBind()


@dataclass(frozen=True)
class Context(Sequence[ContextEntry]):
    """
    Ordered binding context.

    Representation:
        Index 0 refers to the innermost (most recently introduced) binder,
        index 1 to the next outer binder, and so on. ``Var(k)`` resolves to
        ``ctx[k]``.

    Extension discipline:
        ``push`` returns a new context with the binder at index 0; every
        existing index moves up by one. The receiver is never modified, so a
        scope ends simply by dropping the extended context, on normal return
        and on exceptions alike.

    Free names:
        ``add_free`` appends a ``NameBind`` at the outermost end, leaving every
        existing index unchanged. Free variables stay registered for the rest
        of a program.
    """

    entries: tuple[ContextEntry, ...] = ()

    @staticmethod
    def of(*entries: ContextEntry | tuple[str, Binding]) -> Context:
        """Build a context from entries ordered innermost first."""
        return Context(
            tuple(e if isinstance(e, ContextEntry) else ContextEntry(*e) for e in entries)
        )

    def __len__(self) -> int:
        return len(self.entries)

    @overload
    def __getitem__(self, i: int, /) -> ContextEntry: ...
    @overload
    def __getitem__(self, s: slice, /) -> Sequence[ContextEntry]: ...
    def __getitem__(self, idx: int | slice) -> ContextEntry | Sequence[ContextEntry]:
        return self.entries[idx]

    # ---- extending the context ----
    def push(self, name: str, binding: Binding = NameBind()) -> Context:
        return Context((ContextEntry(name, binding), *self.entries))

    def push_var(self, name: str, ty: Type) -> Context:
        return self.push(name, VarBind(ty))

    def pop(self) -> Context:
        """Drop the innermost binder."""
        if not self.entries:
            raise IndexError("pop from empty context")
        return Context(self.entries[1:])

    def add_free(self, name: str) -> Context:
        return Context((*self.entries, ContextEntry(name, NameBind())))

    # ---- lookups ----
    def name_of(self, k: int) -> str:
        if 0 <= k < len(self.entries):
            return self.entries[k].name
        return f"#{k}"

    def binding_of(self, k: int) -> Binding | None:
        if 0 <= k < len(self.entries):
            return self.entries[k].binding
        return None

    def index_of(self, name: str) -> int | None:
        for i, entry in enumerate(self.entries):
            if entry.name == name:
                return i
        return None

    def is_name_bound(self, name: str) -> bool:
        return self.index_of(name) is not None

    def pick_fresh_name(self, name: str) -> tuple[Context, str]:
        """Push a ``NameBind`` for ``name``, priming it until it is unused."""
        while self.is_name_bound(name):
            name = f"{name}'"
        return self.push(name), name

    def __str__(self) -> str:
        if len(self.entries) < 2:
            return f"Context{tuple(e.name for e in self.entries)}"
        lines = []
        for i, e in enumerate(self.entries):
            ty = f" : {e.binding.ty}" if isinstance(e.binding, VarBind) else ""
            lines.append(f"  #{i}: {e.name}{ty}\n")
        return f"Context(\n{''.join(lines)})"


__all__ = ["Binding", "Context", "ContextEntry", "NameBind", "VarBind"]
