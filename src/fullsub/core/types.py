"""Types of the simply typed calculus with records, ``Top`` and subtyping."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Iterable


def sorted_fields(fields: object, kind: str) -> tuple[tuple[str, object], ...]:
    """Return ``fields`` as a label-sorted tuple of pairs, rejecting duplicates."""
    items: Iterable[tuple[str, object]]
    if isinstance(fields, Mapping):
        items = fields.items()
    else:
        items = fields  # type: ignore[assignment]
    pairs = tuple(items)
    labels = [label for label, _ in pairs]
    if len(set(labels)) != len(labels):
        raise ValueError(f"Duplicate labels in {kind}: {labels}")
    return tuple(sorted(pairs, key=lambda pair: pair[0]))


@dataclass(frozen=True)
class Type:
    """Base class for all types."""

    def __str__(self) -> str:
        from .pretty import pretty_type

        return pretty_type(self)


@dataclass(frozen=True)
class TyBool(Type):
    pass


@dataclass(frozen=True)
class TyNat(Type):
    pass


@dataclass(frozen=True)
class TyTop(Type):
    """The universal supertype."""


@dataclass(frozen=True)
class TyArr(Type):
    dom: Type
    rng: Type


@dataclass(frozen=True)
class TyRecord(Type):
    """Record type.

    Fields are kept sorted by label so that structural equality does not
    depend on the order the labels were written in.
    """

    fields: tuple[tuple[str, Type], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", sorted_fields(self.fields, "record type"))

    def get(self, label: str) -> Type | None:
        for name, ty in self.fields:
            if name == label:
                return ty
        return None

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(label for label, _ in self.fields)

    def __iter__(self) -> Iterator[tuple[str, Type]]:
        return iter(self.fields)


__all__ = ["Type", "TyBool", "TyNat", "TyTop", "TyArr", "TyRecord"]
