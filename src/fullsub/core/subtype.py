"""Structural subtyping for arrows, records and ``Top``."""

from __future__ import annotations

from .types import TyArr, TyRecord, TyTop, Type


def sub_type(s: Type, t: Type) -> bool:
    """Return ``True`` when a value of type ``s`` may be used where ``t`` is expected."""

    if s == t:
        return True
    match s, t:
        case (_, TyTop()):
            return True
        case (TyRecord() as s_rec, TyRecord(t_fields)):
            # Width: ``s`` may carry extra labels. Depth: shared labels recurse.
            for label, t_field in t_fields:
                s_field = s_rec.get(label)
                if s_field is None or not sub_type(s_field, t_field):
                    return False
            return True
        case (TyArr(s_dom, s_rng), TyArr(t_dom, t_rng)):
            return sub_type(t_dom, s_dom) and sub_type(s_rng, t_rng)
    return False


__all__ = ["sub_type"]
