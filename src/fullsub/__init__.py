"""Call-by-value evaluation and subtype-aware type checking for a lambda calculus with records."""

from loguru import logger

from fullsub.core.ast import (
    Abst,
    App,
    If,
    IsZero,
    Pred,
    Proj,
    Record,
    Succ,
    Term,
    TmFalse,
    TmTrue,
    Var,
    Zero,
)
from fullsub.core.context import Context, NameBind, VarBind
from fullsub.core.debruijn import shift, subst, subst_top
from fullsub.core.eval import evaluate, is_value, step
from fullsub.core.subtype import sub_type
from fullsub.core.types import TyArr, TyBool, TyNat, TyRecord, TyTop, Type
from fullsub.core.typing import type_of

logger.disable("fullsub")

__all__ = [
    "Abst",
    "App",
    "Context",
    "If",
    "IsZero",
    "NameBind",
    "Pred",
    "Proj",
    "Record",
    "Succ",
    "Term",
    "TmFalse",
    "TmTrue",
    "TyArr",
    "TyBool",
    "TyNat",
    "TyRecord",
    "TyTop",
    "Type",
    "Var",
    "VarBind",
    "Zero",
    "evaluate",
    "is_value",
    "shift",
    "step",
    "sub_type",
    "subst",
    "subst_top",
    "type_of",
]
