from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from typelint.core.typetree import DUMMY_SPAN, Span, TypeExpr


class DeclKind(Enum):
    FN = "fn"
    TRAIT_IMPL_FN = "trait_impl_fn"
    TRAIT_REQUIRED_FN = "trait_required_fn"
    FIELD = "field"
    TRAIT_CONST = "trait_const"
    TRAIT_TYPE = "trait_type"
    IMPL_CONST = "impl_const"
    IMPL_TYPE = "impl_type"
    LOCAL = "local"
    STATIC = "static"
    CONST = "const"


@dataclass(frozen=True)
class Declaration:
    """A declaration site and the type expressions written on it, in source order."""
    kind: DeclKind
    name: str
    types: Tuple[TypeExpr, ...]
    span: Span = DUMMY_SPAN
