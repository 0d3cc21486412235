"""
Structural complexity of type expressions.

Every node adds a weight to a running score. Named types, arrays, slices and
tuples weigh more the deeper they are nested, so a flat tuple of ten
integers scores far lower than a few layers of generic wrappers.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Tuple

from typelint.core.typetree import (
    ArrayType,
    BareFnType,
    InferType,
    PathType,
    PtrType,
    RefType,
    SliceType,
    TraitObjectType,
    TupleType,
    TypeExpr,
)


class TypeComplexityVisitor:
    def __init__(self) -> None:
        self.score = 0
        self.nest = 1

    def _weight(self, ty: TypeExpr) -> Tuple[int, int]:
        """Return ``(score to add, nesting increment for the children)``."""
        # _, &x and *x have only small overhead
        if isinstance(ty, (InferType, PtrType, RefType)):
            return 1, 0
        if isinstance(ty, (PathType, SliceType, TupleType, ArrayType)):
            return 10 * self.nest, 1
        if isinstance(ty, BareFnType):
            if ty.is_native_abi:
                return 50 * self.nest, 1
            return 0, 0
        if isinstance(ty, TraitObjectType):
            # for<'a> bounds are weighed like a function type
            if ty.has_lifetime_parameters:
                return 50 * self.nest, 1
            return 20 * self.nest, 0
        return 0, 0

    @contextmanager
    def _nested(self, depth: int) -> Iterator[None]:
        self.nest += depth
        try:
            yield
        finally:
            self.nest -= depth

    def visit(self, ty: TypeExpr) -> None:
        add_score, sub_nest = self._weight(ty)
        self.score += add_score
        with self._nested(sub_nest):
            for child in ty.children():
                self.visit(child)


def score(ty: TypeExpr) -> int:
    """Complexity score of ``ty``. Does not look at spans or report anything."""
    visitor = TypeComplexityVisitor()
    visitor.visit(ty)
    return visitor.score
