from __future__ import annotations

from typing import Optional, Protocol

from typelint.core.typetree import PathType, Span, TypeExpr


class Resolver(Protocol):
    def resolve(self, path: PathType) -> Optional[str]:
        """Return the identity the path names, or None when it cannot be resolved."""


class SizeEstimator(Protocol):
    def estimated_stack_size(self, ty: TypeExpr) -> Optional[int]:
        """Return the size of ``ty`` in bytes, or None when it is unknown or unsized."""


class UnknownSizes:
    def estimated_stack_size(self, ty: TypeExpr) -> Optional[int]:
        return None


class LintContext:
    """
    What the walker and the detectors may ask of their host.

    A context is read-only once built; a single instance can serve any
    number of declarations.
    """

    def __init__(
        self,
        resolver: Resolver,
        sizes: Optional[SizeEstimator] = None,
        vec_box_size_threshold: int = 4096,
    ) -> None:
        self.resolver = resolver
        self.sizes = sizes or UnknownSizes()
        self.vec_box_size_threshold = vec_box_size_threshold

    def resolve(self, path: PathType) -> Optional[str]:
        return self.resolver.resolve(path)

    def resolve_type(self, ty: Optional[TypeExpr]) -> Optional[str]:
        if isinstance(ty, PathType):
            return self.resolve(ty)
        return None

    def is_macro_expanded(self, span: Span) -> bool:
        return span.from_expansion

    def estimated_stack_size(self, ty: TypeExpr) -> Optional[int]:
        return self.sizes.estimated_stack_size(ty)
