from __future__ import annotations

import logging
from typing import Iterator, Sequence

from typelint.analysis.context import LintContext
from typelint.analysis.detectors import DETECTORS, Detector, check_borrowed_box
from typelint.core.finding import Diagnostic
from typelint.core.typetree import (
    ArrayType,
    PathType,
    PtrType,
    RefType,
    SliceType,
    TupleType,
    TypeExpr,
)

logger = logging.getLogger(__name__)


class TypeWalker:
    """
    Recursive descent over a type tree running the pattern detectors.

    Each named-path node is offered to the detectors in priority order. The
    first one that matches produces the node's only diagnostic and the walk
    does not descend into that node.

    ``in_local_context`` marks types written on ``let`` bindings: detectors
    are not run on their path nodes, but the walk still descends.
    """

    def __init__(self, cx: LintContext, detectors: Sequence[Detector] = DETECTORS) -> None:
        self.cx = cx
        self.detectors = tuple(detectors)

    def walk(self, ty: TypeExpr, in_local_context: bool = False) -> Iterator[Diagnostic]:
        if self.cx.is_macro_expanded(ty.span):
            return

        if isinstance(ty, PathType):
            if not in_local_context:
                identity = self.cx.resolve(ty)
                if identity is not None:
                    for detector in self.detectors:
                        diagnostic = detector(self.cx, ty, identity)
                        if diagnostic is not None:
                            yield diagnostic
                            return
                else:
                    logger.debug("Unresolved path %s at %s", ty.text or ty.names, ty.span)
            if ty.qself is not None:
                yield from self.walk(ty.qself, in_local_context)
            for arg in ty.type_args():
                yield from self.walk(arg, in_local_context)
        elif isinstance(ty, RefType):
            diagnostic = check_borrowed_box(self.cx, ty)
            if diagnostic is not None:
                yield diagnostic
                return
            yield from self.walk(ty.pointee, in_local_context)
        elif isinstance(ty, (PtrType, SliceType, ArrayType)):
            yield from self.walk(next(ty.children()), in_local_context)
        elif isinstance(ty, TupleType):
            for element in ty.elements:
                yield from self.walk(element, in_local_context)
