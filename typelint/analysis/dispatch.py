"""
Which declarations feed which analysis.

Every declaration site is tagged with a :class:`DeclKind`. The table below
says, per kind, whether its types go through the pattern walk, through the
complexity check, and whether the pattern walk runs in local context.
Function-like declarations list their parameter types first and their
return type last.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from typelint.core.declarations import Declaration, DeclKind
from typelint.core.typetree import TypeExpr


@dataclass(frozen=True)
class DispatchEntry:
    pattern_walk: bool
    complexity: bool
    local: bool = False


DISPATCH: Dict[DeclKind, DispatchEntry] = {
    # Free functions, inherent methods and provided trait methods.
    DeclKind.FN: DispatchEntry(pattern_walk=True, complexity=True),
    # Signatures of trait impl methods are dictated by the trait.
    DeclKind.TRAIT_IMPL_FN: DispatchEntry(pattern_walk=False, complexity=True),
    DeclKind.TRAIT_REQUIRED_FN: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.FIELD: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.TRAIT_CONST: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.TRAIT_TYPE: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.IMPL_CONST: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.IMPL_TYPE: DispatchEntry(pattern_walk=True, complexity=True),
    DeclKind.LOCAL: DispatchEntry(pattern_walk=True, complexity=True, local=True),
    DeclKind.STATIC: DispatchEntry(pattern_walk=False, complexity=True),
    DeclKind.CONST: DispatchEntry(pattern_walk=False, complexity=True),
}


def pattern_types(decl: Declaration) -> Tuple[TypeExpr, ...]:
    if DISPATCH[decl.kind].pattern_walk:
        return decl.types
    return ()


def complexity_types(decl: Declaration) -> Tuple[TypeExpr, ...]:
    if DISPATCH[decl.kind].complexity:
        return decl.types
    return ()


def in_local_context(decl: Declaration) -> bool:
    return DISPATCH[decl.kind].local
