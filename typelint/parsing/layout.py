"""
Approximate memory layouts for a 64-bit target.

Only what can be worked out from one file is known: primitives, pointers,
standard containers, tuples, arrays with literal lengths and the
non-generic structs and enums declared locally. Rust is free to reorder
fields, so aggregates are sized as the sum of their fields rounded up to
the largest alignment.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

from typelint.core import paths
from typelint.core.typetree import (
    ArrayType,
    BareFnType,
    NeverType,
    PathType,
    PtrType,
    RefType,
    SliceType,
    TraitObjectType,
    TupleType,
    TypeExpr,
)
from typelint.parsing.items import LocalItem
from typelint.parsing.resolve import PathResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layout:
    size: int
    align: int


POINTER = Layout(8, 8)
FAT_POINTER = Layout(16, 8)

PRIMITIVE_LAYOUTS: Dict[str, Layout] = {
    "bool": Layout(1, 1),
    "u8": Layout(1, 1),
    "i8": Layout(1, 1),
    "u16": Layout(2, 2),
    "i16": Layout(2, 2),
    "u32": Layout(4, 4),
    "i32": Layout(4, 4),
    "f32": Layout(4, 4),
    "char": Layout(4, 4),
    "u64": Layout(8, 8),
    "i64": Layout(8, 8),
    "f64": Layout(8, 8),
    "usize": Layout(8, 8),
    "isize": Layout(8, 8),
    "u128": Layout(16, 16),
    "i128": Layout(16, 16),
}

UNSIZED_PRIMITIVES = {"str"}

# Heap-owning containers laid out as (pointer, capacity, length) or similar.
THREE_WORD_TYPES = {
    paths.VEC,
    paths.STRING,
    paths.OS_STRING,
    paths.PATH_BUF,
    paths.VEC_DEQUE,
    paths.LINKED_LIST,
}
SMART_POINTERS = {paths.BOX, paths.RC, paths.ARC}

# Types whose all-zero bit pattern (or some other value) is invalid, so
# `Option<T>` needs no separate tag.
NICHE_PRIMITIVES = {"bool", "char"}

_LENGTH = re.compile(r"^([0-9][0-9_]*)(?:usize|u\d+|i\d+)?$")


def _round_up(size: int, align: int) -> int:
    return (size + align - 1) // align * align


def _aggregate(layouts: Iterable[Optional[Layout]]) -> Optional[Layout]:
    size = 0
    align = 1
    for layout in layouts:
        if layout is None:
            return None
        size += layout.size
        align = max(align, layout.align)
    return Layout(_round_up(size, align), align)


class LayoutEstimator:
    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver
        self._in_progress: Set[str] = set()

    def estimated_stack_size(self, ty: TypeExpr) -> Optional[int]:
        layout = self.layout_of(ty)
        return layout.size if layout is not None else None

    def layout_of(self, ty: TypeExpr) -> Optional[Layout]:
        if isinstance(ty, (RefType, PtrType)):
            return FAT_POINTER if self.is_unsized(ty.pointee) else POINTER
        if isinstance(ty, BareFnType):
            return POINTER
        if isinstance(ty, NeverType):
            return Layout(0, 1)
        if isinstance(ty, TupleType):
            return _aggregate(self.layout_of(e) for e in ty.elements)
        if isinstance(ty, ArrayType):
            element = self.layout_of(ty.element)
            match = _LENGTH.match(ty.length.strip())
            if element is None or match is None:
                return None
            return Layout(element.size * int(match.group(1).replace("_", "")), element.align)
        if isinstance(ty, PathType):
            return self._path_layout(ty)
        return None

    def is_unsized(self, ty: TypeExpr) -> bool:
        if isinstance(ty, (SliceType, TraitObjectType)):
            return True
        if isinstance(ty, PathType) and ty.qself is None and ty.names in (("str",), ("std", "primitive", "str")):
            return True
        return False

    def _path_layout(self, ty: PathType) -> Optional[Layout]:
        if ty.qself is None and len(ty.segments) == 1:
            name = ty.segments[0].name
            if name in PRIMITIVE_LAYOUTS:
                return PRIMITIVE_LAYOUTS[name]
            if name in UNSIZED_PRIMITIVES:
                return None

        identity = self.resolver.resolve(ty)
        if identity is None:
            return None
        if identity in SMART_POINTERS:
            inner = ty.first_type_arg()
            return FAT_POINTER if inner is not None and self.is_unsized(inner) else POINTER
        if identity in THREE_WORD_TYPES:
            return Layout(24, 8)
        if identity == paths.OPTION:
            return self._option_layout(ty.first_type_arg())

        item = self.resolver.local_item(ty)
        if item is None or item.generic:
            return None
        if item.identity in self._in_progress:
            logger.debug("Recursive type %s has no finite layout", item.identity)
            return None
        self._in_progress.add(item.identity)
        try:
            return self._item_layout(item)
        finally:
            self._in_progress.discard(item.identity)

    def _has_niche(self, ty: TypeExpr) -> bool:
        if isinstance(ty, (RefType, BareFnType)):
            return True
        if isinstance(ty, PathType):
            if ty.qself is None and ty.names and ty.names[-1] in NICHE_PRIMITIVES and len(ty.names) == 1:
                return True
            identity = self.resolver.resolve(ty)
            return identity in SMART_POINTERS or identity in THREE_WORD_TYPES
        return False

    def _option_layout(self, inner: Optional[TypeExpr]) -> Optional[Layout]:
        if inner is None:
            return None
        layout = self.layout_of(inner)
        if layout is None:
            return None
        if self._has_niche(inner):
            return layout
        return Layout(_round_up(layout.size + layout.align, layout.align), layout.align)

    def _item_layout(self, item: LocalItem) -> Optional[Layout]:
        if item.kind == "alias":
            return self.layout_of(item.aliased)
        if item.kind == "struct":
            return _aggregate(self.layout_of(f) for f in item.fields)
        if item.kind == "union":
            layouts = [self.layout_of(f) for f in item.fields]
            if any(layout is None for layout in layouts):
                return None
            align = max((layout.align for layout in layouts), default=1)
            size = max((layout.size for layout in layouts), default=0)
            return Layout(_round_up(size, align), align)
        if item.kind == "enum":
            return self._enum_layout(item)
        return None

    def _enum_layout(self, item: LocalItem) -> Optional[Layout]:
        if not item.variants:
            return Layout(0, 1)
        payloads = [_aggregate(self.layout_of(f) for f in fields) for fields in item.variants]
        if any(payload is None for payload in payloads):
            return None
        if len(payloads) == 1:
            return payloads[0]
        align = max(payload.align for payload in payloads)
        largest = max(payload.size for payload in payloads)
        # One-byte tag padded to the payload alignment.
        return Layout(_round_up(_round_up(1, align) + largest, align), align)
