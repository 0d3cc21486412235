"""
Per-file path resolution.

Rust name resolution needs the whole crate graph; this resolver only sees
one file. It understands the prelude, ``use`` declarations (lists, aliases
and globs of the standard library), fully qualified standard library paths
and items declared in the file itself. Anything else is unresolved.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from typelint.core.paths import KNOWN_PATHS, PRELUDE
from typelint.core.typetree import PathType
from typelint.parsing.items import LocalItem, ModuleIndex

logger = logging.getLogger(__name__)

STD_ROOTS = {"std", "core", "alloc"}
LOCAL_ROOTS = {"crate", "self", "super"}


class PathResolver:
    def __init__(self, index: Optional[ModuleIndex] = None) -> None:
        self.index = index or ModuleIndex()

    def resolve(self, path: PathType) -> Optional[str]:
        # `<T as Trait>::Assoc` names a projection, not a nominal type.
        if path.qself is not None or not path.segments:
            return None
        return self.resolve_names(path.names)

    def resolve_names(self, names: Tuple[str, ...]) -> Optional[str]:
        names = tuple(name for name in names if name)
        if not names:
            return None
        first = names[0]

        if first in LOCAL_ROOTS:
            item = self.index.items.get(names[-1])
            if item is not None:
                return item.identity
            return "::".join(names)

        if first in self.index.imports:
            return self._canonical(self.index.imports[first] + names[1:])

        if len(names) == 1:
            item = self.index.items.get(first)
            if item is not None:
                return item.identity
            for prefix in self.index.glob_imports:
                identity = KNOWN_PATHS.get(prefix + names)
                if identity is not None:
                    return identity
            return PRELUDE.get(first)

        if first in STD_ROOTS:
            return self._canonical(names)
        return None

    def _canonical(self, names: Tuple[str, ...]) -> Optional[str]:
        if names and names[0] in LOCAL_ROOTS:
            return self.resolve_names(names)
        return KNOWN_PATHS.get(names, "::".join(names))

    def local_item(self, path: PathType) -> Optional[LocalItem]:
        identity = self.resolve(path)
        if identity is None:
            return None
        item = self.index.items.get(path.last_segment.name)
        if item is not None and item.identity == identity:
            return item
        return None
