from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from typelint.core.typetree import TypeExpr


@dataclass(frozen=True)
class LocalItem:
    """A nominal item declared in the scanned file."""
    name: str
    identity: str
    kind: str  # struct, union, enum, trait or alias
    fields: Tuple[TypeExpr, ...] = ()
    variants: Tuple[Tuple[TypeExpr, ...], ...] = ()
    aliased: Optional[TypeExpr] = None
    generic: bool = False


@dataclass
class ModuleIndex:
    """Names in scope for one file: imports by local name plus items declared in it."""
    imports: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    glob_imports: List[Tuple[str, ...]] = field(default_factory=list)
    items: Dict[str, LocalItem] = field(default_factory=dict)

    def add_item(self, item: LocalItem) -> None:
        # First declaration of a name wins.
        self.items.setdefault(item.name, item)
