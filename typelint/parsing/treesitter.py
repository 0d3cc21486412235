from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import tree_sitter_rust
from tree_sitter import Language, Parser

from typelint.core.declarations import Declaration
from typelint.core.typetree import TypeExpr
from typelint.parsing.items import ModuleIndex
from typelint.parsing.lower import DeclarationCollector, TypeLowering

logger = logging.getLogger(__name__)

RUST_LANGUAGE = Language(tree_sitter_rust.language())
EXTENSIONS = {".rs"}


@dataclass(frozen=True)
class ParsedFile:
    path: str
    source: bytes
    tree: object
    declarations: Tuple[Declaration, ...]
    index: ModuleIndex

    @property
    def text(self) -> str:
        return self.source.decode("utf-8", errors="replace")

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


def is_rust_path(path: str) -> bool:
    return Path(path).suffix.lower() in EXTENSIONS


def create_parser() -> Parser:
    return Parser(RUST_LANGUAGE)


def parse_source(source: bytes, path: str = "<memory>", parser: Optional[Parser] = None) -> ParsedFile:
    parser = parser or create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning("Syntax errors in %s; results may be incomplete", path)
    collector = DeclarationCollector(TypeLowering(source, path)).collect(tree.root_node)
    logger.debug("Collected %d declarations from %s", len(collector.declarations), path)
    return ParsedFile(
        path=path,
        source=source,
        tree=tree,
        declarations=tuple(collector.declarations),
        index=collector.index,
    )


def parse_file(path: str, parser: Optional[Parser] = None) -> ParsedFile:
    source = Path(path).read_bytes()
    return parse_source(source, path=path, parser=parser)


def parse_type(text: str, path: str = "<type>") -> TypeExpr:
    """Parse a single Rust type, e.g. ``Vec<Box<u8>>``."""
    prefix = "type __T = "
    source = f"{prefix}{text};".encode("utf-8")
    tree = create_parser().parse(source)
    if tree.root_node.has_error or len(tree.root_node.named_children) != 1:
        raise ValueError(f"not a valid Rust type: {text!r}")
    item = tree.root_node.named_children[0]
    ty = item.child_by_field_name("type")
    if item.type != "type_item" or ty is None:
        raise ValueError(f"not a valid Rust type: {text!r}")
    return TypeLowering(source, path).lower(ty)
