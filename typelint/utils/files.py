from __future__ import annotations

from pathlib import Path
from typing import Iterable

from typelint.parsing.treesitter import is_rust_path


IGNORED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "node_modules",
    "target",
    "vendor",
}


def iter_source_files(root: str) -> Iterable[str]:
    root_path = Path(root)
    if root_path.is_file():
        if is_rust_path(str(root_path)):
            yield str(root_path)
        return
    for path in sorted(root_path.rglob("*.rs")):
        if not path.is_file():
            continue
        if any(part in IGNORED_DIRS for part in path.relative_to(root_path).parts):
            continue
        yield str(path)
