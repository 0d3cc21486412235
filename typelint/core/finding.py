from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from typelint.core.lints import Lint
from typelint.core.typetree import Span


@dataclass(frozen=True)
class Diagnostic:
    """A lint match on one type node, before severity and location are attached."""
    lint: Lint
    span: Span
    message: str
    help: Optional[str] = None
    suggestion: Optional[str] = None

    @property
    def rule_id(self) -> str:
        return self.lint.rule_id


@dataclass(frozen=True)
class Location:
    path: str
    line: int
    column: int
    snippet: str
    end_line: int = 0
    end_column: int = 0


@dataclass(frozen=True)
class Finding:
    rule_id: str
    title: str
    severity: str
    confidence: str
    message: str
    location: Location
    remediation: str
    references: List[str] = field(default_factory=list)
    help: Optional[str] = None
    suggestion: Optional[str] = None
