from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from typelint.core.config import Config
from typelint.core.finding import Diagnostic, Finding, Location
from typelint.core.lints import LINTS_BY_ID, Lint
from typelint.parsing.treesitter import ParsedFile


@dataclass(frozen=True)
class RuleContext:
    config: Config


class Rule:
    """
    A check run over every parsed file.

    A rule may report diagnostics for several lints; ``lints`` lists them and
    the engine keeps or drops each finding on its own lint's ``enabled``
    setting.
    """

    rule_id = "GENERIC"
    lints: Tuple[Lint, ...] = ()
    name = "Generic Rule"
    description = ""

    def __init__(self, config: Config) -> None:
        self.config = config

    def enabled(self) -> bool:
        return any(self.config.rule_enabled(rule_id) for rule_id in self.rule_ids())

    def rule_ids(self) -> Tuple[str, ...]:
        return tuple(lint.rule_id for lint in self.lints) or (self.rule_id,)

    def check(self, parsed: ParsedFile, context: RuleContext) -> Iterable[Finding]:
        return []

    def severity(self, rule_id: str = "") -> str:
        return self.config.rule_severity(rule_id or self.rule_id)

    def confidence(self, rule_id: str = "") -> str:
        return self.config.rule_confidence(rule_id or self.rule_id)

    def to_finding(self, parsed: ParsedFile, diagnostic: Diagnostic) -> Finding:
        span = diagnostic.span
        lint = LINTS_BY_ID[diagnostic.rule_id]
        lines = parsed.lines
        snippet = lines[span.line - 1].strip() if 0 < span.line <= len(lines) else ""
        return Finding(
            rule_id=diagnostic.rule_id,
            title=lint.title,
            severity=self.severity(diagnostic.rule_id),
            confidence=self.confidence(diagnostic.rule_id),
            message=diagnostic.message,
            location=Location(
                path=span.path,
                line=span.line,
                column=span.column,
                snippet=snippet,
                end_line=span.end_line,
                end_column=span.end_column,
            ),
            remediation=lint.remediation,
            references=[lint.reference],
            help=diagnostic.help,
            suggestion=diagnostic.suggestion,
        )
