from __future__ import annotations

from typing import Iterable

from typelint.analysis.context import LintContext
from typelint.analysis.dispatch import in_local_context, pattern_types
from typelint.analysis.walker import TypeWalker
from typelint.core.config import Config
from typelint.core.finding import Finding
from typelint.core.lints import (
    BORROWED_BOX,
    BOX_VEC,
    LINKEDLIST,
    OPTION_OPTION,
    RC_BUFFER,
    REDUNDANT_ALLOCATION,
    VEC_BOX,
)
from typelint.core.rule import Rule, RuleContext
from typelint.parsing.layout import LayoutEstimator
from typelint.parsing.resolve import PathResolver
from typelint.parsing.treesitter import ParsedFile


def lint_context_for(parsed: ParsedFile, config: Config) -> LintContext:
    resolver = PathResolver(parsed.index)
    return LintContext(
        resolver=resolver,
        sizes=LayoutEstimator(resolver),
        vec_box_size_threshold=config.vec_box_size_threshold(),
    )


class TypePatternRule(Rule):
    rule_id = "TYPE_PATTERNS"
    lints = (BOX_VEC, REDUNDANT_ALLOCATION, RC_BUFFER, VEC_BOX, OPTION_OPTION, LINKEDLIST, BORROWED_BOX)
    name = "Wrapper Type Patterns"
    description = "Flags redundant or wasteful compositions of standard wrapper types."

    def check(self, parsed: ParsedFile, context: RuleContext) -> Iterable[Finding]:
        walker = TypeWalker(lint_context_for(parsed, context.config))
        for decl in parsed.declarations:
            local = in_local_context(decl)
            for ty in pattern_types(decl):
                for diagnostic in walker.walk(ty, in_local_context=local):
                    yield self.to_finding(parsed, diagnostic)
