from __future__ import annotations

import logging
from typing import Iterable

from typelint.analysis.complexity import score
from typelint.analysis.dispatch import complexity_types
from typelint.core.finding import Diagnostic, Finding
from typelint.core.lints import TYPE_COMPLEXITY
from typelint.core.rule import Rule, RuleContext
from typelint.parsing.treesitter import ParsedFile

logger = logging.getLogger(__name__)


class TypeComplexityRule(Rule):
    rule_id = TYPE_COMPLEXITY.rule_id
    lints = (TYPE_COMPLEXITY,)
    name = "Type Complexity"
    description = "Flags type expressions whose structural complexity exceeds the threshold."

    def check(self, parsed: ParsedFile, context: RuleContext) -> Iterable[Finding]:
        threshold = context.config.type_complexity_threshold()
        for decl in parsed.declarations:
            for ty in complexity_types(decl):
                if ty.span.from_expansion:
                    continue
                value = score(ty)
                if value <= threshold:
                    continue
                logger.debug("%s in %s scores %d (threshold %d)", ty.text, decl.name, value, threshold)
                yield self.to_finding(
                    parsed,
                    Diagnostic(
                        lint=TYPE_COMPLEXITY,
                        span=ty.span,
                        message="very complex type used. Consider factoring parts into `type` definitions",
                    ),
                )
