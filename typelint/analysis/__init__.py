"""Pattern detection and complexity scoring over type trees."""

from typelint.analysis.complexity import TypeComplexityVisitor, score
from typelint.analysis.context import LintContext
from typelint.analysis.walker import TypeWalker

__all__ = ["LintContext", "TypeComplexityVisitor", "TypeWalker", "score"]
