from typelint.rules.type_complexity import TypeComplexityRule
from typelint.rules.type_patterns import TypePatternRule

__all__ = ["TypeComplexityRule", "TypePatternRule"]
