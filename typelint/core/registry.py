from __future__ import annotations

from typing import Iterable, Type

from typelint.core.config import Config
from typelint.core.rule import Rule
from typelint.rules.type_complexity import TypeComplexityRule
from typelint.rules.type_patterns import TypePatternRule


RULES: list[Type[Rule]] = [
    TypePatternRule,
    TypeComplexityRule,
]


def load_rules(config: Config) -> Iterable[Rule]:
    for rule_cls in RULES:
        rule = rule_cls(config)
        if rule.enabled():
            yield rule
