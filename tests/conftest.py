import textwrap

import pytest

from typelint.analysis.context import LintContext
from typelint.core.config import Config
from typelint.core.engine import ScanEngine
from typelint.core.typetree import render
from typelint.parsing.resolve import PathResolver


class FixedSizes:
    """Sizes keyed by the rendered type."""

    def __init__(self, sizes):
        self.sizes = sizes

    def estimated_stack_size(self, ty):
        return self.sizes.get(render(ty))


@pytest.fixture
def make_context():
    def factory(sizes=None, threshold=4096):
        return LintContext(PathResolver(), FixedSizes(sizes or {}), vec_box_size_threshold=threshold)
    return factory


@pytest.fixture
def cx(make_context):
    return make_context()


@pytest.fixture
def make_engine():
    def factory(**overrides):
        return ScanEngine(Config.from_overrides(overrides))
    return factory


@pytest.fixture
def scan(make_engine):
    """Scan a Rust snippet; line 1 is the first non-empty line of the snippet."""
    def run(source, **overrides):
        engine = make_engine(**overrides)
        return engine.scan_source(textwrap.dedent(source).lstrip("\n"), path="lib.rs")
    return run
