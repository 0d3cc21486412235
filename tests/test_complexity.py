"""
Tests for type complexity scoring.
"""

import pytest

from typelint.analysis.complexity import TypeComplexityVisitor, score
from typelint.core import build as b
from typelint.core.typetree import Span


def u8():
    return b.path("u8")


class TestWeights:
    def test_single_path(self):
        assert score(u8()) == 10

    def test_generic_argument_is_nested(self):
        assert score(b.path("Vec", u8())) == 30

    def test_reference_does_not_nest(self):
        assert score(b.ref(u8())) == 11

    def test_pointer_and_infer(self):
        assert score(b.ptr(u8())) == 11
        assert score(b.infer()) == 1

    def test_native_bare_fn(self):
        assert score(b.bare_fn([u8()], u8())) == 90

    def test_foreign_abi_bare_fn_weighs_nothing(self):
        assert score(b.bare_fn([u8()], abi="C")) == 10

    def test_trait_object_without_binder(self):
        assert score(b.dyn("Send")) == 20

    def test_trait_object_children_stay_at_same_nesting(self):
        # dyn Fn(u8): the argument tuple and the implicit `()` output sit at nesting 1.
        assert score(b.dyn(b.fn_trait("Fn", [u8()]))) == 20 + 10 + 20 + 10

    def test_never_and_macro_weigh_nothing(self):
        assert score(b.never()) == 0
        assert score(b.macro("ty")) == 0

    def test_documented_example(self):
        ints = b.tuple_of(u8(), u8(), u8(), u8())
        ty = b.tuple_of(b.array(ints, 4), b.dyn(b.bound("Trait", "'a")))
        assert score(ty) == 320


class TestVisitorState:
    def test_nesting_restored_after_visit(self):
        visitor = TypeComplexityVisitor()
        visitor.visit(b.path("Vec", b.path("Vec", u8())))
        assert visitor.nest == 1

    def test_nesting_restored_on_error(self):
        visitor = TypeComplexityVisitor()
        with pytest.raises(RuntimeError):
            with visitor._nested(3):
                raise RuntimeError("boom")
        assert visitor.nest == 1

    def test_score_is_idempotent(self):
        ty = b.path("HashMap", b.path("String"), b.path("Vec", b.tuple_of(u8(), u8())))
        assert score(ty) == score(ty)

    def test_expanded_spans_still_count(self):
        span = Span(path="lib.rs", line=1, column=1).expanded()
        assert score(b.path("Box", b.path("Vec", u8()), span=span)) == 60
