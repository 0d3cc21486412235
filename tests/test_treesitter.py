"""
Tests for the tree-sitter front end.
"""

import logging
import textwrap

import pytest

from typelint.analysis.complexity import score
from typelint.core import build as b
from typelint.core.declarations import DeclKind
from typelint.core.typetree import (
    ArrayType,
    BareFnType,
    ImplTraitType,
    MacroType,
    PathType,
    PtrType,
    RefType,
    SliceType,
    TraitObjectType,
    TupleType,
)
from typelint.parsing.treesitter import is_rust_path, parse_source, parse_type


class TestParseType:
    def test_generic_path(self):
        ty = parse_type("Vec<Box<u8>>")
        assert isinstance(ty, PathType)
        assert ty.names == ("Vec",)
        assert ty.first_type_arg().names == ("Box",)
        assert ty.text == "Vec<Box<u8>>"

    def test_scoped_path(self):
        ty = parse_type("std::collections::HashMap<String, u32>")
        assert ty.names == ("std", "collections", "HashMap")
        assert [arg.names for arg in ty.type_args()] == [("String",), ("u32",)]

    def test_reference(self):
        ty = parse_type("&'a mut [u8]")
        assert isinstance(ty, RefType)
        assert ty.mutable
        assert ty.lifetime == "'a"
        assert isinstance(ty.pointee, SliceType)

    def test_pointers(self):
        assert parse_type("*mut u8").mutable
        assert not parse_type("*const u8").mutable
        assert isinstance(parse_type("*const u8"), PtrType)

    def test_array_and_tuples(self):
        array = parse_type("[u8; 4]")
        assert isinstance(array, ArrayType)
        assert array.length == "4"
        assert parse_type("()").elements == ()
        assert len(parse_type("(u8, u16)").elements) == 2
        assert isinstance(parse_type("(u8, u16)"), TupleType)

    def test_bare_fn(self):
        native = parse_type("fn(u8) -> u16")
        assert isinstance(native, BareFnType)
        assert native.abi is None
        assert len(native.inputs) == 1
        assert native.output.names == ("u16",)
        assert parse_type('extern "C" fn()').abi == "C"

    def test_trait_object_bounds(self):
        ty = parse_type("Box<dyn Display + Send>").first_type_arg()
        assert isinstance(ty, TraitObjectType)
        assert [bound.path.names[-1] for bound in ty.bounds] == ["Display", "Send"]

    def test_higher_ranked_bound(self):
        ty = parse_type("Box<dyn for<'a> Fn(&'a u8)>").first_type_arg()
        assert isinstance(ty, TraitObjectType)
        assert ty.has_lifetime_parameters

    def test_impl_trait_binding(self):
        ty = parse_type("impl Iterator<Item = u8>")
        assert isinstance(ty, ImplTraitType)
        binding = ty.bounds[0].path.last_segment.args.bindings[0]
        assert binding.name == "Item"

    def test_qualified_path(self):
        ty = parse_type("<T as Iterator>::Item")
        assert ty.qself.names == ("T",)
        assert ty.names == ("Iterator", "Item")

    def test_macro_is_expanded(self):
        ty = parse_type("my_type!()")
        assert isinstance(ty, MacroType)
        assert ty.span.from_expansion

    def test_documented_example_score(self):
        assert score(parse_type("([(u8, u8, u8, u8); 4], dyn for<'a> Trait<'a>)")) == 320

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_type("Vec<")

    def test_trailing_items_rejected(self):
        with pytest.raises(ValueError):
            parse_type("u8; struct S")

    def test_fn_sugar_matches_built_tree(self):
        built = b.dyn(b.fn_trait("Fn", [b.path("u8")]))
        assert score(parse_type("dyn Fn(u8)")) == score(built) == 60


SOURCE = textwrap.dedent(
    """
    use std::collections::LinkedList;
    use std::rc::{self, Rc as Shared};

    struct Queue {
        items: LinkedList<i32>,
    }

    struct Pair(u8, Box<u16>);

    trait Store {
        const LIMIT: usize;
        fn get(&self, key: &str) -> Option<u8>;
        fn provided(&self) -> u8 {
            0
        }
    }

    impl Store for Queue {
        const LIMIT: usize = 4;
        type Item = u8;
        fn get(&self, key: &str) -> Option<u8> {
            None
        }
    }

    impl Queue {
        fn new() -> Self {
            let count: usize = 0;
            Queue { items: LinkedList::new() }
        }
    }

    static NAME: &str = "q";
    const SIZE: usize = 8;
    """
).lstrip("\n")


class TestParseSource:
    def test_declarations(self):
        parsed = parse_source(SOURCE.encode("utf-8"), path="lib.rs")
        found = {(d.kind, d.name) for d in parsed.declarations}
        assert {
            (DeclKind.FIELD, "Queue.items"),
            (DeclKind.FIELD, "Pair.0"),
            (DeclKind.FIELD, "Pair.1"),
            (DeclKind.TRAIT_CONST, "LIMIT"),
            (DeclKind.TRAIT_REQUIRED_FN, "get"),
            (DeclKind.FN, "provided"),
            (DeclKind.IMPL_CONST, "LIMIT"),
            (DeclKind.IMPL_TYPE, "Item"),
            (DeclKind.TRAIT_IMPL_FN, "get"),
            (DeclKind.FN, "new"),
            (DeclKind.LOCAL, "count"),
            (DeclKind.STATIC, "NAME"),
            (DeclKind.CONST, "SIZE"),
        } <= found

    def test_function_types_skip_receiver(self):
        parsed = parse_source(SOURCE.encode("utf-8"), path="lib.rs")
        required = next(d for d in parsed.declarations if d.kind is DeclKind.TRAIT_REQUIRED_FN)
        assert [ty.text for ty in required.types] == ["&str", "Option<u8>"]

    def test_field_span(self):
        parsed = parse_source(SOURCE.encode("utf-8"), path="lib.rs")
        field = next(d for d in parsed.declarations if d.name == "Queue.items")
        assert field.types[0].span.line == 5
        assert field.types[0].span.path == "lib.rs"

    def test_imports_and_items(self):
        index = parse_source(SOURCE.encode("utf-8"), path="lib.rs").index
        assert index.imports["LinkedList"] == ("std", "collections", "LinkedList")
        assert index.imports["Shared"] == ("std", "rc", "Rc")
        assert index.imports["rc"] == ("std", "rc")
        assert index.items["Queue"].identity == "crate::Queue"
        assert index.items["Store"].kind == "trait"

    def test_closure_signature(self):
        parsed = parse_source(b"fn f() { run(|a: u8, b| -> u16 { 0 }); }", path="lib.rs")
        closure = next(d for d in parsed.declarations if d.name == "<closure>")
        assert closure.kind is DeclKind.FN
        assert [ty.text for ty in closure.types] == ["u8", "u16"]

    def test_nested_module_identity(self):
        index = parse_source(b"mod inner { pub struct Thing; }", path="lib.rs").index
        assert index.items["Thing"].identity == "crate::inner::Thing"

    def test_syntax_error_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="typelint.parsing.treesitter"):
            parse_source(b"struct S { a: }", path="broken.rs")
        assert "broken.rs" in caplog.text

    def test_rust_path(self):
        assert is_rust_path("src/lib.rs")
        assert not is_rust_path("README.md")
