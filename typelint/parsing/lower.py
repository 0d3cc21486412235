"""
Lowering of tree-sitter-rust syntax into type trees and declarations.

:class:`TypeLowering` turns a type node into a :class:`TypeExpr`.
:class:`DeclarationCollector` walks a whole file and records every
declaration site that carries written types, together with the imports and
nominal items needed to resolve paths and estimate sizes.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from typelint.core.declarations import Declaration, DeclKind
from typelint.core.typetree import (
    ArrayType,
    BareFnType,
    ConstArg,
    GenericArgs,
    ImplTraitType,
    InferType,
    LifetimeArg,
    MacroType,
    NeverType,
    PathSegment,
    PathType,
    PtrType,
    RefType,
    SliceType,
    Span,
    TraitBound,
    TraitObjectType,
    TupleType,
    TypeArg,
    TypeBinding,
    TypeExpr,
)
from typelint.parsing.items import LocalItem, ModuleIndex

logger = logging.getLogger(__name__)

COMMENT_TYPES = {"line_comment", "block_comment", "attribute_item", "inner_attribute_item"}

CONST_ARG_TYPES = {
    "block",
    "integer_literal",
    "float_literal",
    "string_literal",
    "raw_string_literal",
    "char_literal",
    "boolean_literal",
    "negative_literal",
}

PATH_LEAF_TYPES = {
    "type_identifier",
    "primitive_type",
    "identifier",
    "self",
    "super",
    "crate",
    "metavariable",
}

# Owners of associated items.
TRAIT = "trait"
IMPL = "impl"
TRAIT_IMPL = "trait_impl"
FOREIGN = "foreign"


def _named(node) -> List[object]:
    return [child for child in node.named_children if child.type not in COMMENT_TYPES]


def _has_child(node, kind: str) -> bool:
    return any(child.type == kind for child in node.children)


class TypeLowering:
    def __init__(self, source: bytes, path: str) -> None:
        self.source = source
        self.path = path

    def text(self, node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def span(self, node) -> Span:
        return Span(
            path=self.path,
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
            end_line=node.end_point[0] + 1,
            end_column=node.end_point[1] + 1,
        )

    def lower(self, node) -> TypeExpr:
        if node is None:
            return TypeExpr()
        kind = node.type
        span = self.span(node)
        text = self.text(node)

        if text == "_":
            return InferType(span=span, text=text)
        if kind in PATH_LEAF_TYPES or kind in ("scoped_type_identifier", "scoped_identifier", "generic_type"):
            qself, segments = self._segments(node)
            return PathType(span=span, text=text, segments=tuple(segments), qself=qself)
        if kind == "reference_type":
            lifetime = next((c for c in node.named_children if c.type == "lifetime"), None)
            return RefType(
                span=span,
                text=text,
                pointee=self.lower(node.child_by_field_name("type")),
                mutable=_has_child(node, "mutable_specifier"),
                lifetime=self.text(lifetime) if lifetime is not None else None,
            )
        if kind == "pointer_type":
            return PtrType(
                span=span,
                text=text,
                pointee=self.lower(node.child_by_field_name("type")),
                mutable=_has_child(node, "mutable_specifier"),
            )
        if kind == "array_type":
            element = self.lower(node.child_by_field_name("element"))
            length = node.child_by_field_name("length")
            if length is None:
                return SliceType(span=span, text=text, element=element)
            return ArrayType(span=span, text=text, element=element, length=self.text(length))
        if kind == "tuple_type":
            return TupleType(span=span, text=text, elements=tuple(self.lower(c) for c in _named(node)))
        if kind == "unit_type":
            return TupleType(span=span, text=text)
        if kind == "function_type":
            if node.child_by_field_name("trait") is not None:
                return self._fn_trait(node)
            return self._bare_fn(node)
        if kind in ("dynamic_type", "bounded_type"):
            bounds, lifetime, is_impl = self._bounds(node)
            if is_impl:
                return ImplTraitType(span=span, text=text, bounds=bounds)
            return TraitObjectType(span=span, text=text, bounds=bounds, lifetime_bound=lifetime)
        if kind == "abstract_type":
            bounds, _, _ = self._bounds(node.child_by_field_name("trait"))
            return ImplTraitType(span=span, text=text, bounds=bounds)
        if kind == "never_type" or text == "!":
            return NeverType(span=span, text=text)
        if kind == "macro_invocation":
            name = node.child_by_field_name("macro")
            return MacroType(span=span.expanded(), text=text, name=self.text(name) if name else "")
        if kind == "bracketed_type":
            qself, segments = self._segments(node)
            if not segments:
                return qself
            return PathType(span=span, text=text, segments=tuple(segments), qself=qself)
        if kind == "parenthesized_type" or (kind == "ERROR" and len(_named(node)) == 1):
            return self.lower(_named(node)[0])

        logger.debug("Unhandled type node %s at %s", kind, span)
        return TypeExpr(span=span, text=text)

    def _segments(self, node) -> Tuple[Optional[TypeExpr], List[PathSegment]]:
        kind = node.type
        if kind in ("scoped_type_identifier", "scoped_identifier"):
            prefix = node.child_by_field_name("path")
            name = node.child_by_field_name("name")
            qself, segments = (None, []) if prefix is None else self._segments(prefix)
            return qself, segments + [PathSegment(self.text(name))]
        if kind == "generic_type":
            qself, segments = self._segments(node.child_by_field_name("type"))
            args = self._generic_args(node.child_by_field_name("type_arguments"))
            segments[-1] = PathSegment(segments[-1].name, args)
            return qself, segments
        if kind == "bracketed_type":
            inner = _named(node)[0]
            if inner.type == "qualified_type":
                qself = self.lower(inner.child_by_field_name("type"))
                _, segments = self._segments(inner.child_by_field_name("alias"))
                return qself, segments
            return self.lower(inner), []
        return None, [PathSegment(self.text(node))]

    def _generic_args(self, node) -> GenericArgs:
        args = []
        bindings = []
        for child in _named(node):
            kind = child.type
            if kind == "lifetime":
                args.append(LifetimeArg(self.text(child)))
            elif kind == "type_binding":
                bindings.append(
                    TypeBinding(
                        self.text(child.child_by_field_name("name")),
                        self.lower(child.child_by_field_name("type")),
                    )
                )
            elif kind in CONST_ARG_TYPES:
                args.append(ConstArg(self.text(child)))
            elif kind in ("trait_bounds", "type_arguments"):
                continue
            else:
                args.append(TypeArg(self.lower(child)))
        return GenericArgs(args=tuple(args), bindings=tuple(bindings))

    def parameter_types(self, node) -> Tuple[TypeExpr, ...]:
        """Types of a ``parameters`` node. ``self`` receivers and variadics are skipped."""
        if node is None:
            return ()
        types = []
        for child in _named(node):
            if child.type == "parameter":
                types.append(self.lower(child.child_by_field_name("type")))
            elif child.type in ("self_parameter", "variadic_parameter"):
                continue
            else:
                types.append(self.lower(child))
        return tuple(types)

    def _fn_trait(self, node) -> PathType:
        params = node.child_by_field_name("parameters")
        inputs = TupleType(span=self.span(params), text=self.text(params), elements=self.parameter_types(params))
        ret = node.child_by_field_name("return_type")
        if ret is not None:
            output = self.lower(ret)
        else:
            # `Fn(A)` is `Fn<(A,), Output = ()>`.
            output = TupleType(span=self.span(node))
        args = GenericArgs(
            args=(TypeArg(inputs),),
            bindings=(TypeBinding("Output", output),),
            parenthesized=True,
        )
        qself, segments = self._segments(node.child_by_field_name("trait"))
        segments[-1] = PathSegment(segments[-1].name, args)
        return PathType(span=self.span(node), text=self.text(node), segments=tuple(segments), qself=qself)

    def _bare_fn(self, node) -> BareFnType:
        abi = None
        for modifiers in node.children:
            if modifiers.type != "function_modifiers":
                continue
            for modifier in modifiers.children:
                if modifier.type == "extern_modifier":
                    literal = next((c for c in modifier.named_children if c.type == "string_literal"), None)
                    abi = self.text(literal).strip('"') if literal is not None else "C"
        ret = node.child_by_field_name("return_type")
        return BareFnType(
            span=self.span(node),
            text=self.text(node),
            inputs=self.parameter_types(node.child_by_field_name("parameters")),
            output=self.lower(ret) if ret is not None else None,
            abi=abi,
        )

    def _flatten_bounds(self, node, parts: List[object]) -> None:
        if node.type == "bounded_type":
            for child in _named(node):
                self._flatten_bounds(child, parts)
        else:
            parts.append(node)

    def _bounds(self, node) -> Tuple[Tuple[TraitBound, ...], Optional[str], bool]:
        """Bounds of a ``dyn``/``impl``/``+`` type, its lifetime bound, and whether it is ``impl``."""
        parts: List[object] = []
        self._flatten_bounds(node, parts)
        bounds = []
        lifetime = None
        is_impl = False
        for part in parts:
            if part.type == "lifetime":
                lifetime = self.text(part)
            elif part.type == "removed_trait_bound":
                continue
            elif part.type in ("dynamic_type", "abstract_type"):
                is_impl = is_impl or part.type == "abstract_type"
                inner, inner_lifetime, _ = self._bounds(part.child_by_field_name("trait"))
                bounds.extend(inner)
                lifetime = lifetime or inner_lifetime
            else:
                bounds.append(self._bound(part))
        return tuple(bounds), lifetime, is_impl

    def _bound(self, node) -> TraitBound:
        if node.type == "higher_ranked_trait_bound":
            params = node.child_by_field_name("type_parameters")
            lifetimes = tuple(self.text(n) for n in _descendants(params) if n.type == "lifetime")
            inner = self._bound(node.child_by_field_name("type"))
            return TraitBound(inner.path, lifetimes + inner.lifetime_params)
        lifetimes = ()
        for_lifetimes = next((c for c in node.children if c.type == "for_lifetimes"), None)
        if for_lifetimes is not None:
            lifetimes = tuple(self.text(n) for n in _descendants(for_lifetimes) if n.type == "lifetime")
        ty = self.lower(node)
        if isinstance(ty, PathType):
            return TraitBound(ty, lifetimes)
        return TraitBound(
            PathType(span=ty.span, text=ty.text, segments=(PathSegment(ty.text),)),
            lifetimes,
        )


def _default_type(node):
    default = node.child_by_field_name("default_type")
    if default is not None:
        return default
    seen_equals = False
    for child in node.children:
        if child.type == "=":
            seen_equals = True
        elif seen_equals and child.is_named and child.type not in COMMENT_TYPES:
            return child
    return None


def _descendants(node):
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


class DeclarationCollector:
    """Collects declarations, imports and local items from a parsed file."""

    def __init__(self, lowering: TypeLowering) -> None:
        self.lowering = lowering
        self.declarations: List[Declaration] = []
        self.index = ModuleIndex()
        self._modules: List[str] = []

    def collect(self, root) -> "DeclarationCollector":
        self._visit(root, owner=None)
        return self

    def _text(self, node) -> str:
        return self.lowering.text(node) if node is not None else ""

    def _add(self, kind: DeclKind, name: str, types, node) -> None:
        types = tuple(types)
        if types:
            self.declarations.append(
                Declaration(kind=kind, name=name, types=types, span=self.lowering.span(node))
            )

    def _identity(self, name: str) -> str:
        return "::".join(["crate", *self._modules, name])

    def _visit(self, node, owner: Optional[str]) -> None:
        for child in node.named_children:
            self._visit_node(child, owner)

    def _visit_node(self, child, owner: Optional[str]) -> None:
        kind = child.type
        if kind == "function_item":
            self._function(child, owner)
            body = child.child_by_field_name("body")
            if body is not None:
                self._visit(body, owner=None)
        elif kind == "function_signature_item":
            if owner == TRAIT:
                self._signature(child, DeclKind.TRAIT_REQUIRED_FN)
        elif kind in ("struct_item", "union_item"):
            self._struct(child, kind[: -len("_item")])
        elif kind == "enum_item":
            self._enum(child)
        elif kind == "trait_item":
            name = self._text(child.child_by_field_name("name"))
            self.index.add_item(LocalItem(name=name, identity=self._identity(name), kind="trait"))
            self._visit_body(child, TRAIT)
        elif kind == "impl_item":
            self._visit_body(child, TRAIT_IMPL if child.child_by_field_name("trait") else IMPL)
        elif kind == "const_item":
            self._typed_item(child, {TRAIT: DeclKind.TRAIT_CONST, TRAIT_IMPL: DeclKind.IMPL_CONST,
                                     IMPL: DeclKind.IMPL_CONST}.get(owner, DeclKind.CONST))
            self._visit_value(child)
        elif kind == "static_item":
            if owner != FOREIGN:
                self._typed_item(child, DeclKind.STATIC)
                self._visit_value(child)
        elif kind == "associated_type":
            default = _default_type(child)
            if owner == TRAIT and default is not None:
                name = self._text(child.child_by_field_name("name"))
                self._add(DeclKind.TRAIT_TYPE, name, [self.lowering.lower(default)], child)
        elif kind == "type_item":
            self._type_item(child, owner)
        elif kind == "let_declaration":
            ty = child.child_by_field_name("type")
            if ty is not None:
                name = self._text(child.child_by_field_name("pattern"))
                self._add(DeclKind.LOCAL, name, [self.lowering.lower(ty)], child)
            self._visit_value(child)
        elif kind == "use_declaration":
            argument = child.child_by_field_name("argument")
            if argument is not None:
                self._use(argument, ())
        elif kind == "mod_item":
            body = child.child_by_field_name("body")
            if body is not None:
                self._modules.append(self._text(child.child_by_field_name("name")))
                try:
                    self._visit(body, owner=None)
                finally:
                    self._modules.pop()
        elif kind == "foreign_mod_item":
            self._visit_body(child, FOREIGN)
        elif kind == "closure_expression":
            self._closure(child)
        elif kind in ("macro_invocation", "macro_definition"):
            return
        else:
            self._visit(child, owner=None)

    def _visit_body(self, node, owner: str) -> None:
        body = node.child_by_field_name("body")
        if body is not None:
            self._visit(body, owner)

    def _visit_value(self, node) -> None:
        value = node.child_by_field_name("value")
        if value is not None:
            self._visit_node(value, owner=None)

    def _function(self, node, owner: Optional[str]) -> None:
        kind = DeclKind.TRAIT_IMPL_FN if owner == TRAIT_IMPL else DeclKind.FN
        self._signature(node, kind)

    def _signature(self, node, kind: DeclKind) -> None:
        types = list(self.lowering.parameter_types(node.child_by_field_name("parameters")))
        ret = node.child_by_field_name("return_type")
        if ret is not None:
            types.append(self.lowering.lower(ret))
        self._add(kind, self._text(node.child_by_field_name("name")), types, node)

    def _closure(self, node) -> None:
        """Closure signatures count as functions; untyped parameters are skipped."""
        types = []
        params = node.child_by_field_name("parameters")
        for param in _named(params) if params is not None else ():
            ty = param.child_by_field_name("type") if param.type == "parameter" else None
            if ty is not None:
                types.append(self.lowering.lower(ty))
        ret = node.child_by_field_name("return_type")
        if ret is not None:
            types.append(self.lowering.lower(ret))
        self._add(DeclKind.FN, "<closure>", types, node)
        body = node.child_by_field_name("body")
        if body is not None:
            self._visit_node(body, owner=None)

    def _typed_item(self, node, kind: DeclKind) -> None:
        ty = node.child_by_field_name("type")
        if ty is not None:
            self._add(kind, self._text(node.child_by_field_name("name")), [self.lowering.lower(ty)], node)

    def _fields(self, body, owner_name: str) -> Tuple[TypeExpr, ...]:
        if body is None:
            return ()
        types = []
        if body.type == "field_declaration_list":
            for field in _named(body):
                if field.type != "field_declaration":
                    continue
                ty = self.lowering.lower(field.child_by_field_name("type"))
                name = self._text(field.child_by_field_name("name"))
                self._add(DeclKind.FIELD, f"{owner_name}.{name}", [ty], field)
                types.append(ty)
        elif body.type == "ordered_field_declaration_list":
            for position, node in enumerate(body.children_by_field_name("type")):
                ty = self.lowering.lower(node)
                self._add(DeclKind.FIELD, f"{owner_name}.{position}", [ty], node)
                types.append(ty)
        return tuple(types)

    def _struct(self, node, kind: str) -> None:
        name = self._text(node.child_by_field_name("name"))
        fields = self._fields(node.child_by_field_name("body"), name)
        self.index.add_item(
            LocalItem(
                name=name,
                identity=self._identity(name),
                kind=kind,
                fields=fields,
                generic=node.child_by_field_name("type_parameters") is not None,
            )
        )

    def _enum(self, node) -> None:
        name = self._text(node.child_by_field_name("name"))
        variants = []
        body = node.child_by_field_name("body")
        for variant in _named(body) if body is not None else ():
            if variant.type != "enum_variant":
                continue
            variant_name = f"{name}::{self._text(variant.child_by_field_name('name'))}"
            variants.append(self._fields(variant.child_by_field_name("body"), variant_name))
        self.index.add_item(
            LocalItem(
                name=name,
                identity=self._identity(name),
                kind="enum",
                variants=tuple(variants),
                generic=node.child_by_field_name("type_parameters") is not None,
            )
        )

    def _type_item(self, node, owner: Optional[str]) -> None:
        ty = node.child_by_field_name("type")
        name = self._text(node.child_by_field_name("name"))
        if owner in (IMPL, TRAIT_IMPL):
            self._add(DeclKind.IMPL_TYPE, name, [self.lowering.lower(ty)], node)
            return
        if owner == TRAIT:
            if ty is not None:
                self._add(DeclKind.TRAIT_TYPE, name, [self.lowering.lower(ty)], node)
            return
        if owner is None and ty is not None:
            self.index.add_item(
                LocalItem(
                    name=name,
                    identity=self._identity(name),
                    kind="alias",
                    aliased=self.lowering.lower(ty),
                    generic=node.child_by_field_name("type_parameters") is not None,
                )
            )

    def _use_path(self, node) -> Tuple[str, ...]:
        if node is None:
            return ()
        if node.type == "scoped_identifier":
            return self._use_path(node.child_by_field_name("path")) + (
                self._text(node.child_by_field_name("name")),
            )
        return (self._text(node),)

    def _use(self, node, prefix: Tuple[str, ...]) -> None:
        kind = node.type
        if kind == "use_as_clause":
            full = prefix + self._use_path(node.child_by_field_name("path"))
            alias = self._text(node.child_by_field_name("alias"))
            if alias != "_":
                self.index.imports[alias] = full
        elif kind == "scoped_use_list":
            self._use(node.child_by_field_name("list"), prefix + self._use_path(node.child_by_field_name("path")))
        elif kind == "use_list":
            for child in _named(node):
                self._use(child, prefix)
        elif kind == "use_wildcard":
            inner = _named(node)
            self.index.glob_imports.append(prefix + (self._use_path(inner[0]) if inner else ()))
        else:
            full = prefix + self._use_path(node)
            if full and full[-1] == "self":
                full = full[:-1]
            if full:
                self.index.imports[full[-1]] = full
