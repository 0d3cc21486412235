"""
Helpers for building type expression trees by hand.

Hosts that already have a parser of their own can use these to hand trees
to the analysis without going through tree-sitter::

    from typelint.core import build as b

    ty = b.path("Rc", b.path("Box", b.ref(b.path("T"))))
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from typelint.core.typetree import (
    DUMMY_SPAN,
    ArrayType,
    BareFnType,
    ConstArg,
    GenericArgs,
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

Arg = Union[TypeExpr, LifetimeArg, ConstArg]


def _wrap(arg: Arg):
    if isinstance(arg, TypeExpr):
        return TypeArg(arg)
    return arg


def lifetime(name: str) -> LifetimeArg:
    return LifetimeArg(name)


def const(expr: str) -> ConstArg:
    return ConstArg(expr)


def path(name: str, *args: Arg, span: Span = DUMMY_SPAN, qself: Optional[TypeExpr] = None) -> PathType:
    """``path("std::rc::Rc", inner)`` builds ``std::rc::Rc<inner>``."""
    names = name.split("::")
    generic_args = GenericArgs(args=tuple(_wrap(a) for a in args)) if args else None
    segments = tuple(PathSegment(n) for n in names[:-1]) + (PathSegment(names[-1], generic_args),)
    return PathType(span=span, segments=segments, qself=qself)


def fn_trait(name: str, inputs: Sequence[TypeExpr], output: Optional[TypeExpr] = None) -> PathType:
    """``Fn(A, B) -> C`` in its desugared form. A missing output is ``()``."""
    bindings = (TypeBinding("Output", output if output is not None else TupleType()),)
    args = GenericArgs(args=(TypeArg(TupleType(elements=tuple(inputs))),), bindings=bindings, parenthesized=True)
    return PathType(segments=(PathSegment(name, args),))


def ref(pointee: TypeExpr, mutable: bool = False, lifetime: Optional[str] = None, span: Span = DUMMY_SPAN) -> RefType:
    return RefType(span=span, pointee=pointee, mutable=mutable, lifetime=lifetime)


def ptr(pointee: TypeExpr, mutable: bool = False) -> PtrType:
    return PtrType(pointee=pointee, mutable=mutable)


def slice_of(element: TypeExpr) -> SliceType:
    return SliceType(element=element)


def array(element: TypeExpr, length: Union[int, str]) -> ArrayType:
    return ArrayType(element=element, length=str(length))


def tuple_of(*elements: TypeExpr, span: Span = DUMMY_SPAN) -> TupleType:
    return TupleType(span=span, elements=tuple(elements))


def bare_fn(inputs: Sequence[TypeExpr] = (), output: Optional[TypeExpr] = None, abi: Optional[str] = None) -> BareFnType:
    return BareFnType(inputs=tuple(inputs), output=output, abi=abi)


def bound(trait: Union[str, PathType], *lifetime_params: str) -> TraitBound:
    if isinstance(trait, str):
        trait = path(trait)
    return TraitBound(path=trait, lifetime_params=tuple(lifetime_params))


def dyn(*bounds: Union[str, PathType, TraitBound], lifetime_bound: Optional[str] = None) -> TraitObjectType:
    normalized = tuple(b if isinstance(b, TraitBound) else bound(b) for b in bounds)
    return TraitObjectType(bounds=normalized, lifetime_bound=lifetime_bound)


def infer() -> InferType:
    return InferType(text="_")


def never() -> NeverType:
    return NeverType(text="!")


def macro(name: str, span: Span = DUMMY_SPAN) -> MacroType:
    return MacroType(span=span.expanded(), text=f"{name}!()", name=name)
