"""
Type expression trees.

These are the syntactic type expressions the analysis works on: what a
parser produces for the type written in a signature, field, binding or
associated item. Trees are immutable and acyclic; every node knows its
source span and its source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Tuple, Union


@dataclass(frozen=True)
class Span:
    """A source range. Lines and columns are 1-based."""
    path: str
    line: int
    column: int
    end_line: int = 0
    end_column: int = 0
    from_expansion: bool = False

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"

    def expanded(self) -> "Span":
        return replace(self, from_expansion=True)


DUMMY_SPAN = Span(path="<unknown>", line=0, column=0)


@dataclass(frozen=True)
class TypeExpr:
    """Base class of all type expression nodes."""
    span: Span = field(default=DUMMY_SPAN, compare=False)
    text: str = field(default="", compare=False)

    def children(self) -> Iterator["TypeExpr"]:
        """Yield every syntactic sub-type, in source order."""
        return iter(())


@dataclass(frozen=True)
class LifetimeArg:
    name: str


@dataclass(frozen=True)
class ConstArg:
    expr: str


@dataclass(frozen=True)
class TypeArg:
    ty: TypeExpr


GenericArg = Union[TypeArg, LifetimeArg, ConstArg]


@dataclass(frozen=True)
class TypeBinding:
    """An associated type binding such as ``Item = u8``."""
    name: str
    ty: TypeExpr


@dataclass(frozen=True)
class GenericArgs:
    args: Tuple[GenericArg, ...] = ()
    bindings: Tuple[TypeBinding, ...] = ()
    # Fn(A, B) -> C sugar: args hold a single tuple, bindings hold Output.
    parenthesized: bool = False

    def types(self) -> Iterator[TypeExpr]:
        for arg in self.args:
            if isinstance(arg, TypeArg):
                yield arg.ty


@dataclass(frozen=True)
class PathSegment:
    name: str
    args: Optional[GenericArgs] = None


@dataclass(frozen=True)
class PathType(TypeExpr):
    segments: Tuple[PathSegment, ...] = ()
    qself: Optional[TypeExpr] = None

    @property
    def last_segment(self) -> PathSegment:
        return self.segments[-1]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(seg.name for seg in self.segments)

    def type_args(self) -> Iterator[TypeExpr]:
        """Generic type arguments of every segment (lifetimes and consts excluded)."""
        for seg in self.segments:
            if seg.args is not None:
                yield from seg.args.types()

    def first_type_arg(self) -> Optional[TypeExpr]:
        """First generic type argument of the last segment, if any."""
        args = self.last_segment.args
        if args is None:
            return None
        return next(args.types(), None)

    def children(self) -> Iterator[TypeExpr]:
        if self.qself is not None:
            yield self.qself
        for seg in self.segments:
            if seg.args is None:
                continue
            yield from seg.args.types()
            for binding in seg.args.bindings:
                yield binding.ty


@dataclass(frozen=True)
class RefType(TypeExpr):
    pointee: TypeExpr = None
    mutable: bool = False
    lifetime: Optional[str] = None

    def children(self) -> Iterator[TypeExpr]:
        yield self.pointee


@dataclass(frozen=True)
class PtrType(TypeExpr):
    pointee: TypeExpr = None
    mutable: bool = False

    def children(self) -> Iterator[TypeExpr]:
        yield self.pointee


@dataclass(frozen=True)
class SliceType(TypeExpr):
    element: TypeExpr = None

    def children(self) -> Iterator[TypeExpr]:
        yield self.element


@dataclass(frozen=True)
class ArrayType(TypeExpr):
    element: TypeExpr = None
    length: str = ""

    def children(self) -> Iterator[TypeExpr]:
        yield self.element


@dataclass(frozen=True)
class TupleType(TypeExpr):
    elements: Tuple[TypeExpr, ...] = ()

    def children(self) -> Iterator[TypeExpr]:
        yield from self.elements


@dataclass(frozen=True)
class BareFnType(TypeExpr):
    inputs: Tuple[TypeExpr, ...] = ()
    output: Optional[TypeExpr] = None
    # None is the native Rust ABI; otherwise the string of ``extern "..."``.
    abi: Optional[str] = None

    @property
    def is_native_abi(self) -> bool:
        return self.abi is None or self.abi == "Rust"

    def children(self) -> Iterator[TypeExpr]:
        yield from self.inputs
        if self.output is not None:
            yield self.output


@dataclass(frozen=True)
class TraitBound:
    """One ``+``-separated bound of a trait object, e.g. ``for<'a> Fn(&'a u8)``."""
    path: PathType
    lifetime_params: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TraitObjectType(TypeExpr):
    bounds: Tuple[TraitBound, ...] = ()
    lifetime_bound: Optional[str] = None

    @property
    def has_lifetime_parameters(self) -> bool:
        return any(bound.lifetime_params for bound in self.bounds)

    def children(self) -> Iterator[TypeExpr]:
        for bound in self.bounds:
            yield from bound.path.children()


@dataclass(frozen=True)
class InferType(TypeExpr):
    pass


@dataclass(frozen=True)
class NeverType(TypeExpr):
    pass


@dataclass(frozen=True)
class ImplTraitType(TypeExpr):
    bounds: Tuple[TraitBound, ...] = ()


@dataclass(frozen=True)
class MacroType(TypeExpr):
    """A macro invocation in type position. Its span is always expanded."""
    name: str = ""


def _render_args(seg: PathSegment) -> str:
    args = seg.args
    if args is None:
        return seg.name
    if args.parenthesized:
        inputs = next(args.types(), None)
        inner = ", ".join(render(t) for t in inputs.children()) if inputs is not None else ""
        out = f"{seg.name}({inner})"
        for binding in args.bindings:
            if binding.name == "Output" and binding.ty != TupleType():
                out += f" -> {render(binding.ty)}"
        return out
    parts = []
    for arg in args.args:
        if isinstance(arg, TypeArg):
            parts.append(render(arg.ty))
        elif isinstance(arg, LifetimeArg):
            parts.append(arg.name)
        else:
            parts.append(arg.expr)
    parts.extend(f"{b.name} = {render(b.ty)}" for b in args.bindings)
    return f"{seg.name}<{', '.join(parts)}>"


def _render_bound(bound: TraitBound) -> str:
    text = render(bound.path)
    if bound.lifetime_params:
        text = f"for<{', '.join(bound.lifetime_params)}> {text}"
    return text


def render(ty: TypeExpr) -> str:
    """Render a tree back to Rust syntax, normalising whitespace."""
    if isinstance(ty, PathType):
        text = "::".join(_render_args(seg) for seg in ty.segments)
        if ty.qself is not None:
            text = f"<{render(ty.qself)}>::{text}"
        return text
    if isinstance(ty, RefType):
        lifetime = f"{ty.lifetime} " if ty.lifetime else ""
        mutability = "mut " if ty.mutable else ""
        return f"&{lifetime}{mutability}{render(ty.pointee)}"
    if isinstance(ty, PtrType):
        return f"*{'mut' if ty.mutable else 'const'} {render(ty.pointee)}"
    if isinstance(ty, SliceType):
        return f"[{render(ty.element)}]"
    if isinstance(ty, ArrayType):
        return f"[{render(ty.element)}; {ty.length}]"
    if isinstance(ty, TupleType):
        if len(ty.elements) == 1:
            return f"({render(ty.elements[0])},)"
        return f"({', '.join(render(e) for e in ty.elements)})"
    if isinstance(ty, BareFnType):
        prefix = f'extern "{ty.abi}" ' if ty.abi is not None else ""
        text = f"{prefix}fn({', '.join(render(i) for i in ty.inputs)})"
        if ty.output is not None:
            text += f" -> {render(ty.output)}"
        return text
    if isinstance(ty, (TraitObjectType, ImplTraitType)):
        keyword = "dyn" if isinstance(ty, TraitObjectType) else "impl"
        parts = [_render_bound(b) for b in ty.bounds]
        if isinstance(ty, TraitObjectType) and ty.lifetime_bound:
            parts.append(ty.lifetime_bound)
        return f"{keyword} {' + '.join(parts)}"
    if isinstance(ty, InferType):
        return "_"
    if isinstance(ty, NeverType):
        return "!"
    return ty.text


def snippet(ty: TypeExpr) -> str:
    """The source text of ``ty``, or its rendering when the tree was built by hand."""
    return ty.text or render(ty)
