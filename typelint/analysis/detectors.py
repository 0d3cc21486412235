"""
Pattern detectors for wrapper-type compositions.

Every detector looks at one named-path node whose identity has already been
resolved and returns a :class:`Diagnostic` when the node matches its pattern,
``None`` otherwise. Detectors never recurse; the walker decides what gets
visited next.
"""

from __future__ import annotations

from typing import Callable, Optional, Tuple

from typelint.analysis.context import LintContext
from typelint.core import lints, paths
from typelint.core.finding import Diagnostic
from typelint.core.typetree import (
    ImplTraitType,
    PathType,
    RefType,
    TraitObjectType,
    TypeExpr,
    snippet,
)

Detector = Callable[[LintContext, PathType, str], Optional[Diagnostic]]

SHORT_NAMES = {
    paths.BOX: "Box",
    paths.RC: "Rc",
    paths.ARC: "Arc",
}

# Owned buffer types and the borrowed form a shared handle should hold instead.
BUFFER_ALTERNATIVES = {
    paths.STRING: "str",
    paths.OS_STRING: "std::ffi::OsStr",
    paths.PATH_BUF: "std::path::Path",
}


def _first_arg_with_identity(cx: LintContext, ty: PathType, identity: str) -> Optional[PathType]:
    """The first generic type argument of ``ty`` if it is a path naming ``identity``."""
    arg = ty.first_type_arg()
    if isinstance(arg, PathType) and cx.resolve(arg) == identity:
        return arg
    return None


def _borrowed_parameter(ty: PathType) -> Optional[RefType]:
    """The first generic type argument of ``ty`` if it is a reference."""
    args = ty.last_segment.args
    if args is None or args.parenthesized:
        return None
    arg = next(args.types(), None)
    if isinstance(arg, RefType):
        return arg
    return None


def check_box_vec(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity != paths.BOX:
        return None
    if _first_arg_with_identity(cx, ty, paths.VEC) is None:
        return None
    return Diagnostic(
        lint=lints.BOX_VEC,
        span=ty.span,
        message="you seem to be trying to use `Box<Vec<..>>`. Consider using just `Vec<..>`",
        help="`Vec<..>` is already on the heap, `Box<Vec<..>>` makes an extra allocation",
        suggestion=snippet(ty.first_type_arg()),
    )


def check_redundant_allocation(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity == paths.BOX:
        borrowed = _borrowed_parameter(ty)
        if borrowed is None:
            return None
        return Diagnostic(
            lint=lints.REDUNDANT_ALLOCATION,
            span=ty.span,
            message="usage of `Box<&T>`",
            help="try",
            suggestion=snippet(borrowed),
        )

    if identity not in paths.SHARED_HANDLES:
        return None
    outer = SHORT_NAMES[identity]

    arg = ty.first_type_arg()
    arg_identity = cx.resolve_type(arg)
    if arg_identity in paths.SHARED_HANDLES or arg_identity == paths.BOX:
        inner = arg.first_type_arg()
        if inner is None:
            return None
        return Diagnostic(
            lint=lints.REDUNDANT_ALLOCATION,
            span=ty.span,
            message=f"usage of `{outer}<{SHORT_NAMES[arg_identity]}<T>>`",
            help="try",
            suggestion=f"{outer}<{snippet(inner)}>",
        )

    borrowed = _borrowed_parameter(ty)
    if borrowed is None:
        return None
    return Diagnostic(
        lint=lints.REDUNDANT_ALLOCATION,
        span=ty.span,
        message=f"usage of `{outer}<&T>`",
        help="try",
        suggestion=snippet(borrowed),
    )


def check_rc_buffer(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity not in paths.SHARED_HANDLES:
        return None
    outer = SHORT_NAMES[identity]

    arg = ty.first_type_arg()
    arg_identity = cx.resolve_type(arg)
    if arg_identity in BUFFER_ALTERNATIVES:
        suggestion = f"{outer}<{BUFFER_ALTERNATIVES[arg_identity]}>"
    elif arg_identity == paths.VEC:
        element = arg.first_type_arg()
        if element is None:
            return None
        suggestion = f"{outer}<[{snippet(element)}]>"
    else:
        return None

    return Diagnostic(
        lint=lints.RC_BUFFER,
        span=ty.span,
        message=f"usage of `{outer}<T>` when T is a buffer type",
        help="try",
        suggestion=suggestion,
    )


def check_vec_box(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity != paths.VEC:
        return None
    boxed = _first_arg_with_identity(cx, ty, paths.BOX)
    if boxed is None:
        return None
    boxed_ty = boxed.first_type_arg()
    if boxed_ty is None:
        return None

    size = cx.estimated_stack_size(boxed_ty)
    if size is None or size >= cx.vec_box_size_threshold:
        return None
    return Diagnostic(
        lint=lints.VEC_BOX,
        span=ty.span,
        message="`Vec<T>` is already on the heap, the boxing is unnecessary",
        help="try",
        suggestion=f"Vec<{snippet(boxed_ty)}>",
    )


def check_option_option(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity != paths.OPTION:
        return None
    if _first_arg_with_identity(cx, ty, paths.OPTION) is None:
        return None
    return Diagnostic(
        lint=lints.OPTION_OPTION,
        span=ty.span,
        message=(
            "consider using `Option<T>` instead of `Option<Option<T>>` or a custom "
            "enum if you need to distinguish all 3 cases"
        ),
    )


def check_linked_list(cx: LintContext, ty: PathType, identity: str) -> Optional[Diagnostic]:
    if identity != paths.LINKED_LIST:
        return None
    return Diagnostic(
        lint=lints.LINKEDLIST,
        span=ty.span,
        message="you seem to be using a `LinkedList`! Perhaps you meant some other data structure?",
        help="a `VecDeque` might work",
    )


# Priority order; the first detector to return a diagnostic wins.
DETECTORS: Tuple[Detector, ...] = (
    check_box_vec,
    check_redundant_allocation,
    check_rc_buffer,
    check_vec_box,
    check_option_option,
    check_linked_list,
)


def _is_any_trait(ty: TypeExpr) -> bool:
    # Only auto traits may follow the principal trait, so the first bound decides.
    if not isinstance(ty, TraitObjectType) or not ty.bounds:
        return False
    names = ty.bounds[0].path.names
    return names[-1] == "Any" and (len(names) == 1 or names[-2] == "any")


def _needs_parens(ty: TypeExpr) -> bool:
    if isinstance(ty, TraitObjectType):
        return len(ty.bounds) > 1 or ty.lifetime_bound is not None
    if isinstance(ty, ImplTraitType):
        return len(ty.bounds) > 1
    return False


def check_borrowed_box(cx: LintContext, ty: RefType) -> Optional[Diagnostic]:
    """``&Box<T>`` where ``&T`` would do. Run by the walker on reference nodes."""
    boxed = ty.pointee
    if not isinstance(boxed, PathType) or boxed.qself is not None or len(boxed.segments) != 1:
        return None
    if cx.resolve(boxed) != paths.BOX:
        return None
    args = boxed.last_segment.args
    if args is None or args.parenthesized:
        return None
    inner = next(args.types(), None)
    if inner is None:
        return None

    # `&Box<dyn Any>` and `&mut Box<T>` are left alone.
    if _is_any_trait(inner) or ty.mutable:
        return None

    lifetime = f"{ty.lifetime} " if ty.lifetime and ty.lifetime != "'_" else ""
    inner_text = snippet(inner)
    if _needs_parens(inner):
        suggestion = f"&{lifetime}({inner_text})"
    else:
        suggestion = f"&{lifetime}{inner_text}"
    return Diagnostic(
        lint=lints.BORROWED_BOX,
        span=ty.span,
        message="you seem to be trying to use `&Box<T>`. Consider using just `&T`",
        help="try",
        suggestion=suggestion,
    )
