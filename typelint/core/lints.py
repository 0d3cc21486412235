"""
Catalogue of the lints reported by typelint.

Each lint carries the group it belongs to (``perf``, ``complexity``,
``pedantic``, ``restriction``), a short title and the remediation text shown
next to every finding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Lint:
    rule_id: str
    group: str
    title: str
    description: str
    remediation: str
    reference: str = "https://doc.rust-lang.org/std/boxed/index.html"


BOX_VEC = Lint(
    rule_id="BOX_VEC",
    group="perf",
    title="usage of `Box<Vec<T>>`",
    description="usage of `Box<Vec<T>>`, vector elements are already on the heap",
    remediation=(
        "`Vec` already keeps its contents in a separate area on the heap. "
        "Boxing it adds another level of indirection without any benefit."
    ),
)

VEC_BOX = Lint(
    rule_id="VEC_BOX",
    group="complexity",
    title="usage of `Vec<Box<T>>`",
    description="usage of `Vec<Box<T>>` where T: Sized, vector elements are already on the heap",
    remediation=(
        "Store the elements directly. Boxing only pays off for large elements, "
        "see the `vec_box_size_threshold` setting."
    ),
)

OPTION_OPTION = Lint(
    rule_id="OPTION_OPTION",
    group="pedantic",
    title="usage of `Option<Option<T>>`",
    description="usage of `Option<Option<T>>`",
    remediation=(
        "If `Some(Some(_))`, `Some(None)` and `None` are distinct cases, "
        "use a custom enum with clear names for each case."
    ),
    reference="https://doc.rust-lang.org/std/option/index.html",
)

LINKEDLIST = Lint(
    rule_id="LINKEDLIST",
    group="pedantic",
    title="usage of `LinkedList`",
    description=(
        "usage of LinkedList, usually a vector is faster, or a more specialized "
        "data structure like a `VecDeque`"
    ),
    remediation=(
        "A `LinkedList` is built on a massive amount of pointers and indirection, "
        "with poor cache locality. Prefer `Vec` or `VecDeque`."
    ),
    reference="https://doc.rust-lang.org/std/collections/struct.LinkedList.html",
)

BORROWED_BOX = Lint(
    rule_id="BORROWED_BOX",
    group="complexity",
    title="a borrow of a boxed type",
    description="a borrow of a boxed type",
    remediation="Any `&Box<T>` can also be a `&T`, which is more general.",
)

REDUNDANT_ALLOCATION = Lint(
    rule_id="REDUNDANT_ALLOCATION",
    group="perf",
    title="redundant allocation",
    description="redundant allocation",
    remediation=(
        "Types such as `Rc<&T>`, `Rc<Rc<T>>`, `Rc<Box<T>>` and `Box<&T>` add "
        "an unnecessary level of indirection."
    ),
    reference="https://doc.rust-lang.org/std/rc/index.html",
)

RC_BUFFER = Lint(
    rule_id="RC_BUFFER",
    group="restriction",
    title="shared ownership of a buffer type",
    description="shared ownership of a buffer type",
    remediation=(
        "`Rc<String>` has no advantage over `Rc<str>`: it is larger and adds an "
        "extra indirection. Wrap the buffer in `RefCell` or `Mutex` if it must "
        "be mutated through the shared handle."
    ),
    reference="https://doc.rust-lang.org/std/rc/index.html",
)

TYPE_COMPLEXITY = Lint(
    rule_id="TYPE_COMPLEXITY",
    group="complexity",
    title="very complex type",
    description="usage of very complex types that might be better factored into `type` definitions",
    remediation="Factor parts of the type into `type` aliases.",
    reference="https://doc.rust-lang.org/reference/items/type-aliases.html",
)

ALL_LINTS: Tuple[Lint, ...] = (
    BOX_VEC,
    REDUNDANT_ALLOCATION,
    RC_BUFFER,
    VEC_BOX,
    OPTION_OPTION,
    LINKEDLIST,
    BORROWED_BOX,
    TYPE_COMPLEXITY,
)

LINTS_BY_ID: Dict[str, Lint] = {lint.rule_id: lint for lint in ALL_LINTS}
