"""
Tests for the individual pattern detectors.
"""

from typelint.analysis import detectors
from typelint.core import build as b
from typelint.core import lints, paths


def T():
    return b.path("T")


class TestBoxVec:
    def test_box_of_vec(self, cx):
        ty = b.path("Box", b.path("Vec", b.path("u8")))
        diagnostic = detectors.check_box_vec(cx, ty, paths.BOX)
        assert diagnostic.lint is lints.BOX_VEC
        assert diagnostic.suggestion == "Vec<u8>"

    def test_box_of_other(self, cx):
        ty = b.path("Box", b.path("u8"))
        assert detectors.check_box_vec(cx, ty, paths.BOX) is None


class TestRedundantAllocation:
    def test_box_of_reference(self, cx):
        ty = b.path("Box", b.ref(T()))
        diagnostic = detectors.check_redundant_allocation(cx, ty, paths.BOX)
        assert diagnostic.message == "usage of `Box<&T>`"
        assert diagnostic.suggestion == "&T"

    def test_rc_of_box(self, cx):
        ty = b.path("std::rc::Rc", b.path("Box", T()))
        diagnostic = detectors.check_redundant_allocation(cx, ty, paths.RC)
        assert diagnostic.message == "usage of `Rc<Box<T>>`"
        assert diagnostic.suggestion == "Rc<T>"

    def test_arc_of_rc(self, cx):
        ty = b.path("std::sync::Arc", b.path("std::rc::Rc", T()))
        diagnostic = detectors.check_redundant_allocation(cx, ty, paths.ARC)
        assert diagnostic.message == "usage of `Arc<Rc<T>>`"
        assert diagnostic.suggestion == "Arc<T>"

    def test_rc_of_reference(self, cx):
        ty = b.path("std::rc::Rc", b.ref(T(), lifetime="'a"))
        diagnostic = detectors.check_redundant_allocation(cx, ty, paths.RC)
        assert diagnostic.message == "usage of `Rc<&T>`"
        assert diagnostic.suggestion == "&'a T"

    def test_inner_handle_without_arguments(self, cx):
        ty = b.path("std::rc::Rc", b.path("Box"))
        assert detectors.check_redundant_allocation(cx, ty, paths.RC) is None

    def test_rc_of_plain_type(self, cx):
        ty = b.path("std::rc::Rc", T())
        assert detectors.check_redundant_allocation(cx, ty, paths.RC) is None


class TestRcBuffer:
    def test_rc_of_string(self, cx):
        ty = b.path("std::rc::Rc", b.path("String"))
        diagnostic = detectors.check_rc_buffer(cx, ty, paths.RC)
        assert diagnostic.lint is lints.RC_BUFFER
        assert diagnostic.suggestion == "Rc<str>"

    def test_arc_of_vec(self, cx):
        ty = b.path("std::sync::Arc", b.path("Vec", b.path("u8")))
        diagnostic = detectors.check_rc_buffer(cx, ty, paths.ARC)
        assert diagnostic.suggestion == "Arc<[u8]>"

    def test_rc_of_path_buf(self, cx):
        ty = b.path("std::rc::Rc", b.path("std::path::PathBuf"))
        diagnostic = detectors.check_rc_buffer(cx, ty, paths.RC)
        assert diagnostic.suggestion == "Rc<std::path::Path>"

    def test_box_of_string_is_not_shared(self, cx):
        ty = b.path("Box", b.path("String"))
        assert detectors.check_rc_buffer(cx, ty, paths.BOX) is None


class TestVecBox:
    def test_fires_below_threshold(self, make_context):
        cx = make_context(sizes={"Big": 4095}, threshold=4096)
        ty = b.path("Vec", b.path("Box", b.path("Big")))
        diagnostic = detectors.check_vec_box(cx, ty, paths.VEC)
        assert diagnostic.lint is lints.VEC_BOX
        assert diagnostic.suggestion == "Vec<Big>"

    def test_silent_at_threshold(self, make_context):
        cx = make_context(sizes={"Big": 4096}, threshold=4096)
        ty = b.path("Vec", b.path("Box", b.path("Big")))
        assert detectors.check_vec_box(cx, ty, paths.VEC) is None

    def test_silent_when_size_unknown(self, cx):
        ty = b.path("Vec", b.path("Box", b.path("Big")))
        assert detectors.check_vec_box(cx, ty, paths.VEC) is None


class TestOptionOption:
    def test_nested_option(self, cx):
        ty = b.path("Option", b.path("Option", b.path("u8")))
        assert detectors.check_option_option(cx, ty, paths.OPTION).lint is lints.OPTION_OPTION

    def test_single_option(self, cx):
        ty = b.path("Option", b.path("u8"))
        assert detectors.check_option_option(cx, ty, paths.OPTION) is None


class TestLinkedList:
    def test_any_linked_list(self, cx):
        ty = b.path("std::collections::LinkedList", b.path("i32"))
        diagnostic = detectors.check_linked_list(cx, ty, paths.LINKED_LIST)
        assert diagnostic.help == "a `VecDeque` might work"


class TestBorrowedBox:
    def test_borrowed_box(self, cx):
        diagnostic = detectors.check_borrowed_box(cx, b.ref(b.path("Box", b.path("u8"))))
        assert diagnostic.lint is lints.BORROWED_BOX
        assert diagnostic.suggestion == "&u8"

    def test_keeps_named_lifetime(self, cx):
        diagnostic = detectors.check_borrowed_box(cx, b.ref(b.path("Box", T()), lifetime="'a"))
        assert diagnostic.suggestion == "&'a T"

    def test_drops_anonymous_lifetime(self, cx):
        diagnostic = detectors.check_borrowed_box(cx, b.ref(b.path("Box", T()), lifetime="'_"))
        assert diagnostic.suggestion == "&T"

    def test_parenthesizes_multiple_bounds(self, cx):
        boxed = b.path("Box", b.dyn("Trait", "Send"))
        diagnostic = detectors.check_borrowed_box(cx, b.ref(boxed))
        assert diagnostic.suggestion == "&(dyn Trait + Send)"

    def test_mutable_borrow_is_ignored(self, cx):
        assert detectors.check_borrowed_box(cx, b.ref(b.path("Box", T()), mutable=True)) is None

    def test_box_of_any_is_ignored(self, cx):
        assert detectors.check_borrowed_box(cx, b.ref(b.path("Box", b.dyn("Any")))) is None
        assert detectors.check_borrowed_box(cx, b.ref(b.path("Box", b.dyn("std::any::Any")))) is None

    def test_qualified_box_path_is_ignored(self, cx):
        assert detectors.check_borrowed_box(cx, b.ref(b.path("std::boxed::Box", T()))) is None
