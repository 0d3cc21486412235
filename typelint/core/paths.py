"""
Identities of the standard library types the detectors look for.

An identity is the canonical definition path of an item. Every spelling
that names the same item (prelude name, ``std::`` re-export, ``alloc::`` or
``core::`` definition) maps to a single identity.
"""

from typing import Dict, Tuple

BOX = "alloc::boxed::Box"
VEC = "alloc::vec::Vec"
RC = "alloc::rc::Rc"
ARC = "alloc::sync::Arc"
LINKED_LIST = "alloc::collections::linked_list::LinkedList"
OPTION = "core::option::Option"
STRING = "alloc::string::String"
OS_STRING = "std::ffi::os_str::OsString"
PATH_BUF = "std::path::PathBuf"
VEC_DEQUE = "alloc::collections::vec_deque::VecDeque"
ANY = "core::any::Any"

SHARED_HANDLES = (RC, ARC)

# Names usable without an import.
PRELUDE: Dict[str, str] = {
    "Box": BOX,
    "Vec": VEC,
    "Option": OPTION,
    "String": STRING,
}

KNOWN_PATHS: Dict[Tuple[str, ...], str] = {}


def _register(identity: str, *spellings: str) -> None:
    for spelling in spellings:
        KNOWN_PATHS[tuple(spelling.split("::"))] = identity


_register(BOX, "std::boxed::Box", "alloc::boxed::Box")
_register(VEC, "std::vec::Vec", "alloc::vec::Vec")
_register(RC, "std::rc::Rc", "alloc::rc::Rc")
_register(ARC, "std::sync::Arc", "alloc::sync::Arc")
_register(
    LINKED_LIST,
    "std::collections::LinkedList",
    "std::collections::linked_list::LinkedList",
    "alloc::collections::LinkedList",
    "alloc::collections::linked_list::LinkedList",
)
_register(
    VEC_DEQUE,
    "std::collections::VecDeque",
    "std::collections::vec_deque::VecDeque",
    "alloc::collections::VecDeque",
    "alloc::collections::vec_deque::VecDeque",
)
_register(OPTION, "std::option::Option", "core::option::Option")
_register(STRING, "std::string::String", "alloc::string::String")
_register(OS_STRING, "std::ffi::OsString", "std::ffi::os_str::OsString")
_register(PATH_BUF, "std::path::PathBuf")
_register(ANY, "std::any::Any", "core::any::Any")
