"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

GENERATED_MODULE = "doublegen.generated"

MOCK_CLASS_PREFIX = "MockObject_"
STUB_CLASS_PREFIX = "TestStub_"
INTERSECTION_PREFIX = "Intersection_"
RANDOM_SUFFIX_LENGTH = 8

# Accessor mixed into every double; a doubled method may not shadow it.
RESERVED_METHOD_NAME = "method"

STATE_ATTRIBUTE = "__test_double_state__"

CONSTRUCTOR_NAMES: frozenset[str] = frozenset({"__init__", "__new__"})
DESTRUCTOR_NAME = "__del__"
CLONE_METHOD_NAME = "__copy__"
ITER_METHOD_NAME = "__iter__"
NEXT_METHOD_NAME = "__next__"

EXCLUDED_METHOD_NAMES: frozenset[str] = frozenset(
    {
        # clone hooks
        "__copy__",
        "__deepcopy__",
        # interpreter intrinsics
        "__class__",
        "__getattribute__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__set_name__",
        "__instancecheck__",
        "__subclasscheck__",
        "__prepare__",
        "__post_init__",
        # pickling
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__getnewargs__",
        "__getnewargs_ex__",
        "__sizeof__",
        # identity hooks the double itself relies on
        "__repr__",
        "__hash__",
        "__eq__",
        "__ne__",
    }
)

BASE_EXCEPTION_TYPE = "builtins.Exception"
TRAVERSABLE_TYPE = "collections.abc.Iterable"
ITERATOR_TYPE = "collections.abc.Iterator"

# Control-plane mixins and marker classes referenced from generated source.
STUB_API = "doublegen.control.StubApi"
MUTABLE_STUB_API = "doublegen.control.MutableStubApi"
MOCK_OBJECT_API = "doublegen.control.MockObjectApi"
METHOD_API = "doublegen.control.Method"
DOUBLED_CLONE_METHOD = "doublegen.control.DoubledCloneMethod"
PROXIED_CLONE_METHOD = "doublegen.control.ProxiedCloneMethod"
ERROR_CLONE_METHOD = "doublegen.control.ErrorCloneMethod"
STUB_INTERNAL = "doublegen.control.StubInternal"
MOCK_OBJECT_INTERNAL = "doublegen.control.MockObjectInternal"
PROTOCOL_TYPE = "typing.Protocol"
