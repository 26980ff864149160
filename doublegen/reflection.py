"""Reflection primitives — class and method introspection over ``inspect``."""

from __future__ import annotations

import enum
import inspect
import logging
import types
import typing
from dataclasses import dataclass, is_dataclass
from typing import Any

from . import constants
from .double_types import MethodKind
from .exceptions import ReflectionError

logger = logging.getLogger(__name__)

# Py_TPFLAGS_BASETYPE: the type may be used as a base class.
_TPFLAGS_BASETYPE = 1 << 10

# Members contributed by these owners are runtime machinery, never doubled.
_SKIPPED_OWNERS: tuple[type, ...] = (object, typing.Generic, typing.Protocol)


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_method_attribute(raw: Any) -> bool:
    if isinstance(raw, (staticmethod, classmethod)):
        return True
    if inspect.isroutine(raw):
        return True
    return callable(raw) and hasattr(raw, "__wrapped__") and not inspect.isclass(raw)


@dataclass(frozen=True)
class ReflectedMethod:
    """One method as found in the ``__dict__`` of its declaring class."""

    name: str
    owner: type
    raw: Any

    @property
    def function(self) -> Any:
        if isinstance(self.raw, (staticmethod, classmethod)):
            return self.raw.__func__
        return self.raw

    @property
    def kind(self) -> MethodKind:
        if isinstance(self.raw, staticmethod):
            return MethodKind.STATIC
        if isinstance(self.raw, (classmethod, types.ClassMethodDescriptorType)):
            return MethodKind.CLASS
        return MethodKind.INSTANCE

    @property
    def is_static(self) -> bool:
        return self.kind is not MethodKind.INSTANCE

    @property
    def is_constructor(self) -> bool:
        return self.name in constants.CONSTRUCTOR_NAMES

    @property
    def is_destructor(self) -> bool:
        return self.name == constants.DESTRUCTOR_NAME

    @property
    def is_final(self) -> bool:
        return bool(getattr(self.function, "__final__", False))

    @property
    def is_abstract(self) -> bool:
        return bool(
            getattr(self.raw, "__isabstractmethod__", False)
            or getattr(self.function, "__isabstractmethod__", False)
        )

    @property
    def is_private(self) -> bool:
        mangled_prefix = f"_{self.owner.__name__.lstrip('_')}__"
        return self.name.startswith(mangled_prefix) and not self.name.endswith("__")

    @property
    def is_dunder(self) -> bool:
        return self.name.startswith("__") and self.name.endswith("__")

    @property
    def is_public(self) -> bool:
        if self.is_dunder:
            return True
        return not self.name.startswith("_")

    @property
    def is_protected(self) -> bool:
        return not self.is_public and not self.is_private

    @property
    def is_user_defined(self) -> bool:
        return inspect.isfunction(inspect.unwrap(self.function))

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.function)

    def signature(self) -> inspect.Signature:
        try:
            return inspect.signature(self.function)
        except (TypeError, ValueError) as e:
            raise ReflectionError(
                f"Cannot inspect signature of {qualified_name(self.owner)}.{self.name}: {e}"
            ) from e


class ReflectedClass:
    """Read-only view over a class, shaped after the questions a double generator asks."""

    def __init__(self, cls: Any):
        if not inspect.isclass(cls):
            raise ReflectionError(f"{cls!r} is not a class")
        self._cls = cls
        self._methods: dict[str, ReflectedMethod] | None = None

    @property
    def cls(self) -> type:
        return self._cls

    @property
    def name(self) -> str:
        return qualified_name(self._cls)

    @property
    def short_name(self) -> str:
        return self._cls.__name__

    @property
    def is_enum(self) -> bool:
        return issubclass(self._cls, enum.Enum)

    @property
    def is_final(self) -> bool:
        if getattr(self._cls, "__final__", False):
            return True
        return not self._cls.__flags__ & _TPFLAGS_BASETYPE

    @property
    def is_readonly(self) -> bool:
        if is_dataclass(self._cls):
            return bool(self._cls.__dataclass_params__.frozen)
        model_config = getattr(self._cls, "model_config", None)
        return isinstance(model_config, dict) and bool(model_config.get("frozen"))

    @property
    def is_interface(self) -> bool:
        return is_interface(self._cls)

    def implements(self, other: type) -> bool:
        return issubclass(self._cls, other)

    def get_methods(self) -> list[ReflectedMethod]:
        """Methods visible on the class, most-derived declaration first."""
        if self._methods is None:
            self._methods = _collect_methods(self._cls)
        return list(self._methods.values())

    def has_method(self, name: str) -> bool:
        self.get_methods()
        return name in self._methods

    def get_method(self, name: str) -> ReflectedMethod:
        if not self.has_method(name):
            raise ReflectionError(f"Method {self.name}.{name}() does not exist")
        return self._methods[name]


def _collect_methods(cls: type) -> dict[str, ReflectedMethod]:
    seen: set[str] = set()
    methods: dict[str, ReflectedMethod] = {}
    for klass in cls.__mro__:
        if klass in _SKIPPED_OWNERS:
            continue
        for name, raw in vars(klass).items():
            if name in seen:
                continue
            # A non-callable override (e.g. ``__hash__ = None``) hides the base method.
            seen.add(name)
            if _is_method_attribute(raw):
                methods[name] = ReflectedMethod(name=name, owner=klass, raw=raw)
    return methods


def is_interface(cls: Any) -> bool:
    """True for protocols and for abstract classes declaring nothing but abstract methods."""
    if not inspect.isclass(cls):
        return False
    if getattr(cls, "_is_protocol", False):
        return True
    if not inspect.isabstract(cls):
        return False
    declared = [
        m
        for m in _collect_methods(cls).values()
        if m.is_user_defined
        and not m.is_static
        and m.name not in constants.EXCLUDED_METHOD_NAMES
    ]
    return all(m.is_abstract for m in declared)


# ── Instantiation ────────────────────────────────────────────────


def allocate_instance(cls: type) -> Any:
    """Create an instance of *cls* without running any of its constructor logic.

    Python-level ``__new__`` overrides are skipped in favour of the first
    builtin allocator in the MRO, as ``copyreg`` does when unpickling.
    """
    for klass in cls.__mro__:
        new = vars(klass).get("__new__")
        if new is None:
            continue
        if isinstance(new, staticmethod):
            new = new.__func__
        if not inspect.isfunction(new):
            return new(cls)
    return object.__new__(cls)


def construct_instance(cls: type, arguments: tuple = ()) -> Any:
    """Run ``__new__`` with *arguments* but leave ``__init__`` to the caller."""
    if cls.__new__ is object.__new__:
        return object.__new__(cls)
    return cls.__new__(cls, *arguments)


def copy_instance(obj: Any) -> Any:
    """Shallow copy that bypasses any ``__copy__`` defined on the object's class."""
    clone = allocate_instance(type(obj))
    for key, value in vars(obj).items():
        object.__setattr__(clone, key, value)
    if isinstance(obj, BaseException):
        clone.args = obj.args
    return clone
