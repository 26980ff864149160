"""Class table — the hosting runtime's view of which types exist.

Type names are dotted paths (``package.module.Outer.Inner``). Unqualified
names live in the generated namespace module (or are builtins). Classes that
cannot be reached by import, such as classes defined inside functions or
placeholders fabricated for unknown names, are declared explicitly.
"""

from __future__ import annotations

import builtins
import importlib
import inspect
import linecache
import logging
import threading
import typing
from typing import Any

from . import constants
from .exceptions import ReflectionError, UnknownTypeError
from .reflection import ReflectedClass, is_interface, qualified_name

logger = logging.getLogger(__name__)

_DECLARED: dict[str, type] = {}
_LOCK = threading.RLock()
_MISSING = object()


def generated_namespace() -> dict[str, Any]:
    return vars(importlib.import_module(constants.GENERATED_MODULE))


def _import_dotted(name: str) -> Any:
    parts = name.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj: Any = importlib.import_module(module_name)
        except ModuleNotFoundError:
            continue
        for attr in parts[split:]:
            obj = getattr(obj, attr, _MISSING)
            if obj is _MISSING:
                return None
        return obj
    return None


def lookup(name: str) -> Any:
    """Return whatever *name* denotes, or ``None`` when nothing is declared under it."""
    name = name.lstrip(".")
    if not name:
        return None
    with _LOCK:
        declared = _DECLARED.get(name)
    if declared is not None:
        return declared
    if "." not in name:
        namespace = generated_namespace()
        if name in namespace:
            return namespace[name]
        return getattr(builtins, name, None)
    return _import_dotted(name)


def declare(name: str, cls: type) -> type:
    with _LOCK:
        _DECLARED[name.lstrip(".")] = cls
    logger.debug("Declared %s", name)
    return cls


def type_name(type_: Any) -> str:
    """Normalise a class object or dotted name to the name the class table knows it by."""
    if isinstance(type_, str):
        return type_.lstrip(".")
    origin = typing.get_origin(type_)
    if inspect.isclass(origin):
        type_ = origin
    if not inspect.isclass(type_):
        raise UnknownTypeError(repr(type_))
    name = qualified_name(type_)
    if lookup(name) is not type_:
        declare(name, type_)
    return name


def class_exists(name: str) -> bool:
    obj = lookup(name)
    return inspect.isclass(obj) and not is_interface(obj)


def interface_exists(name: str) -> bool:
    return is_interface(lookup(name))


def name_in_use(name: str) -> bool:
    return lookup(name) is not None


def get_class(name: str) -> type:
    obj = lookup(name)
    if not inspect.isclass(obj):
        raise ReflectionError(f'Class "{name}" does not exist')
    return obj


def reflect_class(name: str) -> ReflectedClass:
    return ReflectedClass(get_class(name))


def define_class(source: str, class_name: str) -> type:
    """Compile *source* into the generated namespace and return *class_name* from it."""
    filename = f"<doublegen {class_name}>"
    code = compile(source, filename, "exec")
    linecache.cache[filename] = (len(source), None, source.splitlines(True), filename)
    namespace = generated_namespace()
    with _LOCK:
        exec(code, namespace)
    logger.info("Defined test double class %s", class_name)
    return namespace[class_name]


# ── Helpers bound into the generated namespace ───────────────────


def resolve_type(name: str) -> type:
    return get_class(name)


def resolve_default(type_name: str, method_name: str, parameter_name: str) -> Any:
    method = reflect_class(type_name).get_method(method_name)
    return method.signature().parameters[parameter_name].default
