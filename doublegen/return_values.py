"""Default return values for calls nobody configured."""

from __future__ import annotations

import collections.abc
import enum
import inspect
import logging
import types
import typing
from typing import Any

from . import constants
from .exceptions import DoubleError, ReturnValueGenerationError
from .invocation import Invocation

logger = logging.getLogger(__name__)

_ZERO_VALUES: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

_EMPTY_FACTORIES: dict[type, Any] = {
    bytearray: bytearray,
    list: list,
    dict: dict,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    object: object,
}

_UNION_ORIGINS = (typing.Union, types.UnionType)


class ReturnValueGenerator:
    """Derives a harmless value from a method's declared return type.

    Iterator doubles iterate as empty sequences: ``__iter__`` hands back the
    double itself and ``__next__`` raises ``StopIteration``.
    """

    def generate(self, invocation: Invocation, return_type: Any) -> Any:
        obj = invocation.obj
        if (
            invocation.method_name == constants.ITER_METHOD_NAME
            and isinstance(obj, collections.abc.Iterator)
        ):
            return obj
        if invocation.method_name == constants.NEXT_METHOD_NAME:
            raise StopIteration
        return self.for_type(return_type, obj)

    def for_type(self, return_type: Any, obj: Any = None) -> Any:
        if return_type is None or return_type is Any or return_type is type(None):
            return None
        if isinstance(return_type, (str, typing.ForwardRef, typing.TypeVar)):
            return None
        if return_type is typing.Self:
            return obj

        origin = typing.get_origin(return_type)
        args = typing.get_args(return_type)
        if origin in _UNION_ORIGINS:
            if type(None) in args:
                return None
            return self.for_type(args[0], obj)
        if origin is typing.Literal:
            return args[0]
        if origin is typing.Annotated:
            return self.for_type(args[0], obj)
        if origin is not None:
            return self.for_type(origin, obj)

        if not inspect.isclass(return_type):
            return None
        return self._for_class(return_type)

    def _for_class(self, cls: type) -> Any:
        if cls in _ZERO_VALUES:
            return _ZERO_VALUES[cls]
        if cls in _EMPTY_FACTORIES:
            return _EMPTY_FACTORIES[cls]()
        if cls is type:
            return None
        if issubclass(cls, enum.Enum):
            members = list(cls)
            return members[0] if members else None
        if cls.__module__ == collections.abc.__name__:
            if cls is collections.abc.Callable:
                return lambda *args, **kwargs: None
            if cls is collections.abc.Iterable or issubclass(
                cls, collections.abc.Iterator
            ):
                return iter(())
            for empty in (list, dict, set):
                if issubclass(empty, cls):
                    return empty()
        return self._stub(cls)

    def _stub(self, cls: type) -> Any:
        from .generator import DoubleGenerator

        logger.debug("Generating a stub of %s as return value", cls)
        try:
            return DoubleGenerator().create_test_double(
                cls, False, call_original_constructor=False
            )
        except DoubleError as e:
            raise ReturnValueGenerationError(
                f"Cannot generate a return value of type {cls.__qualname__}: {e}"
            ) from e
