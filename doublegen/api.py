"""Composable API functions for creating test doubles.

Each function is a thin wrapper over a module-level default
:class:`DoubleGenerator`, so callers need not construct one themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from .generator import DoubleGenerator

logger = logging.getLogger(__name__)

_DEFAULT_GENERATOR: DoubleGenerator | None = None


def default_generator() -> DoubleGenerator:
    global _DEFAULT_GENERATOR
    if _DEFAULT_GENERATOR is None:
        _DEFAULT_GENERATOR = DoubleGenerator()
    return _DEFAULT_GENERATOR


def create_stub(
    type_: Any,
    methods: Sequence[str] = (),
    return_value_generation: bool = True,
) -> Any:
    """Create a stub of *type_* without running its constructor.

    Args:
        type_: Class object or dotted name of the class or interface to stub.
        methods: Methods to double; empty doubles every eligible method.
        return_value_generation: Derive return values for unconfigured calls.

    Returns:
        The stub instance.
    """
    return default_generator().create_test_double(
        type_,
        False,
        methods,
        call_original_constructor=False,
        call_original_clone=False,
        return_value_generation=return_value_generation,
    )


def create_mock(
    type_: Any,
    methods: Sequence[str] = (),
    arguments: Sequence[Any] = (),
    call_original_constructor: bool = False,
) -> Any:
    """Create a mock object of *type_*.

    Args:
        type_: Class object or dotted name of the class or interface to mock.
        methods: Methods to double; empty doubles every eligible method.
        arguments: Constructor arguments, used when the constructor runs.
        call_original_constructor: Run the mocked type's ``__init__``.

    Returns:
        The mock object.
    """
    return default_generator().create_test_double(
        type_,
        True,
        methods,
        arguments,
        call_original_constructor=call_original_constructor,
        call_original_clone=False,
    )


def create_stub_for_intersection(interfaces: Sequence[Any]) -> Any:
    return default_generator().create_test_double_for_interface_intersection(
        interfaces, False
    )


def create_mock_for_intersection(interfaces: Sequence[Any]) -> Any:
    return default_generator().create_test_double_for_interface_intersection(
        interfaces, True
    )


def dump_double_source(
    type_: Any,
    mock_object: bool = True,
    methods: Sequence[str] | None = (),
    class_name: str = "",
    call_original_clone: bool = True,
) -> str:
    """Return the Python source generated for a double of *type_*.

    The class is synthesized (and cached) but not defined, so the source can
    be inspected before anything runs.
    """
    logger.info("Dumping double source for %s", type_)
    compiled = default_generator().generate(
        type_,
        mock_object,
        list(methods) if methods is not None else None,
        class_name,
        call_original_clone,
    )
    return compiled.class_code
