"""Control-plane mixins and marker classes mixed into every generated double.

Generated classes list these ahead of the doubled type among their bases, so
the accessors here are found before anything the doubled type declares.
State lives in the instance ``__dict__`` under ``STATE_ATTRIBUTE`` and is
read and written with the ``object`` primitives so that ``__getattr__`` /
``__setattr__`` overrides on the doubled type (frozen dataclasses included)
do not interfere.
"""

from __future__ import annotations

import logging
from typing import Any

from . import constants
from .exceptions import CannotCloneReadonlyDoubleError, DoubleRuntimeError
from .invocation import Invocation, InvocationHandler, MethodStub
from .reflection import copy_instance
from .state import DoubleState

logger = logging.getLogger(__name__)


# ── Marker classes ───────────────────────────────────────────────


class Stub:
    """Every generated double is a Stub."""


class MockObject(Stub):
    """Doubles generated as mock objects additionally verify expectations."""


class StubInternal(Stub):
    pass


class MockObjectInternal(MockObject, StubInternal):
    pass


# ── State access ─────────────────────────────────────────────────


class StubApi:
    """State accessors for doubles whose state is attached exactly once."""

    def _test_double_state(self) -> DoubleState:
        try:
            return object.__getattribute__(self, constants.STATE_ATTRIBUTE)
        except AttributeError as e:
            raise DoubleRuntimeError(
                f"No control-plane state is attached to {type(self).__name__}"
            ) from e

    def _test_double_attach_state(self, state: DoubleState) -> None:
        if constants.STATE_ATTRIBUTE in vars(self):
            raise DoubleRuntimeError(
                f"Control-plane state of {type(self).__name__} is already attached"
            )
        object.__setattr__(self, constants.STATE_ATTRIBUTE, state)

    def _test_double_invocation_handler(self) -> InvocationHandler:
        return self._test_double_state().invocation_handler()

    def _test_double_generated_as_mock_object(self) -> bool:
        return bool(type(self).__test_double_mock_object__)


class MutableStubApi(StubApi):
    def _test_double_attach_state(self, state: DoubleState) -> None:
        object.__setattr__(self, constants.STATE_ATTRIBUTE, state)


class MockObjectApi:
    def expects(self, name: str) -> MethodStub:
        return self._test_double_invocation_handler().expects(name)

    def _test_double_invocations(self, name: str | None = None) -> list[Invocation]:
        return self._test_double_invocation_handler().invocations(name)

    def _test_double_verify(self) -> None:
        self._test_double_invocation_handler().verify()


class Method:
    def method(self, name: str) -> MethodStub:
        return self._test_double_invocation_handler().configure(name)


# ── Clone policies ───────────────────────────────────────────────


class DoubledCloneMethod:
    def __copy__(self) -> Any:
        clone = copy_instance(self)
        clone._test_double_attach_state(self._test_double_state().clone())
        return clone


class ProxiedCloneMethod:
    def __copy__(self) -> Any:
        clone = super().__copy__()
        clone._test_double_attach_state(self._test_double_state().clone())
        logger.debug("Cloned %s through the original __copy__", type(self).__name__)
        return clone


class ErrorCloneMethod:
    def __copy__(self) -> Any:
        raise CannotCloneReadonlyDoubleError(type(self).__name__)
