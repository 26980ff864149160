"""Invocation recording and per-method stubbing for test doubles."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .double_types import ConfigurableMethod
from .exceptions import (
    ExpectationFailedError,
    MethodCannotBeConfiguredError,
    ReturnValueNotConfiguredError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Invocation:
    """One call made on a double."""

    class_name: str
    method_name: str
    parameters: tuple = ()
    keywords: dict[str, Any] = field(default_factory=dict)
    obj: Any = field(default=None, repr=False, compare=False)


class MethodStub:
    """Configured behavior for one doubled method.

    Each ``will_*`` call replaces whatever was configured before. The last
    configuration is remembered so that a copy starts from the same setup
    rather than sharing progress through consecutive return values.
    """

    def __init__(self, method: ConfigurableMethod):
        self.method = method
        self.expected = False
        self._behavior: Callable[[Invocation], Any] | None = None
        self._configuration: tuple[str, tuple] | None = None

    @property
    def configured(self) -> bool:
        return self._behavior is not None

    def will_return(self, *values: Any) -> MethodStub:
        """Return *values* on consecutive calls, then ``None`` once exhausted."""
        remaining = iter(values)
        return self._configure(
            "will_return", values, lambda invocation: next(remaining, None)
        )

    def will_return_callback(self, callback: Callable[..., Any]) -> MethodStub:
        return self._configure(
            "will_return_callback",
            (callback,),
            lambda invocation: callback(*invocation.parameters, **invocation.keywords),
        )

    def will_return_argument(self, index: int) -> MethodStub:
        return self._configure(
            "will_return_argument",
            (index,),
            lambda invocation: invocation.parameters[index],
        )

    def will_return_self(self) -> MethodStub:
        return self._configure(
            "will_return_self", (), lambda invocation: invocation.obj
        )

    def will_raise(self, exception: BaseException) -> MethodStub:
        def _raise(invocation: Invocation) -> Any:
            raise exception

        return self._configure("will_raise", (exception,), _raise)

    def respond(self, invocation: Invocation) -> Any:
        return self._behavior(invocation)

    def copy(self) -> MethodStub:
        clone = MethodStub(self.method)
        clone.expected = self.expected
        if self._configuration is not None:
            name, arguments = self._configuration
            getattr(clone, name)(*arguments)
        return clone

    def _configure(
        self, name: str, arguments: tuple, behavior: Callable[[Invocation], Any]
    ) -> MethodStub:
        self._configuration = (name, arguments)
        self._behavior = behavior
        return self


class InvocationHandler:
    """Dispatches calls made on one double to its configured stubs."""

    def __init__(
        self,
        configurable_methods: tuple[ConfigurableMethod, ...],
        generate_return_values: bool,
        return_value_generator: Any = None,
    ):
        self._methods = {m.name: m for m in configurable_methods}
        self._generate_return_values = generate_return_values
        self._stubs: dict[str, MethodStub] = {}
        self._invocations: list[Invocation] = []
        if return_value_generator is None:
            from .return_values import ReturnValueGenerator

            return_value_generator = ReturnValueGenerator()
        self._return_value_generator = return_value_generator

    def configure(self, name: str) -> MethodStub:
        method = self._methods.get(name)
        if method is None:
            raise MethodCannotBeConfiguredError(name)
        stub = self._stubs.get(name)
        if stub is None:
            stub = self._stubs[name] = MethodStub(method)
        return stub

    def expects(self, name: str) -> MethodStub:
        stub = self.configure(name)
        stub.expected = True
        return stub

    def invoke(self, invocation: Invocation) -> Any:
        self._invocations.append(invocation)
        stub = self._stubs.get(invocation.method_name)
        if stub is not None and stub.configured:
            return stub.respond(invocation)
        if not self._generate_return_values:
            raise ReturnValueNotConfiguredError(
                invocation.class_name, invocation.method_name
            )
        method = self._methods.get(invocation.method_name)
        return_type = method.return_type if method is not None else None
        return self._return_value_generator.generate(invocation, return_type)

    def invocations(self, name: str | None = None) -> list[Invocation]:
        return [
            i for i in self._invocations if name is None or i.method_name == name
        ]

    def verify(self) -> None:
        invoked = {i.method_name for i in self._invocations}
        missing = sorted(
            name
            for name, stub in self._stubs.items()
            if stub.expected and name not in invoked
        )
        if missing:
            raise ExpectationFailedError(
                "Expected methods were never invoked: "
                + ", ".join(f"{name}()" for name in missing)
            )

    def clone(self) -> InvocationHandler:
        clone = InvocationHandler(
            tuple(self._methods.values()),
            self._generate_return_values,
            self._return_value_generator,
        )
        clone._stubs = {name: stub.copy() for name, stub in self._stubs.items()}
        return clone
