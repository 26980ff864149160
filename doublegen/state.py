"""Per-instance control-plane state attached to every double."""

from __future__ import annotations

from dataclasses import dataclass, field

from .double_types import ConfigurableMethod
from .invocation import InvocationHandler


@dataclass
class DoubleState:
    configurable_methods: tuple[ConfigurableMethod, ...]
    generate_return_values: bool = True
    _handler: InvocationHandler | None = field(default=None, repr=False)

    def invocation_handler(self) -> InvocationHandler:
        if self._handler is None:
            self._handler = InvocationHandler(
                self.configurable_methods, self.generate_return_values
            )
        return self._handler

    def clone(self) -> DoubleState:
        """Independent state: stubs are copied, recorded invocations are not."""
        clone = DoubleState(self.configurable_methods, self.generate_return_values)
        if self._handler is not None:
            clone._handler = self._handler.clone()
        return clone
