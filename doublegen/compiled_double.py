"""CompiledDouble — rendered source plus the metadata the control plane consumes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from . import runtime
from .double_types import ConfigurableMethod


class CompiledDouble(BaseModel):
    model_config = ConfigDict(frozen=True)

    class_code: str
    class_name: str
    configurable_methods: tuple[ConfigurableMethod, ...] = ()

    def generate(self) -> type:
        """Define the class in the generated namespace unless it already exists."""
        if runtime.lookup(self.class_name) is None:
            runtime.define_class(self.class_code, self.class_name)
        return runtime.get_class(self.class_name)
