"""Test double data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from . import constants


class MethodKind(str, Enum):
    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"


@dataclass(frozen=True)
class GeneratorConfig:
    """Groups naming configuration for synthesized classes."""

    mock_prefix: str = constants.MOCK_CLASS_PREFIX
    stub_prefix: str = constants.STUB_CLASS_PREFIX
    intersection_prefix: str = constants.INTERSECTION_PREFIX
    suffix_length: int = constants.RANDOM_SUFFIX_LENGTH

    def prefix_for(self, mock_object: bool) -> str:
        return self.mock_prefix if mock_object else self.stub_prefix


class ClassNameInfo(BaseModel):
    """Names derived once per synthesis call."""

    model_config = ConfigDict(frozen=True)

    class_name: str
    original_class_name: str
    full_class_name: str
    namespace_name: str = ""


class ConfigurableMethod(BaseModel):
    """What the control plane needs to know about one doubled method."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    default_parameter_values: dict[int, Any] = {}
    number_of_parameters: int = 0
    return_type: Any = None
