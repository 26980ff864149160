"""Runtime test double (stub and mock object) generator."""

from .api import (  # noqa: F401
    create_mock,
    create_mock_for_intersection,
    create_stub,
    create_stub_for_intersection,
    dump_double_source,
)
from .control import MockObject, Stub  # noqa: F401
from .double_types import GeneratorConfig  # noqa: F401
from .generator import DoubleGenerator  # noqa: F401
