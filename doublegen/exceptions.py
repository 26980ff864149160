"""Errors raised while generating, instantiating and driving test doubles."""

from __future__ import annotations

from typing import Any


class DoubleError(Exception):
    """Base class for every error raised by doublegen."""


# ── Generation errors ────────────────────────────────────────────


class UnknownTypeError(DoubleError):
    def __init__(self, type_name: str):
        super().__init__(f'Class or interface "{type_name}" does not exist')
        self.type_name = type_name


class ClassIsEnumerationError(DoubleError):
    def __init__(self, class_name: str):
        super().__init__(
            f'Class "{class_name}" is an enumeration and cannot be doubled'
        )
        self.class_name = class_name


class ClassIsFinalError(DoubleError):
    def __init__(self, class_name: str):
        super().__init__(f'Class "{class_name}" is declared "final" and cannot be doubled')
        self.class_name = class_name


class InvalidMethodNameError(DoubleError):
    def __init__(self, method: Any):
        super().__init__(f'Cannot double method with invalid name "{method}"')
        self.method = method


class DuplicateMethodError(DoubleError):
    def __init__(self, methods: list[str]):
        duplicates = sorted({m for m in methods if methods.count(m) > 1})
        super().__init__(
            "Cannot double using a method list that contains duplicates: "
            f"{', '.join(duplicates)}"
        )
        self.methods = methods


class NameAlreadyInUseError(DoubleError):
    def __init__(self, name: str):
        super().__init__(
            f'The name "{name}" is already in use by a class, interface or other declaration'
        )
        self.name = name


class MethodNamedMethodError(DoubleError):
    def __init__(self):
        super().__init__(
            'Doubling a method named "method" is not supported because it '
            "would shadow the configuration accessor of the test double"
        )


class ReflectionError(DoubleError):
    """Wraps failures raised by the underlying introspection primitives."""


class DoubleRuntimeError(DoubleError, RuntimeError):
    """Generic invariant violation while building a test double."""


# ── Control-plane errors ─────────────────────────────────────────


class BadMethodCallError(DoubleError):
    pass


class MethodCannotBeConfiguredError(DoubleError):
    def __init__(self, method_name: str):
        super().__init__(
            f'Trying to configure method "{method_name}" which cannot be '
            "configured because it does not exist, has not been specified, "
            "is final, or is static"
        )
        self.method_name = method_name


class ReturnValueNotConfiguredError(DoubleError):
    def __init__(self, class_name: str, method_name: str):
        super().__init__(
            f"No return value is configured for {class_name}.{method_name}() "
            "and return value generation is disabled"
        )
        self.class_name = class_name
        self.method_name = method_name


class ReturnValueGenerationError(DoubleError):
    pass


class CannotCloneReadonlyDoubleError(DoubleError):
    def __init__(self, class_name: str):
        super().__init__(
            f'Test double "{class_name}" doubles a readonly class and cannot be cloned'
        )
        self.class_name = class_name


class ExpectationFailedError(DoubleError, AssertionError):
    pass
