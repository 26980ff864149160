"""DoubleGenerator — validates requests, synthesizes, caches and instantiates doubles."""

from __future__ import annotations

import keyword
import logging
from typing import Any, Sequence

from . import constants, runtime, templates
from .cache import DoubleCache, fingerprint, process_cache
from .compiled_double import CompiledDouble
from .control import MockObject, Stub
from .double_types import GeneratorConfig
from .eligibility import can_double
from .exceptions import (
    DoubleRuntimeError,
    DuplicateMethodError,
    InvalidMethodNameError,
    NameAlreadyInUseError,
    UnknownTypeError,
)
from .instantiator import Instantiator
from .method_descriptor import MethodDescriptor
from .naming import ClassNameResolver
from .state import DoubleState
from .synthesizer import DoubleClassSynthesizer

logger = logging.getLogger(__name__)


class DoubleGenerator:
    """Public entry point for creating stubs and mock objects at runtime."""

    def __init__(
        self,
        config: GeneratorConfig = GeneratorConfig(),
        cache: DoubleCache | None = None,
        name_resolver: ClassNameResolver | None = None,
        instantiator: Instantiator | None = None,
    ):
        self._config = config
        if cache is None:
            # Fingerprints ignore naming; custom prefixes get a private cache.
            cache = process_cache() if config == GeneratorConfig() else DoubleCache()
        self._cache = cache
        self._name_resolver = name_resolver or ClassNameResolver(
            suffix_length=config.suffix_length
        )
        self._synthesizer = DoubleClassSynthesizer(config, self._name_resolver)
        self._instantiator = instantiator or Instantiator()

    def create_test_double(
        self,
        type_: Any,
        mock_object: bool,
        methods: Sequence[str] | None = (),
        arguments: Sequence[Any] = (),
        class_name: str = "",
        call_original_constructor: bool = True,
        call_original_clone: bool = True,
        return_value_generation: bool = True,
    ) -> Any:
        """Create a stub or mock object for *type_*.

        Args:
            type_: Class object or dotted name of the class or interface to double.
            mock_object: True for a mock object, False for a stub.
            methods: Names of the methods to double. An empty sequence doubles
                every eligible method; ``None`` doubles none of a class's methods.
            arguments: Arguments for the original constructor.
            class_name: Explicit name for the generated class.
            call_original_constructor: Run the doubled type's ``__init__``.
            call_original_clone: Let ``copy.copy`` run the doubled type's ``__copy__``.
            return_value_generation: Derive return values for unconfigured calls.

        Returns:
            An instance of the generated double.
        """
        type_name = runtime.type_name(type_)
        if type_name == constants.TRAVERSABLE_TYPE:
            type_name = constants.ITERATOR_TYPE

        self._ensure_known_type(type_name)
        if methods is not None:
            self._ensure_valid_methods(list(methods))
        self._ensure_name_available(class_name)

        compiled = self.generate(
            type_name,
            mock_object,
            list(methods) if methods is not None else None,
            class_name,
            call_original_clone,
        )
        double = self._get_object(
            compiled, call_original_constructor, arguments, return_value_generation
        )

        # Nominal check: isinstance() refuses protocols not marked runtime_checkable.
        expected = runtime.get_class(type_name)
        if expected not in type(double).__mro__:
            raise DoubleRuntimeError(
                f"Generated double {compiled.class_name} is not a {type_name}"
            )
        marker = MockObject if mock_object else Stub
        if not isinstance(double, marker):
            raise DoubleRuntimeError(
                f"Generated double {compiled.class_name} is not a {marker.__name__}"
            )
        return double

    def create_test_double_for_interface_intersection(
        self,
        interfaces: Sequence[Any],
        mock_object: bool,
        return_value_generation: bool = True,
    ) -> Any:
        """Create a double implementing every interface in *interfaces*.

        Args:
            interfaces: At least two interfaces, as class objects or dotted names.
            mock_object: True for a mock object, False for a stub.
            return_value_generation: Derive return values for unconfigured calls.

        Returns:
            An instance of a double of a freshly declared intersection interface.
        """
        if len(interfaces) < 2:
            raise DoubleRuntimeError("At least two interfaces must be specified")

        names = sorted(runtime.type_name(i) for i in interfaces)
        for name in names:
            if not runtime.interface_exists(name):
                raise UnknownTypeError(name)

        seen: list[str] = []
        for name in names:
            for method in runtime.reflect_class(name).get_methods():
                if not (method.is_public or method.is_abstract):
                    continue
                if not can_double(method):
                    continue
                if method.name in seen:
                    raise DoubleRuntimeError(
                        "Interfaces must not declare the same method"
                    )
                seen.append(method.name)

        short_names = [n.rpartition(".")[2] for n in names]
        intersection = self._name_resolver.intersection_name(
            short_names, self._config.intersection_prefix
        )
        entries = [templates.BASE_ENTRY.format(name=n) for n in names]
        if all(getattr(runtime.get_class(n), "_is_protocol", False) for n in names):
            entries.append(templates.BASE_ENTRY.format(name=constants.PROTOCOL_TYPE))
        runtime.define_class(
            templates.INTERSECTION.format(
                intersection=intersection, interfaces="\n".join(entries)
            ),
            intersection,
        )
        logger.info("Declared intersection %s of %s", intersection, ", ".join(names))

        return self.create_test_double(
            intersection,
            mock_object,
            return_value_generation=return_value_generation,
        )

    def list_doubleable_methods(self, class_name: Any) -> list[MethodDescriptor]:
        return self._synthesizer.mock_class_methods(runtime.type_name(class_name))

    def generate(
        self,
        type_name: str,
        mock_object: bool,
        methods: Sequence[str] | None = None,
        class_name: str = "",
        call_original_clone: bool = True,
    ) -> CompiledDouble:
        """Synthesize (or fetch from the cache) the compiled double for *type_name*."""
        type_name = runtime.type_name(type_name)

        def synthesize() -> CompiledDouble:
            return self._synthesizer.synthesize(
                type_name, mock_object, methods, class_name, call_original_clone
            )

        if class_name:
            return synthesize()

        key = fingerprint(type_name, mock_object, methods, call_original_clone)
        return self._cache.get_or_create(key, synthesize)

    # ── helpers ──────────────────────────────────────────────────

    def _get_object(
        self,
        compiled: CompiledDouble,
        call_original_constructor: bool,
        arguments: Sequence[Any],
        return_value_generation: bool,
    ) -> Any:
        compiled.generate()
        state = DoubleState(
            compiled.configurable_methods, return_value_generation
        )
        return self._instantiator.instantiate(
            compiled.class_name, call_original_constructor, arguments, state
        )

    @staticmethod
    def _ensure_known_type(type_name: str) -> None:
        if not runtime.class_exists(type_name) and not runtime.interface_exists(
            type_name
        ):
            raise UnknownTypeError(type_name)

    @staticmethod
    def _ensure_valid_methods(methods: list[Any]) -> None:
        for method in methods:
            if (
                not isinstance(method, str)
                or not method.isidentifier()
                or keyword.iskeyword(method)
            ):
                raise InvalidMethodNameError(method)
        if len(set(methods)) != len(methods):
            raise DuplicateMethodError(methods)

    @staticmethod
    def _ensure_name_available(class_name: str) -> None:
        if not class_name:
            return
        if runtime.name_in_use(class_name):
            raise NameAlreadyInUseError(class_name)
        if not class_name.isidentifier() or keyword.iskeyword(class_name):
            raise DoubleRuntimeError(f'"{class_name}" is not a valid class name')
