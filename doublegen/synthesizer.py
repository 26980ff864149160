"""Double class synthesizer — turns a target type into test double source.

Given a target type name, decides which methods the double overrides,
which control-plane mixins it carries and how it clones, then renders the
class source. Special cases:

- unknown names get an empty placeholder class to extend;
- interfaces deriving from ``BaseException`` are doubled on top of
  ``Exception``, with the interface kept as an additional base;
- iterable interfaces that are neither iterators nor declare their own
  ``__iter__`` additionally become ``collections.abc.Iterator``.
"""

from __future__ import annotations

import collections.abc
import enum
import keyword
import logging
from typing import Sequence

from . import constants, runtime, templates
from .compiled_double import CompiledDouble
from .double_types import ClassNameInfo, GeneratorConfig
from .eligibility import can_double, is_doubleable_by_default
from .exceptions import (
    ClassIsEnumerationError,
    ClassIsFinalError,
    DoubleRuntimeError,
    MethodNamedMethodError,
)
from .method_descriptor import MethodDescriptor
from .method_set import MethodSet
from .naming import ClassNameResolver
from .reflection import ReflectedClass

logger = logging.getLogger(__name__)


class ClonePolicy(str, enum.Enum):
    DOUBLED = "doubled"
    PROXIED = "proxied"
    NONE = "none"


class DoubleClassSynthesizer:
    def __init__(
        self,
        config: GeneratorConfig = GeneratorConfig(),
        name_resolver: ClassNameResolver | None = None,
    ):
        self._config = config
        self._name_resolver = name_resolver or ClassNameResolver(
            suffix_length=config.suffix_length
        )

    # ── public ───────────────────────────────────────────────────

    def synthesize(
        self,
        target_type: str,
        mock_object: bool,
        explicit_methods: Sequence[str] | None,
        requested_name: str,
        call_original_clone: bool,
    ) -> CompiledDouble:
        target_type = target_type.lstrip(".")
        prefix = self._config.prefix_for(mock_object)
        names = self._name_resolver.resolve(target_type, requested_name, prefix)

        is_class = runtime.class_exists(names.full_class_name)
        is_interface = not is_class and runtime.interface_exists(
            names.full_class_name
        )

        methods = MethodSet()
        additional_interfaces: list[str] = []
        reflected: ReflectedClass | None = None
        is_readonly = False
        clone_policy = ClonePolicy.DOUBLED
        prologue = ""

        if not is_class and not is_interface:
            prologue = self._placeholder(names)
        else:
            reflected = runtime.reflect_class(names.full_class_name)
            if reflected.is_enum:
                raise ClassIsEnumerationError(names.full_class_name)
            if reflected.is_final:
                raise ClassIsFinalError(names.full_class_name)
            is_readonly = reflected.is_readonly

            if is_interface and reflected.implements(BaseException):
                logger.debug(
                    "%s is an exception interface, doubling it on top of %s",
                    names.full_class_name,
                    constants.BASE_EXCEPTION_TYPE,
                )
                additional_interfaces.append(names.full_class_name)
                is_interface = False
                interface = reflected
                reflected = runtime.reflect_class(constants.BASE_EXCEPTION_TYPE)
                methods.add(*self._user_defined_interface_methods(interface, reflected))
                names = self._name_resolver.resolve(
                    constants.BASE_EXCEPTION_TYPE, names.class_name, prefix
                )

            if is_interface and self._needs_iterator(reflected):
                logger.debug(
                    "%s is iterable but no iterator, adding %s",
                    names.full_class_name,
                    constants.ITERATOR_TYPE,
                )
                additional_interfaces.append(constants.ITERATOR_TYPE)
                methods.add(*self.mock_class_methods(constants.ITERATOR_TYPE))

            clone_policy = self._clone_policy(
                reflected, is_interface, call_original_clone
            )

        if is_class and explicit_methods is not None and len(explicit_methods) == 0:
            methods.add(*self.mock_class_methods(names.full_class_name))

        if is_interface and not explicit_methods:
            methods.add(*self._interface_methods(reflected))

        for method_name in explicit_methods or ():
            if reflected is not None and reflected.has_method(method_name):
                method = reflected.get_method(method_name)
                if can_double(method):
                    methods.add(MethodDescriptor.from_reflected_method(method))
                else:
                    logger.debug("Skipping non-doubleable method %s", method_name)
            else:
                methods.add(
                    MethodDescriptor.from_name(names.full_class_name, method_name)
                )

        if methods.contains(constants.RESERVED_METHOD_NAME) or (
            reflected is not None
            and reflected.has_method(constants.RESERVED_METHOD_NAME)
        ):
            raise MethodNamedMethodError()

        descriptors = methods.as_ordered_list()
        mixins = self._mixins(mock_object, is_readonly, clone_policy)
        logger.debug(
            "Synthesizing %s with mixins %s", names.class_name, ", ".join(mixins)
        )

        class_code = templates.TEST_DOUBLE_CLASS.format(
            prologue=prologue,
            class_name=names.class_name,
            bases=self._bases(
                names,
                mixins,
                additional_interfaces,
                is_interface,
                placeholder=reflected is None,
                mock_object=mock_object,
            ),
            mock_object=mock_object,
            original_type=target_type,
            methods="".join(d.generate_code() for d in descriptors),
        )
        return CompiledDouble(
            class_code=class_code,
            class_name=names.class_name,
            configurable_methods=tuple(d.configurable_method() for d in descriptors),
        )

    def mock_class_methods(self, class_name: str) -> list[MethodDescriptor]:
        """Descriptors for every method a double of *class_name* overrides by default."""
        reflected = runtime.reflect_class(class_name)
        return [
            MethodDescriptor.from_reflected_method(m)
            for m in reflected.get_methods()
            if is_doubleable_by_default(m)
        ]

    # ── method population ────────────────────────────────────────

    def _interface_methods(self, interface: ReflectedClass) -> list[MethodDescriptor]:
        return [
            MethodDescriptor.from_reflected_method(m)
            for m in interface.get_methods()
            if can_double(m)
        ]

    def _user_defined_interface_methods(
        self, interface: ReflectedClass, exception: ReflectedClass
    ) -> list[MethodDescriptor]:
        descriptors = []
        for method in interface.get_methods():
            if not method.is_user_defined or not can_double(method):
                continue
            if exception.has_method(method.name) and not can_double(
                exception.get_method(method.name)
            ):
                continue
            descriptors.append(MethodDescriptor.from_reflected_method(method))
        return descriptors

    @staticmethod
    def _needs_iterator(interface: ReflectedClass) -> bool:
        if not interface.implements(collections.abc.Iterable):
            return False
        if interface.implements(collections.abc.Iterator):
            return False
        if not interface.has_method(constants.ITER_METHOD_NAME):
            return True
        iter_method = interface.get_method(constants.ITER_METHOD_NAME)
        return iter_method.owner is collections.abc.Iterable

    @staticmethod
    def _clone_policy(
        reflected: ReflectedClass, is_interface: bool, call_original_clone: bool
    ) -> ClonePolicy:
        if not reflected.has_method(constants.CLONE_METHOD_NAME):
            return ClonePolicy.DOUBLED
        if reflected.get_method(constants.CLONE_METHOD_NAME).is_final:
            return ClonePolicy.NONE
        if call_original_clone and not is_interface:
            return ClonePolicy.PROXIED
        return ClonePolicy.DOUBLED

    # ── rendering ────────────────────────────────────────────────

    @staticmethod
    def _placeholder(names: ClassNameInfo) -> str:
        short_name = names.original_class_name
        if not short_name.isidentifier() or keyword.iskeyword(short_name):
            raise DoubleRuntimeError(
                f'Cannot declare a placeholder class named "{names.full_class_name}"'
            )
        logger.debug("Declaring placeholder class %s", names.full_class_name)
        if not names.namespace_name:
            return templates.PLACEHOLDER_PROLOGUE.format(short_name=short_name)
        # Bound under the full name only; the bare short name is left untouched.
        return templates.NAMESPACED_PLACEHOLDER_PROLOGUE.format(
            short_name=short_name,
            namespace=names.namespace_name,
            full_name=names.full_class_name,
        )

    @staticmethod
    def _mixins(
        mock_object: bool, is_readonly: bool, clone_policy: ClonePolicy
    ) -> list[str]:
        mixins = [constants.STUB_API if is_readonly else constants.MUTABLE_STUB_API]
        if mock_object:
            mixins.append(constants.MOCK_OBJECT_API)
        mixins.append(constants.METHOD_API)
        if is_readonly:
            mixins.append(constants.ERROR_CLONE_METHOD)
        elif clone_policy is ClonePolicy.DOUBLED:
            mixins.append(constants.DOUBLED_CLONE_METHOD)
        elif clone_policy is ClonePolicy.PROXIED:
            mixins.append(constants.PROXIED_CLONE_METHOD)
        return mixins

    @staticmethod
    def _bases(
        names: ClassNameInfo,
        mixins: list[str],
        additional_interfaces: list[str],
        is_interface: bool,
        placeholder: bool,
        mock_object: bool,
    ) -> str:
        entries = [
            templates.BASE_ENTRY.format(name=name)
            for name in mixins + additional_interfaces
        ]
        if placeholder and not names.namespace_name:
            entries.append(f"    {names.original_class_name},")
        elif not (is_interface and names.full_class_name in additional_interfaces):
            entries.append(templates.BASE_ENTRY.format(name=names.full_class_name))
        marker = (
            constants.MOCK_OBJECT_INTERNAL if mock_object else constants.STUB_INTERNAL
        )
        entries.append(templates.BASE_ENTRY.format(name=marker))
        return "\n".join(entries)
