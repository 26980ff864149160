"""Tests for MethodDescriptor and MethodSet."""

import inspect

import pytest
from pydantic import ValidationError

from doublegen.double_types import MethodKind
from doublegen.method_descriptor import MethodDescriptor
from doublegen.method_set import MethodSet
from doublegen.reflection import ReflectedClass

from double_fixtures import Calculator, Shapes


def _descriptor(cls, name) -> MethodDescriptor:
    return MethodDescriptor.from_reflected_method(ReflectedClass(cls).get_method(name))


class TestFromReflectedMethod:
    def test_signature_snapshot(self):
        descriptor = _descriptor(Calculator, "add")
        assert descriptor.class_name == "double_fixtures.Calculator"
        assert descriptor.method_name == "add"
        assert [p.name for p in descriptor.parameters] == ["a", "b"]
        assert descriptor.receiver == "self"
        assert descriptor.return_type is int
        assert descriptor.return_type_text == "int"

    def test_metadata(self):
        descriptor = _descriptor(Calculator, "add")
        assert descriptor.number_of_parameters() == 2
        assert descriptor.default_parameter_values() == {1: 1}

    def test_configurable_method(self):
        configurable = _descriptor(Calculator, "add").configurable_method()
        assert configurable.name == "add"
        assert configurable.number_of_parameters == 2
        assert configurable.return_type is int

    def test_missing_return_annotation_is_none(self):
        assert _descriptor(Calculator, "tag").return_type is None

    def test_none_return_normalised(self):
        assert _descriptor(Calculator, "_Calculator__secret").return_type is type(None)

    def test_static_and_class_kinds(self):
        assert _descriptor(Calculator, "create").method_kind is MethodKind.STATIC
        assert _descriptor(Calculator, "create").receiver == ""
        named = _descriptor(Calculator, "named")
        assert named.method_kind is MethodKind.CLASS
        assert named.receiver == "cls"

    def test_protected_visibility(self):
        assert _descriptor(Calculator, "_adjust").visibility == "protected"

    def test_parameter_kinds(self):
        kinds = [p.kind for p in _descriptor(Shapes, "scale").parameters]
        assert kinds == [
            inspect.Parameter.POSITIONAL_ONLY.name,
            inspect.Parameter.POSITIONAL_OR_KEYWORD.name,
            inspect.Parameter.VAR_POSITIONAL.name,
            inspect.Parameter.KEYWORD_ONLY.name,
            inspect.Parameter.VAR_KEYWORD.name,
        ]

    def test_descriptor_is_frozen(self):
        descriptor = _descriptor(Calculator, "add")
        with pytest.raises(ValidationError):
            descriptor.method_name = "other"


class TestFromName:
    def test_permissive_signature(self):
        descriptor = MethodDescriptor.from_name("pkg.Missing", "anything")
        assert descriptor.class_name == "pkg.Missing"
        assert [p.name for p in descriptor.parameters] == ["args", "kwargs"]
        assert all(p.is_variadic for p in descriptor.parameters)
        assert descriptor.return_type is None
        assert descriptor.default_parameter_values() == {}


class TestGenerateCode:
    def test_instance_method_delegates_to_handler(self):
        code = _descriptor(Calculator, "add").generate_code()
        assert "def add(self, a: 'int', b: 'int' = 1) -> 'int':" in code
        assert "self._test_double_invocation_handler().invoke(" in code
        assert "_Invocation('double_fixtures.Calculator', 'add', (a, b), {}, self)" in code

    def test_keyword_only_marker(self):
        code = _descriptor(Calculator, "describe").generate_code()
        assert "def describe(self, *, verbose: 'bool' = False) -> 'str':" in code
        assert "(), {'verbose': verbose}" in code

    def test_all_parameter_markers(self):
        code = _descriptor(Shapes, "scale").generate_code()
        assert (
            "def scale(self, factor, /, origin=0, *rest, mode: 'str' = 'fast', **options):"
            in code
        )
        assert "(factor, origin, *rest), {'mode': mode, **options}" in code

    def test_single_positional_gets_tuple_comma(self):
        code = _descriptor(Shapes, "square").generate_code()
        assert "(side,)" in code

    def test_non_literal_default_is_looked_up(self):
        code = _descriptor(Calculator, "tag").generate_code()
        assert "labels=_default('double_fixtures.Calculator', 'tag', 'labels')" in code

    def test_async_method(self):
        code = _descriptor(Calculator, "fetch").generate_code()
        assert "async def fetch(self, key: 'str') -> 'str | None':" in code

    def test_static_method_raises(self):
        code = _descriptor(Calculator, "create").generate_code()
        assert "@staticmethod" in code
        assert "def create() -> 'Calculator':" in code
        assert "_BadMethodCallError(" in code

    def test_class_method_raises(self):
        code = _descriptor(Calculator, "named").generate_code()
        assert "@classmethod" in code
        assert "def named(cls, name: 'str') -> 'Calculator':" in code

    def test_permissive_method(self):
        code = MethodDescriptor.from_name("pkg.Missing", "anything").generate_code()
        assert "def anything(self, *args, **kwargs):" in code
        assert "(*args,), {**kwargs}" in code


class TestMethodSet:
    def test_first_insertion_wins(self):
        first = MethodDescriptor.from_name("a.A", "run")
        second = MethodDescriptor.from_name("b.B", "run")
        methods = MethodSet()
        methods.add(first, second)
        assert methods.as_ordered_list() == [first]

    def test_insertion_order_and_contains(self):
        methods = MethodSet()
        methods.add(
            MethodDescriptor.from_name("a.A", "b"),
            MethodDescriptor.from_name("a.A", "a"),
        )
        assert [m.method_name for m in methods.as_ordered_list()] == ["b", "a"]
        assert methods.contains("a")
        assert not methods.contains("c")
        assert len(methods) == 2
