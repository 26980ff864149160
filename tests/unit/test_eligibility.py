"""Tests for the method eligibility filter."""

from doublegen.eligibility import (
    can_double,
    is_doubleable_by_default,
    is_method_name_excluded,
)
from doublegen.reflection import ReflectedClass

from double_fixtures import AbstractRepository, Calculator, Copyable, Reading


def _method(cls, name):
    return ReflectedClass(cls).get_method(name)


class TestCanDouble:
    def test_plain_public_method(self):
        assert can_double(_method(Calculator, "add"))

    def test_constructor_rejected(self):
        assert not can_double(_method(Calculator, "__init__"))

    def test_final_rejected(self):
        assert not can_double(_method(Calculator, "locked"))

    def test_private_rejected(self):
        assert not can_double(_method(Calculator, "_Calculator__secret"))

    def test_protected_allowed(self):
        assert can_double(_method(Calculator, "_adjust"))

    def test_clone_hook_rejected(self):
        assert not can_double(_method(Copyable, "__copy__"))

    def test_destructor_rejected(self):
        class WithDestructor:
            def __del__(self):
                pass

        assert not can_double(_method(WithDestructor, "__del__"))


class TestExcludedNames:
    def test_intrinsics_and_identity_hooks(self):
        for name in ("__getattribute__", "__reduce_ex__", "__repr__", "__hash__"):
            assert is_method_name_excluded(name)

    def test_ordinary_dunder_not_excluded(self):
        assert not is_method_name_excluded("__len__")


class TestDoubleableByDefault:
    def test_protected_method_needs_abstract(self):
        assert not is_doubleable_by_default(_method(Calculator, "_adjust"))

    def test_abstract_method(self):
        assert is_doubleable_by_default(_method(AbstractRepository, "get"))

    def test_static_method(self):
        assert is_doubleable_by_default(_method(Calculator, "create"))

    def test_dunder_class_hooks_keep_original(self):
        assert not is_doubleable_by_default(
            _method(Reading, "__get_pydantic_core_schema__")
        )
        assert can_double(_method(Reading, "__get_pydantic_core_schema__"))
