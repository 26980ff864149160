"""Tests for the composable API functions in doublegen.api."""

import pytest

import doublegen
from doublegen.api import (
    create_mock,
    create_mock_for_intersection,
    create_stub,
    create_stub_for_intersection,
    default_generator,
    dump_double_source,
)
from doublegen.control import MockObject, Stub
from doublegen.exceptions import ExpectationFailedError, UnknownTypeError

from double_fixtures import Calculator, Closeable, Farewell, Flushable, Greeter


class TestCreateStub:
    def test_returns_configurable_stub(self):
        stub = create_stub(Calculator)
        assert isinstance(stub, Calculator)
        assert not isinstance(stub, MockObject)
        stub.method("add").will_return(42)
        assert stub.add(1) == 42

    def test_constructor_not_run(self):
        assert not hasattr(create_stub(Calculator), "initialised")

    def test_restricted_methods(self):
        stub = create_stub(Calculator, methods=["add"])
        assert stub.describe() == "calculator"

    def test_dotted_name(self):
        assert isinstance(create_stub("double_fixtures.Greeter"), Greeter)

    def test_unknown_type(self):
        with pytest.raises(UnknownTypeError):
            create_stub("double_fixtures.Nothing")


class TestCreateMock:
    def test_expectations(self):
        mock = create_mock(Greeter)
        mock.expects("greet").will_return("hi")
        assert mock.greet("bob") == "hi"
        mock._test_double_verify()

    def test_unmet_expectation(self):
        mock = create_mock(Greeter)
        mock.expects("greet")
        with pytest.raises(ExpectationFailedError):
            mock._test_double_verify()

    def test_constructor_opt_in(self):
        mock = create_mock(Calculator, arguments=(7,), call_original_constructor=True)
        assert mock.base == 7


class TestIntersections:
    def test_stub(self):
        stub = create_stub_for_intersection([Closeable, Flushable])
        assert isinstance(stub, Stub)
        assert isinstance(stub, Closeable)
        assert isinstance(stub, Flushable)

    def test_mock(self):
        mock = create_mock_for_intersection([Greeter, Farewell])
        mock.method("farewell").will_return("bye")
        assert mock.farewell("x") == "bye"
        assert isinstance(mock, MockObject)


class TestDumpDoubleSource:
    def test_returns_class_source(self):
        source = dump_double_source(Calculator)
        assert source.startswith("class MockObject_Calculator_")
        assert "def add(self, a: 'int', b: 'int' = 1) -> 'int':" in source

    def test_stub_source(self):
        source = dump_double_source(Calculator, mock_object=False, methods=["add"])
        assert source.startswith("class TestStub_Calculator_")
        assert "def describe" not in source

    def test_source_is_cached(self):
        assert dump_double_source(Greeter) == dump_double_source(Greeter)


class TestPackageExports:
    def test_reexports(self):
        assert doublegen.create_stub is create_stub
        assert doublegen.MockObject is MockObject
        assert isinstance(default_generator(), doublegen.DoubleGenerator)
        assert default_generator() is default_generator()
