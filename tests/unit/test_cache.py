"""Tests for DoubleCache and fingerprints."""

import pytest

from doublegen.cache import DoubleCache, fingerprint, process_cache
from doublegen.compiled_double import CompiledDouble


def _make_compiled(name: str = "Double") -> CompiledDouble:
    return CompiledDouble(class_code="", class_name=name)


class TestFingerprint:
    def test_stable(self):
        assert fingerprint("a.B", True, ["x"], True) == fingerprint(
            "a.B", True, ["x"], True
        )

    def test_every_input_matters(self):
        base = fingerprint("a.B", True, ["x"], True)
        assert fingerprint("a.C", True, ["x"], True) != base
        assert fingerprint("a.B", False, ["x"], True) != base
        assert fingerprint("a.B", True, ["y"], True) != base
        assert fingerprint("a.B", True, ["x"], False) != base

    def test_none_differs_from_empty_list(self):
        assert fingerprint("a.B", True, None, True) != fingerprint(
            "a.B", True, [], True
        )


class TestDoubleCache:
    def test_second_lookup_returns_same_object(self):
        cache = DoubleCache()
        calls = []

        def synthesize():
            calls.append(1)
            return _make_compiled()

        first = cache.get_or_create("k", synthesize)
        second = cache.get_or_create("k", synthesize)
        assert first is second
        assert len(calls) == 1
        assert "k" in cache
        assert len(cache) == 1

    def test_failure_is_not_cached(self):
        cache = DoubleCache()

        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_create("k", failing)
        assert "k" not in cache
        assert cache.get_or_create("k", _make_compiled).class_name == "Double"

    def test_clear(self):
        cache = DoubleCache()
        cache.get_or_create("k", _make_compiled)
        cache.clear()
        assert len(cache) == 0

    def test_process_cache_is_shared(self):
        assert process_cache() is process_cache()
