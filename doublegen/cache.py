"""Process-wide cache of compiled doubles keyed by synthesis fingerprint."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from typing import Callable, Sequence

from .compiled_double import CompiledDouble

logger = logging.getLogger(__name__)


def fingerprint(
    type_name: str,
    mock_object: bool,
    methods: Sequence[str] | None,
    call_original_clone: bool,
) -> str:
    payload = json.dumps(
        [
            type_name,
            "MockObject" if mock_object else "TestStub",
            list(methods) if methods is not None else None,
            call_original_clone,
        ]
    )
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


class DoubleCache:
    """Entries live for the process lifetime; there is no eviction."""

    def __init__(self) -> None:
        self._entries: dict[str, CompiledDouble] = {}
        self._lock = threading.RLock()

    def get_or_create(
        self, key: str, synthesize_fn: Callable[[], CompiledDouble]
    ) -> CompiledDouble:
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            compiled = synthesize_fn()
            self._entries[key] = compiled
            logger.info("Cached %s under %s", compiled.class_name, key)
            return compiled

    def clear(self) -> None:
        """Forget every entry; intended for test isolation."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


_PROCESS_CACHE = DoubleCache()


def process_cache() -> DoubleCache:
    return _PROCESS_CACHE
