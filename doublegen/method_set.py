"""Ordered, duplicate-free collection of method descriptors."""

from __future__ import annotations

from .method_descriptor import MethodDescriptor


class MethodSet:
    """Name → descriptor map; the first descriptor added under a name wins."""

    def __init__(self) -> None:
        self._methods: dict[str, MethodDescriptor] = {}

    def add(self, *descriptors: MethodDescriptor) -> None:
        for descriptor in descriptors:
            self._methods.setdefault(descriptor.method_name, descriptor)

    def contains(self, name: str) -> bool:
        return name in self._methods

    def as_ordered_list(self) -> list[MethodDescriptor]:
        return list(self._methods.values())

    def __len__(self) -> int:
        return len(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods
