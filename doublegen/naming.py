"""Class name resolution for synthesized doubles."""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from . import constants, runtime
from .double_types import ClassNameInfo

logger = logging.getLogger(__name__)


def _random_hex(length: int) -> str:
    return uuid.uuid4().hex[:length]


class ClassNameResolver:
    """Assigns synthetic class names that are unused in the class table.

    Both collaborators are injectable: ``name_in_use`` probes the class
    table and ``random_suffix`` produces the hex suffix appended to
    generated names.
    """

    def __init__(
        self,
        name_in_use: Callable[[str], bool] = runtime.name_in_use,
        random_suffix: Callable[[], str] | None = None,
        suffix_length: int = constants.RANDOM_SUFFIX_LENGTH,
    ):
        self._name_in_use = name_in_use
        self._random_suffix = random_suffix or (lambda: _random_hex(suffix_length))

    def resolve(
        self, target_type: str, requested_name: str, prefix: str
    ) -> ClassNameInfo:
        full_class_name = target_type.lstrip(".")
        namespace_name, _, short_name = full_class_name.rpartition(".")

        class_name = requested_name
        if not class_name:
            class_name = self._unused(f"{prefix}{short_name}_")

        return ClassNameInfo(
            class_name=class_name,
            original_class_name=short_name,
            full_class_name=full_class_name,
            namespace_name=namespace_name,
        )

    def intersection_name(
        self,
        short_names: list[str],
        prefix: str = constants.INTERSECTION_PREFIX,
        exists: Callable[[str], bool] = runtime.interface_exists,
    ) -> str:
        stem = prefix + "_".join(short_names) + "_"
        while True:
            name = stem + self._random_suffix()
            if not exists(name):
                return name
            logger.debug("Intersection name %s taken, retrying", name)

    def _unused(self, stem: str) -> str:
        while True:
            name = stem + self._random_suffix()
            if not self._name_in_use(name):
                return name
            logger.debug("Class name %s taken, retrying", name)
