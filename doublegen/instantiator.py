"""Instantiation adapter — creates double instances with or without running __init__."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from . import runtime
from .exceptions import ReflectionError
from .reflection import allocate_instance, construct_instance
from .state import DoubleState

logger = logging.getLogger(__name__)


class Instantiator:
    def instantiate(
        self,
        class_name: str,
        call_original_constructor: bool,
        arguments: Sequence[Any] = (),
        state: DoubleState | None = None,
    ) -> Any:
        """Allocate an instance of *class_name*, attach *state*, then maybe run ``__init__``.

        Failures while resolving or allocating are wrapped in
        ``ReflectionError``; whatever the original constructor raises
        propagates unchanged.
        """
        cls = runtime.get_class(class_name)
        arguments = tuple(arguments)
        try:
            if call_original_constructor:
                obj = construct_instance(cls, arguments)
            else:
                obj = allocate_instance(cls)
        except TypeError as e:
            raise ReflectionError(f"Cannot instantiate {class_name}: {e}") from e

        if state is not None:
            obj._test_double_attach_state(state)

        if call_original_constructor:
            logger.debug("Running original constructor of %s", class_name)
            obj.__init__(*arguments)
        return obj
