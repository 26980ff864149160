"""Method eligibility — which reflected methods a double may override."""

from __future__ import annotations

from . import constants
from .reflection import ReflectedMethod


def is_method_name_excluded(name: str) -> bool:
    return name in constants.EXCLUDED_METHOD_NAMES


def can_double(method: ReflectedMethod) -> bool:
    """Constructors, destructors, final and private methods are never doubled."""
    if method.is_constructor:
        return False
    if method.is_destructor:
        return False
    if method.is_final:
        return False
    if method.is_private:
        return False
    return not is_method_name_excluded(method.name)


def is_doubleable_by_default(method: ReflectedMethod) -> bool:
    """Methods picked up when no explicit method list narrows the double.

    Dunder static and class methods are class-creation hooks that metaclasses
    (pydantic's included) call while the double's class is being defined, so
    they keep their original implementation.
    """
    if method.is_static and method.is_dunder:
        return False
    return (method.is_public or method.is_abstract) and can_double(method)
