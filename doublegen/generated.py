"""Namespace module that receives synthesized test double classes.

Generated source is executed with this module's globals; the names imported
below are the only helpers generated class bodies refer to.
"""

from doublegen.exceptions import BadMethodCallError as _BadMethodCallError  # noqa: F401
from doublegen.invocation import Invocation as _Invocation  # noqa: F401
from doublegen.runtime import (  # noqa: F401
    declare as _declare,
    resolve_default as _default,
    resolve_type as _type,
)
