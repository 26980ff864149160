"""Source templates for generated classes, rendered with ``str.format``."""

from __future__ import annotations

TEST_DOUBLE_CLASS = """\
{prologue}class {class_name}(
{bases}
):
    __test_double_mock_object__ = {mock_object}
    __test_double_original_type__ = {original_type!r}
{methods}"""

DOUBLED_METHOD = """
    {modifier}def {method_name}({parameters}){return_declaration}:
        return {receiver}._test_double_invocation_handler().invoke(
            {invocation}
        )
"""

DOUBLED_STATIC_METHOD = """
    @{decorator}
    {modifier}def {method_name}({parameters}){return_declaration}:
        raise _BadMethodCallError(
            {message!r}
        )
"""

STATIC_METHOD_MESSAGE = 'Static method "{method_name}" cannot be invoked on mock object'

PLACEHOLDER_PROLOGUE = """\
class {short_name}:
    pass


"""

NAMESPACED_PLACEHOLDER_PROLOGUE = """\
_declare({full_name!r}, type({short_name!r}, (), {{"__module__": {namespace!r}}}))


"""

INTERSECTION = """\
class {intersection}(
{interfaces}
):
    pass
"""

BASE_ENTRY = "    _type({name!r}),"
