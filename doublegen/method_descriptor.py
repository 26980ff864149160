"""Method descriptors — signature snapshots that regenerate doubled methods."""

from __future__ import annotations

import ast
import inspect
import logging
import typing
from typing import Any

from pydantic import BaseModel, ConfigDict

from . import runtime, templates
from .double_types import ConfigurableMethod, MethodKind
from .exceptions import ReflectionError
from .reflection import ReflectedMethod

logger = logging.getLogger(__name__)

_POSITIONAL_KINDS = frozenset(
    {
        inspect.Parameter.POSITIONAL_ONLY.name,
        inspect.Parameter.POSITIONAL_OR_KEYWORD.name,
    }
)

# Defaults of these types are inlined as literals; anything else is looked
# up on the original method so the doubled signature shares the same object.
_INLINE_DEFAULT_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    type(None),
)


def _annotation_text(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return ""
    if isinstance(annotation, str):
        return annotation
    return inspect.formatannotation(annotation)


def _normalise_annotation(annotation: Any) -> Any:
    if annotation is inspect.Parameter.empty:
        return None
    if annotation is None:
        return type(None)
    return annotation


def _resolved_hints(function: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError, AttributeError, SyntaxError):
        logger.debug("Unresolvable annotations on %r, keeping raw ones", function)
        return {}


def _is_inlineable(value: Any) -> bool:
    if isinstance(value, tuple):
        return type(value) is tuple and all(_is_inlineable(v) for v in value)
    return type(value) in _INLINE_DEFAULT_TYPES


def _default_expression(
    value: Any, class_name: str, method_name: str, parameter_name: str
) -> str:
    if _is_inlineable(value):
        text = repr(value)
        try:
            if ast.literal_eval(text) == value:
                return text
        except (ValueError, SyntaxError):
            pass
    return f"_default({class_name!r}, {method_name!r}, {parameter_name!r})"


class ParameterDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    kind: str = inspect.Parameter.POSITIONAL_OR_KEYWORD.name
    annotation: Any = None
    annotation_text: str = ""
    has_default: bool = False
    default: Any = None

    @property
    def is_variadic(self) -> bool:
        return self.kind in (
            inspect.Parameter.VAR_POSITIONAL.name,
            inspect.Parameter.VAR_KEYWORD.name,
        )

    @classmethod
    def from_parameter(
        cls, parameter: inspect.Parameter, hints: dict[str, Any]
    ) -> ParameterDescriptor:
        has_default = parameter.default is not inspect.Parameter.empty
        return cls(
            name=parameter.name,
            kind=parameter.kind.name,
            annotation=_normalise_annotation(
                hints.get(parameter.name, parameter.annotation)
            ),
            annotation_text=_annotation_text(parameter.annotation),
            has_default=has_default,
            default=parameter.default if has_default else None,
        )


def _permissive_parameters() -> tuple[ParameterDescriptor, ...]:
    return (
        ParameterDescriptor(name="args", kind=inspect.Parameter.VAR_POSITIONAL.name),
        ParameterDescriptor(name="kwargs", kind=inspect.Parameter.VAR_KEYWORD.name),
    )


class MethodDescriptor(BaseModel):
    """Everything needed to regenerate one method of a test double."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    class_name: str
    method_name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_type: Any = None
    return_type_text: str = ""
    visibility: str = "public"
    method_kind: MethodKind = MethodKind.INSTANCE
    is_async: bool = False
    receiver: str = "self"

    # ── construction ─────────────────────────────────────────────

    @classmethod
    def from_reflected_method(cls, method: ReflectedMethod) -> MethodDescriptor:
        class_name = runtime.type_name(method.owner)
        visibility = "public" if method.is_public else "protected"
        try:
            signature = method.signature()
        except ReflectionError:
            logger.debug(
                "No signature for %s.%s, doubling it permissively",
                class_name,
                method.name,
            )
            return cls(
                class_name=class_name,
                method_name=method.name,
                parameters=_permissive_parameters(),
                visibility=visibility,
                method_kind=method.kind,
                is_async=method.is_async,
                receiver=_default_receiver(method.kind, ()),
            )

        parameters = list(signature.parameters.values())
        receiver = ""
        if (
            method.kind is not MethodKind.STATIC
            and parameters
            and parameters[0].kind.name in _POSITIONAL_KINDS
        ):
            receiver = parameters.pop(0).name

        hints = _resolved_hints(method.function)
        descriptors = tuple(
            ParameterDescriptor.from_parameter(p, hints) for p in parameters
        )
        return cls(
            class_name=class_name,
            method_name=method.name,
            parameters=descriptors,
            return_type=_normalise_annotation(
                hints.get("return", signature.return_annotation)
            ),
            return_type_text=_annotation_text(signature.return_annotation),
            visibility=visibility,
            method_kind=method.kind,
            is_async=method.is_async,
            receiver=receiver or _default_receiver(method.kind, descriptors),
        )

    @classmethod
    def from_name(cls, class_name: str, method_name: str) -> MethodDescriptor:
        """Permissive descriptor for a method the doubled type does not declare."""
        return cls(
            class_name=class_name,
            method_name=method_name,
            parameters=_permissive_parameters(),
        )

    # ── metadata ─────────────────────────────────────────────────

    def default_parameter_values(self) -> dict[int, Any]:
        return {
            position: p.default
            for position, p in enumerate(self.parameters)
            if p.has_default
        }

    def number_of_parameters(self) -> int:
        return len(self.parameters)

    def configurable_method(self) -> ConfigurableMethod:
        return ConfigurableMethod(
            name=self.method_name,
            default_parameter_values=self.default_parameter_values(),
            number_of_parameters=self.number_of_parameters(),
            return_type=self.return_type,
        )

    # ── code generation ──────────────────────────────────────────

    def generate_code(self) -> str:
        modifier = "async " if self.is_async else ""
        return_declaration = (
            f" -> {self.return_type_text!r}" if self.return_type_text else ""
        )
        if self.method_kind is MethodKind.INSTANCE:
            return templates.DOUBLED_METHOD.format(
                modifier=modifier,
                method_name=self.method_name,
                parameters=self._parameters_declaration(),
                return_declaration=return_declaration,
                receiver=self.receiver,
                invocation=self._invocation_expression(),
            )
        return templates.DOUBLED_STATIC_METHOD.format(
            decorator="staticmethod"
            if self.method_kind is MethodKind.STATIC
            else "classmethod",
            modifier=modifier,
            method_name=self.method_name,
            parameters=self._parameters_declaration(),
            return_declaration=return_declaration,
            message=templates.STATIC_METHOD_MESSAGE.format(
                method_name=self.method_name
            ),
        )

    def _parameters_declaration(self) -> str:
        parts: list[str] = [self.receiver] if self.receiver else []
        previous_kind = ""
        seen_var_positional = False
        for p in self.parameters:
            if (
                previous_kind == inspect.Parameter.POSITIONAL_ONLY.name
                and p.kind != previous_kind
            ):
                parts.append("/")
            if p.kind == inspect.Parameter.VAR_POSITIONAL.name:
                seen_var_positional = True
            if (
                p.kind == inspect.Parameter.KEYWORD_ONLY.name
                and not seen_var_positional
            ):
                parts.append("*")
                seen_var_positional = True
            parts.append(self._parameter_declaration(p))
            previous_kind = p.kind
        if previous_kind == inspect.Parameter.POSITIONAL_ONLY.name:
            parts.append("/")
        return ", ".join(parts)

    def _parameter_declaration(self, p: ParameterDescriptor) -> str:
        prefix = ""
        if p.kind == inspect.Parameter.VAR_POSITIONAL.name:
            prefix = "*"
        elif p.kind == inspect.Parameter.VAR_KEYWORD.name:
            prefix = "**"
        text = f"{prefix}{p.name}"
        if p.annotation_text:
            text += f": {p.annotation_text!r}"
        if p.has_default:
            separator = " = " if p.annotation_text else "="
            text += separator + _default_expression(
                p.default, self.class_name, self.method_name, p.name
            )
        return text

    def _invocation_expression(self) -> str:
        positional: list[str] = []
        keywords: list[str] = []
        for p in self.parameters:
            if p.kind in _POSITIONAL_KINDS:
                positional.append(p.name)
            elif p.kind == inspect.Parameter.VAR_POSITIONAL.name:
                positional.append(f"*{p.name}")
            elif p.kind == inspect.Parameter.KEYWORD_ONLY.name:
                keywords.append(f"{p.name!r}: {p.name}")
            else:
                keywords.append(f"**{p.name}")
        arguments = "(" + ", ".join(positional) + ("," if len(positional) == 1 else "") + ")"
        keyword_arguments = "{" + ", ".join(keywords) + "}"
        return (
            f"_Invocation({self.class_name!r}, {self.method_name!r}, "
            f"{arguments}, {keyword_arguments}, {self.receiver})"
        )


def _default_receiver(
    kind: MethodKind, parameters: tuple[ParameterDescriptor, ...]
) -> str:
    if kind is MethodKind.STATIC:
        return ""
    receiver = "cls" if kind is MethodKind.CLASS else "self"
    if any(p.name == receiver for p in parameters):
        return f"_{receiver}"
    return receiver
