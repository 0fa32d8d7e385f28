"""Typed parameter values produced by the type registry.

``ParameterValue`` is a closed union so binder and action code can
pattern-match on the member instead of casting an untyped accessor::

    match params.values[0]:
        case IntegerValue(value=n):
            ...
        case TextValue(value=s):
            ...

Kinds registered by plugins whose parse function returns a plain Python
object are carried as :class:`CustomValue` tagged with the type name.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar


class BuiltinType(StrEnum):
    """Parameter type names registered by default."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"


@dataclass(frozen=True, slots=True)
class IntegerValue:
    value: int
    kind: ClassVar[str] = BuiltinType.INT

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class FloatValue:
    value: float
    kind: ClassVar[str] = BuiltinType.FLOAT

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class TextValue:
    value: str
    kind: ClassVar[str] = BuiltinType.STRING

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CustomValue:
    """Value of a registry-registered kind outside the built-ins."""

    kind: str
    value: Any

    def __str__(self) -> str:
        return str(self.value)


ParameterValue = IntegerValue | FloatValue | TextValue | CustomValue

PARAMETER_VALUE_TYPES: tuple[type, ...] = (IntegerValue, FloatValue, TextValue, CustomValue)


def is_parameter_value(obj: object) -> bool:
    """Return True if *obj* is a member of the :data:`ParameterValue` union."""
    return isinstance(obj, PARAMETER_VALUE_TYPES)
