"""Parameter schemas and the parameter type registry.

A schema is an ordered sequence of :class:`ParameterSpec`. Specs name their
type by string; the binder resolves that name through a
:class:`ParameterTypeRegistry` on every call, so registrations made after a
command was declared are honoured by the next run.

INVARIANT: First registration for a type name wins. Re-registering a name is
a no-op, never an error and never an overwrite.
"""

from __future__ import annotations

import logging
import math
import re
import threading
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, field_validator

from linecmd.domain.errors import (
    ConstructionInvalidError,
    ParameterTypeMismatchError,
    UnknownParameterTypeError,
)
from linecmd.domain.values import (
    BuiltinType,
    CustomValue,
    FloatValue,
    IntegerValue,
    ParameterValue,
    TextValue,
    is_parameter_value,
)

logger = logging.getLogger(__name__)

ParseFunction = Callable[[str], Any]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class ParameterSpec(BaseModel):
    """One declared parameter slot: type name, name, description, optional flag."""

    model_config = {"frozen": True}

    type_name: str
    name: str
    description: str = ""
    optional: bool = False

    @field_validator("type_name", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be empty"
            raise ValueError(msg)
        return value

    def __str__(self) -> str:
        return f"{self.type_name} - {self.name}"

    def usage(self) -> str:
        """Render as ``<name:type>`` or ``[name:type]`` for optional slots."""
        if self.optional:
            return f"[{self.name}:{self.type_name}]"
        return f"<{self.name}:{self.type_name}>"


def param(type_name: str, name: str, description: str = "", *, optional: bool = False) -> ParameterSpec:
    """Shorthand constructor for :class:`ParameterSpec`."""
    return ParameterSpec(
        type_name=type_name,
        name=name,
        description=description,
        optional=optional,
    )


def validate_schema(parameters: Sequence[ParameterSpec]) -> tuple[int, int]:
    """Check schema ordering and naming rules.

    Returns ``(required_count, optional_count)``.

    Raises:
        ConstructionInvalidError: If an optional slot precedes a required one,
            or a parameter name repeats.
    """
    required = 0
    optional = 0
    seen: set[str] = set()
    last_is_optional = False

    for spec in parameters:
        if spec.name in seen:
            raise ConstructionInvalidError(f"Duplicate parameter name '{spec.name}'")
        seen.add(spec.name)

        if spec.optional:
            optional += 1
            last_is_optional = True
        else:
            if last_is_optional:
                raise ConstructionInvalidError("Optional parameters must be after others")
            required += 1

    return required, optional


# ---------------------------------------------------------------------------
# Built-in parse functions
# ---------------------------------------------------------------------------


def parse_int(literal: str) -> IntegerValue:
    """Base-10, locale-invariant integer in the signed 64-bit range."""
    if not _INT_RE.fullmatch(literal):
        msg = f"Invalid int value: {literal}"
        raise ValueError(msg)
    number = int(literal)
    if not INT64_MIN <= number <= INT64_MAX:
        msg = f"Int value out of range: {literal}"
        raise ValueError(msg)
    return IntegerValue(number)


def parse_float(literal: str) -> FloatValue:
    # float() accepts digit separators; the command grammar does not.
    if "_" in literal:
        msg = f"Invalid float value: {literal}"
        raise ValueError(msg)
    try:
        number = float(literal)
    except ValueError:
        msg = f"Invalid float value: {literal}"
        raise ValueError(msg) from None
    if math.isinf(number) and "inf" not in literal.lower():
        msg = f"Float value out of range: {literal}"
        raise ValueError(msg)
    return FloatValue(number)


def parse_string(literal: str) -> TextValue:
    return TextValue(literal)


BUILTIN_PARSERS: dict[str, ParseFunction] = {
    BuiltinType.INT: parse_int,
    BuiltinType.FLOAT: parse_float,
    BuiltinType.STRING: parse_string,
}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class ParameterTypeRegistry:
    """Name-keyed table of parse functions.

    Read-mostly: registration takes a lock and is expected to complete
    before commands start executing; :meth:`parse` only reads the table.
    """

    def __init__(self, *, builtins: bool = True) -> None:
        self._parsers: dict[str, ParseFunction] = {}
        self._lock = threading.Lock()
        if builtins:
            for name, parse_fn in BUILTIN_PARSERS.items():
                self.register(name, parse_fn)

    def register(self, name: str, parse_fn: ParseFunction) -> bool:
        """Register *parse_fn* under *name* unless the name is taken.

        Returns True if the function was inserted, False if an earlier
        registration for *name* already exists.
        """
        if not name or not name.strip():
            msg = "Parameter type name must not be empty"
            raise ValueError(msg)
        if not callable(parse_fn):
            msg = f"Parse function for parameter type {name!r} must be callable"
            raise TypeError(msg)

        with self._lock:
            if name in self._parsers:
                logger.debug("Parameter type %s already registered; keeping first", name)
                return False
            self._parsers[name] = parse_fn
        logger.debug("Registered parameter type: %s", name)
        return True

    def parse(self, name: str, literal: str) -> ParameterValue:
        """Parse *literal* with the function registered under *name*.

        Raises:
            UnknownParameterTypeError: If *name* is not registered.
            ParameterTypeMismatchError: If the parse function rejects *literal*.
        """
        parse_fn = self._parsers.get(name)
        if parse_fn is None:
            raise UnknownParameterTypeError(name)

        try:
            result = parse_fn(literal)
        except ParameterTypeMismatchError:
            raise
        except Exception as exc:
            raise ParameterTypeMismatchError(name, literal, str(exc), type_name=name) from exc

        if is_parameter_value(result):
            return result
        return CustomValue(kind=name, value=result)

    def names(self) -> list[str]:
        """Registered type names in registration order."""
        return list(self._parsers)

    def __contains__(self, name: object) -> bool:
        return name in self._parsers

    def __len__(self) -> int:
        return len(self._parsers)


_default_types: ParameterTypeRegistry | None = None
_default_lock = threading.Lock()


def default_types() -> ParameterTypeRegistry:
    """Process-wide registry pre-loaded with the built-in types.

    Used by commands declared without an explicit registry.
    """
    global _default_types
    if _default_types is None:
        with _default_lock:
            if _default_types is None:
                _default_types = ParameterTypeRegistry()
    return _default_types
