"""Positional binding of scanned tokens to a parameter schema."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from linecmd.domain.errors import MissingParameterError, ParameterTypeMismatchError

if TYPE_CHECKING:
    from linecmd.domain.parameters import ParameterSpec, ParameterTypeRegistry
    from linecmd.domain.values import ParameterValue


@dataclass(frozen=True)
class BoundParameters:
    """Everything an action receives for one invocation.

    Attributes:
        values: One typed value per present schema slot, in schema order.
            Optional slots without a token are omitted, not defaulted.
        named: The same values keyed by parameter name.
        tokens: Every scanned token, including those beyond the schema.
        raw_line: The line with the command name removed, untokenized.
    """

    values: tuple[ParameterValue, ...] = ()
    named: dict[str, ParameterValue] = field(default_factory=dict)
    tokens: tuple[str, ...] = ()
    raw_line: str = ""

    def get(self, name: str, default: object = None) -> object:
        """Return the plain Python value bound to *name*, or *default*."""
        bound = self.named.get(name)
        if bound is None:
            return default
        return bound.value

    def __contains__(self, name: object) -> bool:
        return name in self.named


def bind(
    parameters: Sequence[ParameterSpec],
    tokens: Sequence[str],
    types: ParameterTypeRegistry,
    *,
    raw_line: str = "",
) -> BoundParameters:
    """Match *tokens* against *parameters* by position.

    Types are looked up by name in *types* at call time.

    Raises:
        MissingParameterError: A required slot has no token.
        ParameterTypeMismatchError: A token does not parse as its slot's type.
        UnknownParameterTypeError: A slot names an unregistered type.
    """
    values: list[ParameterValue] = []
    named: dict[str, ParameterValue] = {}

    for index, spec in enumerate(parameters):
        if index >= len(tokens):
            if not spec.optional:
                raise MissingParameterError(spec.name)
            continue

        token = tokens[index]
        try:
            value = types.parse(spec.type_name, token)
        except ParameterTypeMismatchError as exc:
            raise ParameterTypeMismatchError(
                spec.name,
                token,
                exc.reason,
                type_name=spec.type_name,
            ) from exc
        values.append(value)
        named[spec.name] = value

    return BoundParameters(
        values=tuple(values),
        named=named,
        tokens=tuple(tokens),
        raw_line=raw_line,
    )
