"""Failure taxonomy for command construction, scanning, binding, and dispatch.

Every error carries a stable ``code`` (used as ``ServiceError.code`` at the
service boundary) and a ``detail`` dict naming the offending parameter,
command, or literal.

Parameter-stage failures share the :class:`ParameterError` base so a command
can route them through a single presentation hook.
"""

from __future__ import annotations

from typing import Any


class CommandError(Exception):
    """Base exception for all linecmd failures."""

    code = "COMMAND_ERROR"

    @property
    def detail(self) -> dict[str, Any]:
        return {}


class EmptyCommandError(CommandError):
    """Raised when a line is empty or whitespace-only."""

    code = "EMPTY_COMMAND"

    def __init__(self) -> None:
        super().__init__("Cannot execute an empty command line")


class WrongCommandNameError(CommandError):
    """Raised when a line is run against a command with a different name."""

    code = "WRONG_COMMAND_NAME"

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Command '{expected}' cannot run line starting with '{actual}'")

    @property
    def detail(self) -> dict[str, Any]:
        return {"expected": self.expected, "actual": self.actual}


class ConstructionInvalidError(CommandError):
    """Raised when a command is declared with an invalid configuration."""

    code = "CONSTRUCTION_INVALID"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid command definition: {reason}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"reason": self.reason}


class NestingLimitExceededError(CommandError):
    """Raised when brace nesting would reach the configured maximum depth."""

    code = "NESTING_LIMIT_EXCEEDED"

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Command nesting exceeded the allowed limit of {max_depth}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"max_depth": self.max_depth}


class DuplicateCommandNameError(CommandError):
    """Raised when a command name is registered twice."""

    code = "DUPLICATE_COMMAND_NAME"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Command with name '{name}' already exists")

    @property
    def detail(self) -> dict[str, Any]:
        return {"name": self.name}


class CommandNotFoundError(CommandError):
    """Raised when no command is registered under the requested name."""

    code = "COMMAND_NOT_FOUND"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Command with name '{name}' not found")

    @property
    def detail(self) -> dict[str, Any]:
        return {"name": self.name}


# --- Parameter stage ---


class ParameterError(CommandError):
    """Base for failures raised while binding tokens to a schema."""

    code = "PARAMETER_ERROR"


class MissingParameterError(ParameterError):
    """Raised when a required schema slot has no token."""

    code = "MISSING_PARAMETER"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required parameter: {name}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"name": self.name}


class ParameterTypeMismatchError(ParameterError):
    """Raised when a literal cannot be parsed as the declared type.

    ``name`` is the parameter name when raised by the binder and the type name
    when raised directly by the type registry.
    """

    code = "PARAMETER_TYPE_MISMATCH"

    def __init__(
        self,
        name: str,
        literal: str,
        detail: str,
        *,
        type_name: str | None = None,
    ) -> None:
        self.name = name
        self.literal = literal
        self.reason = detail
        self.type_name = type_name or name
        super().__init__(f"Parameter type mismatch {name}: {detail}")

    @property
    def detail(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_name,
            "literal": self.literal,
            "reason": self.reason,
        }


class UnknownParameterTypeError(ParameterError):
    """Raised when a schema names a type that is not registered."""

    code = "UNKNOWN_PARAMETER_TYPE"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown parameter type: {name}")

    @property
    def detail(self) -> dict[str, Any]:
        return {"type": self.name}
