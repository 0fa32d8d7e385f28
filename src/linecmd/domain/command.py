"""Command entity: scan, bind, and dispatch one line to an action.

A :class:`Command` holds only immutable configuration. :meth:`Command.run`
derives tokens and bound parameters on the call stack and never stores them
on the instance, so a single command may be run concurrently and nested
self-recursion (``count {count 1}``) needs no defensive copy.

Usage::

    def move(params: BoundParameters) -> str:
        return str(params.get("x") + params.get("y"))

    cmd = Command("move", move, [param("int", "x"), param("int", "y")])
    cmd.run("move 3 4")  # "7"
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from linecmd.domain.binder import BoundParameters, bind
from linecmd.domain.errors import (
    CommandNotFoundError,
    ConstructionInvalidError,
    EmptyCommandError,
    ParameterError,
    WrongCommandNameError,
)
from linecmd.domain.parameters import (
    ParameterSpec,
    ParameterTypeRegistry,
    default_types,
    validate_schema,
)
from linecmd.domain.scanner import SPACE, scan

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 3

CommandAction = Callable[[BoundParameters], str]
RunOtherCommand = Callable[[str], str]
ParameterErrorHook = Callable[[ParameterError], str]


def leading_word(line: str) -> str:
    """Return the text before the first space (the command name slot)."""
    return line.split(SPACE, 1)[0]


def is_blank(line: str | None) -> bool:
    return line is None or not line.strip()


class Command:
    """A named, schema-bound unit of executable line logic.

    Args:
        name: Single word the line must start with.
        action: Receives :class:`BoundParameters`, returns the result text.
        parameters: Ordered schema; required slots before optional ones.
        description: Free-form help text.
        run_other: Executes a nested ``{...}`` line. When None, braces are
            passed through literally.
        max_depth: Maximum brace nesting, ``0`` for unbounded.
        on_parameter_error: Turns a parameter-stage failure into the run
            result instead of raising it.
        types: Parameter type registry; defaults to :func:`default_types`.

    Raises:
        ConstructionInvalidError: On an empty or multi-word name, a
            non-callable action, or an invalid schema.
    """

    def __init__(
        self,
        name: str,
        action: CommandAction,
        parameters: Sequence[ParameterSpec] | None = None,
        description: str = "",
        run_other: RunOtherCommand | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        *,
        on_parameter_error: ParameterErrorHook | None = None,
        types: ParameterTypeRegistry | None = None,
    ) -> None:
        if not name or not name.strip():
            raise ConstructionInvalidError("Command name is empty")
        if any(ch.isspace() for ch in name):
            raise ConstructionInvalidError(f"Command name '{name}' must be a single word")
        if action is None or not callable(action):
            raise ConstructionInvalidError(f"Command '{name}' action is not callable")
        if max_depth < 0:
            raise ConstructionInvalidError(f"Command '{name}' max_depth must be >= 0")

        self._name = name
        self._action = action
        self._parameters: tuple[ParameterSpec, ...] = tuple(parameters or ())
        self._description = description or ""
        self._run_other = run_other
        self._max_depth = max_depth
        self._on_parameter_error = on_parameter_error
        self._types = types

        self.required_count, self.optional_count = validate_schema(self._parameters)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return self._parameters

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def can_execute_nested(self) -> bool:
        return self._run_other is not None

    @property
    def types(self) -> ParameterTypeRegistry:
        return self._types if self._types is not None else default_types()

    def usage(self) -> str:
        """One-line usage string, e.g. ``move <x:int> <y:int> [z:int]``."""
        return " ".join([self._name, *(p.usage() for p in self._parameters)])

    def matches(self, line: str) -> bool:
        """Whether the leading word of *line* is this command's name."""
        return leading_word(line) == self._name

    def clone(self) -> Command:
        """Return an independent command with the same configuration."""
        return Command(
            self._name,
            self._action,
            list(self._parameters),
            self._description,
            self._run_other,
            self._max_depth,
            on_parameter_error=self._on_parameter_error,
            types=self._types,
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self, line: str) -> str:
        """Scan, bind, and dispatch *line*; return the action's result.

        Raises:
            EmptyCommandError: *line* is empty or whitespace-only.
            WrongCommandNameError: *line* names a different command.
            NestingLimitExceededError: Brace nesting reached ``max_depth``.
            ParameterError: Binding failed and no hook handled it.
        """
        if is_blank(line):
            raise EmptyCommandError()

        actual = leading_word(line)
        if actual != self._name:
            raise WrongCommandNameError(self._name, actual)

        raw_line = line[len(self._name) :]
        tokens = scan(raw_line, self._max_depth, self._resolve_nested)

        try:
            params = bind(self._parameters, tokens, self.types, raw_line=raw_line)
        except ParameterError as exc:
            logger.debug("Parameter error in %s: %s", self._name, exc)
            return self.handle_parameter_error(exc)

        return self._action(params)

    def handle_parameter_error(self, exc: ParameterError) -> str:
        """Presentation hook for parameter-stage failures.

        Default: delegate to ``on_parameter_error`` if configured, otherwise
        re-raise *exc* unchanged. Subclasses may override to format errors.
        """
        if self._on_parameter_error is not None:
            return self._on_parameter_error(exc)
        raise exc

    def _resolve_nested(self, inner: str) -> str:
        literal = "{" + inner + "}"
        if self._run_other is None:
            return literal
        try:
            return self._run_other(inner)
        except CommandNotFoundError:
            logger.debug("Nested command not found, keeping literal %s", literal)
            return literal

    def __repr__(self) -> str:
        return f"Command(name={self._name!r}, parameters={len(self._parameters)})"
