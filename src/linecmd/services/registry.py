"""CommandRegistry — name-keyed command store and line dispatcher.

``execute`` is also the nested-execution delegate handed to commands built
with :meth:`CommandRegistry.create`, so ``{...}`` substitutions recurse
through the same lookup as top-level lines.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence

from linecmd.domain.command import (
    DEFAULT_MAX_DEPTH,
    Command,
    CommandAction,
    ParameterErrorHook,
    is_blank,
    leading_word,
)
from linecmd.domain.errors import (
    CommandNotFoundError,
    DuplicateCommandNameError,
    EmptyCommandError,
)
from linecmd.domain.parameters import ParameterSpec, ParameterTypeRegistry, default_types
from linecmd.services.telemetry import trace_span

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Unique-name store of :class:`Command` objects.

    Entries are created by :meth:`add` and removed by :meth:`remove`; they
    never expire. Mutation takes a lock; :meth:`execute` reads a single entry.

    Args:
        types: Type registry given to commands built via :meth:`create`.
        max_depth: Default nesting limit for commands built via :meth:`create`.
        nested: Whether commands built via :meth:`create` may execute
            ``{...}`` sub-commands.
    """

    def __init__(
        self,
        *,
        types: ParameterTypeRegistry | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        nested: bool = True,
    ) -> None:
        self._commands: dict[str, Command] = {}
        self._lock = threading.Lock()
        self.types = types if types is not None else default_types()
        self.max_depth = max_depth
        self.nested = nested

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    def add(self, command: Command) -> None:
        """Register *command*.

        Raises:
            DuplicateCommandNameError: If the name is already registered.
        """
        if command is None:
            msg = "command must not be None"
            raise TypeError(msg)
        with self._lock:
            if command.name in self._commands:
                raise DuplicateCommandNameError(command.name)
            self._commands[command.name] = command
        logger.debug("Registered command: %s", command.name)

    def remove(self, name: str) -> None:
        """Unregister the command called *name*.

        Raises:
            CommandNotFoundError: If no such command exists.
        """
        with self._lock:
            if name not in self._commands:
                raise CommandNotFoundError(name)
            del self._commands[name]
        logger.debug("Removed command: %s", name)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def list(self) -> list[Command]:
        """Snapshot of registered commands in registration order."""
        with self._lock:
            return [command.clone() for command in self._commands.values()]

    def names(self) -> list[str]:
        return list(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    # ------------------------------------------------------------------
    # Declaration helpers
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        action: CommandAction,
        parameters: Sequence[ParameterSpec] | None = None,
        description: str = "",
        *,
        max_depth: int | None = None,
        nested: bool | None = None,
        on_parameter_error: ParameterErrorHook | None = None,
    ) -> Command:
        """Build a command wired to this registry and register it.

        The command resolves ``{...}`` through :meth:`execute` unless nesting
        is disabled, and parses with this registry's type table.
        """
        allow_nested = self.nested if nested is None else nested
        command = Command(
            name,
            action,
            parameters,
            description,
            self.execute if allow_nested else None,
            self.max_depth if max_depth is None else max_depth,
            on_parameter_error=on_parameter_error,
            types=self.types,
        )
        self.add(command)
        return command

    def command(
        self,
        name: str,
        parameters: Sequence[ParameterSpec] | None = None,
        description: str = "",
        **kwargs: object,
    ) -> Callable[[CommandAction], CommandAction]:
        """Decorator form of :meth:`create`; the action docstring is the fallback description."""

        def decorator(action: CommandAction) -> CommandAction:
            doc = (action.__doc__ or "").strip().splitlines()
            self.create(
                name,
                action,
                parameters,
                description or (doc[0] if doc else ""),
                **kwargs,  # type: ignore[arg-type]
            )
            return action

        return decorator

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def execute(self, line: str) -> str:
        """Run *line* on a fresh clone of the command named by its leading word.

        Raises:
            EmptyCommandError: If *line* is empty or whitespace-only.
            CommandNotFoundError: If the leading word names no command.
        """
        if is_blank(line):
            raise EmptyCommandError()

        name = leading_word(line)
        command = self._commands.get(name)
        if command is None:
            raise CommandNotFoundError(name)

        with trace_span(f"execute:{name}") as span:
            if span:
                span.annotate("line", line)
            return command.clone().run(line)
