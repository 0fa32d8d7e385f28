"""Pluggy hook specifications for linecmd extensions.

Two setup-time hooks let plugins contribute parameter types and commands.
One execution hook observes every line run through the interpreter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from linecmd.services.registry import CommandRegistry

hookspec = pluggy.HookspecMarker("linecmd")
hookimpl = pluggy.HookimplMarker("linecmd")


class LinecmdHookSpec:
    """Hook specifications for the linecmd plugin system."""

    @hookspec
    def register_parameter_types(self) -> dict[str, Callable[[str], Any]] | None:
        """Return type name -> parse function mappings.

        Parse functions raise ValueError on invalid literals. Names that are
        already registered are ignored (first registration wins).
        """

    @hookspec
    def register_commands(self, registry: CommandRegistry) -> None:
        """Declare commands on *registry* (typically via ``registry.create``)."""

    @hookspec
    def post_execute(self, line: str, ok: bool, output: str | None) -> None:
        """Called after the interpreter executes a top-level line."""
