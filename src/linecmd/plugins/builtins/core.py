"""Built-in command set registered on every interpreter.

Small, composable commands that make nested substitution useful out of
the box, e.g. ``echo {add 2 {mul 3 4}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from linecmd.domain.errors import CommandNotFoundError
from linecmd.domain.parameters import param
from linecmd.domain.values import BuiltinType
from linecmd.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from linecmd.domain.binder import BoundParameters
    from linecmd.services.registry import CommandRegistry

PLUGIN_NAME = "core"


def _number(value: float) -> str:
    """Render integral floats without a trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class CorePlugin:
    """Registers echo, add, mul, upper, concat, len and help."""

    @hookimpl
    def register_commands(self, registry: CommandRegistry) -> None:
        def echo(params: BoundParameters) -> str:
            return " ".join(params.tokens)

        def add(params: BoundParameters) -> str:
            return _number(sum(v.value for v in params.values))

        def mul(params: BoundParameters) -> str:
            return _number(params.get("a") * params.get("b"))

        def upper(params: BoundParameters) -> str:
            return " ".join(params.tokens).upper()

        def concat(params: BoundParameters) -> str:
            return "".join(params.tokens)

        def length(params: BoundParameters) -> str:
            return str(len(params.get("text")))

        def help_(params: BoundParameters) -> str:
            name = params.get("name")
            if name is None:
                return "\n".join(cmd.usage() for cmd in registry.list())
            command = registry.get(name)
            if command is None:
                raise CommandNotFoundError(name)
            lines = [command.usage()]
            if command.description:
                lines.append(command.description)
            for spec in command.parameters:
                if spec.description:
                    lines.append(f"  {spec.name}: {spec.description}")
            return "\n".join(lines)

        registry.create(
            "echo",
            echo,
            description="Repeat all parameters separated by single spaces.",
        )
        registry.create(
            "add",
            add,
            [
                param(BuiltinType.FLOAT, "a", "First addend"),
                param(BuiltinType.FLOAT, "b", "Second addend"),
                param(BuiltinType.FLOAT, "c", "Optional third addend", optional=True),
            ],
            "Add two or three numbers.",
        )
        registry.create(
            "mul",
            mul,
            [
                param(BuiltinType.FLOAT, "a", "First factor"),
                param(BuiltinType.FLOAT, "b", "Second factor"),
            ],
            "Multiply two numbers.",
        )
        registry.create(
            "upper",
            upper,
            [param(BuiltinType.STRING, "text", "Text to convert")],
            "Upper-case the parameters.",
        )
        registry.create(
            "concat",
            concat,
            description="Join all parameters without separators.",
        )
        registry.create(
            "len",
            length,
            [param(BuiltinType.STRING, "text", "Text to measure")],
            "Number of characters in the first parameter.",
        )
        registry.create(
            "help",
            help_,
            [param(BuiltinType.STRING, "name", "Command to describe", optional=True)],
            "List commands, or describe one command.",
            nested=False,
        )
