"""Subcommand modules for linecmd.

Provides register_commands() which uses deferred imports to keep
``linecmd --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from linecmd.commands.list_cmd import list_cmd
    from linecmd.commands.run import run
    from linecmd.commands.shell import shell
    from linecmd.commands.types_cmd import types_cmd

    cli.add_command(run)
    cli.add_command(shell)
    cli.add_command(list_cmd)
    cli.add_command(types_cmd)
