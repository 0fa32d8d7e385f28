"""Command: list registered commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linecmd.commands._base import LinecmdCommand

if TYPE_CHECKING:
    from linecmd.commands._context import AppContext


@click.command(
    "list",
    cls=LinecmdCommand,
    examples="""\
  linecmd list
  linecmd -v list
  linecmd --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered commands with their usage."""
    app.emit(app.interpreter.list_commands())
