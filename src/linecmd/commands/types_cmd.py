"""Command: list registered parameter types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linecmd.commands._base import LinecmdCommand

if TYPE_CHECKING:
    from linecmd.commands._context import AppContext


@click.command(
    "types",
    cls=LinecmdCommand,
    examples="""\
  linecmd types
  linecmd -q types""",
)
@click.pass_obj
def types_cmd(app: AppContext) -> None:
    """List registered parameter types."""
    app.emit(app.interpreter.list_types())
