"""Command: execute a single line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linecmd.commands._base import LinecmdCommand

if TYPE_CHECKING:
    from linecmd.commands._context import AppContext


@click.command(
    cls=LinecmdCommand,
    context_settings={"ignore_unknown_options": True},
    examples="""\
  linecmd run 'add 3 4'
  linecmd run 'echo "hello world" again'
  linecmd run 'upper {echo nested call}'
  linecmd --json run 'mul 2.5 {add 1 1}'""",
)
@click.argument("line", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(app: AppContext, line: tuple[str, ...]) -> None:
    """Execute LINE (arguments are joined with single spaces)."""
    app.emit(app.interpreter.execute(" ".join(line)))
