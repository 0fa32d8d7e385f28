"""Command: read and execute lines from stdin."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from linecmd.commands._base import LinecmdCommand

if TYPE_CHECKING:
    from linecmd.commands._context import AppContext


@click.command(
    cls=LinecmdCommand,
    examples="""\
  linecmd shell
  printf 'add 1 2\\necho {add 3 4}\\n' | linecmd shell
  linecmd --json shell --stop-on-error < script.txt""",
)
@click.option("--stop-on-error", is_flag=True, help="Exit with code 1 at the first failing line.")
@click.pass_obj
def shell(app: AppContext, stop_on_error: bool) -> None:
    """Execute lines from stdin until EOF or an exit word."""
    stdin = sys.stdin
    interactive = stdin.isatty()
    prompt = app.settings.shell.prompt
    exit_words = set(app.settings.shell.exit_words)
    failures = 0

    while True:
        if interactive:
            click.echo(prompt, nl=False)
        raw = stdin.readline()
        if not raw:
            break
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        if line.strip() in exit_words:
            break

        result = app.interpreter.execute(line)
        app.render(result)
        if not result.ok:
            failures += 1
            if stop_on_error:
                raise SystemExit(1)

    if interactive:
        click.echo()
    if failures and not app.settings.quiet and not app.settings.json_output:
        click.echo(f"{failures} line(s) failed", err=True)
