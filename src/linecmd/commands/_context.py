"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Interpreter construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from linecmd.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from linecmd.config.settings import LinecmdSettings
    from linecmd.services.interpreter import Interpreter
    from linecmd.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The interpreter (and plugin discovery) is built on first use so
    ``--help`` and ``--version`` stay cheap.
    """

    def __init__(self, settings: LinecmdSettings) -> None:
        self.settings = settings
        self._interpreter: Interpreter | None = None

        from linecmd.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from linecmd.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def interpreter(self) -> Interpreter:
        """The interpreter instance (created lazily on first access)."""
        if self._interpreter is None:
            from linecmd.services.interpreter import Interpreter

            self._interpreter = Interpreter(self.settings)
        return self._interpreter

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def render(self, result: ServiceResult) -> None:
        """Write *result* to stdout (success) or stderr (failure) without exiting."""
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)

    def emit(self, result: ServiceResult) -> None:
        """Render *result*; exit with code 1 if it failed."""
        self.render(result)
        if not result.ok:
            raise SystemExit(1)
