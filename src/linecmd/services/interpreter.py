"""Interpreter — the service facade over type registry, command registry, and plugins.

Every public method returns a :class:`ServiceResult`; domain failures are
converted to ``ServiceError`` payloads carrying the failure's code and
detail, so callers never need to catch :class:`CommandError` themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from linecmd.domain.command import leading_word
from linecmd.domain.errors import CommandError
from linecmd.domain.parameters import ParameterTypeRegistry
from linecmd.plugins.builtins.core import PLUGIN_NAME as CORE_PLUGIN_NAME
from linecmd.plugins.builtins.core import CorePlugin
from linecmd.plugins.manager import PluginManager
from linecmd.services.registry import CommandRegistry
from linecmd.services.result import ServiceError, ServiceResult
from linecmd.services.telemetry import get_current_span, traced

if TYPE_CHECKING:
    from linecmd.config.settings import LinecmdSettings
    from linecmd.domain.command import Command

logger = logging.getLogger(__name__)

ACTION_FAILED = "ACTION_FAILED"


class Interpreter:
    """Owns the registries for one embedding and executes lines against them.

    Args:
        settings: Source of interpreter and plugin configuration. When None,
            code defaults are used and no plugin discovery happens.
        plugins: Pre-built plugin manager; one is created when omitted.
    """

    def __init__(
        self,
        settings: LinecmdSettings | None = None,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        disabled = settings.plugins.disabled if settings else []
        if plugins is None:
            plugins = PluginManager(blocked=disabled)
        else:
            for name in disabled:
                plugins.block(name)
        self.plugins = plugins

        self.types = ParameterTypeRegistry()
        if settings is not None:
            self.commands = CommandRegistry(
                types=self.types,
                max_depth=settings.interpreter.max_depth,
                nested=settings.interpreter.nested,
            )
        else:
            self.commands = CommandRegistry(types=self.types)

        self._load_plugins()

    def _load_plugins(self) -> None:
        if CORE_PLUGIN_NAME not in self.plugins.list_plugin_names():
            self.plugins.register_plugin(CorePlugin(), name=CORE_PLUGIN_NAME)

        settings = self._settings
        if settings is not None and settings.plugins.discover:
            try:
                self.plugins.discover_and_load(local_dir=settings.local_plugin_dir)
            except Exception:
                logger.warning("Plugin discovery failed", exc_info=True)

        added_types = self.plugins.load_parameter_types(self.types)
        added_commands = self.plugins.load_commands(self.commands)
        logger.debug(
            "Interpreter ready: %d types (%d from plugins), %d commands",
            len(self.types),
            len(added_types),
            len(added_commands),
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @traced
    def execute(self, line: str) -> ServiceResult:
        """Execute one line and wrap the outcome.

        Success data: ``{"command", "line", "output"}``.
        """
        op = "execute"
        name = leading_word(line) if line else ""
        span = get_current_span()
        if span:
            span.annotate("command", name)

        warnings: list[str] = []
        try:
            output = self.commands.execute(line)
        except CommandError as exc:
            logger.debug("Execution failed: %s", exc)
            self._post_execute(line, ok=False, output=None, warnings=warnings)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError.from_exception(exc),
                warnings=warnings,
            )
        except Exception as exc:
            logger.debug("Action raised for %r", line, exc_info=True)
            self._post_execute(line, ok=False, output=None, warnings=warnings)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ACTION_FAILED,
                    message=f"Command '{name}' failed: {exc}",
                    detail={"name": name, "exception": type(exc).__name__},
                ),
                warnings=warnings,
            )

        self._post_execute(line, ok=True, output=output, warnings=warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={"command": name, "line": line, "output": output},
            warnings=warnings,
        )

    def list_commands(self) -> ServiceResult:
        """Describe every registered command in registration order."""
        items = [_describe(cmd) for cmd in self.commands.list()]
        return ServiceResult(
            ok=True,
            op="list_commands",
            data={"count": len(items), "items": items},
        )

    def list_types(self) -> ServiceResult:
        """List registered parameter type names in registration order."""
        items = [{"name": name} for name in self.types.names()]
        return ServiceResult(
            ok=True,
            op="list_types",
            data={"count": len(items), "items": items},
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _post_execute(
        self,
        line: str,
        *,
        ok: bool,
        output: str | None,
        warnings: list[str],
    ) -> None:
        """Notify plugins. INVARIANT: Plugin failures are warnings, never errors."""
        try:
            self.plugins.hook.post_execute(line=line, ok=ok, output=output)
        except Exception:
            logger.debug("post_execute hook failed", exc_info=True)
            warnings.append("post_execute hook failed")


def _describe(command: Command) -> dict[str, Any]:
    return {
        "name": command.name,
        "description": command.description,
        "usage": command.usage(),
        "parameters": [spec.model_dump(mode="json") for spec in command.parameters],
    }
