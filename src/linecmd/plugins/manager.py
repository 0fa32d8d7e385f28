"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery from ``.linecmd/plugins/``.
Capabilities: parameter types, commands, post-execution observers.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from linecmd.plugins.hookspecs import LinecmdHookSpec

if TYPE_CHECKING:
    from linecmd.domain.parameters import ParameterTypeRegistry
    from linecmd.services.registry import CommandRegistry

PROJECT_NAME = "linecmd"
ENTRY_POINT_GROUP = "linecmd.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self, *, blocked: Iterable[str] = ()) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(LinecmdHookSpec)
        for name in blocked:
            self._pm.set_blocked(name)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> bool:
        """Register a plugin instance directly (e.g. built-in plugins).

        Returns False if *name* is blocked.
        """
        resolved_name = name or plugin.__class__.__name__
        if self._pm.is_blocked(resolved_name):
            logger.debug("Skipping blocked plugin: %s", resolved_name)
            return False
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)
        return True

    def block(self, name: str) -> None:
        """Block *name*, unregistering it first if already loaded."""
        self._pm.set_blocked(name)
        logger.debug("Blocked plugin: %s", name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins in registration order."""
        return [name for name, plugin in self._pm.list_name_plugin() if plugin is not None]

    # ------------------------------------------------------------------
    # Contributions
    # ------------------------------------------------------------------

    def load_parameter_types(self, types: ParameterTypeRegistry) -> list[str]:
        """Collect plugin-provided parse functions into *types*.

        Returns the names that were newly registered. Names already present
        keep their first registration.
        """
        added: list[str] = []
        for plugin_name, plugin in self._pm.list_name_plugin():
            hook = getattr(plugin, "register_parameter_types", None)
            if hook is None:
                continue

            try:
                type_map = hook()
            except Exception:
                logger.warning(
                    "Failed to collect parameter types from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            if type_map is None:
                continue
            if not isinstance(type_map, dict):
                logger.warning(
                    "Plugin %s returned non-dict parameter type registrations",
                    plugin_name,
                )
                continue

            for type_name, parse_fn in type_map.items():
                try:
                    if types.register(type_name, parse_fn):
                        added.append(type_name)
                except (TypeError, ValueError):
                    logger.warning(
                        "Skipping parameter type %r from plugin %s",
                        type_name,
                        plugin_name,
                        exc_info=True,
                    )
        return added

    def load_commands(self, registry: CommandRegistry) -> list[str]:
        """Let every plugin declare commands on *registry*.

        A plugin that raises is logged and skipped; commands it declared
        before failing stay registered.
        """
        before = set(registry.names())
        for plugin_name, plugin in self._pm.list_name_plugin():
            hook = getattr(plugin, "register_commands", None)
            if hook is None:
                continue
            try:
                hook(registry=registry)
            except Exception:
                logger.warning(
                    "Failed to register commands from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
        return [name for name in registry.names() if name not in before]

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes inside the module that carry pluggy hookimpl-decorated
        methods are instantiated and registered.

        Errors are logged as warnings but never raised.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"linecmd_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue  # imported
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=module_name)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly, which
        leaves ``self`` unbound at dispatch time.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("linecmd")`` sets a ``linecmd_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "linecmd_impl", None):
                return True
        return False
