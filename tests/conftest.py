"""Shared pytest fixtures and test helpers for linecmd tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from linecmd.config.models import PluginsConfig
from linecmd.config.settings import LinecmdSettings
from linecmd.domain.binder import BoundParameters
from linecmd.domain.parameters import ParameterTypeRegistry
from linecmd.services.interpreter import Interpreter
from linecmd.services.registry import CommandRegistry
from linecmd.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo telemetry and root-logger changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg = logging.getLogger("linecmd")
    pkg_level = pkg.level
    yield
    disable_telemetry()
    _current_span.set(None)
    root.handlers = handlers
    root.setLevel(level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def types() -> ParameterTypeRegistry:
    """Fresh type registry with the built-in types only."""
    return ParameterTypeRegistry()


@pytest.fixture
def registry(types: ParameterTypeRegistry) -> CommandRegistry:
    """Empty command registry parsing with the ``types`` fixture."""
    return CommandRegistry(types=types)


@pytest.fixture
def settings(tmp_path: Path) -> LinecmdSettings:
    """Settings rooted at a temp dir with plugin discovery switched off."""
    return LinecmdSettings(
        project_root=tmp_path,
        plugins=PluginsConfig(discover=False),
    )


@pytest.fixture
def interpreter(settings: LinecmdSettings) -> Interpreter:
    """Interpreter with the built-in command set."""
    return Interpreter(settings)


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory with no config overrides."""
    monkeypatch.delenv("LINECMD_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def join_tokens(params: BoundParameters) -> str:
    """Action that echoes every token separated by spaces."""
    return " ".join(params.tokens)
