"""Tests for config section models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from linecmd.config.models import InterpreterConfig, PluginsConfig, ShellConfig


class TestSectionDefaults:
    def test_interpreter(self) -> None:
        assert InterpreterConfig() == InterpreterConfig(max_depth=3, nested=True)

    def test_plugins(self) -> None:
        cfg = PluginsConfig()
        assert cfg.discover is True
        assert cfg.local_dir == ".linecmd/plugins"
        assert cfg.disabled == []

    def test_shell(self) -> None:
        cfg = ShellConfig()
        assert cfg.prompt == "> "
        assert cfg.exit_words == ["exit", "quit"]

    def test_sparse_override(self) -> None:
        cfg = InterpreterConfig.model_validate({"max_depth": 0})
        assert cfg.max_depth == 0
        assert cfg.nested is True

    def test_frozen(self) -> None:
        cfg = PluginsConfig()
        with pytest.raises(ValidationError):
            cfg.discover = False  # type: ignore[misc]


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValidationError):
        InterpreterConfig(max_depth=-1)
