"""Tests for LinecmdSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from linecmd.config.settings import LinecmdSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LINECMD_CONFIG", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.interpreter.max_depth == 3
        assert settings.interpreter.nested is True
        assert settings.plugins.discover is True
        assert settings.shell.prompt == "> "

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]

    def test_local_plugin_dir(self, tmp_path: Path) -> None:
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.local_plugin_dir == tmp_path / ".linecmd" / "plugins"


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "linecmd.toml").write_text(
            '[interpreter]\nmax_depth = 5\n[shell]\nprompt = "$ "\n'
        )
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.interpreter.max_depth == 5
        assert settings.interpreter.nested is True
        assert settings.shell.prompt == "$ "
        assert settings.config_path == tmp_path / "linecmd.toml"

    def test_sparse_section_keeps_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "linecmd.toml").write_text('[shell]\nexit_words = ["bye"]\n')
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.shell.exit_words == ["bye"]
        assert settings.shell.prompt == "> "
        assert settings.interpreter.max_depth == 3

    def test_project_root_from_discovered_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "linecmd.toml").write_text("[plugins]\ndiscover = false\n")
        child = tmp_path / "deep" / "dir"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        settings = LinecmdSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()
        assert settings.plugins.discover is False

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[plugins]\ndisabled = ["core"]\n')
        settings = LinecmdSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.plugins.disabled == ["core"]
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "linecmd.toml").write_text("[interpreter]\nmax_depth = 9\n")
        settings = LinecmdSettings.from_cli(
            config_path=str(tmp_path / "absent.toml"), project_root=tmp_path
        )
        assert settings.config_path is None
        assert settings.interpreter.max_depth == 3

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "linecmd.toml").write_text("[interpreter\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LinecmdSettings.from_cli(project_root=tmp_path)

    def test_invalid_value(self, tmp_path: Path) -> None:
        (tmp_path / "linecmd.toml").write_text("[interpreter]\nmax_depth = -1\n")
        with pytest.raises(ValidationError):
            LinecmdSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = LinecmdSettings.from_cli(
            project_root=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_none_flags_are_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINECMD_QUIET", "true")
        settings = LinecmdSettings.from_cli(project_root=tmp_path, quiet=None)
        assert settings.quiet is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "linecmd.toml").write_text("[interpreter]\nmax_depth = 5\n")
        monkeypatch.setenv("LINECMD_INTERPRETER__MAX_DEPTH", "8")
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.interpreter.max_depth == 8

    def test_env_nested_flag(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LINECMD_INTERPRETER__NESTED", "false")
        settings = LinecmdSettings.from_cli(project_root=tmp_path)
        assert settings.interpreter.nested is False
