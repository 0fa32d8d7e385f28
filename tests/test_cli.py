"""Tests for the root linecmd CLI."""

import pytest
from click.testing import CliRunner

from linecmd import __version__
from linecmd.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "linecmd" in result.output
    for name in ("run", "shell", "list", "types"):
        assert name in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize(
    "flags",
    [["--json"], ["-q"], ["-v"], ["--log-json"], ["-c", "/tmp/absent.toml"]],
)
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_project")
def test_invalid_toml_is_click_error(cli_runner: CliRunner, tmp_path) -> None:
    (tmp_path / "linecmd.toml").write_text("[interpreter\n")
    result = cli_runner.invoke(cli, ["run", "echo hi"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.stderr


@pytest.mark.usefixtures("_isolated_project")
def test_explicit_config(cli_runner: CliRunner, tmp_path) -> None:
    config = tmp_path / "alt.toml"
    config.write_text("[interpreter]\nnested = false\n")
    result = cli_runner.invoke(cli, ["-c", str(config), "run", "echo {echo x}"])
    assert result.stdout == "{echo x}\n"
