"""Tests for the list and types commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from linecmd.cli import cli

pytestmark = pytest.mark.usefixtures("_isolated_project")


class TestList:
    def test_human_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Usage" in result.stdout
        assert "add <a:float> <b:float> [c:float]" in result.stdout

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "list"])
        data = json.loads(result.stdout)
        assert data["op"] == "list_commands"
        assert data["data"]["count"] == 7
        assert [item["name"] for item in data["data"]["items"]][:2] == ["echo", "add"]

    def test_quiet_prints_names(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "list"])
        assert result.stdout.splitlines() == ["echo", "add", "mul", "upper", "concat", "len", "help"]


class TestTypes:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["types"])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["OK  list_types", "  int", "  float", "  string"]

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "types"])
        names = [item["name"] for item in json.loads(result.stdout)["data"]["items"]]
        assert names == ["int", "float", "string"]
