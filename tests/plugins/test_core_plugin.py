"""Tests for the built-in command set."""

from __future__ import annotations

import pytest

from linecmd.domain.errors import CommandNotFoundError, MissingParameterError
from linecmd.plugins.builtins.core import CorePlugin, _number
from linecmd.services.registry import CommandRegistry


@pytest.fixture
def core(registry: CommandRegistry) -> CommandRegistry:
    CorePlugin().register_commands(registry)
    return registry


@pytest.mark.parametrize(
    ("value", "expected"),
    [(7.0, "7"), (-2.0, "-2"), (0.75, "0.75"), (1e20, "100000000000000000000")],
)
def test_number(value: float, expected: str) -> None:
    assert _number(value) == expected


@pytest.mark.parametrize(
    ("line", "output"),
    [
        ("echo", ""),
        ("echo one  two", "one two"),
        ("add 1 2", "3"),
        ("add 1.5 2 0.5", "4"),
        ("mul -2 4", "-8"),
        ("upper mixed Case", "MIXED CASE"),
        ("concat a b c", "abc"),
        ('len ""', "0"),
        ("len {concat ab cd}", "4"),
    ],
)
def test_commands(core: CommandRegistry, line: str, output: str) -> None:
    assert core.execute(line) == output


def test_registered_names(core: CommandRegistry) -> None:
    assert core.names() == ["echo", "add", "mul", "upper", "concat", "len", "help"]


def test_mul_requires_two(core: CommandRegistry) -> None:
    with pytest.raises(MissingParameterError):
        core.execute("mul 2")


class TestHelp:
    def test_lists_usages(self, core: CommandRegistry) -> None:
        lines = core.execute("help").splitlines()
        assert lines[0] == "echo"
        assert "add <a:float> <b:float> [c:float]" in lines
        assert lines[-1] == "help [name:string]"

    def test_describes_one(self, core: CommandRegistry) -> None:
        assert core.execute("help mul").splitlines() == [
            "mul <a:float> <b:float>",
            "Multiply two numbers.",
            "  a: First factor",
            "  b: Second factor",
        ]

    def test_unknown_name(self, core: CommandRegistry) -> None:
        with pytest.raises(CommandNotFoundError) as exc_info:
            core.execute("help ghost")
        assert exc_info.value.name == "ghost"

    def test_unknown_name_in_nested_position_is_literal(self, core: CommandRegistry) -> None:
        assert core.execute("echo {help ghost}") == "{help ghost}"

    def test_help_does_not_resolve_braces(self, core: CommandRegistry) -> None:
        with pytest.raises(CommandNotFoundError) as exc_info:
            core.execute("help {echo add}")
        assert exc_info.value.name == "{echo add}"
