"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from linecmd.output.renderers import render_quiet, render_result
from linecmd.services.result import ServiceError, ServiceResult


def _execute(output: str, **kwargs: object) -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="execute",
        data={"command": "echo", "line": f"echo {output}", "output": output},
        **kwargs,
    )


def _failure() -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="execute",
        error=ServiceError(
            code="COMMAND_NOT_FOUND",
            message="Command with name 'nope' not found",
            detail={"name": "nope"},
        ),
    )


def _commands() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="list_commands",
        data={
            "count": 2,
            "items": [
                {
                    "name": "echo",
                    "description": "Repeat all parameters.",
                    "usage": "echo",
                    "parameters": [],
                },
                {
                    "name": "len",
                    "description": "Count characters.",
                    "usage": "len <text:string>",
                    "parameters": [
                        {
                            "type_name": "string",
                            "name": "text",
                            "description": "Text to measure",
                            "optional": False,
                        }
                    ],
                },
            ],
        },
    )


class TestRenderExecute:
    def test_output_only(self) -> None:
        assert render_result(_execute("7")) == "7"

    def test_markup_is_not_interpreted(self) -> None:
        assert render_result(_execute("[bold]x[/bold]")) == "[bold]x[/bold]"

    def test_long_output_not_wrapped(self) -> None:
        text = "word " * 60
        assert render_result(_execute(text.strip())) == text.strip()

    def test_multiline_output(self) -> None:
        assert render_result(_execute("a\nb")) == "a\nb"

    def test_tabs_and_control_characters_kept(self) -> None:
        assert render_result(_execute("a\tb\x07c")) == "a\tb\x07c"

    def test_verbose_shows_telemetry(self) -> None:
        result = _execute(
            "hi",
            meta={
                "telemetry": {
                    "name": "Interpreter.execute",
                    "duration_ms": 1.5,
                    "annotations": {"command": "echo"},
                    "children": [{"name": "execute:echo", "duration_ms": 1.0}],
                }
            },
        )
        output = render_result(result, verbose=True)
        assert output.startswith("hi")
        assert "Interpreter.execute" in output
        assert "(command=echo)" in output
        assert "execute:echo" in output

    def test_meta_hidden_without_verbose(self) -> None:
        result = _execute("hi", meta={"telemetry": {"name": "x", "duration_ms": 0.0}})
        assert render_result(result) == "hi"


class TestRenderError:
    def test_message_and_code(self) -> None:
        output = render_result(_failure())
        assert "ERROR" in output
        assert "Command with name 'nope' not found" in output
        assert "code: COMMAND_NOT_FOUND" in output
        assert "name: nope" not in output

    def test_verbose_shows_detail(self) -> None:
        assert "name: nope" in render_result(_failure(), verbose=True)


class TestRenderLists:
    def test_commands_table(self) -> None:
        output = render_result(_commands())
        assert "Name" in output
        assert "Usage" in output
        assert "len <text:string>" in output
        assert "Count characters." in output

    def test_commands_verbose_lists_parameter_descriptions(self) -> None:
        assert "text: Text to measure" in render_result(_commands(), verbose=True)

    def test_types(self) -> None:
        result = ServiceResult(
            ok=True,
            op="list_types",
            data={"count": 2, "items": [{"name": "int"}, {"name": "color"}]},
        )
        output = render_result(result)
        assert output.splitlines() == ["OK  list_types", "  int", "  color"]

    def test_generic_fallback(self) -> None:
        result = ServiceResult(ok=True, op="custom", data={"answer": 42, "nested": {"a": 1}})
        output = render_result(result)
        assert "OK  custom" in output
        assert "answer: 42" in output
        assert 'nested: {"a":1}' in output


class TestRenderQuiet:
    def test_execute_prints_output(self) -> None:
        assert render_quiet(_execute("7")) == "7"

    def test_list_prints_names(self) -> None:
        assert render_quiet(_commands()) == "echo\nlen"

    def test_error(self) -> None:
        assert render_quiet(_failure()) == "ERROR: execute — Command with name 'nope' not found"

    def test_other_ops(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="custom")) == "OK: custom"
