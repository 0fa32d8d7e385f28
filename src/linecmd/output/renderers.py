"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

Command output is returned as-is and never passes through a console.
Other user text is wrapped in :class:`rich.text.Text` so it is never parsed
as console markup.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from linecmd.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from linecmd.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    if result.ok and result.op == "execute":
        return _render_execute(result, verbose=verbose)

    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "execute":
        return str(result.data.get("output", ""))

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lc.ok"), Text(f"  {result.op}", style="lc.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="lc.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(Text(f"    {key}: {value}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    duration = span_data.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span_data.get('name', '?')}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="lc.error"),
        Text(f"  {result.op}", style="lc.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if err is not None:
        console.print(Text("  code: ", style="lc.key"), Text(err.code, style="lc.code"), sep="")
        if verbose:
            for key, value in err.detail.items():
                _field(console, key, value)
    if verbose:
        _render_meta(console, result)


def _render_execute(result: ServiceResult, *, verbose: bool = False) -> str:
    """Return the command output untouched; only the meta block goes through Rich."""
    output = str(result.data.get("output", ""))
    if not verbose or not result.meta:
        return output
    console = create_console()
    _render_meta(console, result)
    return output + get_output(console).rstrip("\n")


def _render_commands(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="lc.name", no_wrap=True)
    table.add_column("Usage", style="lc.usage")
    table.add_column("Description")
    for item in items:
        table.add_row(
            Text(str(item.get("name", ""))),
            Text(str(item.get("usage", ""))),
            Text(str(item.get("description", ""))),
        )
    console.print(table)
    if verbose:
        for item in items:
            params = [p for p in item.get("parameters", []) if p.get("description")]
            if not params:
                continue
            console.print(Text(item["name"], style="lc.name"))
            for p in params:
                _field(console, p["name"], p["description"])


def _render_types(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for item in result.data.get("items", []):
        console.print(Text(f"  {item.get('name', '')}", style="lc.name"))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_commands": _render_commands,
    "list_types": _render_types,
}
