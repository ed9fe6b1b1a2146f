"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from psuctl.output.console import (
    ENDPOINT_STATUSES,
    ENDPOINT_TYPES,
    STACK_STATUSES,
    STACK_TYPES,
    create_console,
    get_output,
    label_for,
    style_for_status,
)

if TYPE_CHECKING:
    from rich.console import Console

    from psuctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: names only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))
    if result.op == "config_get":
        return _plain(result.data.get("value"))
    if "name" in result.data:
        return str(result.data["name"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _plain(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="psu.ok")
    op = Text(f"  {result.op}", style="psu.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}:", style="psu.key")
    if key == "id" or key.endswith("_id"):
        v = Text(_plain(value), style="psu.id")
    elif key == "name":
        v = Text(_plain(value), style="psu.name")
    elif key.endswith("url"):
        v = Text(_plain(value), style="psu.url")
    else:
        v = Text(_plain(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _status_text(labels: dict[int, str], value: Any) -> Text:
    status = label_for(labels, value)
    return Text(status, style=style_for_status(status))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="psu.error")
    op = Text(f"  {result.op}", style="psu.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Endpoint renderers ────────────────────────────────────────────────


def _render_endpoint_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="psu.id", justify="right", no_wrap=True)
    table.add_column("Name", style="psu.name")
    table.add_column("Type")
    table.add_column("URL", style="psu.url")
    table.add_column("Status")
    if verbose:
        table.add_column("Public URL", style="psu.url")
        table.add_column("Group", justify="right")

    for item in items:
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            label_for(ENDPOINT_TYPES, item.get("type", "")),
            str(item.get("url", "")),
            _status_text(ENDPOINT_STATUSES, item.get("status", "")),
        ]
        if verbose:
            row.append(str(item.get("public_url", "")))
            row.append(str(item.get("group_id", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} endpoints")
    if verbose:
        _render_meta(console, result)


def _render_endpoint(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "id", d.get("id"))
    _field(console, "name", d.get("name"))
    _field(console, "type", label_for(ENDPOINT_TYPES, d.get("type", "")))
    _field(console, "url", d.get("url", ""))
    _field(console, "status", label_for(ENDPOINT_STATUSES, d.get("status", "")))
    if verbose:
        for key in ("public_url", "group_id"):
            _field(console, key, d.get(key, ""))
        _render_meta(console, result)


# ── Stack renderers ───────────────────────────────────────────────────


def _render_scope(console: Console, data: dict[str, Any]) -> None:
    endpoint = data.get("endpoint") or {}
    scope = f"Endpoint [psu.name]{endpoint.get('name', '?')}[/psu.name]"
    scope += f" ([psu.id]{endpoint.get('id', '?')}[/psu.id])"
    cluster_id = data.get("cluster_id")
    if cluster_id:
        scope += f", cluster [psu.id]{cluster_id}[/psu.id]"
    console.print(scope)


def _render_stack_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    _render_scope(console, result.data)

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="psu.id", justify="right", no_wrap=True)
    table.add_column("Name", style="psu.name")
    table.add_column("Type")
    table.add_column("Status")
    if verbose:
        table.add_column("Entry point")
        table.add_column("Env", justify="right")

    for item in items:
        row: list[Any] = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            label_for(STACK_TYPES, item.get("type", "")),
            _status_text(STACK_STATUSES, item.get("status", "")),
        ]
        if verbose:
            row.append(str(item.get("entry_point", "")))
            row.append(str(len(item.get("env") or [])))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} stacks")
    if verbose:
        _render_meta(console, result)


def _render_stack(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "id", d.get("id"))
    _field(console, "name", d.get("name"))
    _field(console, "type", label_for(STACK_TYPES, d.get("type", "")))
    _field(console, "endpoint_id", d.get("endpoint_id"))
    if d.get("swarm_id"):
        _field(console, "swarm_id", d["swarm_id"])
    _field(console, "entry_point", d.get("entry_point", ""))
    _field(console, "status", label_for(STACK_STATUSES, d.get("status", "")))

    env = d.get("env") or []
    if env:
        console.print(Text("  env:", style="psu.key"))
        for var in env:
            console.print(f"    {var.get('name')}={var.get('value', '')}")
    if verbose:
        _render_meta(console, result)


# ── Config renderers ──────────────────────────────────────────────────


def _render_config_value(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Print the bare value so ``psuctl config KEY`` composes in shell scripts."""
    console.print(_plain(result.data.get("value")), markup=False)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "list_endpoints": _render_endpoint_table,
    "inspect_endpoint": _render_endpoint,
    "list_stacks": _render_stack_table,
    "inspect_stack": _render_stack,
    "config_get": _render_config_value,
    "config_set": _render_generic,
}
