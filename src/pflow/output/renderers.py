"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pflow.output.console import create_console, format_delta, format_vector, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from pflow.services.result import ServiceResult


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "enabled":
        return "\n".join(item["action"] for item in result.data.get("items", []))
    if result.op == "fire":
        return format_vector(result.data.get("state", []))
    if result.op == "describe":
        return "\n".join(t["label"] for t in result.data.get("transitions", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="pflow.ok")
    op = Text(f"  {result.op}", style="pflow.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pflow.key")
    if key.endswith("state") and isinstance(value, list):
        v = Text(format_vector(value), style="pflow.state")
    else:
        v = Text(str(value))
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
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render the span tree: one line per span, steps marked ok or rejected."""
    line = Text(" " * indent)
    line.append(f"{span_data.get('duration_ms', 0.0):>8.2f}ms  ", style="dim")
    line.append(span_data.get("name", "?"))
    if "action" in span_data:
        line.append(f"  x{span_data.get('multiplier', 1)}", style="pflow.key")
        if span_data.get("ok"):
            line.append("  ok ", style="pflow.ok")
        else:
            line.append(f"  {span_data.get('error', 'ERROR')} ", style="pflow.error")
        line.append(format_vector(span_data.get("state", [])), style="pflow.state")
    elif span_data.get("rejected"):
        line.append(f"  ({span_data['rejected']} rejected)", style="pflow.warning")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pflow.error")
    op = Text(f"  {result.op}", style="pflow.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if err and err.detail:
        for key in ("state", "attempted"):
            if key in err.detail:
                _field(console, key, err.detail[key])
        if verbose:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Model renderers ───────────────────────────────────────────────────


def _render_describe(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "schema", d.get("schema", ""))
    _field(console, "roles", ", ".join(d.get("roles", [])))
    _field(console, "initial_state", d.get("initial_state", []))

    places = d.get("places", [])
    place_table = Table(title="Places", show_header=True, pad_edge=False, expand=False)
    place_table.add_column("#", justify="right", style="dim")
    place_table.add_column("Label", style="pflow.label")
    place_table.add_column("Initial", justify="right")
    place_table.add_column("Capacity", justify="right")
    for p in places:
        capacity = p.get("capacity")
        place_table.add_row(
            str(p["offset"]),
            p["label"],
            str(p.get("initial", 0)),
            "∞" if capacity is None else str(capacity),
        )
    console.print()
    console.print(place_table)

    labels = [p["label"] for p in places]
    txn_table = Table(title="Transitions", show_header=True, pad_edge=False, expand=False)
    txn_table.add_column("#", justify="right", style="dim")
    txn_table.add_column("Label", style="pflow.label")
    txn_table.add_column("Role", style="pflow.role")
    txn_table.add_column("Effect")
    txn_table.add_column("Inhibitors")
    for t in d.get("transitions", []):
        guards = ", ".join(f"{label}>={weight}" for label, weight in t.get("guards", {}).items())
        txn_table.add_row(
            str(t["offset"]),
            t["label"],
            t.get("role", ""),
            format_delta(t.get("delta", []), labels),
            guards or "-",
        )
    console.print()
    console.print(txn_table)
    if verbose:
        _render_meta(console, result)


def _render_enabled(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "state", d.get("state", []))

    items = d.get("items", [])
    if items:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Action", style="pflow.label")
        table.add_column("Role", style="pflow.role")
        table.add_column("Next state", style="pflow.state")
        for item in items:
            table.add_row(item["action"], item.get("role", ""), format_vector(item["state"]))
        console.print(table)
    console.print(f"\n{d.get('count', len(items))} actions enabled")
    if verbose:
        _render_meta(console, result)


def _render_fire(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "initial_state", d.get("initial_state", []))

    steps = d.get("steps", [])
    if steps:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Step", justify="right", style="dim")
        table.add_column("Action", style="pflow.label")
        table.add_column("Role", style="pflow.role")
        table.add_column("State", style="pflow.state")
        for step in steps:
            table.add_row(
                str(step["step"]),
                step["action"],
                str(step.get("role") or ""),
                format_vector(step["state"]),
            )
        console.print(table)
    _field(console, "state", d.get("state", []))
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: status line plus one field per data key."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "describe": _render_describe,
    "enabled": _render_enabled,
    "fire": _render_fire,
}
