"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from namectl.output.console import create_console, get_output, style_for_flag

if TYPE_CHECKING:
    from rich.console import Console

    from namectl.services.result import ServiceResult

UNIT = 1_000_000


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
        return f"ERROR: {result.op}: {msg}"
    if result.op == "lookup":
        return str(result.data.get("target", ""))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def format_tokens(micro: int) -> str:
    """Micro-units as a whole-token amount with six decimals."""
    whole, frac = divmod(micro, UNIT)
    return f"{whole:,}.{frac:06d}"


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="nc.ok")
    op = Text(f"  {result.op}", style="nc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="nc.key")
    if key in ("name", "target"):
        v = Text(str(value), style="nc.name")
    elif key in ("path", "output", "output_dir", "source"):
        v = Text(str(value), style="nc.path")
    elif key.endswith("value") and isinstance(value, int):
        v = Text(format_tokens(value), style="nc.value")
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
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="nc.error")
    op = Text(f"  {result.op}", style="nc.op")
    sep = Text(": ")
    console.print(label, op, sep, msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_compile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the compile summary: counts, unit values and rejection reasons."""
    d = result.data
    _status_line(console, result)
    if d.get("dry_run"):
        console.print(Text("  dry run: nothing written", style="nc.warning"))

    summary = Table(show_header=False, box=None, pad_edge=False)
    summary.add_column("Key", style="nc.key")
    summary.add_column("Value", justify="right")
    for key in ("names", "roots", "embargoed", "custom_values", "rejected"):
        summary.add_row(key, f"{d.get(key, 0):,}")
    for key in ("name_value", "root_value", "extra_value", "residue", "total_value"):
        summary.add_row(key, Text(format_tokens(d.get(key, 0)), style="nc.value"))
    console.print(summary)

    reasons: dict[str, int] = d.get("reasons") or {}
    if reasons:
        console.print()
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Reason", style="nc.reason")
        table.add_column("Count", justify="right")
        for reason, count in sorted(reasons.items(), key=lambda kv: (-kv[1], kv[0])):
            table.add_row(reason, f"{count:,}")
        console.print(table)

    if verbose:
        for path in d.get("artifacts", []):
            _field(console, "wrote", path)
        _render_meta(console, result)


def _render_lookup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single database record as a panel."""
    d = result.data
    flags = Text()
    for flag in d.get("flags", []):
        if flags:
            flags.append(" ")
        flags.append(flag, style=style_for_flag(flag))

    body = Text()
    body.append("target: ", style="nc.key")
    body.append(str(d.get("target", "")), style="nc.name")
    body.append("\nhash:   ", style="nc.key")
    body.append(str(d.get("hash", "")))
    body.append("\nflags:  ", style="nc.key")
    body.append_text(flags if flags else Text("none", style="dim"))
    body.append("\nvalue:  ", style="nc.key")
    body.append(format_tokens(d.get("value", 0)), style="nc.value")
    if d.get("custom") is not None:
        body.append("\ncustom: ", style="nc.key")
        body.append(format_tokens(d["custom"]), style="nc.value")

    console.print(Panel(body, title=str(d.get("name", "")), expand=False))
    if verbose:
        _render_meta(console, result)


def _render_artifacts(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render zone extraction, key verification and corpus import results."""
    _status_line(console, result)
    for key, value in result.data.items():
        if key == "artifacts":
            for path in value:
                _field(console, "wrote", path)
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


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
    "compile": _render_compile,
    "lookup": _render_lookup,
    "extract": _render_artifacts,
    "verify": _render_artifacts,
    "import_words": _render_artifacts,
    "import_ranked": _render_artifacts,
}
