"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NamedTuple

from rich.text import Text

from datype.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from datype.services.result import ServiceResult


class RenderOptions(NamedTuple):
    verbose: bool = False
    indent: int = 2
    sort_keys: bool = False


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult,
    *,
    verbose: bool = False,
    indent: int = 2,
    sort_keys: bool = False,
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    opts = RenderOptions(verbose=verbose, indent=indent, sort_keys=sort_keys)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, opts)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, opts)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult, *, indent: int = 2, sort_keys: bool = False) -> str:
    """Render only the essential value for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    match result.op:
        case "merge":
            return _dump(d.get("document"), indent=indent, sort_keys=sort_keys)
        case "compare":
            return "equal" if d.get("equal") else "different"
        case "slugify":
            return str(d.get("slug", ""))
        case "convert_case":
            return str(d.get("output", ""))
        case _:
            return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _dump(value: Any, *, indent: int, sort_keys: bool) -> str:
    return json.dumps(value, indent=indent or None, sort_keys=sort_keys, ensure_ascii=False)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="dt.ok"), Text(f"  {result.op}", style="dt.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    """Print a single indented key-value field."""
    if not style and key in ("path", "left", "right"):
        style = "dt.path"
    console.print(Text(f"  {key}: ", style="dt.key"), Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
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


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="dt.error"),
        Text(f"  {result.op}", style="dt.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if err:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if opts.verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_merge(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "sources", ", ".join(d.get("sources", [])), style="dt.path")
    _field(console, "strategy", d.get("strategy", ""))
    if opts.verbose:
        _field(console, "max_depth", d.get("max_depth", ""))
    console.print()
    console.print(Text(_dump(d.get("document"), indent=opts.indent, sort_keys=opts.sort_keys)))


def _render_compare(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "left", d.get("left", ""))
    _field(console, "right", d.get("right", ""))
    if d.get("equal"):
        console.print(Text("  documents are equal", style="dt.equal"))
        return

    console.print(Text("  documents differ", style="dt.different"))
    if d.get("left_kind") != d.get("right_kind"):
        _field(console, "left_kind", d.get("left_kind"), style="dt.kind")
        _field(console, "right_kind", d.get("right_kind"), style="dt.kind")
    differences = d.get("differences") or {}
    for label, key in (("only in left", "only_left"), ("only in right", "only_right"), ("changed", "changed")):
        keys = differences.get(key) or []
        if keys:
            _field(console, label, ", ".join(keys))


def _render_slugify(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    _status_line(console, result)
    _field(console, "slug", result.data.get("slug", ""), style="dt.value")
    if opts.verbose:
        _field(console, "input", result.data.get("input", ""))


def _render_convert_case(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, d.get("style", "output"), d.get("output", ""), style="dt.value")
    if opts.verbose:
        _field(console, "input", d.get("input", ""))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, opts: RenderOptions) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console, RenderOptions], None]] = {
    "merge": _render_merge,
    "compare": _render_compare,
    "slugify": _render_slugify,
    "convert_case": _render_convert_case,
}
