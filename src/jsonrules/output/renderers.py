"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from jsonrules.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from jsonrules.services.result import ServiceResult

Renderer = Callable[..., None]


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
    if result.op == "list_rules":
        return "\n".join(result.data.get("rules", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="jr.ok")
    op = Text(f"  {result.op}", style="jr.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="jr.key")
    console.print(k, Text(str(value)), end="")
    console.print()


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def _failure_table(errors: dict[str, Any]) -> Table:
    """One row per failed rule, with its detail."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="jr.rule", no_wrap=True)
    table.add_column("Detail")
    for rule_name, detail in errors.items():
        table.add_row(Text(rule_name), Text(_compact(detail)))
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="jr.error")
    op = Text(f"  {result.op}", style="jr.op")
    console.print(label, op, Text(" — "), Text(msg))

    errors = result.data.get("errors")
    if errors:
        console.print(_failure_table(errors))
    elif verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    rules = result.data.get("rules", [])
    _field(console, "rules", ", ".join(rules) if rules else "(none)")


def _render_list_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="jr.rule")
    for name in result.data.get("rules", []):
        table.add_row(Text(name))
    console.print(table)
    _field(console, "count", result.data.get("count", 0))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, _compact(value) if isinstance(value, (dict, list)) else value)


_OP_RENDERERS: dict[str, Renderer] = {
    "check": _render_check,
    "list_rules": _render_list_rules,
}
