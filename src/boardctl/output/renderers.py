"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from boardctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from boardctl.services.result import ServiceResult


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

    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [str(item["id"]) for item in items if isinstance(item, dict) and "id" in item]
        return "\n".join(ids)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="board.ok")
    op = Text(f"  {result.op}", style="board.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="board.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="board.id")
    elif key in ("title", "name"):
        v = Text(str(value), style="board.title")
    elif key == "position":
        v = Text(str(value), style="board.position")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
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


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="board.error")
    op = Text(f"  {result.op}", style="board.op")
    code = Text(f" [{err.code}] " if err else " ", style="board.warning")
    console.print(label, op, code, Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/reorder results."""
    _status_line(console, result)
    for key in (
        "id",
        "name",
        "title",
        "workspace_id",
        "board_id",
        "list_id",
        "position",
        "version",
    ):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


def _render_delete(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("id", "list_id", "board_id", "cards_deleted", "shifted"):
        if key in result.data:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Query renderers ───────────────────────────────────────────────────


def _render_board(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render get_board as a tree: board, then lists, then cards, in order."""
    board = result.data.get("board", {})
    root = Tree(
        Text.assemble((str(board.get("name", "?")), "board.title"), f"  {board.get('id', '')}")
    )
    for lst in result.data.get("lists", []):
        branch = root.add(
            Text.assemble(
                (f"{lst['position']}. ", "board.position"),
                (str(lst["name"]), "board.title"),
                f"  {lst['id']}",
                (f"  v{lst['version']}", "board.version") if verbose else "",
            )
        )
        cards = lst.get("cards", [])
        if not cards:
            branch.add(Text("(empty)", style="dim"))
        for card in cards:
            branch.add(
                Text.assemble(
                    (f"{card['position']}. ", "board.position"),
                    str(card["title"]),
                    f"  {card['id']}",
                    (f"  v{card['version']}", "board.version") if verbose else "",
                )
            )
    console.print(root)
    counts = result.data.get("count", {})
    console.print(f"\n{counts.get('lists', 0)} lists, {counts.get('cards', 0)} cards")
    if verbose:
        _render_meta(console, result)


def _render_board_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_boards as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="board.id", no_wrap=True)
    table.add_column("Name", style="board.title")
    table.add_column("Workspace")
    if verbose:
        table.add_column("Created", style="dim")
    for item in items:
        row = [
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("workspace_id", "")),
        ]
        if verbose:
            row.append(str(item.get("created", "")))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} boards")


# ── Check renderers ───────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[board.ok]OK[/board.ok]  No issues found.")
        return

    severity_styles = {"error": "board.error", "warning": "board.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_category.setdefault(str(issue.get("category", "unknown")), []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(f"\n[bold]{cat}[/bold]")
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            console.print(f"  {prefix}: {issue.get('message', '')}")
            if verbose and issue.get("fix_action"):
                console.print(f"    fix: {issue['fix_action']}")

    errors = sum(1 for i in issues if i.get("severity") == "error")
    console.print(f"\n{errors} errors, {count - errors} warnings")


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    for fix in fixes:
        console.print(f"  - {fix}")


# ── Init renderer ─────────────────────────────────────────────────────


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key in ("root", "name", "config", "database"):
        if key in result.data:
            _field(console, key, result.data[key])
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
    # Mutations
    "create_workspace": _render_mutation,
    "create_board": _render_mutation,
    "create_list": _render_mutation,
    "create_card": _render_mutation,
    "reorder_card": _render_mutation,
    "reorder_list": _render_mutation,
    "delete_card": _render_delete,
    "delete_list": _render_delete,
    # Query
    "get_board": _render_board,
    "list_boards": _render_board_table,
    # Check
    "check": _render_check,
    "fix": _render_fix,
    # Init
    "init": _render_init,
}
