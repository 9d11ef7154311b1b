"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from archctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from archctl.services.result import ServiceResult


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

    items = result.data.get("items")
    if items and isinstance(items, list):
        if result.op == "evaluate_rules":
            return "\n".join(f"{i['id']} {i['status']}" for i in items)
        return "\n".join(str(i.get("id", "")) for i in items if isinstance(i, dict))

    if result.op == "fork" and result.data.get("id"):
        return str(result.data["id"])

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="arch.ok")
    op = Text(f"  {result.op}", style="arch.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="arch.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="arch.id")
    elif key in ("status", "previous"):
        v = Text(str(value), style=style_for_status(str(value)))
    elif key == "version_label":
        v = Text(str(value), style="arch.label")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    line = f"{prefix}[dim]{span.get('duration_ms', 0.0):>8.3f}ms[/dim]  {span.get('name', '?')}"
    annotations = span.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent=indent + 4)


def _summary_line(summary: dict[str, int]) -> Text:
    text = Text("  ")
    parts = [("SATISFIED", "satisfied"), ("VIOLATED", "violated"), ("NOT_EVALUABLE", "unevaluable")]
    for i, (key, label) in enumerate(parts):
        if i:
            text.append(", ")
        text.append(f"{summary.get(key, 0)} {label}", style=style_for_status(key))
    return text


def _rule_table(rules: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", style="arch.id", no_wrap=True)
    table.add_column("Description", style="arch.name")
    table.add_column("Severity")
    table.add_column("Matcher")
    table.add_column("Status")
    table.add_column("Via")
    for rule in rules:
        severity = str(rule.get("severity", ""))
        table.add_row(
            str(rule.get("id", "")),
            str(rule.get("description", "")),
            Text(severity, style="bold" if severity == "CRITICAL" else ""),
            f'"{rule.get("matcher", "")}"',
            _status_text(str(rule.get("status", ""))),
            ", ".join(rule.get("matching_services", [])) or Text("none", style="dim"),
        )
    return table


def _service_table(services: list[dict[str, Any]], *, member_column: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="arch.id", no_wrap=True)
    table.add_column("Name", style="arch.name")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Contract")
    if member_column:
        table.add_column("In")
    for svc in services:
        name = str(svc.get("name", ""))
        if svc.get("is_experimental"):
            name += " (exp)"
        row: list[Any] = [
            str(svc.get("id", "")),
            name,
            str(svc.get("type", "")),
            _status_text(str(svc.get("evaluation_status", ""))),
            ", ".join(svc.get("contract_metrics", [])),
        ]
        if member_column:
            row.append("●" if svc.get("in_arrangement") else "")
        table.add_row(*row)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="arch.error")
    op = Text(f"  {result.op}", style="arch.op")
    console.print(label, op, Text(" — "), msg)

    if err and err.detail and (verbose or "hint" in err.detail):
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render fork/toggle/hypothesis/cycle/activate/init results."""
    _status_line(console, result)
    keys = (
        "id",
        "source_id",
        "arrangement_id",
        "service_id",
        "name",
        "version_label",
        "action",
        "previous",
        "status",
        "hypothesis",
        "service_count",
        "active_id",
        "path",
        "changed",
    )
    for key in keys:
        if key in result.data and result.data[key] is not None:
            _field(console, key, result.data[key])
    if verbose:
        _render_meta(console, result)


# ── Query renderers ───────────────────────────────────────────────────


def _render_arrangement_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("", no_wrap=True)
    table.add_column("ID", style="arch.id", no_wrap=True)
    table.add_column("Name", style="arch.name")
    table.add_column("Version", style="arch.label")
    table.add_column("Parent")
    table.add_column("Services", justify="right")
    table.add_column("Rules", justify="right")
    if verbose:
        table.add_column("Created", style="dim")

    for item in items:
        row: list[Any] = [
            "*" if item.get("active") else "",
            str(item.get("id", "")),
            str(item.get("name", "")),
            str(item.get("version_label", "")),
            str(item.get("parent_id") or ""),
            str(item.get("service_count", 0)),
            str(item.get("rule_count", 0)),
        ]
        if verbose:
            row.append(str(item.get("created_at", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} arrangements")


def _render_arrangement(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    container = d.get("container", {})
    lines = [
        f"version: {container.get('version_label', '')}",
        f"container: {container.get('id', '')}",
    ]
    if d.get("parent_id"):
        lines.append(f"forked from: {d['parent_id']}")
    if verbose:
        lines.append(f"created: {d.get('created_at', '')}")
    hypothesis = container.get("hypothesis", "")
    if hypothesis:
        lines.append(f"\n{hypothesis}")

    marker = " (active)" if d.get("active") else ""
    title = f"{d.get('id', '?')} — {d.get('name', '')}{marker}"
    console.print(Panel("\n".join(lines), title=title, border_style="dim", expand=False))

    console.print("\n[bold]Services[/bold]")
    console.print(_service_table(d.get("services", [])))
    console.print("\n[bold]Rules[/bold]")
    console.print(_rule_table(d.get("rules", [])))
    console.print(_summary_line(d.get("summary", {})))


def _render_catalog(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(_service_table(items, member_column=True))
    arrangement_id = result.data.get("arrangement_id")
    console.print(f"\n{result.data.get('count', len(items))} catalog services", end="")
    if arrangement_id:
        console.print(f" (membership: [arch.id]{arrangement_id}[/arch.id])", end="")
    console.print()


# ── Evaluation renderers ──────────────────────────────────────────────


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    console.print(
        f"[arch.id]{d.get('arrangement_id', '')}[/arch.id]  [arch.name]{d.get('name', '')}[/arch.name]"
        f"  [arch.label]{d.get('version_label', '')}[/arch.label]"
    )
    console.print(_rule_table(d.get("items", [])))
    console.print(_summary_line(d.get("summary", {})))
    if verbose:
        _render_meta(console, result)


def _render_compare(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    a = d.get("a") or {}
    b = d.get("b")

    if b is None:
        console.print(f"A: [arch.id]{a.get('id', '')}[/arch.id]  {a.get('name', '')}")
        console.print("No comparison target selected. Candidates:")
        for cand in d.get("candidates", []):
            console.print(
                f"  [arch.id]{cand.get('id', '')}[/arch.id]  {cand.get('name', '')}"
                f"  [arch.label]{cand.get('version_label', '')}[/arch.label]"
            )
        return

    header = Table(show_header=True, pad_edge=False, expand=False)
    header.add_column("")
    header.add_column("A", style="arch.name")
    header.add_column("B", style="arch.name")
    header.add_row("id", str(a.get("id", "")), str(b.get("id", "")))
    header.add_row("name", str(a.get("name", "")), str(b.get("name", "")))
    header.add_row("version", str(a.get("version_label", "")), str(b.get("version_label", "")))
    header.add_row("hypothesis", str(a.get("hypothesis", "")), str(b.get("hypothesis", "")))
    console.print(header)

    rules = Table(show_header=True, pad_edge=False, expand=False)
    rules.add_column("Rule", style="arch.id")
    rules.add_column("Description")
    rules.add_column("A")
    rules.add_column("B")
    by_id_b = {r["id"]: r for r in d.get("rules_b", [])}
    seen: set[str] = set()
    for rule in d.get("rules_a", []):
        other = by_id_b.get(rule["id"])
        rules.add_row(
            rule["id"],
            rule["description"],
            _status_text(rule["status"]),
            _status_text(other["status"]) if other else Text("—", style="dim"),
        )
        seen.add(rule["id"])
    for rule in d.get("rules_b", []):
        if rule["id"] not in seen:
            rules.add_row(
                rule["id"], rule["description"], Text("—", style="dim"), _status_text(rule["status"])
            )
    console.print("\n[bold]Rules[/bold]")
    console.print(rules)

    for key, label, style in (
        ("unique_to_a", "Only in A", "arch.removed"),
        ("unique_to_b", "Only in B", "arch.added"),
        ("common", "Common", ""),
    ):
        services = d.get(key, [])
        console.print(f"\n[bold]{label}[/bold] ({len(services)})")
        for svc in services:
            console.print(Text(f"  {svc['id']}  {svc['name']}", style=style))

    divergence = d.get("status_divergence", [])
    if divergence:
        console.print("\n[bold]Status divergence[/bold]")
        for item in divergence:
            line = Text(f"  {item['service_id']}  ")
            line.append_text(_status_text(item["status_a"]))
            line.append(" → ")
            line.append_text(_status_text(item["status_b"]))
            console.print(line)
    if verbose:
        _render_meta(console, result)


# ── Lineage renderers ─────────────────────────────────────────────────


def _render_lineage_tree(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    def add(branch: Tree, node: dict[str, Any]) -> None:
        child = branch.add(
            f"[arch.id]{node['id']}[/arch.id]  {node['name']}  "
            f"[arch.label]{node['version_label']}[/arch.label]"
        )
        for sub in node.get("children", []):
            add(child, sub)

    root = Tree("arrangements", guide_style="dim")
    for node in result.data.get("tree", []):
        add(root, node)
    console.print(root)
    console.print(f"\n{result.data.get('count', 0)} arrangements")


def _render_lineage_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(f"{result.op} of [arch.id]{result.data.get('id', '')}[/arch.id]")
    if not items:
        console.print("  (none)")
        return
    for item in items:
        console.print(
            f"  [arch.id]{item['id']}[/arch.id]  {item['name']}"
            f"  [arch.label]{item['version_label']}[/arch.label]  depth={item.get('depth', 0)}"
        )


# ── Fallback ──────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Mutations
    "fork": _render_mutation,
    "toggle_service": _render_mutation,
    "update_hypothesis": _render_mutation,
    "cycle_status": _render_mutation,
    "activate": _render_mutation,
    "init_workspace": _render_mutation,
    # Query
    "list_arrangements": _render_arrangement_list,
    "get_arrangement": _render_arrangement,
    "catalog": _render_catalog,
    # Evaluation
    "evaluate_rules": _render_rules,
    "compare": _render_compare,
    # Lineage
    "lineage_tree": _render_lineage_tree,
    "ancestors": _render_lineage_list,
    "descendants": _render_lineage_list,
}
