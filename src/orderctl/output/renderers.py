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

from orderctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from orderctl.services.result import ServiceResult

Renderer = Callable[["ServiceResult", "Console"], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console)
        if verbose:
            _render_meta(console, result)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: IDs for listings, ``OK: op`` otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        ids = [str(item.get("id") or item.get("name", "")) for item in items if isinstance(item, dict)]
        return "\n".join(i for i in ids if i)
    if result.op == "quote_discount":
        return str(result.data.get("discount_amount", ""))
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="ord.ok"), Text(f"  {result.op}", style="ord.op"))


def _field(console: Console, key: str, value: Any, *, style: str = "") -> None:
    if key == "id" or key.endswith("_id"):
        style = style or "ord.id"
    elif key.endswith("_amount"):
        style = style or "ord.money"
    elif key == "status":
        style = style or style_for_status(str(value))
    console.print(Text.assemble((f"  {key}: ", "ord.key"), (str(value), style)))


def _status_text(status: str) -> Text:
    return Text(status, style=style_for_status(status))


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        console.print(f"    {key}: {value}")


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="ord.error"), Text(f"  {result.op}", style="ord.op"), " — ", msg
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


# ── Orders ────────────────────────────────────────────────────────────


def _render_order(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    for key in (
        "id",
        "order_number",
        "order_date",
        "status",
        "customer_id",
        "customer_name",
        "total_amount",
        "discount_amount",
        "final_amount",
    ):
        if key in d:
            style = "ord.discount" if key == "discount_amount" else ""
            _field(console, key, d[key], style=style)

    items = d.get("items") or []
    if items:
        console.print()
        table = Table(show_header=True, pad_edge=False)
        table.add_column("Product")
        table.add_column("Qty", justify="right")
        table.add_column("Unit Price", justify="right", style="ord.money")
        table.add_column("Discount", justify="right")
        table.add_column("Total", justify="right", style="ord.money")
        for item in items:
            table.add_row(
                item.get("product_name") or str(item.get("product_id", "")),
                str(item["quantity"]),
                item["unit_price"],
                item["discount"],
                item["total_price"],
            )
        console.print(table)

    history = d.get("status_history") or []
    if history:
        console.print()
        console.print(_history_table(history))


def _render_order_table(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items") or []
    if not items:
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("ID", style="ord.id", no_wrap=True)
    table.add_column("Number")
    table.add_column("Date", style="dim")
    table.add_column("Status")
    table.add_column("Total", justify="right", style="ord.money")
    table.add_column("Discount", justify="right", style="ord.discount")
    table.add_column("Final", justify="right", style="ord.money")
    for order in items:
        table.add_row(
            str(order["id"]),
            order["order_number"],
            (order.get("order_date") or "")[:10],
            _status_text(order["status"]),
            order["total_amount"],
            order["discount_amount"],
            order["final_amount"],
        )
    console.print(table)


def _history_table(history: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Changed At", style="dim")
    table.add_column("From")
    table.add_column("To")
    table.add_column("By")
    table.add_column("Notes")
    for entry in history:
        table.add_row(
            entry["changed_at"][:19],
            _status_text(entry["old_status"]),
            _status_text(entry["new_status"]),
            entry.get("changed_by") or "",
            entry.get("notes") or "",
        )
    return table


def _render_history(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "id", result.data.get("id"))
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items") or []
    if items:
        console.print(_history_table(items))


def _render_analytics(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    for key in (
        "start",
        "end",
        "total_orders",
        "total_revenue",
        "average_order_value",
        "average_fulfillment_time",
    ):
        _field(console, key, d.get(key, ""))
    for key, label in (
        ("orders_by_status", "Status"),
        ("orders_by_customer_segment", "Segment"),
    ):
        counts = d.get(key) or {}
        if not counts:
            continue
        table = Table(show_header=True, pad_edge=False)
        table.add_column(label)
        table.add_column("Orders", justify="right")
        for name, count in sorted(counts.items()):
            table.add_row(name, str(count))
        console.print()
        console.print(table)


# ── Discounts ─────────────────────────────────────────────────────────


def _render_quote(result: ServiceResult, console: Console) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("segment", "quantity", "base", "total_amount"):
        _field(console, key, d.get(key, ""))
    _field(console, "discount_amount", d.get("discount_amount", ""), style="ord.discount")
    _field(console, "final_amount", d.get("final_amount", ""))
    if d.get("clamped"):
        _field(console, "clamped", "discount capped at order total", style="ord.error")

    applied = d.get("applied") or []
    if applied:
        table = Table(show_header=True, pad_edge=False)
        table.add_column("Priority", justify="right")
        table.add_column("Rule")
        table.add_column("Amount", justify="right", style="ord.discount")
        for entry in applied:
            table.add_row(str(entry["priority"]), entry["rule"], entry["amount"])
        console.print()
        console.print(table)


def _render_rules(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "base", result.data.get("base", ""))
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Priority", justify="right")
    table.add_column("Rule")
    table.add_column("Parameters", style="dim")
    for rule in result.data.get("items") or []:
        params = {k: v for k, v in rule.items() if k not in ("name", "priority")}
        table.add_row(str(rule["priority"]), rule["name"], json.dumps(params, separators=(",", ":")))
    console.print(table)


# ── Catalog ───────────────────────────────────────────────────────────


def _render_customers(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False)
    table.add_column("ID", style="ord.id")
    table.add_column("Name")
    table.add_column("Email", style="dim")
    table.add_column("Segment")
    for c in result.data.get("items") or []:
        table.add_row(str(c["id"]), c["name"], c["email"], c["segment"])
    console.print(table)


def _render_products(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False)
    table.add_column("ID", style="ord.id")
    table.add_column("Name")
    table.add_column("Price", justify="right", style="ord.money")
    table.add_column("Stock", justify="right")
    for p in result.data.get("items") or []:
        table.add_row(str(p["id"]), p["name"], p["price"], str(p["stock_quantity"]))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "create_order": _render_order,
    "get_order": _render_order,
    "list_orders": _render_order_table,
    "order_history": _render_history,
    "order_analytics": _render_analytics,
    "quote_discount": _render_quote,
    "list_rules": _render_rules,
    "list_customers": _render_customers,
    "list_products": _render_products,
}
