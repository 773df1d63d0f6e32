"""Command group: order creation, lookup, status changes, and analytics."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

import click

from orderctl.commands._base import OrderGroup
from orderctl.domain.types import OrderStatus
from orderctl.services.orders import LineRequest, OrderService

if TYPE_CHECKING:
    from orderctl.commands._context import AppContext

_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


def _parse_lines(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[LineRequest]:
    """Parse repeated ``PRODUCT:QTY[:PRICE]`` options into line requests."""
    lines: list[LineRequest] = []
    for raw in values:
        parts = raw.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(f"{raw!r} is not PRODUCT:QTY or PRODUCT:QTY:PRICE")
        try:
            product_id = int(parts[0])
            quantity = int(parts[1])
            price = Decimal(parts[2]) if len(parts) == 3 else None
        except (ValueError, InvalidOperation) as exc:
            raise click.BadParameter(f"{raw!r} is not PRODUCT:QTY or PRODUCT:QTY:PRICE") from exc
        lines.append((product_id, quantity, price))
    return lines


_ORDER_EXAMPLES = """\
  orderctl order create --customer 1 --item 1:2 --item 3:1
  orderctl order get 1
  orderctl order list --customer 1
  orderctl order status 1 shipped --by warehouse
  orderctl order history 1
  orderctl order analytics --start 2026-01-01 --end 2026-02-01"""


@click.group(cls=OrderGroup, examples=_ORDER_EXAMPLES)
@click.pass_obj
def order(app: AppContext) -> None:
    """Create, inspect, and manage orders."""


@order.command(
    examples="""\
  orderctl order create --customer 1 --item 1:2
  orderctl order create --customer 2 --item 1:1 --item 4:3:99.50
  orderctl --json order create --customer 3 --item 2:12"""
)
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.option(
    "--item",
    "lines",
    multiple=True,
    required=True,
    callback=_parse_lines,
    help="Order line as PRODUCT:QTY[:PRICE] (repeatable).",
)
@click.pass_obj
def create(app: AppContext, customer_id: int, lines: list[LineRequest]) -> None:
    """Place a new pending order with discounts applied."""
    app.emit(OrderService(app.store).create_order(customer_id, lines))


@order.command(
    examples="""\
  orderctl order get 1
  orderctl --json order get 1"""
)
@click.argument("order_id", type=int)
@click.pass_obj
def get(app: AppContext, order_id: int) -> None:
    """Show one order with its items and status history."""
    app.emit(OrderService(app.store).get_order(order_id))


@order.command(
    name="list",
    examples="""\
  orderctl order list --customer 1
  orderctl -q order list --customer 2""",
)
@click.option("--customer", "customer_id", required=True, type=int, help="Customer ID.")
@click.pass_obj
def list_cmd(app: AppContext, customer_id: int) -> None:
    """List a customer's orders, newest first."""
    app.emit(OrderService(app.store).get_orders_by_customer(customer_id))


@order.command(
    examples="""\
  orderctl order status 1 processing
  orderctl order status 1 shipped --by warehouse --notes "Tracking 1Z999" """
)
@click.argument("order_id", type=int)
@click.argument("new_status", type=click.Choice([s.value for s in OrderStatus]))
@click.option("--by", "changed_by", default=None, help="Who made the change.")
@click.option("--notes", default=None, help="Free-text note for the history entry.")
@click.pass_obj
def status(
    app: AppContext,
    order_id: int,
    new_status: str,
    changed_by: str | None,
    notes: str | None,
) -> None:
    """Move an order to a new status."""
    svc = OrderService(app.store)
    app.emit(svc.update_order_status(order_id, new_status, changed_by=changed_by, notes=notes))


@order.command(
    examples="""\
  orderctl order history 1"""
)
@click.argument("order_id", type=int)
@click.pass_obj
def history(app: AppContext, order_id: int) -> None:
    """Show an order's status changes, newest first."""
    app.emit(OrderService(app.store).get_order_history(order_id))


@order.command(
    examples="""\
  orderctl order analytics
  orderctl order analytics --start 2026-01-01 --end 2026-03-31
  orderctl --json order analytics --start 2026-01-01"""
)
@click.option("--start", type=click.DateTime(_DATE_FORMATS), default=None, help="Window start.")
@click.option("--end", type=click.DateTime(_DATE_FORMATS), default=None, help="Window end.")
@click.pass_obj
def analytics(app: AppContext, start: datetime | None, end: datetime | None) -> None:
    """Aggregate orders placed within a date window."""
    app.emit(OrderService(app.store).get_order_analytics(start, end))
