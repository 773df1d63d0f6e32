"""Command group: discount quotes and rule inspection."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

import click

from orderctl.commands._base import OrderGroup
from orderctl.domain.types import CustomerSegment
from orderctl.services.discount import DiscountService

if TYPE_CHECKING:
    from orderctl.commands._context import AppContext


def _parse_items(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[int, Decimal]]:
    items: list[tuple[int, Decimal]] = []
    for raw in values:
        qty, sep, price = raw.partition(":")
        try:
            if not sep:
                raise ValueError(raw)
            items.append((int(qty), Decimal(price)))
        except (ValueError, InvalidOperation) as exc:
            raise click.BadParameter(f"{raw!r} is not QTY:PRICE") from exc
    return items


_DISCOUNT_EXAMPLES = """\
  orderctl discount quote --segment gold --item 5:100 --item 5:100
  orderctl discount rules"""


@click.group(cls=OrderGroup, examples=_DISCOUNT_EXAMPLES)
@click.pass_obj
def discount(app: AppContext) -> None:
    """Preview discounts and inspect the active rules."""


@discount.command(
    examples="""\
  orderctl discount quote --segment premium --item 1:200
  orderctl discount quote --segment gold --item 15:40 --total 600
  orderctl --json discount quote --segment platinum --item 20:50"""
)
@click.option(
    "--segment",
    type=click.Choice([s.value for s in CustomerSegment]),
    default=CustomerSegment.STANDARD.value,
    show_default=True,
    help="Customer segment.",
)
@click.option(
    "--item",
    "items",
    multiple=True,
    callback=_parse_items,
    help="Order line as QTY:PRICE (repeatable).",
)
@click.option("--total", default=None, help="Order total; defaults to the sum of lines.")
@click.pass_obj
def quote(
    app: AppContext,
    segment: str,
    items: list[tuple[int, Decimal]],
    total: str | None,
) -> None:
    """Compute the discount for an ad-hoc order without saving it."""
    svc = DiscountService.from_settings(app.settings)
    app.emit(svc.quote(segment, items, total_amount=total))


@discount.command(
    examples="""\
  orderctl discount rules
  orderctl --json discount rules"""
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List the active rules in evaluation order."""
    app.emit(DiscountService.from_settings(app.settings).list_rules())
