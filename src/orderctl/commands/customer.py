"""Command group: customer listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orderctl.commands._base import OrderGroup
from orderctl.domain.types import CustomerSegment
from orderctl.services.catalog import CatalogService

if TYPE_CHECKING:
    from orderctl.commands._context import AppContext


@click.group(
    cls=OrderGroup,
    examples="""\
  orderctl customer list
  orderctl customer list --segment gold""",
)
@click.pass_obj
def customer(app: AppContext) -> None:
    """Inspect customers."""


@customer.command(name="list")
@click.option(
    "--segment",
    type=click.Choice([s.value for s in CustomerSegment]),
    default=None,
    help="Only customers in this segment.",
)
@click.pass_obj
def list_cmd(app: AppContext, segment: str | None) -> None:
    """List customers."""
    app.emit(CatalogService(app.store).list_customers(segment=segment))
