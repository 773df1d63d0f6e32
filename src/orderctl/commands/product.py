"""Command group: product catalogue."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orderctl.commands._base import OrderGroup
from orderctl.services.catalog import CatalogService

if TYPE_CHECKING:
    from orderctl.commands._context import AppContext


@click.group(cls=OrderGroup)
@click.pass_obj
def product(app: AppContext) -> None:
    """Inspect the product catalogue."""


@product.command(name="list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List products."""
    app.emit(CatalogService(app.store).list_products())
