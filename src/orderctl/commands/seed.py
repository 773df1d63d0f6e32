"""Standalone command: load demo data."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from orderctl.commands._base import OrderCommand
from orderctl.services.catalog import CatalogService

if TYPE_CHECKING:
    from orderctl.commands._context import AppContext


@click.command(
    cls=OrderCommand,
    examples="""\
  orderctl seed
  orderctl --json seed""",
)
@click.pass_obj
def seed(app: AppContext) -> None:
    """Populate an empty store with demo customers, products, and orders."""
    app.emit(CatalogService(app.store).seed())
