"""Subcommand modules for orderctl.

Provides register_commands() which uses deferred imports to keep
``orderctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from orderctl.commands.customer import customer
    from orderctl.commands.discount import discount
    from orderctl.commands.order import order
    from orderctl.commands.product import product

    cli.add_command(order)
    cli.add_command(discount)
    cli.add_command(customer)
    cli.add_command(product)

    # --- Standalone commands ---
    from orderctl.commands.seed import seed

    cli.add_command(seed)
