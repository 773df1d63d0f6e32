"""Rich Console factory and theme for orderctl output.

Consoles render into a StringIO buffer so renderers keep a
``str``-returning contract. In non-TTY environments (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ORDER_THEME = Theme(
    {
        "ord.ok": "bold green",
        "ord.error": "bold red",
        "ord.op": "bold cyan",
        "ord.key": "dim",
        "ord.id": "bold blue",
        "ord.money": "magenta",
        "ord.discount": "bold green",
        "ord.status.pending": "yellow",
        "ord.status.processing": "cyan",
        "ord.status.shipped": "blue",
        "ord.status.delivered": "green",
        "ord.status.cancelled": "red",
        "ord.status.returned": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=ORDER_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Rich style name for an order status, or an empty style."""
    style = f"ord.status.{status}"
    return style if style in ORDER_THEME.styles else ""
