"""Shared pytest fixtures and test helpers for orderctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from orderctl.config.settings import OrderSettings
from orderctl.domain.models import Customer, Order, OrderItem, line_total
from orderctl.domain.types import CustomerSegment
from orderctl.infrastructure.seed import seed_database
from orderctl.infrastructure.store import Store
from orderctl.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ORDERCTL_* environment out of the tests."""
    for var in ("ORDERCTL_CONFIG", "ORDERCTL_ROOT", "ORDERCTL_JSON_OUTPUT", "ORDERCTL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_runtime_state() -> Generator[None]:
    """Undo logging and telemetry changes made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    pkg_level = logging.getLogger("orderctl").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("orderctl").setLevel(pkg_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> OrderSettings:
    return OrderSettings.from_cli(root=tmp_path)


@pytest.fixture
def store(settings: OrderSettings) -> Generator[Store]:
    """Empty store on a temp directory."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def seeded_store(store: Store) -> Store:
    """Store loaded with the demo data set."""
    seed_database(store.engine)
    return store


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_order(
    segment: CustomerSegment | str | None = CustomerSegment.STANDARD,
    lines: list[tuple[int, str]] | None = None,
    *,
    total: str | None = None,
    **kwargs: Any,
) -> Order:
    """Build an order snapshot from ``(quantity, unit_price)`` lines.

    ``segment=None`` builds an order without a customer. ``total``
    overrides the computed line total.
    """
    items = tuple(OrderItem(quantity=q, unit_price=Decimal(p)) for q, p in (lines or []))
    customer = None if segment is None else Customer(id=1, name="Test", segment=segment)
    total_amount = line_total(items) if total is None else Decimal(total)
    return Order(total_amount=total_amount, customer=customer, items=items, **kwargs)
