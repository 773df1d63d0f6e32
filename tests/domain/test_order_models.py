"""Tests for the frozen order snapshot models."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from orderctl.domain.models import Customer, Order, OrderItem, Product, StatusChange, line_total
from orderctl.domain.types import CustomerSegment, OrderStatus


class TestOrderItem:
    def test_total_price_subtracts_line_discount(self) -> None:
        item = OrderItem(quantity=3, unit_price=Decimal("10.50"), discount=Decimal("1.50"))
        assert item.total_price == Decimal("30.00")

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            OrderItem(quantity=0, unit_price=Decimal("1"))

    def test_negative_price_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OrderItem(quantity=1, unit_price=Decimal("-1"))


class TestOrder:
    def test_total_quantity(self) -> None:
        order = Order(
            total_amount=Decimal("0"),
            items=(
                OrderItem(quantity=2, unit_price=Decimal("0")),
                OrderItem(quantity=5, unit_price=Decimal("0")),
            ),
        )
        assert order.total_quantity == 7

    def test_defaults(self) -> None:
        order = Order(total_amount=Decimal("10"))
        assert order.status == OrderStatus.PENDING
        assert order.customer is None
        assert order.items == ()
        assert order.discount_amount == 0

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Order(total_amount=Decimal("-0.01"))

    def test_frozen(self) -> None:
        order = Order(total_amount=Decimal("10"))
        with pytest.raises(ValidationError):
            order.total_amount = Decimal("5")  # type: ignore[misc]

    def test_line_total(self) -> None:
        items = [
            OrderItem(quantity=2, unit_price=Decimal("999.99")),
            OrderItem(quantity=1, unit_price=Decimal("0.02")),
        ]
        assert line_total(items) == Decimal("2000.00")
        assert line_total([]) == 0


class TestCatalogModels:
    def test_customer_segment_coerced(self) -> None:
        customer = Customer(name="Jane", segment="gold")
        assert customer.segment is CustomerSegment.GOLD

    def test_unknown_segment_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Customer(name="Jane", segment="diamond")

    def test_product_stock_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            Product(name="Widget", stock_quantity=-1)

    def test_status_change_defaults(self) -> None:
        change = StatusChange(
            order_id=1,
            old_status="pending",
            new_status="processing",
            changed_at=datetime(2026, 1, 1, tzinfo=UTC),
        )
        assert change.changed_by == "System"
        assert change.notes is None
