"""Order and customer snapshot models.

Snapshots are frozen pydantic models built per request by the caller
(the order service, or the CLI for ad-hoc quotes) and discarded once
the discount is computed. Money is always :class:`~decimal.Decimal`.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from orderctl.domain.types import CustomerSegment, OrderStatus


class Customer(BaseModel):
    """A customer and the segment that drives tier discounts."""

    model_config = {"frozen": True}

    id: int | None = None
    name: str = ""
    email: str = ""
    segment: CustomerSegment = CustomerSegment.STANDARD


class Product(BaseModel):
    """A catalogue product."""

    model_config = {"frozen": True}

    id: int | None = None
    name: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0"), ge=0)
    stock_quantity: int = Field(default=0, ge=0)


class OrderItem(BaseModel):
    """A single order line."""

    model_config = {"frozen": True}

    id: int | None = None
    product_id: int | None = None
    product_name: str = ""
    quantity: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    discount: Decimal = Decimal("0")

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity - self.discount


class StatusChange(BaseModel):
    """One entry in an order's status history."""

    model_config = {"frozen": True}

    id: int | None = None
    order_id: int
    old_status: OrderStatus
    new_status: OrderStatus
    changed_at: datetime
    changed_by: str = "System"
    notes: str | None = None


class Order(BaseModel):
    """An order snapshot as seen by the discount engine.

    ``total_amount`` is the sum of line totals before discount and is
    supplied by the caller; the engine never recomputes it from ``items``.
    """

    model_config = {"frozen": True}

    id: int | None = None
    order_number: str = ""
    order_date: datetime | None = None
    status: OrderStatus = OrderStatus.PENDING
    total_amount: Decimal = Field(ge=0)
    discount_amount: Decimal = Decimal("0")
    final_amount: Decimal = Decimal("0")
    customer: Customer | None = None
    items: tuple[OrderItem, ...] = ()
    status_history: tuple[StatusChange, ...] = ()

    @property
    def total_quantity(self) -> int:
        """Sum of quantities across all order lines."""
        return sum(item.quantity for item in self.items)


def line_total(items: list[OrderItem] | tuple[OrderItem, ...]) -> Decimal:
    """Sum of ``quantity * unit_price`` across *items*, before any discount."""
    return sum((item.unit_price * item.quantity for item in items), Decimal("0"))
