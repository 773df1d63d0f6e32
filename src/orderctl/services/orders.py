"""OrderService — order creation, retrieval, status changes, and analytics.

Creation is the only path that involves the discount engine:

1. Resolve the customer and every product referenced by the lines.
2. Sum line totals into ``total_amount``.
3. Ask :class:`DiscountService` for the discount, rounded to cents.
4. Persist the order as ``pending`` with its initial history entry.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import ValidationError

from orderctl.domain.models import Order, OrderItem, line_total
from orderctl.domain.types import OrderStatus
from orderctl.services._helpers import (
    analytics_to_dict,
    as_utc,
    history_to_dict,
    now_utc,
    order_to_dict,
    quantize_money,
)
from orderctl.services.base import BaseService
from orderctl.services.discount import DiscountService
from orderctl.services.result import ServiceResult
from orderctl.services.telemetry import traced

if TYPE_CHECKING:
    from orderctl.infrastructure.store import Store

# (product_id, quantity, unit_price override or None for catalogue price)
LineRequest = tuple[int, int, Decimal | None]


class OrderService(BaseService):
    """Handles the order lifecycle on top of the store."""

    def __init__(self, store: Store, *, discounts: DiscountService | None = None) -> None:
        super().__init__(store)
        self._discounts = discounts or DiscountService.from_settings(store.settings)

    # ------------------------------------------------------------------
    # get / list
    # ------------------------------------------------------------------

    @traced
    def get_order(self, order_id: int) -> ServiceResult:
        order = self._store.orders.get_by_id(order_id)
        if order is None:
            return ServiceResult.failure(
                "get_order", "NOT_FOUND", f"Order with ID {order_id} not found.", id=order_id
            )
        return ServiceResult(ok=True, op="get_order", data=order_to_dict(order))

    @traced
    def get_orders_by_customer(self, customer_id: int) -> ServiceResult:
        """Orders placed by *customer_id*, newest first."""
        items = [order_to_dict(o) for o in self._store.orders.get_by_customer_id(customer_id)]
        return ServiceResult(
            ok=True,
            op="list_orders",
            data={"customer_id": customer_id, "count": len(items), "items": items},
        )

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    @traced
    def create_order(self, customer_id: int, lines: Sequence[LineRequest]) -> ServiceResult:
        """Create a pending order for *customer_id*.

        Args:
            customer_id: An existing customer.
            lines: ``(product_id, quantity, unit_price)`` triples; a
                ``None`` unit price takes the product's catalogue price.
        """
        op = "create_order"
        if not lines:
            return ServiceResult.failure(op, "INVALID_INPUT", "At least one order item is required")

        customer = self._store.catalog.get_customer(customer_id)
        if customer is None:
            return ServiceResult.failure(
                op,
                "CUSTOMER_NOT_FOUND",
                f"Customer with ID {customer_id} not found.",
                customer_id=customer_id,
            )

        catalogue = self._store.catalog.get_products([product_id for product_id, _, _ in lines])
        missing = sorted({pid for pid, _, _ in lines if pid not in catalogue})
        if missing:
            return ServiceResult.failure(
                op, "PRODUCT_NOT_FOUND", f"Unknown product IDs: {missing}", product_ids=missing
            )

        try:
            items = tuple(
                OrderItem(
                    product_id=pid,
                    product_name=catalogue[pid].name,
                    quantity=qty,
                    unit_price=catalogue[pid].price if price is None else price,
                )
                for pid, qty, price in lines
            )
        except ValidationError as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc))

        order_config = self.settings.orders
        placed = now_utc()
        snapshot = Order(
            order_number=f"{order_config.number_prefix}-{uuid.uuid4().hex[:12].upper()}",
            order_date=placed,
            status=OrderStatus.PENDING,
            total_amount=line_total(items),
            customer=customer,
            items=items,
        )
        discount = quantize_money(
            self._discounts.calculate_discount(snapshot), order_config.currency_places
        )
        snapshot = snapshot.model_copy(
            update={
                "discount_amount": discount,
                "final_amount": snapshot.total_amount - discount,
            }
        )

        order_id = self._store.orders.create(
            snapshot, changed_by=order_config.default_changed_by, notes="Order created"
        )
        created = self._store.orders.get_by_id(order_id)
        assert created is not None
        return ServiceResult(ok=True, op=op, data=order_to_dict(created))

    # ------------------------------------------------------------------
    # status
    # ------------------------------------------------------------------

    @traced
    def update_order_status(
        self,
        order_id: int,
        new_status: str,
        *,
        changed_by: str | None = None,
        notes: str | None = None,
    ) -> ServiceResult:
        """Move *order_id* to *new_status* and record the change."""
        op = "update_status"
        try:
            status = OrderStatus(new_status)
        except ValueError:
            return ServiceResult.failure(
                op,
                "INVALID_STATUS",
                f"Unknown status {new_status!r}",
                allowed=[s.value for s in OrderStatus],
            )

        updated = self._store.orders.update_order_status(
            order_id,
            status,
            changed_by=changed_by or self.settings.orders.default_changed_by,
            notes=notes,
        )
        if not updated:
            return ServiceResult.failure(
                op, "NOT_FOUND", f"Order with ID {order_id} not found.", id=order_id
            )
        return ServiceResult(ok=True, op=op, data={"id": order_id, "status": str(status)})

    @traced
    def get_order_history(self, order_id: int) -> ServiceResult:
        """Status changes for *order_id*, newest first."""
        op = "order_history"
        if not self._store.orders.exists(order_id):
            return ServiceResult.failure(
                op, "NOT_FOUND", f"Order with ID {order_id} not found.", id=order_id
            )
        items = [history_to_dict(h) for h in self._store.orders.get_order_history(order_id)]
        return ServiceResult(
            ok=True, op=op, data={"id": order_id, "count": len(items), "items": items}
        )

    # ------------------------------------------------------------------
    # analytics
    # ------------------------------------------------------------------

    @traced
    def get_order_analytics(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> ServiceResult:
        """Aggregate orders placed between *start* and *end*.

        Defaults to the configured window ending now.
        """
        op = "order_analytics"
        start = as_utc(start) if start is not None else None
        end = as_utc(end) if end is not None else None
        if start is not None and end is not None and end < start:
            return ServiceResult.failure(
                op, "INVALID_DATE_RANGE", "End date must be greater than or equal to start date"
            )

        window = timedelta(days=self.settings.analytics.default_window_days)
        end = end or now_utc()
        start = start or now_utc() - window

        analytics = self._store.orders.get_order_analytics(start, end)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "start": start.isoformat(),
                "end": end.isoformat(),
                **analytics_to_dict(analytics, self.settings.orders.currency_places),
            },
        )
