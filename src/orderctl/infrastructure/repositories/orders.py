"""Order repository — SQL for orders, their lines, and status history.

Returns frozen domain snapshots. Reads use ``engine.connect()``; every
write runs inside a single ``engine.begin()`` transaction.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import Connection, delete, insert, select, update
from sqlalchemy.engine import Engine

from orderctl.domain.analytics import OrderAnalytics, summarize_orders
from orderctl.domain.models import Customer, Order, OrderItem, StatusChange
from orderctl.domain.types import OrderStatus
from orderctl.infrastructure.database.schema import (
    customers,
    order_items,
    order_status_history,
    orders,
    products,
)


def to_db_time(value: datetime) -> str:
    """Serialize *value* as fixed-width UTC ISO text (naive means UTC)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def from_db_time(value: str) -> datetime:
    return datetime.fromisoformat(value)


class OrderRepository:
    """Encapsulates SQL for order reads and writes."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        """Fetch one order with customer, lines, and status history."""
        with self._engine.connect() as conn:
            rows = self._select_orders(conn, orders.c.id == order_id)
            if not rows:
                return None
            return self._hydrate(conn, rows, with_history=True)[0]

    def get_by_customer_id(self, customer_id: int) -> list[Order]:
        """Orders for *customer_id*, newest first."""
        with self._engine.connect() as conn:
            rows = self._select_orders(conn, orders.c.customer_id == customer_id)
            return self._hydrate(conn, rows)

    def get_orders_by_status(self, status: OrderStatus) -> list[Order]:
        with self._engine.connect() as conn:
            rows = self._select_orders(conn, orders.c.status == str(status))
            return self._hydrate(conn, rows)

    def get_order_history(self, order_id: int) -> list[StatusChange]:
        """Status changes for *order_id*, newest first."""
        stmt = (
            select(order_status_history)
            .where(order_status_history.c.order_id == order_id)
            .order_by(order_status_history.c.changed_at.desc(), order_status_history.c.id.desc())
        )
        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [self._history_from_row(r) for r in rows]

    def exists(self, order_id: int) -> bool:
        with self._engine.connect() as conn:
            row = conn.execute(select(orders.c.id).where(orders.c.id == order_id)).first()
        return row is not None

    def get_order_analytics(self, start: datetime, end: datetime) -> OrderAnalytics:
        """Summarize orders placed within ``[start, end]``."""
        with self._engine.connect() as conn:
            rows = self._select_orders(
                conn,
                orders.c.order_date >= to_db_time(start),
                orders.c.order_date <= to_db_time(end),
            )
            snapshots = self._hydrate(conn, rows, with_items=False, with_history=True)
        return summarize_orders(snapshots)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(
        self,
        order: Order,
        *,
        changed_by: str = "System",
        notes: str | None = "Order created",
    ) -> int:
        """Insert *order*, its lines, and its initial status entry.

        Returns the new order id.
        """
        if order.customer is None or order.customer.id is None:
            msg = "Order must reference a persisted customer"
            raise ValueError(msg)

        order_date = order.order_date or datetime.now(UTC)
        with self._engine.begin() as conn:
            order_id = conn.execute(
                insert(orders).values(
                    order_number=order.order_number,
                    order_date=to_db_time(order_date),
                    status=str(order.status),
                    total_amount=str(order.total_amount),
                    discount_amount=str(order.discount_amount),
                    final_amount=str(order.final_amount),
                    customer_id=order.customer.id,
                )
            ).inserted_primary_key[0]

            if order.items:
                conn.execute(
                    insert(order_items),
                    [
                        {
                            "order_id": order_id,
                            "product_id": item.product_id,
                            "quantity": item.quantity,
                            "unit_price": str(item.unit_price),
                            "discount": str(item.discount),
                        }
                        for item in order.items
                    ],
                )

            conn.execute(
                insert(order_status_history).values(
                    order_id=order_id,
                    old_status=str(order.status),
                    new_status=str(order.status),
                    changed_at=to_db_time(order_date),
                    changed_by=changed_by,
                    notes=notes,
                )
            )
        return int(order_id)

    def update(self, order: Order) -> bool:
        """Persist status and amounts of an existing order."""
        if order.id is None:
            return False
        with self._engine.begin() as conn:
            result = conn.execute(
                update(orders)
                .where(orders.c.id == order.id)
                .values(
                    status=str(order.status),
                    total_amount=str(order.total_amount),
                    discount_amount=str(order.discount_amount),
                    final_amount=str(order.final_amount),
                )
            )
        return result.rowcount > 0

    def delete(self, order_id: int) -> bool:
        with self._engine.begin() as conn:
            conn.execute(delete(order_items).where(order_items.c.order_id == order_id))
            conn.execute(
                delete(order_status_history).where(order_status_history.c.order_id == order_id)
            )
            result = conn.execute(delete(orders).where(orders.c.id == order_id))
        return result.rowcount > 0

    def update_order_status(
        self,
        order_id: int,
        new_status: OrderStatus,
        *,
        changed_by: str | None = None,
        notes: str | None = None,
        changed_at: datetime | None = None,
    ) -> bool:
        """Set the order status and record the change. False if no such order."""
        with self._engine.begin() as conn:
            row = conn.execute(select(orders.c.status).where(orders.c.id == order_id)).first()
            if row is None:
                return False
            conn.execute(
                update(orders).where(orders.c.id == order_id).values(status=str(new_status))
            )
            conn.execute(
                insert(order_status_history).values(
                    order_id=order_id,
                    old_status=row.status,
                    new_status=str(new_status),
                    changed_at=to_db_time(changed_at or datetime.now(UTC)),
                    changed_by=changed_by or "System",
                    notes=notes,
                )
            )
        return True

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _select_orders(conn: Connection, *criteria: Any) -> list[Any]:
        stmt = (
            select(
                orders,
                customers.c.name.label("customer_name"),
                customers.c.email.label("customer_email"),
                customers.c.segment.label("customer_segment"),
            )
            .join(customers, customers.c.id == orders.c.customer_id)
            .where(*criteria)
            .order_by(orders.c.order_date.desc(), orders.c.id.desc())
        )
        return list(conn.execute(stmt).mappings().all())

    @staticmethod
    def _history_from_row(row: Any) -> StatusChange:
        return StatusChange(
            id=row["id"],
            order_id=row["order_id"],
            old_status=row["old_status"],
            new_status=row["new_status"],
            changed_at=from_db_time(row["changed_at"]),
            changed_by=row["changed_by"] or "System",
            notes=row["notes"],
        )

    def _hydrate(
        self,
        conn: Connection,
        rows: Sequence[Any],
        *,
        with_items: bool = True,
        with_history: bool = False,
    ) -> list[Order]:
        ids = [r["id"] for r in rows]
        lines: dict[int, list[OrderItem]] = defaultdict(list)
        history: dict[int, list[StatusChange]] = defaultdict(list)

        if ids and with_items:
            stmt = (
                select(order_items, products.c.name.label("product_name"))
                .join(products, products.c.id == order_items.c.product_id, isouter=True)
                .where(order_items.c.order_id.in_(ids))
                .order_by(order_items.c.id)
            )
            for r in conn.execute(stmt).mappings():
                lines[r["order_id"]].append(
                    OrderItem(
                        id=r["id"],
                        product_id=r["product_id"],
                        product_name=r["product_name"] or "",
                        quantity=r["quantity"],
                        unit_price=Decimal(r["unit_price"]),
                        discount=Decimal(r["discount"]),
                    )
                )

        if ids and with_history:
            stmt = (
                select(order_status_history)
                .where(order_status_history.c.order_id.in_(ids))
                .order_by(order_status_history.c.changed_at, order_status_history.c.id)
            )
            for r in conn.execute(stmt).mappings():
                history[r["order_id"]].append(self._history_from_row(r))

        return [
            Order(
                id=r["id"],
                order_number=r["order_number"],
                order_date=from_db_time(r["order_date"]),
                status=r["status"],
                total_amount=Decimal(r["total_amount"]),
                discount_amount=Decimal(r["discount_amount"]),
                final_amount=Decimal(r["final_amount"]),
                customer=Customer(
                    id=r["customer_id"],
                    name=r["customer_name"],
                    email=r["customer_email"],
                    segment=r["customer_segment"],
                ),
                items=tuple(lines[r["id"]]),
                status_history=tuple(history[r["id"]]),
            )
            for r in rows
        ]
