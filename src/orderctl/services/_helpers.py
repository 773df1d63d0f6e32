"""Shared service-layer helpers: money rounding and result payload shaping."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from orderctl.domain.analytics import OrderAnalytics, format_duration
from orderctl.domain.models import Customer, Order, OrderItem, StatusChange


def now_utc() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def quantize_money(amount: Decimal, places: int = 2) -> Decimal:
    """Round *amount* half-up to *places* decimal places."""
    return amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def customer_to_dict(customer: Customer) -> dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "email": customer.email,
        "segment": str(customer.segment),
    }


def item_to_dict(item: OrderItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "product_id": item.product_id,
        "product_name": item.product_name,
        "quantity": item.quantity,
        "unit_price": str(item.unit_price),
        "discount": str(item.discount),
        "total_price": str(item.total_price),
    }


def history_to_dict(change: StatusChange) -> dict[str, Any]:
    return {
        "id": change.id,
        "old_status": str(change.old_status),
        "new_status": str(change.new_status),
        "changed_at": change.changed_at.isoformat(),
        "changed_by": change.changed_by,
        "notes": change.notes,
    }


def order_to_dict(order: Order) -> dict[str, Any]:
    """Flatten an order snapshot into a JSON-safe payload."""
    customer = order.customer
    return {
        "id": order.id,
        "order_number": order.order_number,
        "order_date": order.order_date.isoformat() if order.order_date else None,
        "status": str(order.status),
        "total_amount": str(order.total_amount),
        "discount_amount": str(order.discount_amount),
        "final_amount": str(order.final_amount),
        "customer_id": customer.id if customer else None,
        "customer_name": customer.name if customer else "",
        "items": [item_to_dict(i) for i in order.items],
        "status_history": [history_to_dict(h) for h in order.status_history],
    }


def analytics_to_dict(analytics: OrderAnalytics, places: int = 2) -> dict[str, Any]:
    return {
        "total_orders": analytics.total_orders,
        "total_revenue": str(quantize_money(analytics.total_revenue, places)),
        "average_order_value": str(quantize_money(analytics.average_order_value, places)),
        "average_fulfillment_time": format_duration(analytics.average_fulfillment_time),
        "orders_by_status": analytics.orders_by_status,
        "orders_by_customer_segment": analytics.orders_by_customer_segment,
    }
