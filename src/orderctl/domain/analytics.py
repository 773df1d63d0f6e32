"""Order analytics aggregation.

Pure reduction over already-loaded order snapshots. Revenue and average
order value count delivered orders only. Fulfilment time runs from the
first transition into ``processing`` to the first transition into
``delivered``; orders missing either transition are left out.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import timedelta
from decimal import Decimal

from pydantic import BaseModel, Field

from orderctl.domain.models import Order
from orderctl.domain.types import OrderStatus


class OrderAnalytics(BaseModel):
    """Aggregate figures over a set of orders."""

    model_config = {"frozen": True}

    total_orders: int = 0
    total_revenue: Decimal = Decimal("0")
    average_order_value: Decimal = Decimal("0")
    average_fulfillment_time: timedelta = timedelta(0)
    orders_by_status: dict[str, int] = Field(default_factory=dict)
    orders_by_customer_segment: dict[str, int] = Field(default_factory=dict)


def fulfillment_time(order: Order) -> timedelta:
    """Processing-to-delivered duration, or zero if either step is missing."""
    history = sorted(order.status_history, key=lambda h: h.changed_at)
    started = next((h for h in history if h.new_status == OrderStatus.PROCESSING), None)
    finished = next((h for h in history if h.new_status == OrderStatus.DELIVERED), None)
    if started is None or finished is None:
        return timedelta(0)
    return finished.changed_at - started.changed_at


def summarize_orders(orders: Sequence[Order]) -> OrderAnalytics:
    """Reduce *orders* to an :class:`OrderAnalytics` summary."""
    delivered = [o for o in orders if o.status == OrderStatus.DELIVERED]

    revenue = sum((o.final_amount for o in delivered), Decimal("0"))
    average_value = revenue / len(delivered) if delivered else Decimal("0")

    durations = [t for t in (fulfillment_time(o) for o in delivered) if t > timedelta(0)]
    average_time = sum(durations, timedelta(0)) / len(durations) if durations else timedelta(0)

    by_status = Counter(str(o.status) for o in orders)
    by_segment = Counter(str(o.customer.segment) for o in orders if o.customer is not None)

    return OrderAnalytics(
        total_orders=len(orders),
        total_revenue=revenue,
        average_order_value=average_value,
        average_fulfillment_time=average_time,
        orders_by_status=dict(by_status),
        orders_by_customer_segment=dict(by_segment),
    )


def format_duration(duration: timedelta) -> str:
    """Render a duration as ``'{d}d {h}h {m}m {s}s'``."""
    total = int(duration.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{days}d {hours}h {minutes}m {seconds}s"
