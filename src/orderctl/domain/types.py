"""Classification enums for customers and orders."""

from __future__ import annotations

from enum import StrEnum


class CustomerSegment(StrEnum):
    """Customer tiers, ordered by increasing preferential treatment."""

    STANDARD = "standard"
    PREMIUM = "premium"
    GOLD = "gold"
    PLATINUM = "platinum"


class OrderStatus(StrEnum):
    """Fulfilment status of an order."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"

