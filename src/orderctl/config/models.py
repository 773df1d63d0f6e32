"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, orderctl.toml only contains
overrides. A fresh install needs no config file at all.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from orderctl.domain.discounts import RULE_REGISTRY, DiscountBase
from orderctl.domain.types import CustomerSegment

# --- orderctl.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    db_file: str = "orders.db"
    echo: bool = False


class DiscountConfig(BaseModel):
    """[discount] section.

    ``rules`` lists active rule names in registration order; the order
    only matters for rules that share a priority.
    """

    model_config = {"frozen": True}

    base: DiscountBase = DiscountBase.ORIGINAL
    rules: list[str] = Field(
        default_factory=lambda: ["segment_tier", "bulk_quantity", "high_value"]
    )
    priorities: dict[str, int] = Field(default_factory=dict)
    segment_rates: dict[CustomerSegment, Decimal] = Field(
        default_factory=lambda: {
            CustomerSegment.PREMIUM: Decimal("0.05"),
            CustomerSegment.GOLD: Decimal("0.10"),
            CustomerSegment.PLATINUM: Decimal("0.15"),
        }
    )
    bulk_min_quantity: int = 10
    bulk_rate_per_unit: Decimal = Decimal("0.01")
    bulk_max_rate: Decimal = Decimal("0.10")
    high_value_threshold: Decimal = Decimal("500")
    high_value_amount: Decimal = Decimal("50")

    @field_validator("rules", "priorities")
    @classmethod
    def _known_rules(cls, value: Any) -> Any:
        unknown = sorted(set(value) - set(RULE_REGISTRY))
        if unknown:
            msg = f"Unknown discount rules: {unknown}. Known: {sorted(RULE_REGISTRY)}"
            raise ValueError(msg)
        if isinstance(value, list) and len(value) != len(set(value)):
            dupes = sorted({name for name in value if value.count(name) > 1})
            msg = f"Duplicate discount rules: {dupes}"
            raise ValueError(msg)
        return value


class OrdersConfig(BaseModel):
    """[orders] section."""

    model_config = {"frozen": True}

    number_prefix: str = "ORD"
    currency_places: int = 2
    default_changed_by: str = "System"


class AnalyticsConfig(BaseModel):
    """[analytics] section."""

    model_config = {"frozen": True}

    default_window_days: int = 30


class OrderctlConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    store: StoreConfig = Field(default_factory=StoreConfig)
    discount: DiscountConfig = Field(default_factory=DiscountConfig)
    orders: OrdersConfig = Field(default_factory=OrdersConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
