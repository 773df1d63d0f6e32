"""DiscountService — configured discount engine behind the service contract.

Builds a :class:`DiscountEngine` from the ``[discount]`` config section
and exposes it three ways:

- calculate_discount: raw ``Decimal`` for other services (order creation)
- quote: evaluate an ad-hoc snapshot and return a breakdown
- list_rules: active rules in evaluation order

The service holds no database handle; discounting never touches storage.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from orderctl.config.models import DiscountConfig
from orderctl.domain.discounts import DiscountEngine, DiscountRule, build_rule
from orderctl.domain.models import Customer, Order, OrderItem, line_total
from orderctl.domain.types import CustomerSegment
from orderctl.services._helpers import quantize_money
from orderctl.services.result import ServiceResult
from orderctl.services.telemetry import traced

if TYPE_CHECKING:
    from orderctl.config.settings import OrderSettings

log = structlog.get_logger(__name__)


def _rule_params(name: str, config: DiscountConfig) -> dict[str, Any]:
    params: dict[str, Any]
    if name == "segment_tier":
        params = {"rates": config.segment_rates}
    elif name == "bulk_quantity":
        params = {
            "min_quantity": config.bulk_min_quantity,
            "rate_per_unit": config.bulk_rate_per_unit,
            "max_rate": config.bulk_max_rate,
        }
    elif name == "high_value":
        params = {
            "threshold": config.high_value_threshold,
            "amount": config.high_value_amount,
        }
    else:
        params = {}
    if name in config.priorities:
        params["priority"] = config.priorities[name]
    return params


def build_engine(config: DiscountConfig) -> DiscountEngine:
    """Instantiate the configured rules, in configured order, into an engine."""
    rules: list[DiscountRule] = [
        build_rule(name, **_rule_params(name, config)) for name in config.rules
    ]
    return DiscountEngine(rules, base=config.base)


class DiscountService:
    """Computes order discounts with a shared, stateless engine."""

    def __init__(self, engine: DiscountEngine, *, currency_places: int = 2) -> None:
        self._engine = engine
        self._places = currency_places

    @classmethod
    def from_config(cls, config: DiscountConfig, *, currency_places: int = 2) -> DiscountService:
        return cls(build_engine(config), currency_places=currency_places)

    @classmethod
    def from_settings(cls, settings: OrderSettings) -> DiscountService:
        """Engine from ``[discount]``, rounding to ``[orders] currency_places``."""
        return cls.from_config(
            settings.discount, currency_places=settings.orders.currency_places
        )

    @property
    def engine(self) -> DiscountEngine:
        return self._engine

    def calculate_discount(self, order: Order) -> Decimal:
        """Discount for *order*, within ``[0, order.total_amount]``.

        Not traced: callers get a bare ``Decimal``, with no result meta to
        carry timing. Rounding is left to the caller.
        """
        breakdown = self._engine.evaluate(order)
        log.debug(
            "discount.evaluated",
            order_number=order.order_number or None,
            total_amount=str(order.total_amount),
            discount=str(breakdown.total),
            rules=[a.rule for a in breakdown.applied],
            clamped=breakdown.clamped,
        )
        return breakdown.total

    # ------------------------------------------------------------------
    # quote
    # ------------------------------------------------------------------

    @traced
    def quote(
        self,
        segment: str,
        items: Sequence[tuple[int, Decimal | str]],
        *,
        total_amount: Decimal | str | None = None,
    ) -> ServiceResult:
        """Evaluate the engine on a customer segment and ``(quantity, unit_price)`` lines.

        Args:
            segment: Customer segment name.
            items: Order lines as ``(quantity, unit_price)`` pairs.
            total_amount: Order total; defaults to the sum of line totals.

        ``discount_amount`` and ``final_amount`` are rounded half-up to the
        currency places; the per-rule ``applied`` amounts are not.
        """
        op = "quote_discount"
        try:
            customer = Customer(name="quote", segment=CustomerSegment(segment))
            lines = tuple(OrderItem(quantity=q, unit_price=p) for q, p in items)
            total = line_total(lines) if total_amount is None else Decimal(str(total_amount))
            order = Order(total_amount=total, customer=customer, items=lines)
        except (ArithmeticError, ValueError, ValidationError) as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc))

        breakdown = self._engine.evaluate(order)
        discount = quantize_money(breakdown.total, self._places)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "segment": str(customer.segment),
                "quantity": order.total_quantity,
                "total_amount": str(order.total_amount),
                "discount_amount": str(discount),
                "final_amount": str(order.total_amount - discount),
                "base": str(self._engine.base),
                **breakdown.to_dict(),
            },
        )

    # ------------------------------------------------------------------
    # list_rules
    # ------------------------------------------------------------------

    @traced
    def list_rules(self) -> ServiceResult:
        """Active rules in evaluation order."""
        items = [rule.describe() for rule in self._engine.ordered_rules()]
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={"base": str(self._engine.base), "count": len(items), "items": items},
        )
