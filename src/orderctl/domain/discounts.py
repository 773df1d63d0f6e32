"""Discount rule ABC, built-in rules, registry, and the rule engine.

A :class:`DiscountRule` is a self-contained unit of discount policy: a pure
function of a customer+order snapshot with a fixed priority. The
:class:`DiscountEngine` composes an ordered collection of rules:

1. Keep the rules whose ``is_applicable`` holds for the order's customer.
2. Sort them by priority (stable, so equal priorities keep registration order).
3. Accumulate each rule's discount. As soon as the remaining balance
   (``total_amount - accumulated``) reaches zero, stop and return the full
   ``total_amount``.
4. Otherwise return ``min(accumulated, total_amount)``.

INVARIANT: ``0 <= engine.compute_discount(order) <= order.total_amount``.

Rules and engines hold no per-call state and may be shared freely
between threads and requests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from orderctl.domain.models import Customer, Order
from orderctl.domain.types import CustomerSegment

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so float config values keep their literal digits
    return Decimal(str(value))


class DiscountBase(StrEnum):
    """Amount that percentage rules are applied to.

    ``original`` applies every rule to the order's ``total_amount``.
    ``remaining`` applies each rule to the balance left after the
    higher-priority rules (sequential discounting).
    """

    ORIGINAL = "original"
    REMAINING = "remaining"


class DiscountRule(ABC):
    """Abstract base class for discount rules.

    Subclasses must not depend on evaluation order or on other rules
    having run. ``calculate_discount`` returns zero for inputs where
    ``is_applicable`` is false.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry identifier (e.g. ``'segment_tier'``)."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Ordering key; lower values are evaluated first."""
        ...

    @abstractmethod
    def is_applicable(self, customer: Customer, order: Order) -> bool:
        """Whether this rule's precondition holds for *customer* and *order*."""
        ...

    @abstractmethod
    def calculate_discount(
        self,
        customer: Customer,
        order: Order,
        *,
        base: Decimal | None = None,
    ) -> Decimal:
        """Discount granted by this rule.

        Args:
            customer: The ordering customer.
            order: The order snapshot.
            base: Amount percentage rules apply to. Defaults to
                ``order.total_amount``.
        """
        ...

    def describe(self) -> dict[str, Any]:
        """Serializable summary of the rule for listings."""
        return {"name": self.name, "priority": self.priority}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------

DEFAULT_SEGMENT_RATES: dict[str, Decimal] = {
    CustomerSegment.PREMIUM: Decimal("0.05"),
    CustomerSegment.GOLD: Decimal("0.10"),
    CustomerSegment.PLATINUM: Decimal("0.15"),
}


class SegmentTierRule(DiscountRule):
    """Percentage discount for preferred customer segments.

    Premium 5%, gold 10%, platinum 15%. Standard customers are not eligible.
    """

    def __init__(
        self,
        *,
        rates: Mapping[str, Decimal | float | str] | None = None,
        priority: int = 1,
    ) -> None:
        source = DEFAULT_SEGMENT_RATES if rates is None else rates
        self._rates = {CustomerSegment(k): _to_decimal(v) for k, v in source.items()}
        self._priority = priority

    @property
    def name(self) -> str:
        return "segment_tier"

    @property
    def priority(self) -> int:
        return self._priority

    def rate_for(self, segment: CustomerSegment) -> Decimal:
        return self._rates.get(segment, ZERO)

    def is_applicable(self, customer: Customer, order: Order) -> bool:
        return customer.segment in self._rates

    def calculate_discount(
        self,
        customer: Customer,
        order: Order,
        *,
        base: Decimal | None = None,
    ) -> Decimal:
        if not self.is_applicable(customer, order):
            return ZERO
        amount = order.total_amount if base is None else base
        return amount * self.rate_for(customer.segment)

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "rates": {str(k): str(v) for k, v in self._rates.items()},
        }


class BulkQuantityRule(DiscountRule):
    """1% per unit ordered, capped at 10%, for orders of more than 10 units."""

    def __init__(
        self,
        *,
        min_quantity: int = 10,
        rate_per_unit: Decimal | float | str = Decimal("0.01"),
        max_rate: Decimal | float | str = Decimal("0.10"),
        priority: int = 2,
    ) -> None:
        self._min_quantity = min_quantity
        self._rate_per_unit = _to_decimal(rate_per_unit)
        self._max_rate = _to_decimal(max_rate)
        self._priority = priority

    @property
    def name(self) -> str:
        return "bulk_quantity"

    @property
    def priority(self) -> int:
        return self._priority

    def is_applicable(self, customer: Customer, order: Order) -> bool:
        return order.total_quantity > self._min_quantity

    def calculate_discount(
        self,
        customer: Customer,
        order: Order,
        *,
        base: Decimal | None = None,
    ) -> Decimal:
        if not self.is_applicable(customer, order):
            return ZERO
        rate = min(self._max_rate, order.total_quantity * self._rate_per_unit)
        amount = order.total_amount if base is None else base
        return amount * rate

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "min_quantity": self._min_quantity,
            "rate_per_unit": str(self._rate_per_unit),
            "max_rate": str(self._max_rate),
        }


class HighValueFlatRule(DiscountRule):
    """Flat 50 off orders whose total strictly exceeds 500."""

    def __init__(
        self,
        *,
        threshold: Decimal | float | str = Decimal("500"),
        amount: Decimal | float | str = Decimal("50"),
        priority: int = 3,
    ) -> None:
        self._threshold = _to_decimal(threshold)
        self._amount = _to_decimal(amount)
        self._priority = priority

    @property
    def name(self) -> str:
        return "high_value"

    @property
    def priority(self) -> int:
        return self._priority

    def is_applicable(self, customer: Customer, order: Order) -> bool:
        return order.total_amount > self._threshold

    def calculate_discount(
        self,
        customer: Customer,
        order: Order,
        *,
        base: Decimal | None = None,
    ) -> Decimal:
        # Flat amount: independent of the base.
        if not self.is_applicable(customer, order):
            return ZERO
        return self._amount

    def describe(self) -> dict[str, Any]:
        return {
            **super().describe(),
            "threshold": str(self._threshold),
            "amount": str(self._amount),
        }


RULE_REGISTRY: dict[str, type[DiscountRule]] = {
    "segment_tier": SegmentTierRule,
    "bulk_quantity": BulkQuantityRule,
    "high_value": HighValueFlatRule,
}


def build_rule(name: str, **params: Any) -> DiscountRule:
    """Instantiate a registered rule by name.

    Raises:
        KeyError: If *name* is not in :data:`RULE_REGISTRY`.
    """
    try:
        rule_cls = RULE_REGISTRY[name]
    except KeyError:
        msg = f"Unknown discount rule: {name!r}. Known: {sorted(RULE_REGISTRY)}"
        raise KeyError(msg) from None
    return rule_cls(**params)


def default_rules() -> list[DiscountRule]:
    """The three built-in rules in registration order."""
    return [SegmentTierRule(), BulkQuantityRule(), HighValueFlatRule()]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppliedDiscount:
    """Amount contributed by one rule during an evaluation."""

    rule: str
    priority: int
    amount: Decimal


@dataclass(frozen=True)
class DiscountBreakdown:
    """Result of :meth:`DiscountEngine.evaluate`.

    ``clamped`` is True when the accumulated discount consumed the whole
    order total and evaluation stopped early.
    """

    total: Decimal
    applied: tuple[AppliedDiscount, ...] = ()
    clamped: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": str(self.total),
            "clamped": self.clamped,
            "applied": [
                {"rule": a.rule, "priority": a.priority, "amount": str(a.amount)}
                for a in self.applied
            ],
        }


class DiscountEngine:
    """Composes discount rules into a single order discount.

    Args:
        rules: Rules in registration order. Registration order breaks
            priority ties.
        base: Amount percentage rules are applied to.
    """

    def __init__(
        self,
        rules: Iterable[DiscountRule],
        *,
        base: DiscountBase = DiscountBase.ORIGINAL,
    ) -> None:
        self._rules: tuple[DiscountRule, ...] = tuple(rules)
        self._base = DiscountBase(base)

    @property
    def rules(self) -> tuple[DiscountRule, ...]:
        return self._rules

    @property
    def base(self) -> DiscountBase:
        return self._base

    def ordered_rules(self) -> list[DiscountRule]:
        """All configured rules in evaluation order."""
        return sorted(self._rules, key=lambda r: r.priority)

    def applicable_rules(self, customer: Customer, order: Order) -> list[DiscountRule]:
        """Applicable rules in evaluation order."""
        return [r for r in self.ordered_rules() if r.is_applicable(customer, order)]

    def evaluate(self, order: Order) -> DiscountBreakdown:
        """Compute the discount for *order* with a per-rule breakdown."""
        customer = order.customer
        if customer is None:
            return DiscountBreakdown(total=ZERO)

        total_amount = order.total_amount
        accumulated = ZERO
        applied: list[AppliedDiscount] = []

        for rule in self.applicable_rules(customer, order):
            if self._base is DiscountBase.REMAINING:
                base = total_amount - accumulated
            else:
                base = total_amount
            discount = rule.calculate_discount(customer, order, base=base)
            if discount < 0:
                logger.warning(
                    "Rule %s returned negative discount %s; treating as 0",
                    rule.name,
                    discount,
                )
                discount = ZERO

            accumulated += discount
            applied.append(AppliedDiscount(rule=rule.name, priority=rule.priority, amount=discount))

            if total_amount - accumulated <= 0:
                return DiscountBreakdown(total=total_amount, applied=tuple(applied), clamped=True)

        return DiscountBreakdown(total=min(accumulated, total_amount), applied=tuple(applied))

    def compute_discount(self, order: Order) -> Decimal:
        """Total discount for *order*, always within ``[0, order.total_amount]``."""
        return self.evaluate(order).total

    def __repr__(self) -> str:
        names = ", ".join(r.name for r in self._rules)
        return f"DiscountEngine([{names}], base={self._base.value})"
