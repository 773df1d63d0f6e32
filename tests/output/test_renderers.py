"""Tests for op-specific Rich renderers and quiet output."""

from __future__ import annotations

from orderctl.output.renderers import render_quiet, render_result
from orderctl.services.result import ServiceResult

_ORDER = {
    "id": 7,
    "order_number": "ORD-ABC123",
    "order_date": "2026-05-01T12:00:00+00:00",
    "status": "pending",
    "total_amount": "999.99",
    "discount_amount": "200.00",
    "final_amount": "799.99",
    "customer_id": 4,
    "customer_name": "Alice Brown",
    "items": [
        {
            "id": 1,
            "product_id": 1,
            "product_name": "Laptop",
            "quantity": 1,
            "unit_price": "999.99",
            "discount": "0",
            "total_price": "999.99",
        }
    ],
    "status_history": [
        {
            "id": 1,
            "old_status": "pending",
            "new_status": "pending",
            "changed_at": "2026-05-01T12:00:00.000000+00:00",
            "changed_by": "System",
            "notes": "Order created",
        }
    ],
}


class TestRenderResult:
    def test_order(self) -> None:
        output = render_result(ServiceResult(ok=True, op="create_order", data=_ORDER))
        assert "create_order" in output
        assert "ORD-ABC123" in output
        assert "Laptop" in output
        assert "Order created" in output

    def test_order_list(self) -> None:
        data = {"customer_id": 4, "count": 1, "items": [_ORDER]}
        output = render_result(ServiceResult(ok=True, op="list_orders", data=data))
        assert "ORD-ABC123" in output
        assert "2026-05-01" in output

    def test_quote(self) -> None:
        data = {
            "segment": "platinum",
            "quantity": 11,
            "base": "original",
            "total_amount": "1000",
            "discount_amount": "300",
            "final_amount": "700",
            "clamped": False,
            "applied": [{"rule": "segment_tier", "priority": 1, "amount": "150"}],
        }
        output = render_result(ServiceResult(ok=True, op="quote_discount", data=data))
        assert "segment_tier" in output
        assert "discount_amount: 300" in output

    def test_analytics(self) -> None:
        data = {
            "start": "2026-01-01",
            "end": "2026-02-01",
            "total_orders": 2,
            "total_revenue": "10.00",
            "average_order_value": "5.00",
            "average_fulfillment_time": "1d 0h 0m 0s",
            "orders_by_status": {"delivered": 2},
            "orders_by_customer_segment": {"gold": 2},
        }
        output = render_result(ServiceResult(ok=True, op="order_analytics", data=data))
        assert "1d 0h 0m 0s" in output
        assert "gold" in output

    def test_error(self) -> None:
        result = ServiceResult.failure("get_order", "NOT_FOUND", "Order with ID 9 not found.", id=9)
        assert "Order with ID 9 not found." in render_result(result)
        assert "id: 9" in render_result(result, verbose=True)

    def test_verbose_meta(self) -> None:
        result = ServiceResult(ok=True, op="seed", data={}, meta={"duration_ms": 1.5})
        assert "duration_ms: 1.5" in render_result(result, verbose=True)

    def test_generic_fallback(self) -> None:
        result = ServiceResult(ok=True, op="unknown_op", data={"counts": {"a": 1}})
        assert '{"a":1}' in render_result(result)


class TestRenderQuiet:
    def test_ids_for_listings(self) -> None:
        data = {"items": [{"id": 1}, {"id": 2}]}
        assert render_quiet(ServiceResult(ok=True, op="list_customers", data=data)) == "1\n2"

    def test_rule_names(self) -> None:
        data = {"items": [{"name": "segment_tier", "priority": 1}]}
        assert render_quiet(ServiceResult(ok=True, op="list_rules", data=data)) == "segment_tier"

    def test_quote_amount(self) -> None:
        data = {"discount_amount": "12.50", "applied": []}
        assert render_quiet(ServiceResult(ok=True, op="quote_discount", data=data)) == "12.50"

    def test_single_id(self) -> None:
        result = ServiceResult(ok=True, op="update_status", data={"id": 3, "status": "shipped"})
        assert render_quiet(result) == "3"

    def test_error(self) -> None:
        result = ServiceResult.failure("get_order", "NOT_FOUND", "gone")
        assert render_quiet(result) == "ERROR: get_order — gone"
