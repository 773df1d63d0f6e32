"""CatalogService — customers, products, and demo seeding."""

from __future__ import annotations

from orderctl.domain.types import CustomerSegment
from orderctl.infrastructure.seed import seed_database
from orderctl.services._helpers import customer_to_dict
from orderctl.services.base import BaseService
from orderctl.services.result import ServiceResult
from orderctl.services.telemetry import traced


class CatalogService(BaseService):
    """Read-mostly access to customers and products."""

    @traced
    def list_customers(self, *, segment: str | None = None) -> ServiceResult:
        op = "list_customers"
        try:
            wanted = CustomerSegment(segment) if segment else None
        except ValueError:
            return ServiceResult.failure(op, "INVALID_INPUT", f"Unknown segment {segment!r}")
        items = [customer_to_dict(c) for c in self._store.catalog.list_customers(segment=wanted)]
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    @traced
    def list_products(self) -> ServiceResult:
        items = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price),
                "stock_quantity": p.stock_quantity,
            }
            for p in self._store.catalog.list_products()
        ]
        return ServiceResult(ok=True, op="list_products", data={"count": len(items), "items": items})

    @traced
    def seed(self) -> ServiceResult:
        """Load demo data into an empty store."""
        counts = seed_database(self._store.engine)
        warnings: list[str] = []
        if not any(counts.values()):
            warnings.append("Store already contains customers; nothing seeded")
        return ServiceResult(ok=True, op="seed", data=counts, warnings=warnings)
